"""
Bulk account seeding from an influencer CSV export or a bundled JSON file.

Produces ordinary AccountDraft objects and feeds them through
AccountService.create, so seeded accounts obey the same validation and
hashing rules as signups. Safe to run repeatedly: existing emails are skipped.
"""

from __future__ import annotations

import csv
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from social_api.core.errors import DuplicateEmailError, ValidationError
from social_api.core.logging import get_logger
from social_api.domain.accounts import BIO_MAX_LENGTH, NAME_MAX_LENGTH, AccountDraft
from social_api.services.account_service import AccountService

logger = get_logger(__name__)

SEED_PASSWORD = "seedpass1"
EMAIL_DOMAIN = "example.com"
DEFAULT_BIO = "Instagram influencer / content creator."

_NAME_COLUMNS = ("channel_info", "name", "username", "instagram", "influencer", "account")
_USERNAME_COLUMNS = ("channel_info", "username", "instagram", "name", "account")


@dataclass
class SeedReport:
    created: int = 0
    skipped: int = 0
    invalid: list[str] = field(default_factory=list)


def slugify(value: Any) -> str:
    """Turn a display name into a safe email local part."""
    text = re.sub(r"\s+", ".", str(value).lower())
    text = re.sub(r"[^a-z0-9.]", "", text)
    return text[:50] or "user"


def _first(row: Mapping[str, str], columns: Iterable[str]) -> str:
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def row_to_draft(row: Mapping[str, str], index: int) -> AccountDraft:
    """Map one CSV row (lower-cased headers) to an account draft."""
    fallback_name = f"Influencer {index + 1}"
    raw_name = _first(row, _NAME_COLUMNS) or fallback_name
    raw_username = _first(row, _USERNAME_COLUMNS) or slugify(raw_name)

    parts = []
    if row.get("followers"):
        parts.append(f"{row['followers']} followers")
    if row.get("influence_score"):
        parts.append(f"influence score: {row['influence_score']}")
    if row.get("country"):
        parts.append(str(row["country"]))
    bio = " • ".join(parts) if parts else DEFAULT_BIO
    country = (row.get("country") or "").strip()

    return AccountDraft(
        name=raw_name.strip()[:NAME_MAX_LENGTH] or fallback_name,
        email=f"{slugify(raw_username)}@{EMAIL_DOMAIN}",
        password=SEED_PASSWORD,
        bio=bio[:BIO_MAX_LENGTH],
        location=country[:100] or None,
        is_private=False,
    )


def load_from_csv(path: Path) -> list[AccountDraft]:
    drafts: list[AccountDraft] = []
    seen: set[str] = set()
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for index, raw in enumerate(reader):
            row = {(k or "").strip().lower(): (v or "").strip() for k, v in raw.items()}
            if not any(row.values()):
                continue
            draft = row_to_draft(row, index)
            email = draft.email
            n = 0
            while email in seen:
                n += 1
                email = f"{slugify(draft.name)}{n}@{EMAIL_DOMAIN}"
            seen.add(email)
            draft.email = email
            drafts.append(draft)
    return drafts


def draft_from_mapping(item: Mapping[str, Any]) -> AccountDraft:
    return AccountDraft(
        name=item.get("name"),
        email=item.get("email"),
        password=item.get("password") or SEED_PASSWORD,
        bio=item.get("bio"),
        profile_picture=item.get("profilePicture"),
        website=item.get("website"),
        location=item.get("location"),
        is_private=item.get("isPrivate", False),
    )


def load_from_json(path: Path) -> list[AccountDraft]:
    with path.open("r", encoding="utf-8") as f:
        items = json.load(f)
    if not isinstance(items, list):
        raise ValueError(f"{path} must contain a JSON array of accounts")
    drafts = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValueError(f"{path}: entry {index} must be an object")
        drafts.append(draft_from_mapping(item))
    return drafts


def seed_accounts(drafts: Iterable[AccountDraft], service: AccountService | None = None) -> SeedReport:
    service = service or AccountService()
    report = SeedReport()
    for draft in drafts:
        try:
            service.create(draft)
        except DuplicateEmailError:
            report.skipped += 1
        except ValidationError as exc:
            logger.warning("Skipping invalid seed entry %s: %s", draft.email, exc.message)
            report.invalid.append(draft.email or "")
        else:
            report.created += 1
    return report
