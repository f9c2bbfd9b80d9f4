"""Domain rules for account fields: normalization, limits and the update whitelist."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from social_api.core.errors import ValidationError

NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
EMAIL_MAX_LENGTH = 255
URL_MAX_LENGTH = 512
LOCATION_MAX_LENGTH = 255
_TEXT_LIMITS = {"website": URL_MAX_LENGTH, "location": LOCATION_MAX_LENGTH}
PASSWORD_MIN_LENGTH = 6
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+")

# External (JSON) field name -> Account column. Anything else in a patch is ignored.
UPDATABLE_FIELDS: dict[str, str] = {
    "name": "name",
    "bio": "bio",
    "profilePicture": "profile_picture",
    "website": "website",
    "location": "location",
    "isPrivate": "is_private",
}


@dataclass
class AccountDraft:
    """Input for account creation (signup or seeding)."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    is_private: Optional[bool] = False


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


def _require_str(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def _check_max(field: str, value: str, max_length: int) -> str:
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def clean_name(value: Any) -> str:
    name = _require_str("name", value).strip()
    if not name:
        raise ValidationError("name cannot be empty")
    return _check_max("name", name, NAME_MAX_LENGTH)


def clean_email(value: Any) -> str:
    email = _check_max("email", normalize_email(_require_str("email", value)), EMAIL_MAX_LENGTH)
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("email is invalid")
    return email


def clean_password(value: Any) -> str:
    password = _require_str("password", value)
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"password must be at least {PASSWORD_MIN_LENGTH} characters")
    return password


def clean_bio(value: Any) -> str:
    if value is None:
        return ""
    return _check_max("bio", _require_str("bio", value), BIO_MAX_LENGTH)


def clean_optional_text(field: str, value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    return _check_max(field, _require_str(field, value).strip(), max_length) or None


def clean_profile_picture(value: Any, default: str) -> str:
    if value is None:
        return default
    picture = _require_str("profilePicture", value).strip()
    return _check_max("profilePicture", picture, URL_MAX_LENGTH) or default


def clean_is_private(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("isPrivate must be a boolean")
    return value


def clean_patch(patch: Mapping[str, Any], default_picture: str) -> dict[str, Any]:
    """
    Validate the whitelisted fields of an update payload.

    Returns column -> value for every allowed key present in the patch.
    Unknown keys are dropped without error. Raises ValidationError before
    anything is written.
    """
    values: dict[str, Any] = {}
    for field, column in UPDATABLE_FIELDS.items():
        if field not in patch:
            continue
        raw = patch[field]
        if column == "name":
            values[column] = clean_name(raw)
        elif column == "bio":
            values[column] = clean_bio(raw)
        elif column == "profile_picture":
            values[column] = clean_profile_picture(raw, default_picture)
        elif column == "is_private":
            values[column] = clean_is_private(raw)
        else:
            values[column] = clean_optional_text(field, raw, _TEXT_LIMITS[column])
    return values
