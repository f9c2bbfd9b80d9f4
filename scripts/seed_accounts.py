#!/usr/bin/env python3
"""
Seed accounts from an influencer CSV export or the bundled JSON file.

Usage:
  python scripts/seed_accounts.py [--csv data/instagram-influencers.csv] [--json data/seed_accounts.json]

The CSV is used when it exists; otherwise the JSON file. Existing emails are
skipped, so the script can run multiple times.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from social_api.core.config import get_settings
from social_api.core.logging import setup_logging
from social_api.db.create_tables import create_all
from social_api.services.seed_service import load_from_csv, load_from_json, seed_accounts

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed accounts into the database")
    ap.add_argument("--csv", default=str(DATA_DIR / "instagram-influencers.csv"), help="Influencer CSV export")
    ap.add_argument("--json", default=str(DATA_DIR / "seed_accounts.json"), help="Fallback JSON file")
    args = ap.parse_args()

    setup_logging(get_settings().log_level)
    create_all()

    csv_path = Path(args.csv)
    if csv_path.exists():
        print(f"Using influencer CSV ({csv_path})")
        drafts = load_from_csv(csv_path)
    else:
        json_path = Path(args.json)
        if not json_path.exists():
            raise SystemExit(f"Neither {csv_path} nor {json_path} exists")
        print(f"Using {json_path} (place instagram-influencers.csv in data/ for the Kaggle dataset)")
        drafts = load_from_json(json_path)

    report = seed_accounts(drafts)
    print(f"Seed done. Created: {report.created}, Skipped (already exist): {report.skipped}")
    if report.invalid:
        print(f"  Invalid entries: {len(report.invalid)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
