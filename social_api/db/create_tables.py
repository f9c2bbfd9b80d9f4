"""Create the accounts/follows schema (`python -m social_api.db.create_tables`).

Also called from the app lifespan and the seed script; create_all is a no-op
for tables that already exist.
"""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers Account/Follow on Base.metadata


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Schema ready: accounts, follows.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not create the accounts schema: {exc}") from exc
