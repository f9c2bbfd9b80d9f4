from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the social_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from social_api.core import config as core_config  # noqa: E402
from social_api.db import models  # noqa: E402
from social_api.db import session as db_session  # noqa: E402
from social_api.domain.accounts import AccountDraft  # noqa: E402
from social_api.services.account_service import AccountService  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("AUTO_CREATE_TABLES", "false")
    monkeypatch.delenv("TOKEN_TTL_SECONDS", raising=False)
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _clear_caches()


@pytest.fixture()
def make_account(db_env):
    """Create accounts through the service with sensible defaults."""
    service = AccountService()

    def _make(name: str = "Ava", email: str | None = None, password: str = "secret1", **extra):
        email = email or f"{name.lower()}@x.com"
        return service.create(AccountDraft(name=name, email=email, password=password, **extra))

    return _make


@pytest.fixture()
def client(db_env):
    from fastapi.testclient import TestClient

    from social_api.app import create_app

    return TestClient(create_app())
