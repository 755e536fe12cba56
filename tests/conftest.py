from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the coinboard package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from coinboard.core import config as core_config  # noqa: E402
from coinboard.core.rate_limiter import reset_rate_limits  # noqa: E402
from coinboard.db import create_tables  # noqa: E402
from coinboard.db import session as db_session  # noqa: E402

TEST_SECRET = "coinboard-test-secret-0123456789abcdef0123456789"


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database with fresh settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("LOG_FORMAT", "text")
    _clear_caches()
    reset_rate_limits()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    create_tables.drop_all()
    db_session.get_engine().dispose()
    _clear_caches()


@pytest.fixture()
def client(temp_db):
    from fastapi.testclient import TestClient

    from coinboard.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def write_after_lookup(monkeypatch):
    """Run a competing write right after a service's locking read of a row.

    ``install(getter, make_stmt)`` wraps ``SQLRepository.<getter>`` so that a
    ``for_update`` lookup returns what it read and then executes
    ``make_stmt(pk)`` in the same transaction, as if another writer had got
    there between the read and the service's own write.
    """
    from coinboard.repositories.sql_repository import SQLRepository

    def install(getter, make_stmt):
        original = getattr(SQLRepository, getter)

        def read_then_write(self, pk, **kwargs):
            found = original(self, pk, **kwargs)
            if kwargs.get("for_update"):
                self.session.execute(make_stmt(pk).execution_options(synchronize_session=False))
            return found

        monkeypatch.setattr(SQLRepository, getter, read_then_write)

    return install
