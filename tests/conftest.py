"""
Shared pytest fixtures for storefront tests.

Provides:
- ``engine`` / ``session_factory`` — in-memory SQLite with the catalog schema
- ``ctx`` — an ``OperationContext`` on a fresh session
- ``seeded_ctx`` — the same, with the baseline catalog seeded
- ``db_file`` — a file-backed SQLite URL under ``tmp_path``
"""

import sys
from pathlib import Path

import pytest
import structlog

# Ensure storefront package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storefront.core.orm.session import (  # noqa: E402
    create_schema,
    create_storefront_engine,
    storefront_session_factory,
)
from storefront.ops.context import OperationContext  # noqa: E402
from storefront.ops.requests import SeedRequest  # noqa: E402
from storefront.ops.seed import seed_database  # noqa: E402


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        parts = Path(item.fspath).relative_to(Path(__file__).parent).parts
        if parts[0] in ("api", "cli"):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch):
    """Keep loggers lazy per test so captured streams never leak between tests."""
    monkeypatch.setenv("STOREFRONT_LOG_CACHE", "false")
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created."""
    eng = create_storefront_engine("sqlite:///:memory:")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return storefront_session_factory(engine)


@pytest.fixture
def session(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def ctx(session):
    return OperationContext(session=session, caller="test")


@pytest.fixture
def seeded_ctx(ctx):
    result = seed_database(ctx, SeedRequest())
    assert result.success, result.error
    return ctx


@pytest.fixture
def db_file(tmp_path) -> str:
    """URL of an empty file-backed SQLite database."""
    return f"sqlite:///{tmp_path / 'storefront.db'}"
