"""SQLAlchemy engine factory, session factory and transactional scope.

This module provides:

* ``create_storefront_engine``   -- Create a SA engine from a URL.
* ``StorefrontSession``          -- Session with ``expire_on_commit=False``.
* ``storefront_session_factory`` -- ``sessionmaker`` producing StorefrontSession.
* ``session_scope``              -- Commit/rollback/close around a unit of work.
* ``create_schema`` / ``drop_schema`` -- Metadata DDL without Alembic.

Tags:
    storefront, orm, sqlalchemy, session, engine

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.orm.base import StorefrontBase


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_storefront_engine(
    url: str = "sqlite:///storefront.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    pool_timeout: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql+psycopg://…``, etc.)
    echo:
        If ``True``, log all SQL.
    pool_size, max_overflow, pool_timeout:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        # One shared connection, otherwise every session sees a fresh empty database
        if _is_memory_sqlite(url):
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        # Foreign keys are off by default in SQLite
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class StorefrontSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Loaded products stay readable after commit, which the page renderer
    relies on once the unit of work is closed.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def storefront_session_factory(engine: Engine) -> sessionmaker[StorefrontSession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``StorefrontSession`` instances."""
    # sessionmaker passes its own expire_on_commit=True unless told otherwise
    return sessionmaker(bind=engine, class_=StorefrontSession, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[StorefrontSession]) -> Iterator[StorefrontSession]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema(engine: Engine) -> list[str]:
    """Create every catalog table that does not exist yet; return table names."""
    StorefrontBase.metadata.create_all(engine)
    return sorted(StorefrontBase.metadata.tables)


def drop_schema(engine: Engine) -> None:
    """Drop every catalog table."""
    StorefrontBase.metadata.drop_all(engine)
