"""Tests for storefront.ops.database (schema, migrations, counts, health)."""

from __future__ import annotations

from sqlalchemy import create_engine, inspect

from storefront.core.orm.session import create_storefront_engine, storefront_session_factory
from storefront.ops.context import OperationContext
from storefront.ops.database import (
    check_database_health,
    get_table_counts,
    initialize_database,
    migrate_database,
)
from storefront.ops.requests import MigrateRequest
from storefront.ops.result import VALIDATION_FAILED


class TestInitialize:
    def test_creates_tables(self, db_file):
        engine = create_storefront_engine(db_file)
        with storefront_session_factory(engine)() as session:
            result = initialize_database(OperationContext(session=session))
        assert result.success
        assert result.data.tables_created == ["categories", "product_categories", "products"]
        assert set(inspect(engine).get_table_names()) >= {"categories", "products"}
        engine.dispose()

    def test_dry_run(self, db_file):
        engine = create_storefront_engine(db_file)
        with storefront_session_factory(engine)() as session:
            result = initialize_database(OperationContext(session=session, dry_run=True))
        assert result.data.dry_run is True
        assert inspect(engine).get_table_names() == []
        engine.dispose()


class TestMigrate:
    def test_upgrade_head(self, db_file):
        result = migrate_database(MigrateRequest(database_url=db_file))
        assert result.success
        assert result.data.backend == "sqlite"

        engine = create_engine(db_file)
        names = set(inspect(engine).get_table_names())
        assert {"categories", "products", "product_categories", "alembic_version"} <= names
        engine.dispose()

    def test_upgrade_twice_is_noop(self, db_file):
        migrate_database(MigrateRequest(database_url=db_file))
        assert migrate_database(MigrateRequest(database_url=db_file)).success

    def test_missing_url(self):
        result = migrate_database(MigrateRequest(database_url=""))
        assert result.error.code == VALIDATION_FAILED

    def test_unknown_revision(self, db_file):
        result = migrate_database(MigrateRequest(database_url=db_file, revision="nope"))
        assert not result.success
        assert result.error.code == VALIDATION_FAILED
        assert result.error.details["field"] == "revision"


class TestCountsAndHealth:
    def test_table_counts(self, seeded_ctx):
        result = get_table_counts(seeded_ctx)
        counts = {tc.table: tc.count for tc in result.data}
        assert counts == {"categories": 4, "product_categories": 10, "products": 8}

    def test_health(self, ctx):
        result = check_database_health(ctx)
        assert result.success
        assert result.data.connected is True
        assert result.data.backend == "sqlite"
