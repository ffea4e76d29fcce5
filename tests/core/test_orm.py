"""Tests for the SQLAlchemy ORM layer (base, tables, session)."""

from __future__ import annotations

import pytest
from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from storefront.core.orm.base import NAMING_CONVENTION, StorefrontBase
from storefront.core.orm.session import (
    StorefrontSession,
    create_schema,
    create_storefront_engine,
    drop_schema,
    session_scope,
    storefront_session_factory,
)
from storefront.core.orm.tables import CategoryTable, ProductTable, product_categories


def _product(pid: str = "p1", slug: str = "p-one", **kw) -> ProductTable:
    fields = {"name": "Product", "price_cents": 1000}
    fields.update(kw)
    return ProductTable(id=pid, slug=slug, **fields)


class TestSchema:
    def test_tables_created(self, engine):
        names = set(inspect(engine).get_table_names())
        assert {"categories", "products", "product_categories"} <= names

    def test_create_schema_returns_sorted_names(self, engine):
        assert create_schema(engine) == ["categories", "product_categories", "products"]

    def test_association_primary_key(self):
        pk = [c.name for c in product_categories.primary_key.columns]
        assert pk == ["product_id", "category_id"]

    def test_naming_convention_applied(self):
        assert StorefrontBase.metadata.naming_convention == NAMING_CONVENTION

    def test_drop_schema(self, engine):
        drop_schema(engine)
        assert inspect(engine).get_table_names() == []


class TestTables:
    def test_defaults(self, session):
        session.add(_product())
        session.commit()
        session.expire_all()
        row = session.get(ProductTable, "p1")
        assert row.currency == "USD"
        assert row.available_for_sale is True
        assert row.description == ""
        assert row.created_at is not None

    def test_slug_unique(self, session):
        session.add_all([_product("p1", "same"), _product("p2", "same")])
        with pytest.raises(IntegrityError):
            session.commit()

    def test_many_to_many_both_sides(self, session):
        mugs = CategoryTable(id="c1", slug="mugs", name="Mugs")
        gifts = CategoryTable(id="c2", slug="gifts", name="Gifts")
        session.add(_product(categories=[mugs, gifts]))
        session.commit()
        session.expire_all()

        product = session.get(ProductTable, "p1")
        assert [c.slug for c in product.categories] == ["gifts", "mugs"]
        assert [p.id for p in session.get(CategoryTable, "c1").products] == ["p1"]

    def test_deleting_product_removes_links(self, session):
        session.add(_product(categories=[CategoryTable(id="c1", slug="mugs", name="Mugs")]))
        session.commit()

        session.delete(session.get(ProductTable, "p1"))
        session.commit()

        assert session.execute(select(product_categories)).all() == []
        assert session.get(CategoryTable, "c1") is not None

    def test_deleting_category_keeps_products(self, session):
        mugs = CategoryTable(id="c1", slug="mugs", name="Mugs")
        session.add_all([_product(categories=[mugs]), _product("p2", "p-two", categories=[mugs])])
        session.commit()

        session.delete(session.get(CategoryTable, "c1"))
        session.commit()
        session.expire_all()

        assert session.execute(select(product_categories)).all() == []
        assert {p.id for p in session.scalars(select(ProductTable))} == {"p1", "p2"}
        assert session.get(ProductTable, "p1").categories == []

    def test_bulk_category_delete_cascades_links(self, session):
        session.add(_product(categories=[CategoryTable(id="c1", slug="mugs", name="Mugs")]))
        session.commit()

        session.execute(delete(CategoryTable).where(CategoryTable.id == "c1"))
        session.commit()

        assert session.execute(select(product_categories)).all() == []
        assert session.get(ProductTable, "p1") is not None


class TestSession:
    def test_memory_engine_uses_static_pool(self):
        eng = create_storefront_engine("sqlite://")
        assert isinstance(eng.pool, StaticPool)
        eng.dispose()

    def test_foreign_keys_enforced(self, session):
        with pytest.raises(IntegrityError):
            session.execute(
                product_categories.insert().values(product_id="nope", category_id="nope")
            )

    def test_factory_produces_storefront_session(self, engine):
        factory = storefront_session_factory(engine)
        with factory() as s:
            assert isinstance(s, StorefrontSession)

    def test_session_scope_commits(self, session_factory):
        with session_scope(session_factory) as s:
            s.add(_product())
        with session_factory() as s:
            assert s.get(ProductTable, "p1") is not None

    def test_session_scope_rolls_back(self, session_factory):
        with pytest.raises(RuntimeError):
            with session_scope(session_factory) as s:
                s.add(_product())
                s.flush()
                raise RuntimeError("boom")
        with session_factory() as s:
            assert s.get(ProductTable, "p1") is None

    def test_objects_readable_after_commit(self, session_factory):
        with session_scope(session_factory) as s:
            product = _product()
            s.add(product)
        assert product.name == "Product"

    def test_factory_sessions_keep_loaded_state(self, session_factory):
        session = session_factory()
        try:
            assert session.expire_on_commit is False
        finally:
            session.close()
