"""Tests for the rendered pages and on-demand revalidation over HTTP."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.api.app import create_app
from storefront.core.orm.session import session_scope
from storefront.core.orm.tables import ProductTable
from storefront.core.settings import StorefrontSettings
from storefront.ops.context import OperationContext
from storefront.ops.requests import SeedRequest
from storefront.ops.seed import seed_database


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def app(db_file):
    settings = StorefrontSettings(
        _env_file=None,
        database_url=db_file,
        create_schema_on_startup=True,
        revalidate_seconds=60,
    )
    return create_app(settings=settings)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def client(app, clock):
    with TestClient(app) as c:
        with session_scope(app.state.session_factory) as session:
            seed_database(OperationContext(session=session), SeedRequest())
        app.state.page_cache._clock = clock
        yield c


def _set_price(app, cents: int) -> None:
    with session_scope(app.state.session_factory) as s:
        s.get(ProductTable, "prod_mug").price_cents = cents


class TestPages:
    def test_home(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.headers["X-Page-Cache"] == "MISS"
        assert resp.headers["Cache-Control"] == "s-maxage=60, stale-while-revalidate"
        assert "Classic Tee" in resp.text

    def test_second_request_hits(self, client):
        client.get("/products/mug")
        resp = client.get("/products/mug")
        assert resp.headers["X-Page-Cache"] == "HIT"
        assert "$15.00" in resp.text

    def test_unknown_product_is_404(self, client):
        resp = client.get("/products/nope")
        assert resp.status_code == 404
        assert "/products/nope" in resp.text

    def test_stale_served_then_regenerated(self, app, client, clock):
        client.get("/products/mug")
        _set_price(app, 1700)
        clock.now += 61

        stale = client.get("/products/mug")
        assert stale.headers["X-Page-Cache"] == "STALE"
        assert "$15.00" in stale.text

        # The background refresh ran after the stale response was sent
        fresh = client.get("/products/mug")
        assert fresh.headers["X-Page-Cache"] == "HIT"
        assert "$17.00" in fresh.text


class TestRevalidate:
    def test_single_path(self, app, client):
        client.get("/products/mug")
        _set_price(app, 1900)

        resp = client.post("/api/v1/revalidate", params={"path": "/products/mug"})
        assert resp.status_code == 200
        assert resp.json()["data"] == {"revalidated": ["/products/mug"], "all": False}

        page = client.get("/products/mug")
        assert page.headers["X-Page-Cache"] == "MISS"
        assert "$19.00" in page.text

    def test_all(self, client):
        client.get("/")
        client.get("/products/mug")
        data = client.post("/api/v1/revalidate").json()["data"]
        assert data == {"revalidated": ["/", "/products/mug"], "all": True}
