"""Tests for build-time static generation."""

from __future__ import annotations

import json

import pytest

from storefront.core.errors import RenderError
from storefront.core.orm.tables import ProductTable
from storefront.site.builder import MANIFEST_NAME, build_site, route_to_file
from storefront.site.renderer import PageRenderer


def test_route_to_file():
    assert route_to_file("/").as_posix() == "index.html"
    assert route_to_file("/products/mug").as_posix() == "products/mug/index.html"


@pytest.mark.parametrize("route", ["/products/..", "/products/.", "/products/a/../..", "/products/a\\b"])
def test_route_to_file_rejects_escaping_routes(route):
    with pytest.raises(RenderError):
        route_to_file(route)


class TestBuildSite:
    def test_writes_every_page(self, seeded_ctx, tmp_path):
        result = build_site(seeded_ctx, PageRenderer(), tmp_path / "out", revalidate=60)

        out = tmp_path / "out"
        assert (out / "index.html").exists()
        assert (out / "404.html").exists()
        assert "Classic Tee" in (out / "products" / "classic-tee" / "index.html").read_text()
        assert len(result.pages) == 9
        assert result.not_found == []

    def test_manifest(self, seeded_ctx, tmp_path):
        build_site(seeded_ctx, PageRenderer(), tmp_path, revalidate=60)
        manifest = json.loads((tmp_path / MANIFEST_NAME).read_text())
        assert manifest["revalidate"] == 60
        assert manifest["fallback"] == "blocking"
        routes = {r["route"]: r["file"] for r in manifest["routes"]}
        assert routes["/products/mug"] == "products/mug/index.html"

    def test_empty_catalog_builds_listing_only(self, ctx, tmp_path):
        result = build_site(ctx, PageRenderer(), tmp_path)
        assert result.pages == ["/"]
        assert "No products yet." in (tmp_path / "index.html").read_text()

    def test_dot_slug_aborts_build(self, seeded_ctx, tmp_path):
        seeded_ctx.session.add(ProductTable(id="prod_dots", slug="..", name="Dots", price_cents=100))
        seeded_ctx.session.commit()
        with pytest.raises(RenderError):
            build_site(seeded_ctx, PageRenderer(), tmp_path / "out")
