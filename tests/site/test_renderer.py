"""Tests for the Jinja2 page renderer and the money filter."""

from __future__ import annotations

import pytest

from storefront.core.errors import RenderError
from storefront.site.renderer import PageRenderer, format_money


class TestFormatMoney:
    @pytest.mark.parametrize(
        ("cents", "currency", "expected"),
        [
            (2000, "USD", "$20.00"),
            (5, "usd", "$0.05"),
            (123456, "EUR", "€1,234.56"),
            (500, "JPY", "¥500"),
            (1999, "CHF", "19.99 CHF"),
            (-250, "USD", "$-2.50"),
        ],
    )
    def test_formats(self, cents, currency, expected):
        assert format_money(cents, currency) == expected


class TestPageRenderer:
    def test_packaged_templates(self):
        html = PageRenderer(store_name="Test Shop").render("404.html", route="/x")
        assert "Test Shop" in html
        assert "<code>/x</code>" in html

    def test_autoescape(self):
        html = PageRenderer().render("404.html", route="<script>")
        assert "&lt;script&gt;" in html

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "hello.html").write_text("{{ 1999 | money }} at {{ store_name }}")
        html = PageRenderer(store_name="Shop", template_dir=tmp_path).render("hello.html")
        assert html == "$19.99 at Shop"

    def test_missing_template(self):
        with pytest.raises(RenderError) as exc_info:
            PageRenderer().render("nope.html")
        assert exc_info.value.context.metadata["template"] == "nope.html"
