"""
Jinja2 page renderer.

Templates live in ``storefront/site/templates`` and are loaded through a
``PackageLoader`` so they ship with the wheel; a custom directory can be
passed to override them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateError,
    select_autoescape,
)

from storefront.core.errors import RenderError

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
# Currencies without minor units
_ZERO_DECIMAL = {"JPY"}


def format_money(price_cents: int, currency: str = "USD") -> str:
    """Format minor units as a price: ``format_money(2000) == "$20.00"``."""
    currency = currency.upper()
    if currency in _ZERO_DECIMAL:
        amount = f"{price_cents:,}"
    else:
        major, minor = divmod(abs(price_cents), 100)
        sign = "-" if price_cents < 0 else ""
        amount = f"{sign}{major:,}.{minor:02d}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    return f"{symbol}{amount}" if symbol else f"{amount} {currency}"


class PageRenderer:
    """Render storefront templates to HTML strings.

    Args:
        store_name: Exposed to every template as ``store_name``.
        default_currency: Currency the ``money`` filter uses when none is given.
        template_dir: Directory overriding the packaged templates.
    """

    def __init__(
        self,
        store_name: str = "Acme Store",
        default_currency: str = "USD",
        template_dir: Path | None = None,
    ):
        loader = (
            FileSystemLoader(str(template_dir))
            if template_dir is not None
            else PackageLoader("storefront.site", "templates")
        )
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["money"] = lambda cents, currency=None: format_money(
            cents, currency or default_currency
        )
        self.env.globals["store_name"] = store_name

    def render(self, template_name: str, **context: Any) -> str:
        try:
            return self.env.get_template(template_name).render(**context)
        except TemplateError as exc:
            raise RenderError(
                f"Failed to render {template_name}: {exc}", cause=exc
            ).with_context(template=template_name) from exc
