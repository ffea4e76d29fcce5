"""
Route table for the storefront pages.

``render_route`` maps a URL path to its props function and template:

    /                    → get_home_props     → index.html
    /products/<slug>     → get_product_props  → product.html
    anything else        → 404.html (status 404)
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

from storefront.ops.context import OperationContext
from storefront.site.props import StaticProps, get_home_props, get_product_props
from storefront.site.renderer import PageRenderer

_PRODUCT_ROUTE = re.compile(r"^/products/(?P<slug>[^/]+)$")


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """A generated page and when it was generated.

    Attributes:
        route: Normalised URL path.
        html: Rendered document.
        status_code: 200, or 404 for not-found pages.
        generated_at: Epoch seconds.
        revalidate: Seconds the page stays fresh; ``None`` means forever.
    """

    route: str
    html: str
    status_code: int
    generated_at: float
    revalidate: int | None = None

    def age(self, now: float) -> float:
        return max(0.0, now - self.generated_at)

    def is_stale(self, now: float) -> bool:
        if self.revalidate is None:
            return False
        return self.age(now) >= self.revalidate


def normalize_route(route: str) -> str:
    """``"products/mug/"`` → ``"/products/mug"``; the root stays ``"/"``."""
    path = "/" + route.strip().strip("/")
    return path


def render_route(
    ctx: OperationContext,
    renderer: PageRenderer,
    route: str,
    *,
    revalidate: int | None = None,
    now: float | None = None,
) -> RenderedPage:
    """Fetch props for *route* and render its template."""
    route = normalize_route(route)
    template = "404.html"

    if route == "/":
        props = get_home_props(ctx, revalidate)
        template = "index.html"
    elif match := _PRODUCT_ROUTE.match(route):
        props = get_product_props(ctx, match.group("slug"), revalidate)
        template = "product.html"
    else:
        props = StaticProps(not_found=True, revalidate=revalidate)

    if props.not_found:
        html = renderer.render("404.html", route=route)
        status_code = 404
    else:
        html = renderer.render(template, **props.props)
        status_code = 200

    return RenderedPage(
        route=route,
        html=html,
        status_code=status_code,
        generated_at=now if now is not None else time.time(),
        revalidate=props.revalidate,
    )
