"""
Build-time static generation.

``build_site`` renders the listing page and one page per product slug into an
output directory, plus a ``404.html`` and a ``_manifest.json`` describing
what was generated::

    out/
    ├── index.html
    ├── 404.html
    ├── _manifest.json
    └── products/
        ├── classic-tee/index.html
        └── mug/index.html
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from storefront.core.errors import RenderError
from storefront.core.logging import get_logger
from storefront.ops.context import OperationContext
from storefront.ops.result import start_timer
from storefront.site.pages import RenderedPage, render_route
from storefront.site.props import get_product_paths
from storefront.site.renderer import PageRenderer

logger = get_logger(__name__)

MANIFEST_NAME = "_manifest.json"


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Result payload for :func:`build_site`."""

    output_dir: str
    pages: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0


def route_to_file(route: str) -> Path:
    """``"/"`` → ``index.html``; ``"/products/mug"`` → ``products/mug/index.html``.

    Raises :class:`RenderError` for routes that would leave the output directory.
    """
    stripped = route.strip("/")
    if not stripped:
        return Path("index.html")
    parts = stripped.split("/")
    if "\\" in stripped or any(part in ("", ".", "..") for part in parts):
        raise RenderError(f"Route cannot be written to a file: {route!r}").with_context(route=route)
    return Path(*parts, "index.html")


def build_site(
    ctx: OperationContext,
    renderer: PageRenderer,
    output_dir: str | Path,
    *,
    revalidate: int | None = None,
) -> BuildResult:
    """Pre-render every static route into *output_dir*."""
    timer = start_timer()
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    static_paths = get_product_paths(ctx)
    routes = ["/", *static_paths.paths]

    rendered: list[RenderedPage] = []
    for route in routes:
        page = render_route(ctx, renderer, route, revalidate=revalidate)
        _write(out / route_to_file(page.route), page.html)
        rendered.append(page)
        logger.debug("page_generated", route=page.route, status=page.status_code)

    _write(out / "404.html", renderer.render("404.html", route=None))

    manifest = {
        "generated_at": datetime.now(UTC).isoformat(),
        "revalidate": revalidate,
        "fallback": static_paths.fallback,
        "routes": [
            {
                "route": p.route,
                "file": route_to_file(p.route).as_posix(),
                "status": p.status_code,
            }
            for p in rendered
        ],
    }
    (out / MANIFEST_NAME).write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    result = BuildResult(
        output_dir=str(out),
        pages=[p.route for p in rendered if p.status_code == 200],
        not_found=[p.route for p in rendered if p.status_code == 404],
        elapsed_ms=timer.elapsed_ms,
    )
    logger.info(
        "site_built",
        output_dir=result.output_dir,
        pages=len(result.pages),
        not_found=len(result.not_found),
    )
    return result


def _write(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
