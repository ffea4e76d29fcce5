"""Static generation for the storefront pages.

Modules
-------
props       StaticProps / StaticPaths and the per-page data fetching
renderer    Jinja2 PageRenderer and the ``money`` filter
pages       Route table and ``render_route``
builder     ``build_site`` — write every static route to disk
isr         ``PageCache`` — serve generated pages, regenerate when stale
"""

from storefront.site.builder import BuildResult, build_site
from storefront.site.isr import CacheLookup, PageCache
from storefront.site.pages import RenderedPage, normalize_route, render_route
from storefront.site.props import (
    StaticPaths,
    StaticProps,
    get_home_props,
    get_product_paths,
    get_product_props,
)
from storefront.site.renderer import PageRenderer, format_money

__all__ = [
    "BuildResult",
    "CacheLookup",
    "PageCache",
    "PageRenderer",
    "RenderedPage",
    "StaticPaths",
    "StaticProps",
    "build_site",
    "format_money",
    "get_home_props",
    "get_product_paths",
    "get_product_props",
    "normalize_route",
    "render_route",
]
