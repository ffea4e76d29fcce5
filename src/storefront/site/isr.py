"""
Incremental regeneration of generated pages.

``PageCache`` keeps the last rendered version of every route in process and
decides per request whether it can be served as is:

    ┌────────────┬───────────────────────────────────────────────────────┐
    │ state      │ behaviour                                             │
    ├────────────┼───────────────────────────────────────────────────────┤
    │ MISS       │ render now (blocking fallback), cache, serve          │
    │ HIT        │ serve cached page                                     │
    │ STALE      │ serve cached page, caller schedules ``refresh``       │
    └────────────┴───────────────────────────────────────────────────────┘

A refresh that fails keeps the stale page. 404 pages are cached with the same
interval, so a product created after the first request shows up once the
interval has elapsed; a stale 404 is dropped and rendered again as a miss.
The cache holds at most ``max_pages`` routes and evicts the least recently
used one beyond that.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from sqlalchemy.orm import sessionmaker

from storefront.core.errors import StorefrontError
from storefront.core.logging import LogContext, get_logger
from storefront.core.orm.session import session_scope
from storefront.ops.context import OperationContext
from storefront.site.pages import RenderedPage, normalize_route, render_route
from storefront.site.renderer import PageRenderer

logger = get_logger(__name__)

CacheState = Literal["MISS", "HIT", "STALE"]


@dataclass(frozen=True, slots=True)
class CacheLookup:
    page: RenderedPage
    state: CacheState


class PageCache:
    """Process-local cache of rendered pages with time-based revalidation.

    Args:
        session_factory: Opens a session for each (re)generation.
        renderer: Page renderer.
        revalidate_seconds: Freshness interval stamped on every page.
        max_pages: Routes kept before LRU eviction.
        clock: Returns epoch seconds; injectable for tests.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        renderer: PageRenderer,
        *,
        revalidate_seconds: int | None = 60,
        max_pages: int = 1000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._session_factory = session_factory
        self._renderer = renderer
        self._revalidate = revalidate_seconds
        self._clock = clock
        self._max_pages = max_pages
        self._pages: OrderedDict[str, RenderedPage] = OrderedDict()
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    @property
    def revalidate_seconds(self) -> int | None:
        return self._revalidate

    def routes(self) -> list[str]:
        with self._lock:
            return sorted(self._pages)

    def get(self, route: str) -> CacheLookup:
        """Return the page for *route*, rendering it on a miss."""
        route = normalize_route(route)
        now = self._clock()
        with self._lock:
            page = self._pages.get(route)
            if page is not None and page.status_code == 404 and page.is_stale(now):
                del self._pages[route]
                page = None
            elif page is not None:
                self._pages.move_to_end(route)

        if page is None:
            return CacheLookup(page=self.regenerate(route), state="MISS")
        if page.is_stale(now):
            return CacheLookup(page=page, state="STALE")
        return CacheLookup(page=page, state="HIT")

    def regenerate(self, route: str) -> RenderedPage:
        """Render *route* now and replace the cached copy. Raises on failure."""
        route = normalize_route(route)
        with LogContext(route=route), session_scope(self._session_factory) as session:
            ctx = OperationContext(session=session, caller="site")
            page = render_route(
                ctx,
                self._renderer,
                route,
                revalidate=self._revalidate,
                now=self._clock(),
            )
        with self._lock:
            self._pages[page.route] = page
            self._pages.move_to_end(page.route)
            while len(self._pages) > self._max_pages:
                evicted, _ = self._pages.popitem(last=False)
                logger.debug("page_evicted", route=evicted)
        logger.info("page_regenerated", route=page.route, status=page.status_code)
        return page

    def refresh(self, route: str) -> bool:
        """Regenerate a stale page, keeping the old one if rendering fails.

        Concurrent refreshes of the same route collapse into one. Returns
        ``True`` when a new page was stored.
        """
        route = normalize_route(route)
        with self._lock:
            if route in self._in_flight:
                return False
            self._in_flight.add(route)
        try:
            self.regenerate(route)
            return True
        except StorefrontError as exc:
            logger.warning("page_refresh_failed", route=route, **exc.to_dict())
            return False
        finally:
            with self._lock:
                self._in_flight.discard(route)

    def invalidate(self, route: str | None = None) -> list[str]:
        """Drop one route (or every route) so the next request re-renders it."""
        with self._lock:
            if route is None:
                dropped = sorted(self._pages)
                self._pages.clear()
            else:
                route = normalize_route(route)
                dropped = [route] if self._pages.pop(route, None) is not None else []
        logger.info("pages_invalidated", routes=dropped)
        return dropped
