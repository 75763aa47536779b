"""Search session: one evolving ingredient search and its result lifecycle.

The session lives on a single asyncio event loop. Every change of terms or page
issues a new request sequence number; a fetch outcome is applied only if its
sequence number is still the latest one, so late answers for superseded queries
never overwrite the view.
"""

import asyncio
import functools
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from .api import NetworkError, RecipeAPIError
from .config import CACHE_TTL_SECONDS
from .models import SearchResult
from .query import QueryDescriptor, build_query

logger = logging.getLogger(__name__)

Status = Literal["idle", "loading", "error", "success"]
Loader = Callable[[QueryDescriptor], Awaitable[SearchResult]]


class SearchBackend(Protocol):
    async def search(self, descriptor: QueryDescriptor) -> SearchResult: ...


class SearchSessionError(Exception):
    """Exception raised when the session is driven out of order."""

    pass


@dataclass(frozen=True)
class ErrorInfo:
    """Displayable description of a failed search."""

    kind: str  # "network" or "remote"
    message: str

    @classmethod
    def from_exception(cls, error: RecipeAPIError) -> "ErrorInfo":
        kind = "network" if isinstance(error, NetworkError) else "remote"
        return cls(kind=kind, message=str(error))


@dataclass(frozen=True)
class SearchView:
    """What the session currently shows for its active query."""

    status: Status = "idle"
    descriptor: QueryDescriptor | None = None
    result: SearchResult | None = None
    error: ErrorInfo | None = None

    @property
    def is_empty(self) -> bool:
        """True for a successful search that found no recipes."""
        return self.status == "success" and self.result is not None and self.result.is_empty


class QueryCache:
    """De-duplicates in-flight searches and keeps completed results for reuse.

    One cache may be shared by several sessions.
    """

    def __init__(self, max_age: float | None = CACHE_TTL_SECONDS):
        self.max_age = max_age
        self._in_flight: dict[QueryDescriptor, asyncio.Future[SearchResult]] = {}
        self._completed: dict[QueryDescriptor, tuple[SearchResult, float]] = {}

    def cached(self, descriptor: QueryDescriptor) -> SearchResult | None:
        """Return a completed result for the descriptor if it has not expired."""
        entry = self._completed.get(descriptor)
        if entry is None:
            return None

        result, stored_at = entry
        if self.max_age is not None and time.monotonic() - stored_at > self.max_age:
            del self._completed[descriptor]
            return None
        return result

    def is_in_flight(self, descriptor: QueryDescriptor) -> bool:
        return descriptor in self._in_flight

    def fetch(self, descriptor: QueryDescriptor, loader: Loader) -> "asyncio.Future[SearchResult]":
        """
        Start a fetch for the descriptor, or join the one already running.

        Args:
            descriptor: Query to fetch
            loader: Coroutine function performing the actual request

        Returns:
            A future shared by every caller asking for the same descriptor
            until it resolves
        """
        future = self._in_flight.get(descriptor)
        if future is not None:
            logger.debug("Joining in-flight search %s", descriptor)
            return future

        future = asyncio.ensure_future(loader(descriptor))
        self._in_flight[descriptor] = future
        future.add_done_callback(functools.partial(self._on_done, descriptor))
        return future

    def _on_done(self, descriptor: QueryDescriptor, future: "asyncio.Future[SearchResult]") -> None:
        if self._in_flight.get(descriptor) is future:
            del self._in_flight[descriptor]
        # Failures are not cached so the next trigger fetches again
        if future.cancelled() or future.exception() is not None:
            return
        self._completed[descriptor] = (future.result(), time.monotonic())

    def invalidate(self, descriptor: QueryDescriptor | None = None) -> None:
        """Drop one completed result, or all of them."""
        if descriptor is None:
            self._completed.clear()
        else:
            self._completed.pop(descriptor, None)


class SearchSession:
    """Holds the active ingredient terms and page and tracks the search for them."""

    def __init__(
        self,
        api: SearchBackend,
        cache: QueryCache | None = None,
        on_change: Callable[[SearchView], Any] | None = None,
    ):
        self.api = api
        self.cache = cache if cache is not None else QueryCache()
        self.on_change = on_change
        self._terms: tuple[str, ...] = ()
        self._page = 1
        self._total_pages: int | None = None
        self._sequence = 0
        self._view = SearchView()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    @property
    def page_number(self) -> int:
        return self._page

    @property
    def total_pages(self) -> int | None:
        """Page count reported by the engine for the current terms, once known."""
        return self._total_pages

    def current_view(self) -> SearchView:
        return self._view

    def set_terms(self, terms: Sequence[str]) -> asyncio.Task[None] | None:
        """
        Replace the search terms and start searching from page 1.

        An empty sequence ends the search: nothing is fetched and the view goes
        back to idle.

        Returns:
            The task applying the fetch outcome, or None if there is nothing to wait for
        """
        self._terms = tuple(terms)
        self._page = 1
        self._total_pages = None

        if not self._terms:
            self._sequence += 1
            self._publish(SearchView())
            return None
        return self._request()

    def set_page(self, page: int) -> asyncio.Task[None] | None:
        """
        Move to another page of the current search.

        Raises:
            SearchSessionError: If no search terms are active
            ValueError: If the page is below 1 or past the last known page
        """
        if not self._terms:
            raise SearchSessionError("Cannot change page without search terms")
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"Page number must be a positive integer, got {page!r}")
        if self._total_pages is not None and page > max(self._total_pages, 1):
            raise ValueError(f"Page {page} is past the last page ({self._total_pages})")

        self._page = page
        return self._request()

    def refresh(self) -> asyncio.Task[None] | None:
        """Fetch the active query again, bypassing the completed-result cache."""
        if not self._terms:
            return None
        self.cache.invalidate(build_query(self._terms, self._page))
        return self._request()

    async def settle(self) -> None:
        """Wait until every outstanding fetch has been applied or discarded."""
        while self._pending:
            await asyncio.gather(*self._pending)

    def _request(self) -> asyncio.Task[None] | None:
        descriptor = build_query(self._terms, self._page)
        self._sequence += 1
        sequence = self._sequence

        cached = self.cache.cached(descriptor)
        if cached is not None:
            logger.debug("Serving %s from cache", descriptor)
            self._apply_success(descriptor, cached)
            return None

        self._publish(SearchView(status="loading", descriptor=descriptor))
        task = asyncio.get_running_loop().create_task(self._resolve(sequence, descriptor))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _resolve(self, sequence: int, descriptor: QueryDescriptor) -> None:
        # Shielded so a cancelled waiter never cancels a fetch other waiters share
        try:
            result = await asyncio.shield(self.cache.fetch(descriptor, self.api.search))
        except RecipeAPIError as e:
            if sequence != self._sequence:
                logger.debug("Discarding stale failure for %s", descriptor)
                return
            logger.info("Search %s failed: %s", descriptor, e)
            self._publish(
                SearchView(status="error", descriptor=descriptor, error=ErrorInfo.from_exception(e))
            )
            return

        if sequence != self._sequence:
            logger.debug("Discarding stale result for %s", descriptor)
            return
        self._apply_success(descriptor, result)

    def _apply_success(self, descriptor: QueryDescriptor, result: SearchResult) -> None:
        self._total_pages = result.total_pages
        self._publish(SearchView(status="success", descriptor=descriptor, result=result))

    def _publish(self, view: SearchView) -> None:
        self._view = view
        if self.on_change is not None:
            self.on_change(view)
