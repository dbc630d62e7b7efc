"""Application service: the product listing shown to the user.

CatalogState accumulates pages of the unfiltered catalog, swaps in
category or search results, and debounces search-as-you-type. It runs on
a single asyncio event loop: every mutation happens on the loop thread
and network completions are applied in the order they resolve.

One in-flight flag (``is_loading``) serialises every fetch that replaces
or extends the product list. A paginated or category fetch requested
while another is outstanding is a no-op. A settled search that arrives
while a fetch is outstanding is held and started once the flag clears,
so only the latest settled query runs and never overlaps another fetch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from storefront.application.observable import Observable
from storefront.domain.exceptions import NetworkError
from storefront.domain.model.product import CatalogPage, Product
from storefront.domain.repository.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
SEARCH_DEBOUNCE_SECONDS = 0.5


class CatalogEventKind(Enum):
    LOADING = "LOADING"
    LOADED = "LOADED"
    FAILED = "FAILED"
    CATEGORIES = "CATEGORIES"


@dataclass(frozen=True)
class CatalogEvent:
    kind: CatalogEventKind
    error: NetworkError | None = None


class CatalogState(Observable[CatalogEvent]):

    def __init__(
        self,
        client: CatalogClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        super().__init__()
        self._client = client
        self.page_size = page_size
        self._debounce_seconds = debounce_seconds

        self._products: list[Product] = []
        self.categories: list[str] = []
        self.selected_category: str | None = None
        self.active_search: str | None = None
        self.search_query = ""
        self.is_loading = False
        self.last_error: NetworkError | None = None

        # Pagination cursor for the unfiltered listing
        self.skip = 0
        self.total: int | None = None

        self._settled_query = ""
        self._pending_query: str | None = None
        self._debounce_handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        # Set whenever is_loading is False
        self._fetch_done = asyncio.Event()
        self._fetch_done.set()

    # --- Queries --------------------------------------------------------------

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    def can_load_more(self) -> bool:
        """True when fetch_next_page would extend the unfiltered listing."""
        if self.selected_category is not None or self.active_search is not None:
            return False
        return self.total is not None and len(self._products) < self.total

    # --- Paginated listing ----------------------------------------------------

    async def reset_and_fetch_first_page(self) -> bool:
        """Drop every filter and the accumulated list, then load page one.

        Returns False without doing anything if a fetch is in flight.
        Raises NetworkError if the first page cannot be fetched.
        """
        if self._reject_if_loading("reset"):
            return False
        self._products = []
        self.selected_category = None
        self.active_search = None
        self.skip = 0
        self.total = None
        return await self._run(
            "first page",
            lambda: self._client.fetch_products(limit=self.page_size, skip=0),
            self._append_page,
        )

    async def fetch_next_page(self) -> bool:
        """Append the page at the cursor to the unfiltered listing.

        Returns False without doing anything if a fetch is in flight, a
        category or search filter is showing, or every product is loaded.
        """
        if self._reject_if_loading("next page"):
            return False
        if self.selected_category is not None or self.active_search is not None:
            logger.debug("Ignoring next page: a filtered listing is showing")
            return False
        if self.total is not None and len(self._products) >= self.total:
            logger.debug("Ignoring next page: all %d products loaded", self.total)
            return False
        skip = self.skip
        return await self._run(
            f"page at skip={skip}",
            lambda: self._client.fetch_products(limit=self.page_size, skip=skip),
            self._append_page,
        )

    # --- Filtered listings ----------------------------------------------------

    async def fetch_by_category(self, name: str) -> bool:
        """Replace the listing with the products of category *name*.

        The pagination cursor of the unfiltered listing is left as is.
        """
        if self._reject_if_loading(f"category {name!r}"):
            return False

        def apply(page: CatalogPage) -> None:
            self._replace_with(page)
            self.selected_category = name
            self.active_search = None

        return await self._run(
            f"category {name!r}",
            lambda: self._client.fetch_products_by_category(name),
            apply,
        )

    async def search(self, query: str) -> bool:
        """Replace the listing with the results for *query*.

        An empty (or blank) query resets to the unfiltered first page instead.
        """
        if not query.strip():
            return await self.reset_and_fetch_first_page()
        if self._reject_if_loading(f"search {query!r}"):
            return False

        def apply(page: CatalogPage) -> None:
            self._replace_with(page)
            self.active_search = query
            self.selected_category = None

        return await self._run(
            f"search {query!r}",
            lambda: self._client.search_products(query),
            apply,
        )

    # --- Debounced search -----------------------------------------------------

    def set_search_query(self, text: str) -> None:
        """Record an edit of the search box.

        Must be called from the running event loop. The query is run
        once it has been left unchanged for the debounce interval; an
        edit within the interval restarts the timer.
        """
        self.search_query = text
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
        loop = asyncio.get_running_loop()
        self._debounce_handle = loop.call_later(
            self._debounce_seconds, self._on_query_settled
        )

    def _on_query_settled(self) -> None:
        self._debounce_handle = None
        query = self.search_query
        if query == self._settled_query:
            return
        self._settled_query = query
        self._start_settled_query(query)

    def _start_settled_query(self, query: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run_settled_query(query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_settled_query(self, query: str) -> None:
        try:
            started = await self.search(query)
        except NetworkError:
            # Already logged and delivered to listeners by _run.
            return
        if not started:
            logger.debug("Holding search %r until the in-flight fetch completes", query)
            self._pending_query = query

    async def wait_until_idle(self) -> None:
        """Wait until no search is scheduled, held or running.

        A held search waits on a fetch awaited by some other caller, so
        this returns only after that fetch completes and the held search
        has run.
        """
        loop = asyncio.get_running_loop()
        while (
            self._debounce_handle is not None
            or self._tasks
            or self._pending_query is not None
        ):
            if self._tasks:
                await asyncio.wait(set(self._tasks))
            elif self._pending_query is not None:
                await self._fetch_done.wait()
            else:
                await asyncio.sleep(max(self._debounce_handle.when() - loop.time(), 0))

    # --- Categories -----------------------------------------------------------

    async def load_categories(self) -> list[str]:
        """Fetch the category names; an unreachable catalog yields []."""
        try:
            self.categories = await self._client.fetch_categories()
        except NetworkError as exc:
            logger.warning("Could not load categories: %s", exc)
            self.categories = []
        self._notify(CatalogEvent(CatalogEventKind.CATEGORIES))
        return self.categories

    # --- Lifecycle ------------------------------------------------------------

    async def aclose(self) -> None:
        """Cancel a scheduled search and any settled query still running."""
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None
        self._pending_query = None
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # --- Internal helpers -----------------------------------------------------

    def _reject_if_loading(self, description: str) -> bool:
        if self.is_loading:
            logger.debug("Ignoring %s: a fetch is already in flight", description)
            return True
        return False

    async def _run(
        self,
        description: str,
        fetch: Callable[[], Awaitable[CatalogPage]],
        apply: Callable[[CatalogPage], None],
    ) -> bool:
        """Run one guarded fetch.

        The flag is cleared whatever the outcome. On failure the listing
        is left untouched and the NetworkError is re-raised to the caller.
        """
        self.is_loading = True
        self._fetch_done.clear()
        self.last_error = None
        self._notify(CatalogEvent(CatalogEventKind.LOADING))
        logger.debug("Fetching %s", description)

        failure: NetworkError | None = None
        try:
            page = await fetch()
        except NetworkError as exc:
            failure = exc
        finally:
            self.is_loading = False
            self._fetch_done.set()

        if failure is not None:
            self.last_error = failure
            logger.warning("Fetching %s failed: %s", description, failure)
            self._after_fetch(CatalogEvent(CatalogEventKind.FAILED, error=failure))
            raise failure

        apply(page)
        self._after_fetch(CatalogEvent(CatalogEventKind.LOADED))
        return True

    def _after_fetch(self, event: CatalogEvent) -> None:
        self._notify(event)
        if self._pending_query is not None:
            query, self._pending_query = self._pending_query, None
            self._start_settled_query(query)

    def _append_page(self, page: CatalogPage) -> None:
        known = {p.id for p in self._products}
        for product in page.products:
            if len(self._products) >= page.total:
                break
            if product.id not in known:
                self._products.append(product)
                known.add(product.id)
        self.total = page.total
        self.skip += self.page_size

    def _replace_with(self, page: CatalogPage) -> None:
        unique: dict[int, Product] = {}
        for product in page.products:
            unique.setdefault(product.id, product)
        self._products = list(unique.values())[: page.total]
        self.total = page.total
