"""In-memory fakes for the domain ports.

These implement the same abstract interfaces as the JSON store and the
HTTP client but keep everything in memory. No file I/O, no network.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from storefront.domain.exceptions import (
    EntityNotFoundError,
    NetworkError,
    PersistenceError,
)
from storefront.domain.model.product import CatalogPage, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_client import CatalogClient
from storefront.domain.repository.key_value_store import KeyValueStore


def make_product(
    product_id: int,
    price: str = "10.00",
    title: str | None = None,
    category: str = "misc",
) -> Product:
    return Product(
        id=product_id,
        title=title or f"Product {product_id}",
        price=Money.of(price),
        description=f"Description of product {product_id}",
        thumbnail_url=f"https://cdn.example/{product_id}/thumb.png",
        image_urls=(f"https://cdn.example/{product_id}/1.png",),
        category=category,
    )


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._store: dict[str, Any] = copy.deepcopy(initial or {})
        self.writes = 0

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._store.get(key))

    def set(self, key: str, value: Any) -> None:
        self.writes += 1
        self._store[key] = copy.deepcopy(value)


class FailingKeyValueStore(KeyValueStore):
    """Every read and write fails, like a full or corrupted disk."""

    def __init__(self) -> None:
        self.write_attempts = 0

    def get(self, key: str) -> Any | None:
        raise PersistenceError("storage unavailable")

    def set(self, key: str, value: Any) -> None:
        self.write_attempts += 1
        raise PersistenceError("storage unavailable")


class FakeCatalogClient(CatalogClient):
    """Serves a fixed product list.

    ``failure`` makes every call raise it; ``gate`` holds every call until
    the event is set, so a fetch can be kept in flight.
    """

    def __init__(
        self,
        products: list[Product] | None = None,
        categories: list[str] | None = None,
        reported_total: int | None = None,
    ) -> None:
        self.products = list(products or [])
        self.categories = list(categories or [])
        self.reported_total = reported_total
        self.failure: NetworkError | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[Any, ...]] = []

    async def _respond(self, call: tuple[Any, ...]) -> None:
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if self.failure is not None:
            raise self.failure

    def _page(self, products: list[Product], skip: int = 0, limit: int = 0) -> CatalogPage:
        total = self.reported_total if self.reported_total is not None else len(products)
        return CatalogPage(products=tuple(products), total=total, skip=skip, limit=limit)

    async def fetch_products(self, limit: int, skip: int) -> CatalogPage:
        await self._respond(("page", limit, skip))
        page = self._page(self.products[skip:skip + limit], skip, limit)
        if self.reported_total is None:
            page = CatalogPage(page.products, len(self.products), skip, limit)
        return page

    async def search_products(self, query: str) -> CatalogPage:
        await self._respond(("search", query))
        return self._page([p for p in self.products if query.lower() in p.title.lower()])

    async def fetch_products_by_category(self, category: str) -> CatalogPage:
        await self._respond(("category", category))
        return self._page([p for p in self.products if p.category == category])

    async def fetch_categories(self) -> list[str]:
        await self._respond(("categories",))
        return list(self.categories)

    async def fetch_product(self, product_id: int) -> Product:
        await self._respond(("product", product_id))
        for p in self.products:
            if p.id == product_id:
                return p
        raise EntityNotFoundError(f"Product #{product_id} not found")
