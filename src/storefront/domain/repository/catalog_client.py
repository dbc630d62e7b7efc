"""Abstract read-only gateway to the remote product catalog.

Defined in the domain layer so the state containers never depend on
infrastructure. The HTTP implementation lives in
``storefront.infrastructure.http``; tests use an in-memory fake.

Every method raises NetworkError on connectivity, status, or decode
failure. Nothing is retried.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import CatalogPage, Product


class CatalogClient(ABC):

    @abstractmethod
    async def fetch_products(self, limit: int, skip: int) -> CatalogPage:
        """Return one page of the unfiltered catalog."""

    @abstractmethod
    async def search_products(self, query: str) -> CatalogPage:
        """Return products matching a non-empty free-text query."""

    @abstractmethod
    async def fetch_products_by_category(self, category: str) -> CatalogPage:
        """Return the products of one category."""

    @abstractmethod
    async def fetch_categories(self) -> list[str]:
        """Return every known category name, in catalog order."""

    @abstractmethod
    async def fetch_product(self, product_id: int) -> Product:
        """Return a single product, or raise EntityNotFoundError."""
