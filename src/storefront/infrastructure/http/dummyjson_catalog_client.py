"""httpx-backed implementation of CatalogClient for DummyJSON-style APIs.

Routes used:
    GET /products?limit=&skip=
    GET /products/search?q=
    GET /products/category/{name}
    GET /products/categories
    GET /products/{id}

Every failure (transport error, timeout, non-2xx status, undecodable
payload) is raised as NetworkError. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from storefront.domain.exceptions import (
    EntityNotFoundError,
    NetworkError,
    ValidationError,
)
from storefront.domain.model.product import CatalogPage, Product
from storefront.domain.repository.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dummyjson.com"
DEFAULT_TIMEOUT = 10.0


class DummyJsonCatalogClient(CatalogClient):

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> DummyJsonCatalogClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- CatalogClient interface ----------------------------------------------

    async def fetch_products(self, limit: int, skip: int) -> CatalogPage:
        raw = await self._get_json("/products", params={"limit": limit, "skip": skip})
        return self._to_page(raw)

    async def search_products(self, query: str) -> CatalogPage:
        if not query or not query.strip():
            raise ValidationError("Search query must not be empty")
        raw = await self._get_json("/products/search", params={"q": query})
        return self._to_page(raw)

    async def fetch_products_by_category(self, category: str) -> CatalogPage:
        raw = await self._get_json(f"/products/category/{quote(category, safe='')}")
        return self._to_page(raw)

    async def fetch_categories(self) -> list[str]:
        raw = await self._get_json("/products/categories")
        if not isinstance(raw, list):
            raise NetworkError("Category list is not a JSON array")
        names: list[str] = []
        for item in raw:
            # Older deployments answer with plain names, newer ones with
            # {"slug", "name", "url"} objects; the slug is what the
            # category route accepts.
            if isinstance(item, str):
                names.append(item)
            elif isinstance(item, dict) and isinstance(item.get("slug"), str):
                names.append(item["slug"])
            else:
                raise NetworkError(f"Malformed category entry: {item!r}")
        return names

    async def fetch_product(self, product_id: int) -> Product:
        try:
            raw = await self._get_json(f"/products/{product_id}")
        except NetworkError as exc:
            if exc.status_code == 404:
                raise EntityNotFoundError(f"Product #{product_id} not found") from exc
            raise
        return self._to_product(raw)

    # --- Transport ------------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s params=%s", path, params)
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NetworkError(
                f"Catalog answered {status} for {path}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Catalog request to {path} failed: {exc!r}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"Catalog returned invalid JSON for {path}") from exc

    # --- Decoding -------------------------------------------------------------

    @staticmethod
    def _to_product(raw: Any) -> Product:
        if not isinstance(raw, dict):
            raise NetworkError(f"Product record is not a JSON object: {raw!r}")
        try:
            return Product.from_payload(raw)
        except ValidationError as exc:
            raise NetworkError(f"Malformed product record: {exc}") from exc

    @classmethod
    def _to_page(cls, raw: Any) -> CatalogPage:
        if not isinstance(raw, dict):
            raise NetworkError("Catalog page is not a JSON object")
        products = raw.get("products")
        total = raw.get("total")
        if not isinstance(products, list) or not isinstance(total, int):
            raise NetworkError("Catalog page lacks 'products' or 'total'")
        skip = raw.get("skip", 0)
        limit = raw.get("limit", 0)
        for value in (skip, limit):
            if not isinstance(value, int) or isinstance(value, bool):
                raise NetworkError("Catalog page has a malformed 'skip' or 'limit'")
        return CatalogPage(
            products=tuple(cls._to_product(item) for item in products),
            total=total,
            skip=skip,
            limit=limit,
        )
