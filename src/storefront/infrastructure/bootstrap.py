"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.application.cart_store import CartStore
from storefront.application.catalog_state import DEFAULT_PAGE_SIZE, CatalogState
from storefront.application.favorites_store import FavoritesStore
from storefront.infrastructure.http.dummyjson_catalog_client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DummyJsonCatalogClient,
)
from storefront.infrastructure.persistence.json_key_value_store import (
    JsonFileKeyValueStore,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_BASE_URL
    data_dir: Path = _DEFAULT_DATA_DIR
    http_timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE

    @staticmethod
    def from_env() -> Settings:
        env = os.environ
        return Settings(
            api_url=env.get("STOREFRONT_API_URL", DEFAULT_BASE_URL),
            data_dir=Path(env.get("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            http_timeout=float(env.get("STOREFRONT_HTTP_TIMEOUT", DEFAULT_TIMEOUT)),
            page_size=int(env.get("STOREFRONT_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
        )


def key_value_store(settings: Settings) -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(settings.data_dir / "storefront.json")


def cart_store(settings: Settings) -> CartStore:
    return CartStore(key_value_store(settings))


def favorites_store(settings: Settings) -> FavoritesStore:
    return FavoritesStore(key_value_store(settings))


def catalog_client(settings: Settings) -> DummyJsonCatalogClient:
    return DummyJsonCatalogClient(base_url=settings.api_url, timeout=settings.http_timeout)


def catalog_state(
    settings: Settings, client: DummyJsonCatalogClient | None = None
) -> CatalogState:
    return CatalogState(client or catalog_client(settings), page_size=settings.page_size)
