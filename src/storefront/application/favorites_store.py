"""Application service: the persisted set of favorite products."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from storefront.application.observable import Observable
from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.favorites import FavoriteSet
from storefront.domain.model.product import Product
from storefront.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_STORAGE_KEY = "favorite_products_v1"


class FavoritesStore(Observable["FavoritesStore"]):

    def __init__(
        self, storage: KeyValueStore, key: str = FAVORITES_STORAGE_KEY
    ) -> None:
        super().__init__()
        self._storage = storage
        self._key = key
        self._favorites = self._load()

    @property
    def ids(self) -> frozenset[int]:
        return frozenset(self._favorites.ids)

    def toggle(self, product: Product) -> bool:
        """Favorite or unfavorite *product*. Returns the new membership."""
        now_favorite = self._favorites.toggle(product)
        self._save()
        self._notify(self)
        return now_favorite

    def is_favorite(self, product: Product) -> bool:
        return self._favorites.contains(product)

    def filter(self, products: Iterable[Product]) -> list[Product]:
        return self._favorites.filter(products)

    # --- Persistence ----------------------------------------------------------

    def _save(self) -> None:
        try:
            self._storage.set(self._key, sorted(self._favorites.ids))
        except PersistenceError:
            logger.warning("Failed to save favorites under %r", self._key, exc_info=True)

    def _load(self) -> FavoriteSet:
        try:
            raw = self._storage.get(self._key)
            if raw is None:
                return FavoriteSet()
            return self._to_domain(raw)
        except PersistenceError:
            logger.warning(
                "Failed to load favorites from %r; starting empty",
                self._key,
                exc_info=True,
            )
            return FavoriteSet()

    @staticmethod
    def _to_domain(raw: Any) -> FavoriteSet:
        if not isinstance(raw, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in raw
        ):
            raise PersistenceError(f"Expected a list of product ids, got {raw!r}")
        return FavoriteSet(ids=set(raw))
