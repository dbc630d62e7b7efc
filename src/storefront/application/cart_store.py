"""Application service: the persisted shopping cart.

Wraps the Cart aggregate with local persistence and change notification.
Every mutation that changes the cart is followed by a write of the whole
cart under a single storage key. Storage failures are logged and never
reach the caller; the in-memory cart stays the source of truth for the
session.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.application.dto import CartLineDTO, CartSummaryDTO
from storefront.application.observable import Observable
from storefront.domain.exceptions import (
    PersistenceError,
    ValidationError,
)
from storefront.domain.model.cart import Cart, CartEntry
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart_items_v2"


class CartStore(Observable["CartStore"]):

    def __init__(self, storage: KeyValueStore, key: str = CART_STORAGE_KEY) -> None:
        super().__init__()
        self._storage = storage
        self._key = key
        self._cart = self._load()

    # --- Queries --------------------------------------------------------------

    @property
    def entries(self) -> tuple[CartEntry, ...]:
        return tuple(self._cart.entries)

    def total(self) -> Money:
        return self._cart.total

    def count(self) -> int:
        return self._cart.count

    def quantity_of(self, product: Product) -> int:
        return self._cart.quantity_of(product)

    def summary(self) -> CartSummaryDTO:
        return CartSummaryDTO(
            lines=[
                CartLineDTO(
                    product_id=entry.product.id,
                    title=entry.product.title,
                    quantity=entry.quantity.value,
                    unit_price=str(entry.product.price),
                    line_total=str(entry.line_total),
                )
                for entry in self._cart.entries
            ],
            item_count=self._cart.count,
            total=str(self._cart.total),
        )

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> None:
        self._apply(self._cart.add(product))

    def remove(self, product: Product) -> None:
        """Remove one unit of *product*. Silent no-op if it is not in the cart."""
        self._apply(self._cart.remove(product))

    def remove_all(self, product: Product) -> None:
        self._apply(self._cart.remove_all(product))

    def clear(self) -> None:
        self._apply(self._cart.clear())

    def checkout(self) -> CartSummaryDTO:
        """Capture the cart as placed and empty it.

        Raises ValidationError for an empty cart.
        """
        if self._cart.is_empty:
            raise ValidationError("Cannot check out an empty cart")
        placed = self.summary()
        self.clear()
        logger.info("Checked out %d item(s) for %s", placed.item_count, placed.total)
        return placed

    # --- Persistence ----------------------------------------------------------

    def _apply(self, changed: bool) -> None:
        if not changed:
            return
        self._save()
        self._notify(self)

    def _save(self) -> None:
        try:
            self._storage.set(self._key, [self._to_raw(e) for e in self._cart.entries])
        except PersistenceError:
            logger.warning("Failed to save cart under %r", self._key, exc_info=True)

    def _load(self) -> Cart:
        try:
            raw = self._storage.get(self._key)
            if raw is None:
                return Cart()
            return self._to_domain(raw)
        except PersistenceError:
            logger.warning(
                "Failed to load cart from %r; starting empty", self._key, exc_info=True
            )
            return Cart()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: CartEntry) -> dict[str, Any]:
        return {
            "entry_id": entry.entry_id,
            "quantity": entry.quantity.value,
            "product": entry.product.to_payload(),
        }

    @staticmethod
    def _to_domain(raw: Any) -> Cart:
        if not isinstance(raw, list):
            raise PersistenceError(f"Expected a list of cart entries, got {type(raw).__name__}")
        cart = Cart()
        seen: set[int] = set()
        try:
            for item in raw:
                product = Product.from_payload(item["product"])
                if product.id in seen:
                    raise PersistenceError(f"Duplicate cart entry for product {product.id}")
                seen.add(product.id)
                cart.entries.append(
                    CartEntry(
                        product=product,
                        quantity=Quantity(item["quantity"]),
                        entry_id=str(item["entry_id"]),
                    )
                )
        except (KeyError, TypeError, ValidationError) as exc:
            raise PersistenceError(f"Malformed cart entry: {exc}") from exc
        return cart
