"""Cart aggregate: one entry per distinct product, each with a quantity.

The Cart owns its entries. Persistence and change notification belong to
the application layer (``CartStore``); this module only enforces the
quantity rules.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


def new_entry_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CartEntry:
    """A product in the cart with how many units of it were added.

    ``entry_id`` is an opaque token, stable for the life of the entry and
    across reloads from storage.
    """

    product: Product
    quantity: Quantity = field(default_factory=lambda: Quantity(1))
    entry_id: str = field(default_factory=new_entry_id)

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for the shopping cart.

    Invariants:
    - at most one entry per product id
    - every entry's quantity is >= 1 (an entry that would drop to zero is
      removed instead)
    """

    entries: list[CartEntry] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------
    #
    # Each returns True when the cart changed so the caller knows whether
    # a persistence write is due.

    def add(self, product: Product) -> bool:
        entry = self._find_entry(product.id)
        if entry is None:
            self.entries.append(CartEntry(product=product))
        else:
            entry.quantity = entry.quantity.incremented()
        return True

    def remove(self, product: Product) -> bool:
        """Take one unit out; drop the entry when its last unit goes."""
        entry = self._find_entry(product.id)
        if entry is None:
            return False
        if entry.quantity.value > 1:
            entry.quantity = entry.quantity.decremented()
        else:
            self.entries.remove(entry)
        return True

    def remove_all(self, product: Product) -> bool:
        entry = self._find_entry(product.id)
        if entry is None:
            return False
        self.entries.remove(entry)
        return True

    def clear(self) -> bool:
        if not self.entries:
            return False
        self.entries.clear()
        return True

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for entry in self.entries:
            result = result + entry.line_total
        return result.quantized()

    @property
    def count(self) -> int:
        return sum(entry.quantity.value for entry in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def quantity_of(self, product: Product) -> int:
        entry = self._find_entry(product.id)
        return entry.quantity.value if entry is not None else 0

    # --- Internal helpers -----------------------------------------------------

    def _find_entry(self, product_id: int) -> CartEntry | None:
        for entry in self.entries:
            if entry.product.id == product_id:
                return entry
        return None
