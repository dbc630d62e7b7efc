"""FavoriteSet aggregate: the ids of products the user has favorited."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from storefront.domain.model.product import Product


@dataclass
class FavoriteSet:

    ids: set[int] = field(default_factory=set)

    def toggle(self, product: Product) -> bool:
        """Flip membership of *product*. Returns the new membership."""
        if product.id in self.ids:
            self.ids.discard(product.id)
            return False
        self.ids.add(product.id)
        return True

    def contains(self, product: Product) -> bool:
        return product.id in self.ids

    def filter(self, products: Iterable[Product]) -> list[Product]:
        """Return the favorited products among *products*, order preserved."""
        return [p for p in products if p.id in self.ids]
