"""Product and CatalogPage.

Products are read-only snapshots of the remote catalog. Nothing in the
storefront mutates them; the cart keeps a copy so it can be displayed and
totalled without going back to the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True, eq=False)
class Product:
    """A product of the remote catalog. Identity is ``id``."""

    id: int
    title: str
    price: Money
    description: str = ""
    thumbnail_url: str = ""
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    category: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # --- Payload mapping ------------------------------------------------------
    #
    # The payload shape is the catalog API's: ``thumbnail`` and ``images``.
    # Local storage reuses it so a persisted cart reads like an API response.

    @staticmethod
    def from_payload(raw: dict[str, Any]) -> Product:
        """Build a Product from a decoded catalog record.

        Raises ValidationError if a required field is missing or malformed.
        """
        try:
            product_id = raw["id"]
            title = raw["title"]
            price = raw["price"]
        except (KeyError, TypeError) as exc:
            raise ValidationError(f"Product record is missing {exc}") from exc

        if not isinstance(product_id, int) or isinstance(product_id, bool):
            raise ValidationError(f"Product id must be an integer, got {product_id!r}")

        images = raw.get("images") or []
        if not isinstance(images, list):
            raise ValidationError(f"Product images must be a list, got {images!r}")

        return Product(
            id=product_id,
            title=str(title),
            price=Money.of(price),
            description=str(raw.get("description") or ""),
            thumbnail_url=str(raw.get("thumbnail") or ""),
            image_urls=tuple(str(url) for url in images),
            category=str(raw.get("category") or ""),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price.amount),
            "description": self.description,
            "thumbnail": self.thumbnail_url,
            "images": list(self.image_urls),
            "category": self.category,
        }


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog results.

    Transient: Catalog State folds it into its accumulated list and drops it.
    """

    products: tuple[Product, ...]
    total: int
    skip: int = 0
    limit: int = 0
