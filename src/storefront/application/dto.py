"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry display-ready data from the stores to presentation layers
without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart entry as displayed to the user."""

    product_id: int
    title: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartSummaryDTO:
    """Output: the whole cart as displayed to the user."""

    lines: list[CartLineDTO]
    item_count: int
    total: str
