from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .order import Order

__all__ = [
    "Trailer",
    "SalesHistory",
]


@dataclass(frozen=True)
class Trailer:
    """Declared record count and seller id from the last two lines of the file.

    Only used for validation; not carried onto orders.
    """
    record_count: int
    seller_id: str


@dataclass(frozen=True)
class SalesHistory:
    """Result of parsing one sales history file."""
    source: Path
    columns: tuple[str, ...]
    orders: tuple[Order, ...]
    record_count: int
    seller_id: str

    @property
    def item_count(self) -> int:
        return sum(order.item_count for order in self.orders)

    def __str__(self) -> str:
        return f"Sales History: '{self.source}'"
