from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

__all__ = [
    "Price",
    "EMPTY_PRICE",
]


@dataclass(frozen=True)
class Price:
    """Amount with its ISO currency code. Both are None for an empty price."""
    currency: str | None
    amount: Decimal | None

    @property
    def is_empty(self) -> bool:
        return self.amount is None


EMPTY_PRICE = Price(currency=None, amount=None)
