from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import IntEnum

"""LineItem model: one sold item within an order."""

__all__ = [
    "FeedbackSentiment",
    "LineItem",
]


class FeedbackSentiment(IntEnum):
    NEGATIVE = -1
    NEUTRAL = 0
    POSITIVE = 1


@dataclass(frozen=True)
class LineItem:
    """One sold item. A single line item may cover several units (`quantity`)."""
    item_number: int
    sku: str | None  # "Custom Label" column
    title: str | None
    variation_details: str | None
    quantity: int
    currency: str | None
    price: Decimal | None
    sale_date: date | None
    feedback_left: bool
    feedback_received: FeedbackSentiment | None
    transaction_id: int | None = None
    order_id: int | None = None
