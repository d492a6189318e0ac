from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .line_item import FeedbackSentiment, LineItem

"""Order / Address models.

An Order is one buyer transaction built from its order header row; it owns its
LineItems, which are stored in original file order.
"""

__all__ = [
    "Address",
    "Order",
]


@dataclass(frozen=True)
class Address:
    name: str | None
    street_1: str | None
    street_2: str | None
    city: str | None
    county: str | None
    post_code: str | None
    country: str | None


@dataclass(frozen=True)
class Order:
    """One buyer transaction (order header row + its line items)."""
    sales_record_number: int | None
    user_id: str | None
    buyer_name: str | None
    email: str
    phone_number: str | None
    buyer_address: Address
    shipping_address: Address
    currency: str | None
    subtotal: Decimal | None
    vat_rate: float
    shipping: Decimal | None
    insurance: Decimal | None
    cash_on_delivery_fee: Decimal | None
    total_price: Decimal
    payment_method: str | None
    sale_date: date | None
    checkout_date: date | None
    paid_on_date: date | None
    dispatch_date: date | None
    invoice_date: date | None
    invoice_number: str | None
    feedback_left: bool
    feedback_received: FeedbackSentiment | None
    notes: str | None
    paypal_transaction_id: str | None
    delivery_service: str | None
    cash_on_delivery_option: str | None
    transaction_id: int | None
    order_id: int | None
    global_shipping: bool
    global_shipping_reference_id: str | None
    click_and_collect: bool
    click_and_collect_reference: str | None
    ebay_plus: bool
    items: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)
