from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce

from ..models.config_models import DEFAULT_DATE_FORMATS
from ..models.line_item import LineItem
from ..models.order import Address, Order
from ..models.row_data import RowData
from .errors import FieldParseError
from .fields import (
    parse_boolean,
    parse_date,
    parse_feedback,
    parse_identifier,
    parse_integer,
    parse_percentage,
    parse_price,
    parse_text,
)

"""Rationalizer: flat rows -> Orders with nested LineItems.

A file lists the order header (buyer data, totals) once per order and one row
per sold item. Rows are folded in reverse file order: line items accumulate
until the order header row owning them is reached, which flushes them onto a
new Order. A single row may carry both an item and the order header.
"""

__all__ = [
    "build_line_item",
    "build_order",
    "rationalize",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _FoldState:
    pending_items: tuple[LineItem, ...] = ()  # file order
    orders: tuple[Order, ...] = ()  # reverse file order


def build_line_item(row: RowData, date_formats: Sequence[str] = DEFAULT_DATE_FORMATS) -> LineItem | None:
    """Build the LineItem described by `row`, or None if it carries no item."""
    item_number = parse_integer(row.get("item_number"))
    if item_number is None or item_number <= 0:
        return None

    quantity = parse_integer(row.get("quantity"))
    if quantity is None or quantity < 1:
        raise FieldParseError(
            f"Invalid quantity '{row.get('quantity')}' for item {item_number}",
            column="quantity",
            value=row.get("quantity"),
        )
    price = parse_price(row.get("sale_price"), required=True, column="sale_price")
    return LineItem(
        item_number=item_number,
        sku=parse_text(row.get("custom_label")),
        title=parse_text(row.get("item_title")),
        variation_details=parse_text(row.get("variation_details")),
        quantity=quantity,
        currency=price.currency,
        price=price.amount,
        sale_date=parse_date(row.get("sale_date"), date_formats, column="sale_date"),
        feedback_left=parse_boolean(row.get("feedback_left")),
        feedback_received=parse_feedback(row.get("feedback_received")),
        transaction_id=parse_identifier(row.get("transaction_id")),
        order_id=parse_identifier(row.get("order_id")),
    )


def _address(row: RowData, prefix: str, city_column: str) -> Address:
    return Address(
        name=parse_text(row.get("buyer_full_name")),
        street_1=parse_text(row.get(f"{prefix}_address_1")),
        street_2=parse_text(row.get(f"{prefix}_address_2")),
        city=parse_text(row.get(city_column)),
        county=parse_text(row.get(f"{prefix}_county")),
        post_code=parse_text(row.get(f"{prefix}_postcode")),
        country=parse_text(row.get(f"{prefix}_country")),
    )


def build_order(
    row: RowData,
    items: Sequence[LineItem],
    date_formats: Sequence[str] = DEFAULT_DATE_FORMATS,
) -> Order:
    """Build an Order from an order header row and its (file ordered) items."""
    def _date(column: str):
        return parse_date(row.get(column), date_formats, column=column)

    total = parse_price(row.get("total_price"), required=True, column="total_price")
    return Order(
        sales_record_number=parse_identifier(row.get("sales_record_number")),
        user_id=parse_text(row.get("user_id")),
        buyer_name=parse_text(row.get("buyer_full_name")),
        email=row.get("buyer_email").strip(),
        phone_number=parse_text(row.get("buyer_phone_number")),
        buyer_address=_address(row, "buyer", "buyer_town_city"),
        shipping_address=_address(row, "post_to", "post_to_city"),
        currency=total.currency,
        subtotal=parse_price(row.get("sale_price")).amount,
        vat_rate=parse_percentage(row.get("included_vat_rate")),
        shipping=parse_price(row.get("postage_and_packaging")).amount,
        insurance=parse_price(row.get("insurance")).amount,
        cash_on_delivery_fee=parse_price(row.get("cash_on_delivery_fee")).amount,
        total_price=total.amount,
        payment_method=parse_text(row.get("payment_method")),
        sale_date=_date("sale_date"),
        checkout_date=_date("checkout_date"),
        paid_on_date=_date("paid_on_date"),
        dispatch_date=_date("dispatch_date"),
        invoice_date=_date("invoice_date"),
        invoice_number=parse_text(row.get("invoice_number")),
        feedback_left=parse_boolean(row.get("feedback_left")),
        feedback_received=parse_feedback(row.get("feedback_received")),
        notes=parse_text(row.get("notes_to_yourself")),
        paypal_transaction_id=parse_text(row.get("paypal_transaction_id")),
        delivery_service=parse_text(row.get("delivery_service")),
        cash_on_delivery_option=parse_text(row.get("cash_on_delivery_option")),
        transaction_id=parse_identifier(row.get("transaction_id")),
        order_id=parse_identifier(row.get("order_id")),
        global_shipping=parse_boolean(row.get("global_shipping_programme")),
        global_shipping_reference_id=parse_text(row.get("global_shipping_reference_id")),
        click_and_collect=parse_boolean(row.get("click_and_collect")),
        click_and_collect_reference=parse_text(row.get("click_and_collect_reference")),
        ebay_plus=parse_boolean(row.get("ebay_plus")),
        items=tuple(items),
    )


def _fold_row(state: _FoldState, row: RowData, date_formats: Sequence[str]) -> _FoldState:
    try:
        item = build_line_item(row, date_formats)
        pending = state.pending_items
        if item is not None:
            # walking backwards: prepend keeps file order
            pending = (item,) + pending

        if row.get("buyer_email").strip():
            order = build_order(row, pending, date_formats)
            return _FoldState(pending_items=(), orders=state.orders + (order,))
        return _FoldState(pending_items=pending, orders=state.orders)
    except FieldParseError as e:
        e.line = row.row_number
        raise


def rationalize(rows: Sequence[RowData], date_formats: Sequence[str] = DEFAULT_DATE_FORMATS) -> list[Order]:
    """Group rows into Orders.

    Returns:
        Orders in original file order

    Raises:
        FieldParseError: A required or non-blank typed field failed to parse
    """
    final = reduce(
        lambda state, row: _fold_row(state, row, date_formats),
        reversed(rows),
        _FoldState(),
    )
    if final.pending_items:
        logger.warning(
            f"{len(final.pending_items)} line item(s) at the start of the file have no order header row; dropped"
        )
    return list(reversed(final.orders))
