from __future__ import annotations

import re

from .errors import SchemaError

"""Header line -> ordered column identifiers.

`Buyer Address 1` -> `buyer_address_1`, `Post To: Town/City` -> `post_to_town_city`.
The sequence is used positionally by the row reconstructor.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "normalize_column_name",
    "read_schema",
]

REQUIRED_COLUMNS: tuple[str, ...] = (
    "sales_record_number",
    "user_id",
    "buyer_full_name",
    "buyer_phone_number",
    "buyer_email",
    "buyer_address_1",
    "buyer_address_2",
    "buyer_town_city",
    "buyer_county",
    "buyer_postcode",
    "buyer_country",
    "item_number",
    "item_title",
    "custom_label",
    "quantity",
    "sale_price",
    "included_vat_rate",
    "postage_and_packaging",
    "insurance",
    "cash_on_delivery_fee",
    "total_price",
    "payment_method",
    "sale_date",
    "checkout_date",
    "paid_on_date",
    "dispatch_date",
    "invoice_date",
    "invoice_number",
    "feedback_left",
    "feedback_received",
    "notes_to_yourself",
    "paypal_transaction_id",
    "delivery_service",
    "cash_on_delivery_option",
    "transaction_id",
    "order_id",
    "variation_details",
    "global_shipping_programme",
    "global_shipping_reference_id",
    "click_and_collect",
    "click_and_collect_reference",
    "post_to_address_1",
    "post_to_address_2",
    "post_to_city",
    "post_to_county",
    "post_to_postcode",
    "post_to_country",
    "ebay_plus",
)

_HEADER_SEPARATOR = re.compile(r"\s*,\s*")
_NON_WORD = re.compile(r"[^a-z0-9 ]+")
_SPACES = re.compile(r"\s+")


def normalize_column_name(token: str) -> str:
    name = _NON_WORD.sub(" ", token.lower()).strip()
    return _SPACES.sub("_", name)


def read_schema(header_line: str) -> tuple[str, ...]:
    """Parse and validate the header line.

    Raises:
        SchemaError: a required column is missing (names the first one in
            REQUIRED_COLUMNS order) or a column appears twice
    """
    columns = tuple(normalize_column_name(t) for t in _HEADER_SEPARATOR.split(header_line))

    for column in REQUIRED_COLUMNS:
        if column not in columns:
            raise SchemaError(f"Column {column} not found", column=column)

    seen: set[str] = set()
    for column in columns:
        if column in seen:
            raise SchemaError(f"Column {column} appears more than once", column=column)
        seen.add(column)
    return columns
