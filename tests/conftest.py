# Shared pytest fixtures
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from sales_history.logging.init import reset_logging

# Column titles as they appear in an eBay UK sales history export
HEADER_TITLES = [
    "Sales Record Number", "User Id", "Buyer Full name", "Buyer Phone Number", "Buyer Email",
    "Buyer Address 1", "Buyer Address 2", "Buyer Town/City", "Buyer County", "Buyer Postcode",
    "Buyer Country", "Item Number", "Item Title", "Custom Label", "Quantity", "Sale Price",
    "Included VAT Rate", "Postage and Packaging", "Insurance", "Cash on delivery fee", "Total Price",
    "Payment Method", "Sale Date", "Checkout Date", "Paid on Date", "Dispatch Date", "Invoice Date",
    "Invoice Number", "Feedback left", "Feedback received", "Notes to yourself", "PayPal Transaction ID",
    "Delivery Service", "Cash on delivery option", "Transaction ID", "Order ID", "Variation Details",
    "Global Shipping Programme", "Global Shipping Reference ID", "Click and Collect",
    "Click and Collect Reference", "Post To: Address 1", "Post To: Address 2", "Post To: City",
    "Post To: County", "Post To: Postcode", "Post To: Country", "eBay Plus",
]

HEADER_LINE = ", ".join(HEADER_TITLES)

# Normalized identifiers, same order as HEADER_TITLES
COLUMNS = [
    "sales_record_number", "user_id", "buyer_full_name", "buyer_phone_number", "buyer_email",
    "buyer_address_1", "buyer_address_2", "buyer_town_city", "buyer_county", "buyer_postcode",
    "buyer_country", "item_number", "item_title", "custom_label", "quantity", "sale_price",
    "included_vat_rate", "postage_and_packaging", "insurance", "cash_on_delivery_fee", "total_price",
    "payment_method", "sale_date", "checkout_date", "paid_on_date", "dispatch_date", "invoice_date",
    "invoice_number", "feedback_left", "feedback_received", "notes_to_yourself", "paypal_transaction_id",
    "delivery_service", "cash_on_delivery_option", "transaction_id", "order_id", "variation_details",
    "global_shipping_programme", "global_shipping_reference_id", "click_and_collect",
    "click_and_collect_reference", "post_to_address_1", "post_to_address_2", "post_to_city",
    "post_to_county", "post_to_postcode", "post_to_country", "ebay_plus",
]

ORDER_HEADER_VALUES = {
    "sales_record_number": "100-200300",
    "user_id": "alice_buys",
    "buyer_full_name": "Alice Smith",
    "buyer_phone_number": "01234 567890",
    "buyer_email": "alice@example.com",
    "buyer_address_1": "1 High Street",
    "buyer_town_city": "Leeds",
    "buyer_county": "West Yorkshire",
    "buyer_postcode": "LS1 1AA",
    "buyer_country": "United Kingdom",
    "included_vat_rate": "20%",
    "postage_and_packaging": "£2.99",
    "total_price": "£22.97",
    "payment_method": "PayPal",
    "sale_date": "27-Mar-17",
    "checkout_date": "27-Mar-17",
    "paid_on_date": "27-Mar-17",
    "post_to_address_1": "1 High Street",
    "post_to_city": "Leeds",
    "post_to_postcode": "LS1 1AA",
    "post_to_country": "United Kingdom",
    "global_shipping_programme": "No",
    "click_and_collect": "No",
    "ebay_plus": "No",
}

ITEM_VALUES = {
    "item_number": "555",
    "item_title": "Brass door knob",
    "custom_label": "KNOB-01",
    "quantity": "2",
    "sale_price": "£9.99",
    "sale_date": "27-Mar-17",
    "feedback_left": "Yes",
    "feedback_received": "Positive",
    "transaction_id": "1234567890",
}


def build_line(values: dict[str, str], bare_empty: bool = False) -> str:
    """Render one data line with every field double quoted.

    bare_empty=True writes empty fields (other than the first) unquoted, the way
    the vendor export does for some columns.
    """
    parts = []
    for i, column in enumerate(COLUMNS):
        value = values.get(column, "")
        if value == "" and bare_empty and i > 0:
            parts.append("")
        else:
            parts.append(f'"{value}"')
    return ",".join(parts)


def trailer_lines(count: int, seller: str = "bob@seller.com") -> list[str]:
    return [f"{count}, record(s) downloaded,from 01-Mar-17 to 31-Mar-17", f"Seller ID: {seller}"]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_env_and_logging(monkeypatch):
    monkeypatch.delenv("SALES_HISTORY_CONFIG", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def order_values() -> dict[str, str]:
    return {**ORDER_HEADER_VALUES, **ITEM_VALUES}


@pytest.fixture()
def item_values() -> dict[str, str]:
    return dict(ITEM_VALUES)


@pytest.fixture()
def write_sales_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory: write header + data lines + trailer as a latin-1 file."""
    def _write(
        data_lines: list[str],
        *,
        name: str = "sales.csv",
        count: int | None = None,
        seller: str = "bob@seller.com",
        directory: Path | None = None,
        header: str = HEADER_LINE,
        encoding: str = "iso-8859-1",
    ) -> Path:
        target = (directory or tmp_path) / name
        declared = count if count is not None else len(data_lines)
        lines = [header, *data_lines, "", *trailer_lines(declared, seller)]
        target.write_bytes(("\r\n".join(lines) + "\r\n").encode(encoding))
        return target
    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
ebay_site_id: 3
encoding: iso-8859-1
strict_record_count: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sales_history.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
