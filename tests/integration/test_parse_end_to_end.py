from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from conftest import HEADER_LINE, ITEM_VALUES, ORDER_HEADER_VALUES, build_line
from sales_history.parser import (
    EncodingError,
    FieldParseError,
    InputNotFoundError,
    RowError,
    SchemaError,
    TrailerError,
    UnsupportedSiteError,
    parse_sales_history,
)

"""End-to-end parse of complete sales history files written to disk."""


def test_single_order_file(tmp_path: Path):
    line = build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES})
    content = "\r\n".join([
        HEADER_LINE,
        line,
        "",
        "1, record(s) downloaded,from 01-Mar-17 to 31-Mar-17",
        "Seller ID: bob@seller.com",
        "",
    ])
    path = tmp_path / "sales.csv"
    path.write_bytes(content.encode("iso-8859-1"))

    history = parse_sales_history(path)

    assert history.record_count == 1
    assert history.seller_id == "bob@seller.com"
    assert len(history.orders) == 1
    order = history.orders[0]
    assert order.sales_record_number == 100200300
    assert len(order.items) == 1
    item = order.items[0]
    assert item.item_number == 555
    assert item.quantity == 2
    assert item.currency == "GBP"
    assert item.price == Decimal("9.99")


def test_bare_empty_fields_are_repaired(write_sales_file):
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES}, bare_empty=True)])
    order = parse_sales_history(path).orders[0]
    assert order.buyer_address.street_2 is None
    assert order.ebay_plus is False
    assert order.items[0].title == "Brass door knob"


def test_multi_line_notes_and_multi_item_order(write_sales_file):
    header = {**ORDER_HEADER_VALUES, "notes_to_yourself": "wrap carefully\nfragile\nsend tracked"}
    second_item = {**ITEM_VALUES, "item_number": "556", "item_title": "Brass hinge", "quantity": "1"}
    third_item = {**ITEM_VALUES, "item_number": "557", "item_title": "Brass hook"}
    path = write_sales_file(
        [build_line(header), build_line(second_item), build_line(third_item, bare_empty=True)],
        count=1,
    )
    history = parse_sales_history(path)
    assert len(history.orders) == 1
    order = history.orders[0]
    assert order.notes == "wrap carefully\nfragile\nsend tracked"
    assert [i.item_number for i in order.items] == [556, 557]
    assert history.item_count == 2


def test_record_count_mismatch_warns(write_sales_file, caplog):
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES})], count=4)
    history = parse_sales_history(path)
    assert history.record_count == 4
    assert "declares 4 record(s) but 1 order(s)" in caplog.text


def test_record_count_mismatch_strict(write_sales_file):
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES})], count=4)
    with pytest.raises(TrailerError):
        parse_sales_history(path, strict_record_count=True)


def test_unsupported_site_rejected_before_file_access(tmp_path: Path):
    with pytest.raises(UnsupportedSiteError):
        parse_sales_history(tmp_path / "does-not-exist.csv", site_id=0)


def test_missing_file(tmp_path: Path):
    with pytest.raises(InputNotFoundError):
        parse_sales_history(tmp_path / "missing.csv")


def test_directory_is_not_a_file(tmp_path: Path):
    with pytest.raises(InputNotFoundError):
        parse_sales_history(tmp_path)


def test_empty_file(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_bytes(b"\r\n\r\n")
    with pytest.raises(SchemaError):
        parse_sales_history(path)


def test_missing_column(write_sales_file):
    path = write_sales_file([], header=HEADER_LINE.replace("Buyer Email, ", ""))
    with pytest.raises(SchemaError) as e:
        parse_sales_history(path)
    assert e.value.column == "buyer_email"


def test_missing_seller_line(tmp_path: Path):
    path = tmp_path / "sales.csv"
    path.write_bytes(f"{HEADER_LINE}\r\n1, record(s) downloaded,from x\r\n".encode("iso-8859-1"))
    with pytest.raises(TrailerError):
        parse_sales_history(path)


def test_unterminated_row_does_not_consume_trailer(write_sales_file):
    broken = build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES}).split('","')[0] + '","half a row'
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES}), broken], count=1)
    with pytest.raises(RowError) as e:
        parse_sales_history(path)
    assert e.value.line == 3


def test_bad_date_is_fatal(write_sales_file):
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES, "dispatch_date": "31-Feb-17"})])
    with pytest.raises(FieldParseError) as e:
        parse_sales_history(path)
    assert e.value.column == "dispatch_date"
    assert e.value.line == 2


def test_custom_date_formats(write_sales_file):
    values = {**ORDER_HEADER_VALUES, **ITEM_VALUES, "sale_date": "27.03.2017", "checkout_date": "",
              "paid_on_date": ""}
    path = write_sales_file([build_line(values)])
    history = parse_sales_history(path, date_formats=["%d.%m.%Y"])
    assert history.orders[0].sale_date.isoformat() == "2017-03-27"


def test_illegal_bytes_for_configured_encoding(write_sales_file):
    path = write_sales_file([build_line({**ORDER_HEADER_VALUES, **ITEM_VALUES})])
    raw = path.read_bytes().replace(b"Brass", b"Br\x81ss")
    path.write_bytes(raw)
    with pytest.raises(EncodingError) as e:
        parse_sales_history(path, encoding="cp1252")
    assert e.value.line == 2
