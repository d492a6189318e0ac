#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates a synthetic eBay UK sales history export in the vendor layout:
- Line 1: unquoted header with every required column
- Data lines: one order header row per order followed by its item rows,
  empty fields left unquoted, an occasional multi-line note
- Blank line, record count line, seller id line

Encoded as ISO-8859-1 so `£` prices round-trip through the parser.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

import numpy as np

from sales_history.parser.schema import REQUIRED_COLUMNS

TITLES = ["Brass door knob", "Oak shelf bracket", "Steel hinge", "Porcelain handle", "Iron hook"]


def _quote_line(values: dict[str, str]) -> str:
    parts = []
    for i, column in enumerate(REQUIRED_COLUMNS):
        value = values.get(column, "")
        # first field is always quoted; other empty fields stay bare, as the vendor does
        parts.append(f'"{value}"' if value or i == 0 else "")
    return ",".join(parts)


def _pounds(pence: int) -> str:
    return f"£{pence // 100}.{pence % 100:02d}"


def generate_lines(orders: int, max_items: int = 3, seed: int = 42) -> list[str]:
    """Generate header + data + trailer lines for `orders` orders.

    Args:
        orders: Number of orders (= declared record count)
        max_items: Upper bound of items per order
        seed: Random seed for reproducible data

    Returns:
        Lines without terminators
    """
    rng = np.random.default_rng(seed)
    header = ", ".join(c.replace("_", " ").title() for c in REQUIRED_COLUMNS)
    lines = [header]
    start = date(2017, 3, 1)

    for n in range(orders):
        sale_date = (start + timedelta(days=int(rng.integers(0, 28)))).strftime("%d-%b-%y")
        item_count = int(rng.integers(1, max_items + 1))
        prices = rng.integers(99, 9999, size=item_count)
        quantities = rng.integers(1, 4, size=item_count)
        total = int((prices * quantities).sum()) + 299
        note = "leave with neighbour\ncall first" if n % 50 == 0 else ""
        lines.append(_quote_line({
            "sales_record_number": f"{1000 + n}",
            "user_id": f"buyer{n}",
            "buyer_full_name": f"Buyer {n}",
            "buyer_email": f"buyer{n}@example.com",
            "buyer_address_1": f"{n} High Street",
            "buyer_town_city": "Leeds",
            "buyer_postcode": "LS1 1AA",
            "buyer_country": "United Kingdom",
            "postage_and_packaging": "£2.99",
            "total_price": _pounds(total),
            "payment_method": "PayPal",
            "sale_date": sale_date,
            "notes_to_yourself": note,
            "global_shipping_programme": "No",
        }))
        for i in range(item_count):
            lines.append(_quote_line({
                "sales_record_number": f"{1000 + n}",
                "item_number": f"{int(rng.integers(100000, 999999))}",
                "item_title": TITLES[int(rng.integers(0, len(TITLES)))],
                "quantity": f"{int(quantities[i])}",
                "sale_price": _pounds(int(prices[i])),
                "sale_date": sale_date,
                "feedback_received": "Positive" if rng.random() < 0.7 else "",
            }))

    lines += ["", f"{orders}, record(s) downloaded,from 01-Mar-17 to 31-Mar-17", "Seller ID: perf@seller.com"]
    return lines


def write_dataset(path: Path, orders: int, seed: int = 42) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(("\r\n".join(generate_lines(orders, seed=seed)) + "\r\n").encode("iso-8859-1"))
    return path


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic sales history export")
    parser.add_argument("--orders", type=int, default=5000, help="Number of orders (default: 5000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--output", type=Path, default=Path("data/perf_sales_history.csv"), help="Output file path"
    )
    args = parser.parse_args()

    if args.orders < 1:
        print("ERROR: --orders must be positive", file=sys.stderr)
        return 1
    out = write_dataset(args.output, args.orders, seed=args.seed)
    print(f"wrote {args.orders} orders to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
