from __future__ import annotations

from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.line_item import FeedbackSentiment, LineItem
from ..models.order import Address, Order
from ..models.sales_history import SalesHistory

"""Flatten parsed orders into a pandas DataFrame / CSV.

One row per line item; order level columns are repeated on every item row
and prefixed with `order_`. Item columns carry an `item_` prefix. Orders
without items still produce one row with empty item columns.
"""

__all__ = [
    "orders_to_frame",
    "export_history",
]

_ITEM_COLUMNS = {
    f.name: f.name if f.name.startswith("item_") else f"item_{f.name}" for f in fields(LineItem)
}


def _order_columns(order: Order) -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for f in fields(Order):
        if f.name == "items":
            continue
        value = getattr(order, f.name)
        if isinstance(value, Address):
            for key, part in asdict(value).items():
                flat[f"order_{f.name}_{key}"] = part
        elif isinstance(value, FeedbackSentiment):
            flat[f"order_{f.name}"] = int(value)
        else:
            flat[f"order_{f.name}"] = value
    return flat


def _item_columns(item: LineItem | None) -> dict[str, Any]:
    if item is None:
        return {column: None for column in _ITEM_COLUMNS.values()}
    values = {column: getattr(item, name) for name, column in _ITEM_COLUMNS.items()}
    if item.feedback_received is not None:
        values["item_feedback_received"] = int(item.feedback_received)
    return values


def orders_to_frame(history: SalesHistory) -> pd.DataFrame:
    records: list[dict[str, Any]] = []
    for order in history.orders:
        head = _order_columns(order)
        for item in order.items or (None,):
            records.append({**head, **_item_columns(item)})
    return pd.DataFrame.from_records(records)


def export_history(history: SalesHistory, directory: Path) -> Path:
    """Write `<stem>.orders.csv` into `directory` (created if missing)."""
    directory.mkdir(parents=True, exist_ok=True)
    out = directory / f"{history.source.stem}.orders.csv"
    orders_to_frame(history).to_csv(out, index=False, encoding="utf-8")
    return out
