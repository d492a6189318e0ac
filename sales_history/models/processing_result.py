from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .sales_history import SalesHistory

"""Processing result models for directory runs.

FileStat tracks one file; ProcessingResult aggregates a whole run and feeds the
SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file parse statistics."""
    file_name: str
    status: str  # success/failed
    orders: int
    items: int
    elapsed_seconds: float
    error_type: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one run over the source directory."""
    success_files: int
    failed_files: int
    total_orders: int
    total_items: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    histories: list[SalesHistory] | None = None  # successfully parsed files, scan order
