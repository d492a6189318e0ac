from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from pathlib import Path

from ..export.frame import export_history
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.error_record import ErrorRecord
from ..models.processing_result import FileStat, ProcessingResult
from ..models.sales_history import SalesHistory
from ..parser import SalesHistoryError, parse_with_options
from .progress import ProgressTracker

"""Directory orchestration.

Scans the configured directory for sales history exports, parses each file
independently, records failures in the JSON Lines error log and aggregates the
results for the SUMMARY line. A failing file never stops the run.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents processing the directory at all."""


def scan_sales_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_file(path: Path, config: ImportConfig) -> SalesHistory:
    history = parse_with_options(path, config.parse_options)
    if config.export_directory:
        out = export_history(history, Path(config.export_directory))
        logger.info(f"{path.name}: exported to {out}")
    return history


def process_all(config: ImportConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Parse every sales history file in the configured directory.

    Args:
        config: Import configuration with directory and parse options
        error_log: Buffer for failed files (a fresh one is created if None)

    Returns:
        ProcessingResult with aggregated counts, per-file stats and the
        parsed histories

    Raises:
        ProcessingError: the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_sales_files(Path(config.source_directory))
    file_stats: list[FileStat] = []
    histories: list[SalesHistory] = []

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                history = process_file(path, config)
            except SalesHistoryError as e:
                elapsed = time.perf_counter() - t0
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, e.line, e.error_type, str(e)))
                file_stats.append(FileStat(path.name, "failed", 0, 0, elapsed, error_type=e.error_type))
                progress.finish_file()
                continue

            elapsed = time.perf_counter() - t0
            histories.append(history)
            file_stats.append(FileStat(path.name, "success", len(history.orders), history.item_count, elapsed))
            progress.finish_file(orders=len(history.orders))

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=sum(1 for s in file_stats if s.status == "success"),
        failed_files=sum(1 for s in file_stats if s.status == "failed"),
        total_orders=sum(s.orders for s in file_stats),
        total_items=sum(s.items for s in file_stats),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        histories=histories,
    )
