from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from sales_history.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from sales_history.logging.init import log_summary, setup_logging
from sales_history.services.orchestrator import ProcessingError, process_all, scan_sales_files
from sales_history.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (SALES_HISTORY_CONFIG overrides the path)
- Parse every *.csv in source_directory
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_ORDERS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="eBay File Exchange sales history parser")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first parsed orders of each file then exit")
    return p.parse_args(argv)


def _order_preview(order) -> dict:
    # yaml.safe_dump cannot represent Decimal/date/IntEnum, so stringify them
    def plain(value):
        if value is None or type(value) in (bool, int, float, str):
            return value
        return str(value)

    return {
        "sales_record_number": order.sales_record_number,
        "email": order.email,
        "total_price": plain(order.total_price),
        "currency": order.currency,
        "sale_date": plain(order.sale_date),
        "items": [
            {
                "item_number": item.item_number,
                "title": item.title,
                "quantity": item.quantity,
                "price": plain(item.price),
            }
            for item in order.items
        ],
    }


def _inspect_data(cfg) -> int:
    from sales_history.parser import SalesHistoryError, parse_with_options

    try:
        files = scan_sales_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .csv files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            history = parse_with_options(f, cfg.parse_options)
        except SalesHistoryError as e:
            print(f"  error={e}")
            continue
        print(f"  seller={history.seller_id} records={history.record_count} orders={len(history.orders)}")
        preview = [_order_preview(o) for o in history.orders[:INSPECT_ORDERS]]
        print(yaml.safe_dump(preview, allow_unicode=True, sort_keys=False))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None; cli_main([]) in tests must not see pytest flags.
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = Path(os.getenv("SALES_HISTORY_CONFIG") or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
