"""eBay File Exchange sales history parser.

Public entry point: :func:`sales_history.parser.parse_sales_history`.
"""

from .parser import parse_sales_history

__all__ = ["parse_sales_history"]

__version__ = "0.1.0"
