"""Domain models for the sales history parser.

Every model is a frozen dataclass; entities are created fresh per parse and
never mutated afterwards.
"""

from .config_models import ImportConfig, ParseOptions
from .error_record import ErrorRecord
from .line_item import FeedbackSentiment, LineItem
from .order import Address, Order
from .price import EMPTY_PRICE, Price
from .processing_result import FileStat, ProcessingResult
from .row_data import RawLine, RowData
from .sales_history import SalesHistory, Trailer

__all__ = [
    # Configuration models
    "ImportConfig",
    "ParseOptions",
    # Parse models
    "RawLine",
    "RowData",
    "Price",
    "EMPTY_PRICE",
    "FeedbackSentiment",
    "LineItem",
    "Address",
    "Order",
    "Trailer",
    "SalesHistory",
    # Processing models
    "ErrorRecord",
    "FileStat",
    "ProcessingResult",
]
