"""Typed field parsers for sales history values.

Each parser takes the raw string from a reconstructed row. Blank values map to
an absent value (or a neutral default) rather than raising; only malformed
non-blank dates and missing required prices raise FieldParseError.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from ..models.config_models import DEFAULT_DATE_FORMATS
from ..models.line_item import FeedbackSentiment
from ..models.price import EMPTY_PRICE, Price
from .errors import FieldParseError

__all__ = [
    "parse_text",
    "parse_integer",
    "parse_identifier",
    "parse_date",
    "parse_price",
    "parse_percentage",
    "parse_boolean",
    "parse_feedback",
    "CURRENCY_CODES",
]

CURRENCY_CODES = {
    "£": "GBP",
    "$": "USD",
    "€": "EUR",
}

_PRICE = re.compile(r"([£$€])(\d{1,3}(?:,\d{3})+|\d+)[.](\d\d)(?!\d)")
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")
_PERCENTAGE = re.compile(r"(\d+(?:[.]\d+)?)\s*%?")
_TRUE_VALUES = frozenset({"1", "true", "yes"})
_FEEDBACK_PATTERNS = (
    (re.compile("positive", re.IGNORECASE), FeedbackSentiment.POSITIVE),
    (re.compile("negative", re.IGNORECASE), FeedbackSentiment.NEGATIVE),
    (re.compile("neutral", re.IGNORECASE), FeedbackSentiment.NEUTRAL),
)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def parse_text(value: str | None) -> str | None:
    """Blank -> None; otherwise the value verbatim."""
    if _is_blank(value):
        return None
    return value


def parse_integer(value: str | None) -> int | None:
    """Loose base-10 coercion.

    Blank -> None. Otherwise the leading (optionally signed) digit run is used
    and anything after it ignored: `"12abc"` -> 12. A value with no leading
    digits coerces to 0.
    """
    if _is_blank(value):
        return None
    match = _LEADING_INTEGER.match(value)
    if not match:
        return 0
    return int(match.group(1))


def parse_identifier(value: str | None) -> int | None:
    """Marketplace id with separators removed: `"100-200300"` -> 100200300.

    Blank or digit-free -> None.
    """
    if _is_blank(value):
        return None
    digits = "".join(ch for ch in value if ch.isdigit())
    if not digits:
        return None
    return int(digits)


def parse_date(
    value: str | None,
    formats: Sequence[str] = DEFAULT_DATE_FORMATS,
    *,
    column: str | None = None,
) -> date | None:
    """Parse a date in the file's local format.

    Args:
        value: Raw field text
        formats: strptime formats tried in order
        column: Column identifier, used in the error message

    Returns:
        date | None: Parsed date, or None when blank

    Raises:
        FieldParseError: Non-blank value that matches none of `formats`
    """
    if _is_blank(value):
        return None
    candidate = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    raise FieldParseError(f"Could not parse date '{candidate}'", column=column, value=value)


def parse_price(value: str | None, *, required: bool = False, column: str | None = None) -> Price:
    """Parse `£12.34` style prices into a Price.

    Args:
        value: Raw field text
        required: When True a blank or unmatched value raises instead of
            returning EMPTY_PRICE
        column: Column identifier, used in the error message

    Raises:
        FieldParseError: `required` and the value holds no recognisable price
    """
    match = _PRICE.search(value) if value else None
    if not match:
        if required:
            raise FieldParseError(f"Could not parse price string '{value or ''}'", column=column, value=value)
        return EMPTY_PRICE
    symbol, units, cents = match.groups()
    return Price(
        currency=CURRENCY_CODES[symbol],
        amount=Decimal(f"{units.replace(',', '')}.{cents}"),
    )


def parse_percentage(value: str | None) -> float:
    """Blank -> 0.0; otherwise the leading decimal number (`"20%"` -> 20.0)."""
    if _is_blank(value):
        return 0.0
    match = _PERCENTAGE.search(value)
    return float(match.group(1)) if match else 0.0


def parse_boolean(value: str | None) -> bool:
    if _is_blank(value):
        return False
    return value.strip().lower() in _TRUE_VALUES


def parse_feedback(value: str | None) -> FeedbackSentiment | None:
    if _is_blank(value):
        return None
    for pattern, sentiment in _FEEDBACK_PATTERNS:
        if pattern.search(value):
            return sentiment
    return None
