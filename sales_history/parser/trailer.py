from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.row_data import RawLine
from ..models.sales_history import Trailer
from .errors import TrailerError

__all__ = [
    "read_trailer",
]

_RECORD_COUNT = re.compile(r"([0-9]+), record\(s\) downloaded,from", re.IGNORECASE)
_SELLER_ID = re.compile(r"^Seller ID: (.+)")


def read_trailer(lines: Sequence[RawLine]) -> Trailer:
    """Read the expected record count (second last line) and seller id (last line).

    Raises:
        TrailerError: Either line is missing or does not match its pattern
    """
    # header + count + seller id at minimum
    if len(lines) < 3:
        raise TrailerError("file is too short to contain a record count and seller id")

    match = _RECORD_COUNT.search(lines[-2].text)
    if not match:
        raise TrailerError("Could not determine the expected number of records!")
    record_count = int(match.group(1))

    match = _SELLER_ID.match(lines[-1].text)
    if not match:
        raise TrailerError("Could not determine seller email address!")
    return Trailer(record_count=record_count, seller_id=match.group(1).strip())
