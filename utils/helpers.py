"""Helper utility functions."""

import math
import re
from datetime import date, datetime, time
from typing import Any, Optional, Union

# Formats tried after ISO 8601, in order.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%a %b %d %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_date(value: Union[str, date]) -> date:
    """Parse a calendar date from user input.

    Accepts ISO dates, ISO datetimes (the time part is dropped) and a few
    human-readable formats. Raises ValueError when nothing matches.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {text!r}")


def format_date(value: Union[date, datetime]) -> str:
    """Render a date like `Sun Jan 15 2023`."""
    return value.strftime("%a %b %d %Y")


def to_storage_datetime(value: date) -> datetime:
    """BSON has no date type, so dates are stored as midnight datetimes."""
    return datetime.combine(value, time.min)


def parse_leading_int(value: Any) -> Optional[int]:
    """Return the integer a value starts with, or None.

    `"30"` -> 30, `"30.7"` -> 30, `"45min"` -> 45, `"abc"` -> None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def serialize_id(document: dict) -> dict:
    """Serialize MongoDB document ObjectId."""
    if document and "_id" in document:
        document["_id"] = str(document["_id"])
    return document


def coerce_text(value: Any) -> Any:
    """Cast JSON scalars to the string a text field stores.

    `123` -> `"123"`, `1.5` -> `"1.5"`, `True` -> `"true"`; other values pass through.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value
