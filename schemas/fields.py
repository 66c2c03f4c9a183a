"""Field coercions shared by the entity schemas and the store normalizer.

All functions are pure and never raise on bad input: they fall back to an
empty/default value the way the CRM forms expect.
"""
import math
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union


def split_tags(value: Any) -> List[str]:
    """Turn the store's comma-joined ``Tags`` string (or a list) into tags.

    Tags are trimmed and empty entries dropped, order preserved.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    else:
        parts = value
    return [str(p).strip() for p in parts if p is not None and str(p).strip()]


def join_tags(tags: Optional[Iterable[str]]) -> Optional[str]:
    """Collapse tags into the ``Tags`` string; None when there are none."""
    cleaned = split_tags(list(tags) if tags is not None else None)
    if not cleaned:
        return None
    return ",".join(cleaned)


def normalize_date(value: Union[date, datetime, str, None]) -> Optional[str]:
    """Return the YYYY-MM-DD part of a date, date-time or date-time string.

    Aware datetimes are converted to UTC first. Strings are cut at the
    date/time separator ("T" or a space); no other parsing is attempted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return text.split("T", 1)[0].split(" ", 1)[0]
    return None


def coerce_float(value: Any, default: float = 0.0) -> float:
    """Numeric value or ``default`` for missing, non-numeric or non-finite input."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def coerce_int(value: Any, default: int = 0) -> int:
    """Integer value or ``default``; fractional input is truncated ("45.7" -> 45)."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            pass
    result = coerce_float(value, default=math.nan)
    if math.isnan(result):
        return default
    return int(result)


def reference_id(value: Any) -> Any:
    """Unwrap a lookup object (``{"Id": 7, "Name": "..."}``) to its id."""
    if isinstance(value, Mapping):
        return value.get("Id", value.get("id"))
    return value
