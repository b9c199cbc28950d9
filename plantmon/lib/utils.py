"""Shared utility functions."""
import math
from datetime import UTC, datetime
from typing import Any


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO 8601 date-time into an aware datetime.

    Naive values are taken as UTC. Returns None for anything that is not a
    parseable date-time string, so callers can drop the offending reading
    instead of failing the whole payload.
    """
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str):
        try:
            parsed = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def coerce_number(raw: Any) -> int | float | None:
    """Return raw if it is a finite JSON number, else None."""
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    return raw
