"""Time-window filtering of reading history."""

from collections.abc import Sequence
from datetime import datetime

from plantmon.lib.reading import Reading, TimeRange
from plantmon.logging import get_logger

logger = get_logger("lib.window")


def filter_by_range(
    readings: Sequence[Reading], time_range: TimeRange, now: datetime
) -> list[Reading]:
    """Return the readings taken at or after ``now - time_range``.

    Input order is preserved. Readings without a parseable timestamp are
    excluded rather than failing the whole window.
    """
    cutoff = time_range.cutoff(now)
    window: list[Reading] = []
    skipped = 0
    for reading in readings:
        if reading.timestamp is None:
            skipped += 1
            continue
        if reading.timestamp >= cutoff:
            window.append(reading)

    if skipped:
        logger.debug(
            "Excluded %d reading(s) with unparsable timestamps", skipped
        )
    return window
