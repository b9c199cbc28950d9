"""In-memory reading history with a derived time window."""

from collections.abc import Iterable
from datetime import UTC, datetime

from plantmon.lib.reading import DEFAULT_RANGE, Reading, TimeRange
from plantmon.lib.utils import utcnow
from plantmon.lib.window import filter_by_range
from plantmon.logging import get_logger

logger = get_logger("lib.store")

# Sorts readings without a timestamp after every real one
_OLDEST = datetime.min.replace(tzinfo=UTC)


def sort_newest_first(readings: Iterable[Reading]) -> list[Reading]:
    """Sort readings most-recent first; unparsable timestamps go last."""
    return sorted(
        readings,
        key=lambda r: r.timestamp if r.timestamp is not None else _OLDEST,
        reverse=True,
    )


class ReadingStore:
    """Holds the raw reading history and the window for the selected range.

    The raw collection is replaced wholesale on every successful fetch, and
    the window is recomputed whenever the raw data or the range changes.
    """

    def __init__(self, time_range: TimeRange = DEFAULT_RANGE) -> None:
        self._raw: list[Reading] = []
        self._window: list[Reading] = []
        self._range = time_range
        self.updated_at: datetime | None = None

    @property
    def raw(self) -> list[Reading]:
        return list(self._raw)

    @property
    def window(self) -> list[Reading]:
        return list(self._window)

    @property
    def selected_range(self) -> TimeRange:
        return self._range

    @property
    def has_data(self) -> bool:
        return bool(self._raw)

    def replace(
        self, readings: Iterable[Reading], now: datetime | None = None
    ) -> None:
        """Replace the raw history and recompute the window."""
        self._raw = sort_newest_first(readings)
        self.updated_at = now or utcnow()
        self._recompute(self.updated_at)
        logger.debug(
            "Stored %d readings, %d in %s window",
            len(self._raw),
            len(self._window),
            self._range.label,
        )

    def select_range(
        self, time_range: TimeRange, now: datetime | None = None
    ) -> None:
        """Change the selected range and recompute the window."""
        self._range = time_range
        self._recompute(now or utcnow())

    def _recompute(self, now: datetime) -> None:
        self._window = filter_by_range(self._raw, self._range, now)
