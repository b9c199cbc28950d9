"""Domain models for plant monitor readings and history ranges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from plantmon.lib.config import ReadingField
from plantmon.lib.utils import coerce_number, parse_timestamp


@dataclass(frozen=True, slots=True)
class Reading:
    """One sensor sample. Any measured field may be None (not sampled)."""

    timestamp: datetime | None
    air_temperature: float | None = None
    air_humidity: float | None = None
    light_percent: float | None = None
    soil_moisture_raw: float | None = None
    soil_temperature: float | None = None
    raw_timestamp: str | None = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Reading:
        """Build a reading from a monitor API JSON object.

        Unparsable timestamps become None and non-numeric fields become
        None; neither is an error at this level.
        """
        raw_ts = data.get("timestamp")
        fields = {f.value: coerce_number(data.get(f.value)) for f in ReadingField}
        return cls(
            timestamp=parse_timestamp(raw_ts),
            raw_timestamp=raw_ts if isinstance(raw_ts, str) else None,
            **fields,
        )

    def value(self, field: ReadingField) -> float | None:
        """Return the value of a measured field."""
        return field.read(self)


@dataclass(frozen=True, slots=True)
class TimeRange:
    """A named history window ending at "now"."""

    label: str
    hours: int

    def __post_init__(self) -> None:
        if self.hours <= 0:
            raise ValueError(f"hours must be positive, got {self.hours}")

    @property
    def duration(self) -> timedelta:
        return timedelta(hours=self.hours)

    def cutoff(self, now: datetime) -> datetime:
        """Earliest timestamp still inside the window."""
        return now - self.duration

    @classmethod
    def from_label(cls, label: str) -> TimeRange:
        """Look up one of the offered ranges by label (case-insensitive)."""
        for time_range in RANGES:
            if time_range.label.lower() == label.strip().lower():
                return time_range
        raise ValueError(
            f"Unknown range '{label}'. Must be one of: "
            + ", ".join(r.label for r in RANGES)
        )


RANGES: tuple[TimeRange, ...] = (
    TimeRange("1h", 1),
    TimeRange("24h", 24),
    TimeRange("Week", 168),
    TimeRange("Month", 720),
)

DEFAULT_RANGE = RANGES[1]
