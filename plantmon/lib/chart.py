"""Downsampling of a reading window into a fixed-width chart series.

A chart shows at most MAX_CHART_POINTS of the newest readings in
chronological order, and only about TARGET_LABEL_COUNT of them carry an
x-axis label so the labels stay readable whatever the point count.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from plantmon.lib.config import MAX_CHART_POINTS, TARGET_LABEL_COUNT, ReadingField
from plantmon.lib.reading import Reading, TimeRange


@dataclass(slots=True)
class ChartSeries:
    """Parallel label/value lists ready for a line chart."""

    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def labelled_count(self) -> int:
        """Number of points that carry a visible label."""
        return sum(1 for label in self.labels if label)


def format_label(
    timestamp: datetime, time_range: TimeRange, tz: tzinfo | None = None
) -> str:
    """Format an x-axis label with a granularity suited to the range.

    Ranges up to one hour and up to a day both use hour:minute.
    """
    if tz is not None:
        timestamp = timestamp.astimezone(tz)

    if time_range.hours <= 1:
        return timestamp.strftime("%H:%M")
    if time_range.hours <= 24:
        return timestamp.strftime("%H:%M")
    if time_range.hours <= 168:
        return timestamp.strftime("%a %Hh")
    return f"{timestamp:%b} {timestamp.day}"


def label_step(point_count: int) -> int:
    """Distance between labelled points for a series of point_count."""
    return max(1, point_count // TARGET_LABEL_COUNT)


def sample_chart(
    windowed: Sequence[Reading],
    field: ReadingField,
    time_range: TimeRange,
    tz: tzinfo | None = None,
) -> ChartSeries | None:
    """Build the chart series for one field of a most-recent-first window.

    Returns None when none of the sampled readings has a value for the
    field, so the caller can show a "no data" state.
    """
    newest = list(windowed[:MAX_CHART_POINTS])
    newest.reverse()

    points = [
        (reading.timestamp, value)
        for reading in newest
        if (value := reading.value(field)) is not None
        and reading.timestamp is not None
    ]
    if not points:
        return None

    step = label_step(len(points))
    series = ChartSeries()
    for i, (timestamp, value) in enumerate(points):
        series.labels.append(
            format_label(timestamp, time_range, tz) if i % step == 0 else ""
        )
        series.values.append(value)
    return series
