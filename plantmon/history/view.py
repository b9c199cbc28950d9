"""History view state for one sensor: window, chart, stats and errors."""

from datetime import datetime, tzinfo

from plantmon.lib.chart import ChartSeries, sample_chart
from plantmon.lib.client import MonitorClient
from plantmon.lib.exceptions import FetchError, PayloadFormatError
from plantmon.lib.reading import DEFAULT_RANGE, RANGES, TimeRange
from plantmon.lib.sensors import Sensor
from plantmon.lib.stats import Stats, compute_stats
from plantmon.lib.store import ReadingStore
from plantmon.logging import get_logger

logger = get_logger("history.view")

LOAD_FAILED = "Failed to load history"
INVALID_DATA = "Invalid data format"


class HistoryView:
    """Fetches reading history and derives the chart and summary for a sensor.

    On a failed refresh the previously fetched history is kept in the store,
    but ``error`` is set and render() shows the error instead of stale data.
    A later successful refresh (periodic or manual) clears it.
    """

    def __init__(
        self,
        client: MonitorClient,
        sensor: Sensor,
        *,
        history_hours: int = 720,
        time_range: TimeRange = DEFAULT_RANGE,
        tz: tzinfo | None = None,
    ) -> None:
        self._client = client
        self.sensor = sensor
        self._history_hours = history_hours
        self._tz = tz
        self.store = ReadingStore(time_range)
        self.error: str | None = None
        self.loading = True

    @property
    def selected_range(self) -> TimeRange:
        return self.store.selected_range

    async def refresh(self, now: datetime | None = None) -> None:
        """Fetch the full history and recompute the window."""
        try:
            readings = await self._client.fetch_history(self._history_hours)
        except PayloadFormatError as err:
            logger.warning("Invalid history payload: %s", err)
            self.error = INVALID_DATA
        except FetchError as err:
            logger.warning("Failed to load history: %s", err)
            self.error = LOAD_FAILED
        else:
            self.error = None
            self.store.replace(readings, now)
        finally:
            self.loading = False

    def select_range(
        self, time_range: TimeRange, now: datetime | None = None
    ) -> None:
        self.store.select_range(time_range, now)

    def chart(self) -> ChartSeries | None:
        return sample_chart(
            self.store.window, self.sensor.field, self.selected_range, self._tz
        )

    def stats(self) -> Stats | None:
        return compute_stats(self.store.window, self.sensor.field)

    def _render_ranges(self) -> str:
        return " | ".join(
            f"[{r.label}]" if r == self.selected_range else r.label
            for r in RANGES
        )

    def render(self) -> str:
        """Render the history page as plain text."""
        config = self.sensor.config
        lines = [f"{config.title} History", self._render_ranges(), ""]

        if self.loading:
            lines.append("Loading history...")
            return "\n".join(lines)

        if self.error:
            lines.append(self.error)
            return "\n".join(lines)

        series = self.chart()
        if series is None:
            lines.append("No data available for this range")
        else:
            for label, value in zip(series.labels, series.values, strict=True):
                lines.append(f"{label:>10} {value:8.1f}{config.unit}")
            lines.append("")
            lines.append(f"🌿 Optimal range: {config.optimal_range}")

        lines.append("")
        stats = self.stats()
        if stats is None:
            lines.append("No data in this range")
        else:
            lines.append("Summary")
            lines.extend(stats.format(config.unit))
        return "\n".join(lines)
