"""History service.

Fetches the reading history for one sensor and prints its chart and
summary for the selected range. With --watch the history is refreshed
periodically; send SIGUSR1 to force an immediate refresh.
"""

import argparse
import asyncio
import signal
from functools import partial

from plantmon.history.view import HistoryView
from plantmon.lib.client import MonitorClient, create_source
from plantmon.lib.config import get_settings
from plantmon.lib.polling import PollingScheduler, ScheduledTask
from plantmon.lib.reading import RANGES, TimeRange
from plantmon.lib.sensors import Sensor
from plantmon.lib.service import run_service
from plantmon.logging import get_logger

logger = get_logger("history.service")

HISTORY_TASK = "history"


def build_view(client: MonitorClient, sensor: Sensor, range_label: str | None) -> HistoryView:
    """Create a history view using configured defaults."""
    settings = get_settings()
    time_range = TimeRange.from_label(range_label or settings.default_range)
    return HistoryView(
        client,
        sensor,
        history_hours=settings.client.history_hours,
        time_range=time_range,
        tz=settings.timezone,
    )


async def run(
    stop: asyncio.Event,
    *,
    sensor: Sensor,
    range_label: str | None = None,
    watch: bool = False,
) -> None:
    """Print the history once, or keep refreshing until ``stop`` is set."""
    settings = get_settings()
    client = MonitorClient(create_source(settings))
    view = build_view(client, sensor, range_label)
    logger.info(
        "Showing %s history for %s", sensor.value, view.selected_range.label
    )

    async def refresh() -> None:
        await view.refresh()
        print(view.render(), flush=True)

    try:
        if not watch:
            await refresh()
            return

        loop = asyncio.get_running_loop()
        task = ScheduledTask(HISTORY_TASK, settings.polling.reading_interval_sec, refresh)
        async with PollingScheduler("history").start([task]) as handle:
            loop.add_signal_handler(signal.SIGUSR1, handle.trigger, HISTORY_TASK)
            try:
                await stop.wait()
            finally:
                loop.remove_signal_handler(signal.SIGUSR1)
    finally:
        await client.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show sensor history from the plant monitor"
    )
    parser.add_argument(
        "sensor",
        nargs="?",
        default=Sensor.TEMPERATURE.value,
        help="Sensor to show: " + ", ".join(s.value for s in Sensor)
        + " (unknown names fall back to temperature)",
    )
    parser.add_argument(
        "--range",
        dest="range_label",
        choices=[r.label for r in RANGES],
        type=lambda v: TimeRange.from_label(v).label,
        help="Time range to show (default: DEFAULT_RANGE setting)",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep refreshing every READING_POLL_SEC seconds",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the history service."""
    args = parse_args(argv)
    service = partial(
        run,
        sensor=Sensor.parse(args.sensor),
        range_label=args.range_label,
        watch=args.watch,
    )
    run_service(service, name="history")


if __name__ == "__main__":
    main()
