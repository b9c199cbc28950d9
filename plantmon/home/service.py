"""Home dashboard service.

Polls the monitor for the latest reading and for active alerts on two
independent timers, prints the dashboard after each reading refresh and
raises a notification whenever the set of active alerts changes.

Send SIGUSR1 to force an immediate reading refresh.
"""

import asyncio
import signal

from plantmon.home.view import HomeView
from plantmon.lib.client import MonitorClient, create_source
from plantmon.lib.config import PollingSettings, get_settings
from plantmon.lib.notifications import get_notifier
from plantmon.lib.polling import PollingScheduler, ScheduledTask
from plantmon.lib.service import run_service
from plantmon.logging import get_logger

logger = get_logger("home.service")

READINGS_TASK = "readings"
ALERTS_TASK = "alerts"


def build_tasks(view: HomeView, polling: PollingSettings) -> list[ScheduledTask]:
    """Create the reading and alert refresh tasks for a home view."""

    async def refresh_readings() -> None:
        await view.refresh_latest()
        print(view.render(), flush=True)

    return [
        ScheduledTask(READINGS_TASK, polling.reading_interval_sec, refresh_readings),
        ScheduledTask(ALERTS_TASK, polling.alert_interval_sec, view.check_alerts),
    ]


async def run(stop: asyncio.Event) -> None:
    """Run the home dashboard until ``stop`` is set."""
    settings = get_settings()
    client = MonitorClient(create_source(settings))
    view = HomeView(
        client,
        get_notifier(settings),
        thresholds=settings.thresholds,
        tz=settings.timezone,
    )
    logger.info(
        "Polling readings every %ss, alerts every %ss",
        settings.polling.reading_interval_sec,
        settings.polling.alert_interval_sec,
    )
    loop = asyncio.get_running_loop()

    try:
        scheduler = PollingScheduler("home")
        async with scheduler.start(build_tasks(view, settings.polling)) as handle:
            loop.add_signal_handler(signal.SIGUSR1, handle.trigger, READINGS_TASK)
            try:
                await stop.wait()
            finally:
                loop.remove_signal_handler(signal.SIGUSR1)
    finally:
        await client.close()


def main() -> None:
    """Entry point for the home dashboard service."""
    run_service(run, name="home")


if __name__ == "__main__":
    main()
