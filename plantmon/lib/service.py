"""Service runner utility for long-running client services."""

import asyncio
import signal
from collections.abc import Awaitable, Callable
from contextlib import suppress

from plantmon.lib.config import get_settings
from plantmon.logging import configure, get_logger


def run_service(
    main: Callable[[asyncio.Event], Awaitable[None]],
    *,
    name: str = "service",
) -> None:
    """Run an async service with signal handling.

    Provides a standard entry point for services that:
    - Configures logging
    - Sets up graceful shutdown on SIGTERM/SIGINT
    - Runs the async service function until it returns

    Args:
        main: Async function to run. It receives an event that is set when
            a shutdown signal arrives and should return once it is set.
        name: Service name for logging.
    """
    configure(get_settings().log_level)
    logger = get_logger(f"{name}.service")

    async def runner() -> None:
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, stop.set)
        await main(stop)

    with suppress(KeyboardInterrupt):
        asyncio.run(runner())
    logger.info("%s shutdown complete", name.capitalize())
