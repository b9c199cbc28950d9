"""Logging configuration for the plant monitor client."""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def configure(level: int | str = logging.INFO) -> None:
    """Configure logging for the application.

    Safe to call multiple times - only configures once.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("plantmon")
    root.setLevel(level)
    root.addHandler(handler)

    # Connection failures are reported by plantmon.lib.client
    logging.getLogger("aiohttp").setLevel(logging.ERROR)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the 'plantmon' namespace.

    Args:
        name: Logger name (will be prefixed with 'plantmon.')

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(f"plantmon.{name}")
