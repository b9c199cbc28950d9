"""Monitor API client.

The transport is a pluggable ``JsonSource``: anything that can GET a JSON
document for a path. ``HttpJsonSource`` talks to the Raspberry Pi over HTTP
with aiohttp, ``MockJsonSource`` (see plantmon.lib.mock) generates data
locally. ``MonitorClient`` turns those documents into domain objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from pydantic import BaseModel, ConfigDict, ValidationError

from plantmon.lib.alerts import AlertEvent
from plantmon.lib.config import (
    ENDPOINT_CHECK_ALERTS,
    ENDPOINT_HISTORY,
    ENDPOINT_LATEST,
    Settings,
    get_settings,
)
from plantmon.lib.exceptions import PayloadFormatError, TransportError
from plantmon.lib.reading import Reading
from plantmon.lib.store import sort_newest_first
from plantmon.logging import get_logger

logger = get_logger("lib.client")

type QueryParams = Mapping[str, str | int]


class JsonSource(Protocol):
    """Protocol for anything that can fetch a JSON document by path."""

    async def get_json(
        self, path: str, params: QueryParams | None = None
    ) -> Any: ...

    async def close(self) -> None: ...


class HttpJsonSource:
    """Fetch JSON documents from the monitor over HTTP."""

    def __init__(
        self,
        base_url: str,
        websession: aiohttp.ClientSession | None = None,
        timeout_sec: float | None = None,
    ) -> None:
        """Initialize the HTTP source.

        Args:
            base_url: Scheme, host and port of the monitor API.
            websession: Optional aiohttp ClientSession. If not provided, one
                will be created on first use and closed by close().
            timeout_sec: Total timeout per request. None disables it.
        """
        if not base_url.startswith("http"):
            base_url = f"http://{base_url}"
        self.base_url = base_url.rstrip("/")
        self._websession = websession
        self._own_session = websession is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_sec)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True
        return self._websession

    async def get_json(
        self, path: str, params: QueryParams | None = None
    ) -> Any:
        """GET a path and decode the JSON body.

        Raises:
            TransportError: Connection failure, timeout or non-2xx status.
            PayloadFormatError: Body is not valid JSON.
        """
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"
        try:
            async with session.get(
                url, params=params, timeout=self._timeout
            ) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except aiohttp.ClientError as err:
            raise TransportError(f"Failed to fetch {path}: {err}") from err
        except TimeoutError as err:
            raise TransportError(f"Timed out fetching {path}") from err
        except ValueError as err:
            raise PayloadFormatError(f"Invalid JSON from {path}: {err}") from err
        logger.debug("GET %s -> %s", path, type(data).__name__)
        return data

    async def close(self) -> None:
        """Close the session if this source created it."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def __aenter__(self) -> HttpJsonSource:
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class _AlertPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    message: str


class _AlertFeedPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    alert_count: int = 0
    alerts: list[_AlertPayload] = []


class MonitorClient:
    """Typed access to the monitor's history, latest and alert endpoints."""

    def __init__(self, source: JsonSource) -> None:
        self._source = source

    async def fetch_history(self, hours: int) -> list[Reading]:
        """Fetch the last ``hours`` of readings, most recent first.

        Raises:
            TransportError: The monitor could not be reached.
            PayloadFormatError: The response is not a JSON array.
        """
        data = await self._source.get_json(ENDPOINT_HISTORY, {"hours": hours})
        if not isinstance(data, list):
            raise PayloadFormatError(
                f"Expected JSON array from {ENDPOINT_HISTORY}, "
                f"got {type(data).__name__}"
            )

        readings = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning(
                    "Skipping history entry of type %s", type(item).__name__
                )
                continue
            readings.append(Reading.from_payload(item))

        logger.debug("Fetched %d readings for %dh", len(readings), hours)
        return sort_newest_first(readings)

    async def fetch_latest(self) -> Reading | None:
        """Fetch the most recent reading, or None if the monitor has none.

        Raises:
            TransportError: The monitor could not be reached.
            PayloadFormatError: The response is not a JSON object.
        """
        data = await self._source.get_json(ENDPOINT_LATEST)
        if not isinstance(data, dict):
            raise PayloadFormatError(
                f"Expected JSON object from {ENDPOINT_LATEST}, "
                f"got {type(data).__name__}"
            )
        if data.get("error"):
            logger.info("Monitor has no latest reading: %s", data["error"])
            return None
        return Reading.from_payload(data)

    async def check_alerts(self) -> list[AlertEvent]:
        """Fetch the currently active alerts, in feed order.

        Raises:
            TransportError: The monitor could not be reached.
            PayloadFormatError: The response does not match the alert feed.
        """
        data = await self._source.get_json(ENDPOINT_CHECK_ALERTS)
        try:
            feed = _AlertFeedPayload.model_validate(data)
        except ValidationError as err:
            raise PayloadFormatError(
                f"Invalid alert feed from {ENDPOINT_CHECK_ALERTS}: {err}"
            ) from err

        if feed.alert_count <= 0:
            return []
        return [AlertEvent(type=a.type, message=a.message) for a in feed.alerts]

    async def close(self) -> None:
        await self._source.close()


def create_source(settings: Settings | None = None) -> JsonSource:
    """Create the JSON source based on configuration."""
    settings = settings or get_settings()
    if settings.mock_source:
        from plantmon.lib.mock import MockJsonSource

        logger.info("Using mock monitor source")
        return MockJsonSource()

    cfg = settings.client
    logger.info("Using monitor at %s", cfg.base_url)
    return HttpJsonSource(cfg.base_url, timeout_sec=cfg.timeout_sec)
