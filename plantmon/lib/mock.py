"""Mock monitor data source for development.

Serves the same JSON documents as the monitor API from locally generated
data, so the services can run without a Raspberry Pi. Used when
MOCK_SOURCE=1 is set.
"""

import random
from datetime import timedelta
from typing import Any

from plantmon.lib.client import QueryParams
from plantmon.lib.config import (
    ENDPOINT_CHECK_ALERTS,
    ENDPOINT_HISTORY,
    ENDPOINT_LATEST,
    get_settings,
)
from plantmon.lib.utils import utcnow

# (initial low, initial high, drift, min, max) per reading field
_WALKS: dict[str, tuple[float, float, float, float, float]] = {
    "air_temperature": (20.0, 23.0, 0.15, 15.0, 30.0),
    "air_humidity": (45.0, 55.0, 0.3, 25.0, 75.0),
    "light_percent": (40.0, 60.0, 1.0, 0.0, 100.0),
    "soil_moisture_raw": (450.0, 600.0, 5.0, 200.0, 800.0),
    "soil_temperature": (17.0, 20.0, 0.1, 10.0, 28.0),
}

# Soil temperature probe drops out now and then
_SOIL_TEMP_DROPOUT = 0.05


def _random_walk(
    current: float, drift: float, min_val: float, max_val: float
) -> float:
    """Generate next value using random walk with bounds."""
    change = random.gauss(0, drift)
    new_val = current + change
    return max(min_val, min(max_val, new_val))


class MockJsonSource:
    """Mock JSON source producing random-walk readings and derived alerts."""

    def __init__(self, sample_interval_min: int = 10) -> None:
        self._sample_interval = timedelta(minutes=sample_interval_min)
        self._values = {
            name: random.uniform(low, high)
            for name, (low, high, *_bounds) in _WALKS.items()
        }

    def _step(self) -> dict[str, Any]:
        """Advance every walk by one step and return a reading payload."""
        payload: dict[str, Any] = {}
        for name, (_low, _high, drift, min_val, max_val) in _WALKS.items():
            self._values[name] = _random_walk(
                self._values[name], drift, min_val, max_val
            )
            payload[name] = round(self._values[name], 1)
        payload["soil_moisture_raw"] = int(payload["soil_moisture_raw"])
        if random.random() < _SOIL_TEMP_DROPOUT:
            payload["soil_temperature"] = None
        return payload

    def _history(self, hours: int) -> list[dict[str, Any]]:
        now = utcnow()
        count = int(timedelta(hours=hours) / self._sample_interval)
        history = []
        for i in range(count):
            reading = self._step()
            reading["timestamp"] = (now - i * self._sample_interval).isoformat()
            history.append(reading)
        return history

    def _latest(self) -> dict[str, Any]:
        reading = self._step()
        reading["timestamp"] = utcnow().isoformat()
        return reading

    def _alerts(self) -> dict[str, Any]:
        thresholds = get_settings().thresholds
        alerts = []
        if self._values["soil_moisture_raw"] <= thresholds.moisture:
            alerts.append(
                {"type": "low_moisture", "message": "Soil is dry - time to water"}
            )
        if self._values["air_temperature"] > thresholds.temperature_high:
            alerts.append(
                {"type": "high_temperature", "message": "It is too hot for your plant"}
            )
        if self._values["air_temperature"] < thresholds.temperature_low:
            alerts.append(
                {"type": "low_temperature", "message": "It is too cold for your plant"}
            )
        return {"alert_count": len(alerts), "alerts": alerts}

    async def get_json(self, path: str, params: QueryParams | None = None) -> Any:
        """Serve a generated document for a monitor API path."""
        if path == ENDPOINT_HISTORY:
            hours = int((params or {}).get("hours", 24))
            return self._history(hours)
        if path == ENDPOINT_LATEST:
            return self._latest()
        if path == ENDPOINT_CHECK_ALERTS:
            return self._alerts()
        return {"error": f"Unknown endpoint {path}"}

    async def close(self) -> None:
        """No-op for mock source."""
