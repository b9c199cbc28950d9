"""Home view state: latest reading, sensor cards and active alerts."""

from dataclasses import dataclass
from datetime import tzinfo

from plantmon.lib.alerts import AlertEvent, reconcile
from plantmon.lib.client import MonitorClient
from plantmon.lib.config import NO_VALUE, ThresholdSettings, Unit, get_settings
from plantmon.lib.exceptions import FetchError
from plantmon.lib.notifications import AbstractNotifier, Notification
from plantmon.lib.reading import Reading
from plantmon.lib.sensors import Sensor
from plantmon.logging import get_logger

logger = get_logger("home.view")


def format_value(value: float | None, unit: Unit | str, decimals: int = 1) -> str:
    """Format a sensor value for display, '--' when missing."""
    if value is None:
        return NO_VALUE
    if unit in (Unit.CELSIUS, Unit.PERCENT):
        return f"{value:.{decimals}f}{unit}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def light_status(value: float | None, thresholds: ThresholdSettings) -> str:
    if value is None:
        return NO_VALUE
    if value > thresholds.light_great:
        return "Great"
    if value > thresholds.light_good:
        return "Good"
    return "Bad"


def temperature_status(value: float | None, thresholds: ThresholdSettings) -> str:
    if value is None:
        return NO_VALUE
    if value > thresholds.temperature_high:
        return "High"
    if value < thresholds.temperature_low:
        return "Low"
    return "Good"


def humidity_status(value: float | None, thresholds: ThresholdSettings) -> str:
    if value is None:
        return NO_VALUE
    if value > thresholds.humidity_high:
        return "High"
    if value < thresholds.humidity_low:
        return "Low"
    return "Good"


def moisture_status(value: float | None, thresholds: ThresholdSettings) -> str:
    if value is None:
        return NO_VALUE
    return "Wet" if value > thresholds.moisture else "Dry"


@dataclass(frozen=True, slots=True)
class SensorCard:
    """One tile of the home dashboard."""

    sensor: Sensor
    title: str
    status: str
    value: str


class HomeView:
    """Keeps the home dashboard up to date from two independent polls.

    ``refresh_latest`` and ``check_alerts`` are meant to be scheduled
    separately. Fetch failures are logged and leave the previous state in
    place; the next poll is the retry.
    """

    def __init__(
        self,
        client: MonitorClient,
        notifier: AbstractNotifier,
        thresholds: ThresholdSettings | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self._client = client
        self._notifier = notifier
        self._thresholds = thresholds or get_settings().thresholds
        self._tz = tz
        self.latest: Reading | None = None
        self.loading = True
        self.alerts: list[AlertEvent] = []
        self.alert_signature = ""

    async def refresh_latest(self) -> None:
        """Fetch the latest reading, keeping the previous one on failure."""
        try:
            reading = await self._client.fetch_latest()
        except FetchError as err:
            logger.warning("Error fetching sensor data: %s", err)
        else:
            if reading is not None:
                self.latest = reading
        finally:
            self.loading = False

    async def check_alerts(self) -> None:
        """Fetch active alerts and notify when the alert set changed."""
        try:
            alerts = await self._client.check_alerts()
        except FetchError as err:
            logger.warning("Alert polling error: %s", err)
            return

        decision = reconcile(self.alert_signature, alerts)
        self.alerts = alerts
        self.alert_signature = decision.signature
        if decision.should_notify and decision.primary_message is not None:
            await self._notifier.send(Notification(decision.primary_message))

    def _value(self, sensor: Sensor) -> float | None:
        if self.latest is None:
            return None
        return self.latest.value(sensor.field)

    def cards(self) -> list[SensorCard]:
        """Build the four main dashboard tiles."""
        t = self._thresholds
        light = self._value(Sensor.LIGHT)
        temperature = self._value(Sensor.TEMPERATURE)
        humidity = self._value(Sensor.HUMIDITY)
        moisture = self._value(Sensor.MOISTURE)
        return [
            SensorCard(
                Sensor.LIGHT,
                "Light",
                light_status(light, t),
                format_value(light, Unit.PERCENT, 0),
            ),
            SensorCard(
                Sensor.TEMPERATURE,
                "Temperature",
                temperature_status(temperature, t),
                format_value(temperature, Unit.CELSIUS),
            ),
            SensorCard(
                Sensor.HUMIDITY,
                "Humidity",
                humidity_status(humidity, t),
                format_value(humidity, Unit.PERCENT, 0),
            ),
            SensorCard(
                Sensor.MOISTURE,
                "Soil Moisture",
                moisture_status(moisture, t),
                format_value(moisture, Unit.RAW),
            ),
        ]

    @property
    def last_reading_time(self) -> str:
        """When the latest reading was taken, or 'never'."""
        if self.latest is None:
            return "never"
        if self.latest.timestamp is None:
            return self.latest.raw_timestamp or "never"
        ts = self.latest.timestamp
        if self._tz is not None:
            ts = ts.astimezone(self._tz)
        return ts.strftime("%Y-%m-%d %H:%M:%S")

    def render(self) -> str:
        """Render the dashboard as plain text."""
        if self.loading:
            return "Connecting to plant monitor..."

        lines: list[str] = []
        if self.alerts:
            lines.append("⚠️ Attention Needed")
            lines.extend(f"  • {alert.message}" for alert in self.alerts)
            lines.append("")

        for card in self.cards():
            lines.append(f"{card.title:<14} {card.status:<6} {card.value}")

        soil_temperature = self._value(Sensor.SOILTEMP)
        if soil_temperature is not None:
            lines.append(
                "🌱 Soil temperature: "
                + format_value(soil_temperature, Unit.CELSIUS)
            )

        lines.append("")
        lines.append(f"Last reading: {self.last_reading_time}")
        return "\n".join(lines)
