"""Supported sensors and how each one is displayed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from plantmon.lib.config import ReadingField, Unit
from plantmon.logging import get_logger

logger = get_logger("lib.sensors")


@dataclass(frozen=True, slots=True)
class SensorConfig:
    """Display metadata for one sensor."""

    title: str
    field: ReadingField
    unit: Unit
    color: str
    optimal_range: str


class Sensor(StrEnum):
    """Sensors the monitor reports on."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    LIGHT = "light"
    MOISTURE = "moisture"
    SOILTEMP = "soiltemp"

    @property
    def config(self) -> SensorConfig:
        return SENSOR_CONFIGS[self]

    @property
    def field(self) -> ReadingField:
        return SENSOR_CONFIGS[self].field

    @property
    def unit(self) -> Unit:
        return SENSOR_CONFIGS[self].unit

    @classmethod
    def parse(cls, name: str) -> Sensor:
        """Resolve a sensor identifier, falling back to temperature."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            logger.warning("Unknown sensor '%s', using temperature", name)
            return cls.TEMPERATURE


SENSOR_CONFIGS: dict[Sensor, SensorConfig] = {
    Sensor.TEMPERATURE: SensorConfig(
        title="Temperature",
        field=ReadingField.AIR_TEMPERATURE,
        unit=Unit.CELSIUS,
        color="#F5A623",
        optimal_range="18–26°C",
    ),
    Sensor.HUMIDITY: SensorConfig(
        title="Humidity",
        field=ReadingField.AIR_HUMIDITY,
        unit=Unit.PERCENT,
        color="#50E3C2",
        optimal_range="40–60%",
    ),
    Sensor.LIGHT: SensorConfig(
        title="Light",
        field=ReadingField.LIGHT_PERCENT,
        unit=Unit.PERCENT,
        color="#FF6B6B",
        optimal_range="30–80%",
    ),
    Sensor.MOISTURE: SensorConfig(
        title="Soil Moisture",
        field=ReadingField.SOIL_MOISTURE_RAW,
        unit=Unit.RAW,
        color="#4A90E2",
        optimal_range="300–700",
    ),
    Sensor.SOILTEMP: SensorConfig(
        title="Soil Temperature",
        field=ReadingField.SOIL_TEMPERATURE,
        unit=Unit.CELSIUS,
        color="#8B4513",
        optimal_range="15–25°C",
    ),
}
