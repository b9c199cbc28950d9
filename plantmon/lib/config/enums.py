"""Enumerations for the plant monitor client."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plantmon.lib.reading import Reading


class Unit(StrEnum):
    """Display units for sensor values."""

    CELSIUS = "°C"
    PERCENT = "%"
    RAW = ""  # Uncalibrated ADC counts (soil moisture)


class ReadingField(StrEnum):
    """Optional numeric fields carried by a reading."""

    AIR_TEMPERATURE = "air_temperature"
    AIR_HUMIDITY = "air_humidity"
    LIGHT_PERCENT = "light_percent"
    SOIL_MOISTURE_RAW = "soil_moisture_raw"
    SOIL_TEMPERATURE = "soil_temperature"

    def read(self, reading: Reading) -> float | None:
        """Return this field's value on a reading, or None if not sampled."""
        match self:
            case ReadingField.AIR_TEMPERATURE:
                return reading.air_temperature
            case ReadingField.AIR_HUMIDITY:
                return reading.air_humidity
            case ReadingField.LIGHT_PERCENT:
                return reading.light_percent
            case ReadingField.SOIL_MOISTURE_RAW:
                return reading.soil_moisture_raw
            case ReadingField.SOIL_TEMPERATURE:
                return reading.soil_temperature
