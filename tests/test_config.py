"""Tests for the configuration module."""

from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from plantmon.lib.config import (
    ClientSettings,
    PollingSettings,
    ReadingField,
    Settings,
    ThresholdSettings,
    Unit,
    get_settings,
)
from plantmon.lib.config.testing import set_settings


class TestEnums:
    def test_unit_values(self):
        assert f"{Unit.CELSIUS}" == "°C"
        assert f"{Unit.PERCENT}" == "%"
        assert f"{Unit.RAW}" == ""

    def test_reading_field_reads_attribute(self, make_reading):
        reading = make_reading(soil_moisture_raw=480)
        assert ReadingField.SOIL_MOISTURE_RAW.read(reading) == 480
        assert ReadingField.LIGHT_PERCENT.read(reading) is None

    def test_every_field_has_accessor(self, make_reading):
        values = {field: float(i) for i, field in enumerate(ReadingField, start=1)}
        reading = make_reading(**{f.value: v for f, v in values.items()})

        for field, value in values.items():
            assert field.read(reading) == value


class TestNestedSettings:
    """Tests for the frozen nested settings views."""

    def test_defaults(self):
        assert ClientSettings().history_hours == 720
        assert PollingSettings().reading_interval_sec == 10.0
        assert PollingSettings().alert_interval_sec == 10.0

        thresholds = ThresholdSettings()
        assert thresholds.moisture == 500
        assert thresholds.temperature_low == 18
        assert thresholds.temperature_high == 28
        assert thresholds.humidity_low == 30
        assert thresholds.humidity_high == 70
        assert thresholds.light_good == 30
        assert thresholds.light_great == 70

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ThresholdSettings().moisture = 10


class TestSettings:
    """Tests for main settings container."""

    def test_default_values(self):
        settings = Settings(_env_file=None)

        assert settings.monitor_base_url == "http://localhost:5000"
        assert settings.request_timeout_sec is None
        assert settings.mock_source is False
        assert settings.default_range == "24h"
        assert settings.enable_notifications is True
        assert settings.timezone == ZoneInfo("UTC")

    @patch.dict(
        "os.environ",
        {
            "MONITOR_BASE_URL": "http://192.168.1.50:5000/",
            "REQUEST_TIMEOUT_SEC": "7.5",
            "HISTORY_HOURS": "168",
            "READING_POLL_SEC": "30",
            "ALERT_POLL_SEC": "60",
            "DEFAULT_RANGE": "Week",
            "DISPLAY_TIMEZONE": "Europe/London",
            "MOISTURE_THRESHOLD": "450",
            "MOCK_SOURCE": "1",
            "ENABLE_NOTIFICATIONS": "0",
        },
        clear=True,
    )
    def test_from_env(self):
        settings = Settings(_env_file=None)

        assert settings.client == ClientSettings(
            base_url="http://192.168.1.50:5000",
            timeout_sec=7.5,
            history_hours=168,
        )
        assert settings.polling == PollingSettings(
            reading_interval_sec=30, alert_interval_sec=60
        )
        assert settings.thresholds.moisture == 450
        assert settings.default_range == "Week"
        assert settings.timezone == ZoneInfo("Europe/London")
        assert settings.mock_source is True
        assert settings.enable_notifications is False

    def test_invalid_url_fails(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, monitor_base_url="not a url")

    def test_unknown_timezone_fails(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            Settings(_env_file=None, display_timezone="Mars/Olympus")

    @pytest.mark.parametrize(
        "field", ["reading_poll_sec", "alert_poll_sec", "request_timeout_sec"]
    )
    def test_non_positive_intervals_fail(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_temperature_bounds_order(self):
        with pytest.raises(
            ValidationError, match="TEMPERATURE_LOW.*must be less than"
        ):
            Settings(_env_file=None, temperature_low=30, temperature_high=20)

    def test_humidity_bounds_order(self):
        with pytest.raises(
            ValidationError, match="HUMIDITY_LOW.*must be less than"
        ):
            Settings(_env_file=None, humidity_low=80, humidity_high=50)

    def test_light_bounds_order(self):
        with pytest.raises(ValidationError, match="LIGHT_GOOD"):
            Settings(_env_file=None, light_good=70, light_great=70)

    def test_default_range_must_be_offered(self):
        with pytest.raises(ValidationError, match="DEFAULT_RANGE"):
            Settings(_env_file=None, default_range="Year")

    def test_default_range_case_insensitive(self):
        assert Settings(_env_file=None, default_range="month").default_range == "month"

    def test_multiple_errors_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                _env_file=None,
                temperature_low=30,
                temperature_high=20,
                humidity_low=80,
                humidity_high=50,
            )

        error_message = str(exc_info.value)
        assert "TEMPERATURE_LOW" in error_message
        assert "HUMIDITY_LOW" in error_message


class TestGetSetSettings:
    """Tests for global settings management."""

    def test_get_settings_lazy_initialization(self):
        set_settings(None)

        with patch.dict("os.environ", {}, clear=True):
            settings = get_settings()

        assert isinstance(settings, Settings)

    def test_set_settings_override(self):
        custom = Settings(_env_file=None, monitor_base_url="http://pi:8080")

        set_settings(custom)

        assert get_settings() is custom
        assert get_settings().client.base_url == "http://pi:8080"


class TestLogLevel:
    """Tests for LOG_LEVEL validation."""

    @patch.dict("os.environ", {"LOG_LEVEL": "debug"}, clear=True)
    def test_case_insensitive(self):
        assert Settings(_env_file=None).log_level == "DEBUG"

    @patch.dict("os.environ", {"LOG_LEVEL": "verbose"}, clear=True)
    def test_unknown_level_fails(self):
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None)
