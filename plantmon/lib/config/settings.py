"""Settings models and configuration loading for the plant monitor client."""

from functools import cached_property, lru_cache
from typing import Annotated, Any, Literal, Self
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_bool(v: Any) -> bool:
    """Parse boolean from string '1'/'0' or actual bool."""
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v == "1"
    return bool(v)


def _validate_http_url(v: str) -> str:
    """Validate HTTP URL format and drop any trailing slash."""
    HttpUrl(v)
    return v.rstrip("/")


def _upper(v: Any) -> Any:
    """Normalise a string to upper case before validation."""
    return v.upper() if isinstance(v, str) else v


def _validate_timezone(v: str) -> str:
    """Validate that the name is a known IANA timezone."""
    try:
        ZoneInfo(v)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise ValueError(f"Unknown timezone '{v}'") from err
    return v


_BoolFromStr = Annotated[bool, BeforeValidator(_parse_bool)]
_HttpUrlStr = Annotated[str, AfterValidator(_validate_http_url)]
_TimezoneName = Annotated[str, AfterValidator(_validate_timezone)]
_LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(_upper),
]


class ClientSettings(BaseModel):
    """Monitor API connection settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "http://localhost:5000"
    timeout_sec: float | None = None
    history_hours: int = 720


class PollingSettings(BaseModel):
    """Polling intervals for the periodic refresh tasks."""

    model_config = ConfigDict(frozen=True)

    reading_interval_sec: float = 10.0
    alert_interval_sec: float = 10.0


class ThresholdSettings(BaseModel):
    """Bounds used to describe the latest reading on the home view."""

    model_config = ConfigDict(frozen=True)

    moisture: int = 500
    temperature_low: float = 18
    temperature_high: float = 28
    humidity_low: float = 30
    humidity_high: float = 70
    light_good: float = 30
    light_great: float = 70


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Monitor API
    monitor_base_url: _HttpUrlStr = "http://localhost:5000"
    request_timeout_sec: float | None = Field(default=None, gt=0)
    history_hours: int = Field(default=720, ge=1)
    mock_source: _BoolFromStr = False

    # Polling
    reading_poll_sec: float = Field(default=10.0, gt=0)
    alert_poll_sec: float = Field(default=10.0, gt=0)

    # History view
    default_range: str = "24h"
    display_timezone: _TimezoneName = "UTC"

    # Home view status thresholds
    moisture_threshold: int = Field(default=500, ge=0)
    temperature_low: float = Field(default=18, ge=-40, le=80)
    temperature_high: float = Field(default=28, ge=-40, le=80)
    humidity_low: float = Field(default=30, ge=0, le=100)
    humidity_high: float = Field(default=70, ge=0, le=100)
    light_good: float = Field(default=30, ge=0, le=100)
    light_great: float = Field(default=70, ge=0, le=100)

    # Notifications
    enable_notifications: _BoolFromStr = True

    log_level: _LogLevel = "INFO"

    @cached_property
    def client(self) -> ClientSettings:
        """Get monitor API settings as nested object."""
        return ClientSettings(
            base_url=self.monitor_base_url,
            timeout_sec=self.request_timeout_sec,
            history_hours=self.history_hours,
        )

    @cached_property
    def polling(self) -> PollingSettings:
        """Get polling settings."""
        return PollingSettings(
            reading_interval_sec=self.reading_poll_sec,
            alert_interval_sec=self.alert_poll_sec,
        )

    @cached_property
    def thresholds(self) -> ThresholdSettings:
        """Get threshold settings as nested object."""
        return ThresholdSettings(
            moisture=self.moisture_threshold,
            temperature_low=self.temperature_low,
            temperature_high=self.temperature_high,
            humidity_low=self.humidity_low,
            humidity_high=self.humidity_high,
            light_good=self.light_good,
            light_great=self.light_great,
        )

    @cached_property
    def timezone(self) -> ZoneInfo:
        """Timezone used to format chart labels."""
        return ZoneInfo(self.display_timezone)

    @model_validator(mode="after")
    def validate_settings(self) -> Self:
        """Validate cross-field configuration constraints."""
        from plantmon.lib.reading import RANGES

        errors: list[str] = []

        if self.temperature_low >= self.temperature_high:
            errors.append(
                f"TEMPERATURE_LOW ({self.temperature_low}) must be less than "
                f"TEMPERATURE_HIGH ({self.temperature_high})"
            )

        if self.humidity_low >= self.humidity_high:
            errors.append(
                f"HUMIDITY_LOW ({self.humidity_low}) must be less than "
                f"HUMIDITY_HIGH ({self.humidity_high})"
            )

        if self.light_good >= self.light_great:
            errors.append(
                f"LIGHT_GOOD ({self.light_good}) must be less than "
                f"LIGHT_GREAT ({self.light_great})"
            )

        labels = [r.label.lower() for r in RANGES]
        if self.default_range.lower() not in labels:
            errors.append(
                f"DEFAULT_RANGE ({self.default_range}) must be one of: "
                + ", ".join(r.label for r in RANGES)
            )

        if errors:
            raise ValueError(
                "Configuration validation failed:\n  - "
                + "\n  - ".join(errors)
            )

        return self


# Settings override for testing - allows injecting custom Settings without
# modifying environment variables or clearing the lru_cache.
_settings_override: Settings | None = None


@lru_cache(maxsize=1)
def _load_settings() -> Settings:
    """Load settings from environment (cached)."""
    return Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns the test override if set, otherwise loads from environment
    variables (cached after first load). For testing, use set_settings()
    from plantmon.lib.config.testing to override.
    """
    if _settings_override is not None:
        return _settings_override
    return _load_settings()
