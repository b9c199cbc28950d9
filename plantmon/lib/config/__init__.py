"""Centralized configuration for the plant monitor client.

This package provides:
- Enums for units and reading fields
- Constants for endpoints and chart sizing
- Pydantic settings models for configuration
"""

from .constants import (
    ALERT_TITLE,
    ENDPOINT_CHECK_ALERTS,
    ENDPOINT_HISTORY,
    ENDPOINT_LATEST,
    MAX_CHART_POINTS,
    NO_VALUE,
    TARGET_LABEL_COUNT,
)
from .enums import ReadingField, Unit
from .settings import (
    ClientSettings,
    PollingSettings,
    Settings,
    ThresholdSettings,
    get_settings,
)

__all__ = [
    # Enums
    "ReadingField",
    "Unit",
    # Settings models
    "ClientSettings",
    "PollingSettings",
    "Settings",
    "ThresholdSettings",
    # Constants
    "ALERT_TITLE",
    "ENDPOINT_CHECK_ALERTS",
    "ENDPOINT_HISTORY",
    "ENDPOINT_LATEST",
    "MAX_CHART_POINTS",
    "NO_VALUE",
    "TARGET_LABEL_COUNT",
    # Functions
    "get_settings",
]
