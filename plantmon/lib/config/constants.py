"""Shared constants for the plant monitor client.

These constants are separated to avoid circular imports between settings.py
and the modules consuming them.
"""

# Monitor API endpoints
ENDPOINT_HISTORY = "/api/history"
ENDPOINT_LATEST = "/api/latest"
ENDPOINT_CHECK_ALERTS = "/api/check-alerts"

# Chart downsampling: newest points kept, and roughly how many get a label
MAX_CHART_POINTS = 30
TARGET_LABEL_COUNT = 6

# Placeholder shown for a value that was not sampled
NO_VALUE = "--"

ALERT_TITLE = "🌱 Plant Alert"
