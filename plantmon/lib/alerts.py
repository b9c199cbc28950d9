"""Alert feed deduplication.

The monitor reports the full set of currently active alerts on every poll.
To avoid notification spam we summarise that set as a signature and only
notify when the signature changes (not on every poll). The signature is an
explicit value returned to the caller, who stores it for the next poll.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from plantmon.logging import get_logger

logger = get_logger("lib.alerts")

SIGNATURE_SEPARATOR = ","


@dataclass(frozen=True, slots=True)
class AlertEvent:
    """One active alert as reported by the monitor."""

    type: str
    message: str


@dataclass(frozen=True, slots=True)
class AlertDecision:
    """Outcome of reconciling a poll against the previous signature."""

    signature: str
    should_notify: bool
    primary_message: str | None = None


def alert_signature(alerts: Sequence[AlertEvent]) -> str:
    """Summarise an alert set by its types, in feed order."""
    return SIGNATURE_SEPARATOR.join(alert.type for alert in alerts)


def reconcile(
    previous_signature: str, alerts: Sequence[AlertEvent]
) -> AlertDecision:
    """Decide whether the current alert set warrants a notification.

    An empty set always resets the signature and never notifies. A
    non-empty set notifies only when its signature differs from the
    previous one, with the first alert's message as the notification text.
    """
    if not alerts:
        if previous_signature:
            logger.info("Alerts cleared (was: %s)", previous_signature)
        return AlertDecision(signature="", should_notify=False)

    signature = alert_signature(alerts)
    if signature == previous_signature:
        return AlertDecision(signature=signature, should_notify=False)

    logger.info(
        "Alert set changed: '%s' -> '%s'", previous_signature, signature
    )
    return AlertDecision(
        signature=signature,
        should_notify=True,
        primary_message=alerts[0].message,
    )
