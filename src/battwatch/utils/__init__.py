"""Common utility functions and helpers for the battwatch package."""

from battwatch.utils.formatting import (
    critical_alert_text,
    describe_status,
    status_icon_and_tooltip,
    warning_alert_text,
)

__all__ = [
    "critical_alert_text",
    "describe_status",
    "status_icon_and_tooltip",
    "warning_alert_text",
]
