"""User-facing message text."""

from __future__ import annotations

from battwatch.common.enums import SeverityTier
from battwatch.constants import APP_NAME, ICON_MISSING
from battwatch.settings.user import MonitorSettings
from battwatch.system.status import BatteryReading

SUSPENDING_TITLE = "🚨 SYSTEM SUSPENDING NOW! 🚨"
SUSPENDING_BODY = "Battery critically low! Suspending to prevent data loss!"
SUSPEND_FAILED_TITLE = "❌ Suspend failed"
SUSPEND_FAILED_BODY = (
    "All suspend methods exhausted. Plug in your charger now or save your work!"
)


def warning_alert_text(percentage: int, settings: MonitorSettings) -> tuple[str, str]:
    """Title and body for a low-battery warning.

    Args:
        percentage: Current charge level
        settings: Active thresholds

    Returns:
        Tuple of (title, body)
    """
    title = f"⚠️ LOW BATTERY: {percentage}% ⚠️"
    body = f"Your battery is getting low at {percentage}%!\n\nPlease plug in your charger soon!"
    if settings.force_suspend:
        body += (
            f"\n\nSystem will force suspend at {settings.critical_level}% "
            "to protect your data!"
        )
    return title, body


def critical_alert_text(percentage: int, settings: MonitorSettings) -> tuple[str, str]:
    """Title and body for a critical-battery alert.

    Args:
        percentage: Current charge level
        settings: Active thresholds

    Returns:
        Tuple of (title, body)
    """
    title = f"🚨 CRITICAL BATTERY: {percentage}% 🚨"
    body = (
        f"Your battery is critically low at {percentage}%!\n\n"
        "PLUG IN YOUR CHARGER IMMEDIATELY!"
    )
    if settings.force_suspend:
        body += (
            f"\n\nSystem will suspend in {settings.grace_seconds:g} seconds "
            "to prevent data loss!"
        )
    return title, body


def status_icon_and_tooltip(
    tier: SeverityTier, reading: BatteryReading, settings: MonitorSettings
) -> tuple[str, str]:
    """Icon name and tooltip for the tray/status display."""
    if tier is SeverityTier.UNKNOWN:
        return ICON_MISSING, "No battery detected"

    pct = reading.percentage
    if tier is SeverityTier.CHARGING:
        return settings.icon_charging, f"Charging: {pct}%"
    if tier is SeverityTier.CRITICAL:
        return settings.icon_low, f"CRITICAL: {pct}% - GET A CHARGER NOW!"
    if tier is SeverityTier.WARNING:
        return settings.icon_low, f"Low: {pct}% - Consider charging"
    return settings.icon_battery, f"Battery: {pct}%"


def describe_status(reading: BatteryReading, settings: MonitorSettings) -> str:
    """Multi-line summary of the battery and the active configuration."""
    if not reading.present:
        return f"{APP_NAME}\n\nNo battery detected!"

    def enabled(flag: bool) -> str:
        return "Enabled" if flag else "Disabled"

    return "\n".join(
        [
            APP_NAME,
            "",
            f"Battery: {reading.percentage}%",
            f"Status: {reading.raw_status_label or 'Unknown'}",
            f"Warning Level: {settings.warning_level}%",
            f"Critical Level: {settings.critical_level}%",
            f"Force Suspend: {enabled(settings.force_suspend)}",
            f"Impossible Alerts: {enabled(settings.impossible_alerts)}",
            f"Suspend Method: {settings.suspend_method.label}",
        ]
    )
