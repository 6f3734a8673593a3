from __future__ import annotations

from battwatch.common.enums import SeverityTier
from battwatch.settings.user import MonitorSettings
from battwatch.system.status import BatteryReading


def classify(reading: BatteryReading, settings: MonitorSettings) -> SeverityTier:
    """Map a battery reading onto a severity tier.

    Charging wins over any percentage; both threshold boundaries are
    inclusive.
    """
    if not reading.present:
        return SeverityTier.UNKNOWN
    if reading.charging:
        return SeverityTier.CHARGING
    if reading.percentage <= settings.critical_level:
        return SeverityTier.CRITICAL
    if reading.percentage <= settings.warning_level:
        return SeverityTier.WARNING
    return SeverityTier.NORMAL
