"""Alert debounce bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from battwatch.common.enums import SeverityTier
from battwatch.settings.user import MonitorSettings

logger: Final = logging.getLogger(__name__)

_ALERTING_TIERS: Final = (SeverityTier.WARNING, SeverityTier.CRITICAL)


@dataclass
class AlertState:
    """Escalation state carried between monitor cycles.

    Timestamps are monotonic seconds; a missing entry means the tier has
    never alerted since the last recovery.
    """

    last_alert: dict[SeverityTier, float] = field(default_factory=dict)
    active_blocking_alert: bool = False


class AlertScheduler:
    """Decides whether an alert for a tier is due, and records alerts."""

    def should_alert(
        self,
        tier: SeverityTier,
        now: float,
        state: AlertState,
        settings: MonitorSettings,
    ) -> bool:
        """Return True if an alert for ``tier`` is due at ``now``.

        NORMAL and CHARGING never alert and also wipe the escalation
        state, so the next low-battery episode alerts immediately.
        UNKNOWN never alerts and leaves the state alone.

        Args:
            tier: Tier of the current reading
            now: Current monotonic time in seconds
            state: Escalation state to consult
            settings: Active thresholds (repeat intervals)

        Returns:
            True if the caller should alert (and then call ``record``)
        """
        if tier in (SeverityTier.NORMAL, SeverityTier.CHARGING):
            self.reset(state)
            return False
        if tier not in _ALERTING_TIERS:
            return False

        last = state.last_alert.get(tier)
        if last is None:
            return True

        repeat = (
            settings.alert_repeat.warning
            if tier is SeverityTier.WARNING
            else settings.alert_repeat.critical
        )
        return now - last >= repeat

    def record(self, tier: SeverityTier, now: float, state: AlertState) -> None:
        """Remember that ``tier`` alerted at ``now``."""
        state.last_alert[tier] = now

    def reset(self, state: AlertState) -> bool:
        """Clear all escalation state.

        Returns:
            True if a blocking alert was marked active before the reset
        """
        was_active = state.active_blocking_alert
        if state.last_alert or was_active:
            logger.debug("Battery recovered, clearing alert state")
        for tier in _ALERTING_TIERS:
            state.last_alert.pop(tier, None)
        state.active_blocking_alert = False
        return was_active

    def clear_blocking_alert(self, state: AlertState) -> bool:
        """Drop the blocking-alert flag after a downgrade, keeping debounce times.

        Returns:
            True if a blocking alert was marked active
        """
        was_active = state.active_blocking_alert
        state.active_blocking_alert = False
        return was_active
