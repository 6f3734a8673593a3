# src/battwatch/presentation/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from battwatch.common.enums import SeverityTier, Urgency
from battwatch.system.status import BatteryReading


@runtime_checkable
class Presenter(Protocol):
    """Protocol defining the interface for user-facing output.

    The monitor hands plain data to the presenter and never waits on the
    user. Implementations must return promptly from every method; a modal
    alert has to live on its own process or thread.
    """

    def update_status(self, tier: SeverityTier, reading: BatteryReading) -> None:
        """Refresh the icon/tooltip state. Called on every cycle."""
        ...

    def notify(self, urgency: Urgency, title: str, body: str) -> None:
        """Show a transient desktop notification."""
        ...

    def show_blocking_alert(self, title: str, body: str) -> None:
        """Show an alert the user has to dismiss, replacing any previous one."""
        ...

    def dismiss_blocking_alert(self) -> None:
        """Close the current blocking alert, if any."""
        ...


class MockPresenter:
    """Mock implementation of Presenter for testing."""

    def __init__(self) -> None:
        self.status_calls: list[tuple[SeverityTier, BatteryReading]] = []
        self.notifications: list[tuple[Urgency, str, str]] = []
        self.blocking_alerts: list[tuple[str, str]] = []
        self.dismiss_calls = 0

    def update_status(self, tier: SeverityTier, reading: BatteryReading) -> None:
        self.status_calls.append((tier, reading))

    def notify(self, urgency: Urgency, title: str, body: str) -> None:
        self.notifications.append((urgency, title, body))

    def show_blocking_alert(self, title: str, body: str) -> None:
        self.blocking_alerts.append((title, body))

    def dismiss_blocking_alert(self) -> None:
        self.dismiss_calls += 1

    @property
    def last_tier(self) -> SeverityTier | None:
        """Tier from the most recent status update."""
        return self.status_calls[-1][0] if self.status_calls else None

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.status_calls = []
        self.notifications = []
        self.blocking_alerts = []
        self.dismiss_calls = 0
