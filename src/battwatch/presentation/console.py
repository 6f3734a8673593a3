"""Console presenter for foreground and headless runs."""

from __future__ import annotations

import typer

from battwatch.common.enums import SeverityTier, Urgency
from battwatch.system.status import BatteryReading

_TIER_COLORS = {
    SeverityTier.NORMAL: typer.colors.GREEN,
    SeverityTier.CHARGING: typer.colors.CYAN,
    SeverityTier.WARNING: typer.colors.YELLOW,
    SeverityTier.CRITICAL: typer.colors.RED,
    SeverityTier.UNKNOWN: typer.colors.WHITE,
}


class ConsolePresenter:
    """Writes status changes, notifications and alerts to the terminal."""

    def __init__(self) -> None:
        self._last: tuple[SeverityTier, int] | None = None

    def update_status(self, tier: SeverityTier, reading: BatteryReading) -> None:
        current = (tier, reading.percentage)
        if current == self._last:
            return
        self._last = current
        text = f"[{tier.value}] " + (
            f"{reading.percentage}% {reading.raw_status_label}".rstrip()
            if reading.present
            else "no battery detected"
        )
        typer.secho(text, fg=_TIER_COLORS[tier])

    def notify(self, urgency: Urgency, title: str, body: str) -> None:
        color = typer.colors.RED if urgency is Urgency.CRITICAL else typer.colors.BLUE
        typer.secho(f"{title}\n{body}", fg=color, bold=urgency is Urgency.CRITICAL)

    def show_blocking_alert(self, title: str, body: str) -> None:
        typer.secho(f"!! {title} !!", fg=typer.colors.RED, bold=True, err=True)

    def dismiss_blocking_alert(self) -> None:
        typer.secho("Alert cleared", fg=typer.colors.GREEN)
