"""Desktop presenter backed by notify-send and zenity."""

from __future__ import annotations

import logging
import subprocess
from typing import Final

from battwatch.common.enums import SeverityTier, Urgency
from battwatch.constants import APP_NAME, NORMAL_NOTIFICATION_TIMEOUT_MS
from battwatch.settings.user import MonitorSettings
from battwatch.system.status import BatteryReading
from battwatch.utils.formatting import status_icon_and_tooltip

logger: Final = logging.getLogger(__name__)


class DesktopPresenter:
    """Presents monitor output on a freedesktop desktop.

    Notifications go through ``notify-send``. Blocking alerts are
    ``zenity --warning`` dialogs started in their own process, so the
    monitor never waits for the user to click them away.
    """

    def __init__(self, settings: MonitorSettings) -> None:
        """Initialize with the settings used for icons and timeouts.

        Args:
            settings: Active monitor settings
        """
        self.settings = settings
        self.icon_name: str | None = None
        self.tooltip: str | None = None
        self._alert: subprocess.Popen[bytes] | None = None

    def update_status(self, tier: SeverityTier, reading: BatteryReading) -> None:
        icon, tooltip = status_icon_and_tooltip(tier, reading, self.settings)
        if (icon, tooltip) != (self.icon_name, self.tooltip):
            logger.debug("Status icon %s: %s", icon, tooltip)
        self.icon_name, self.tooltip = icon, tooltip

    def notify(self, urgency: Urgency, title: str, body: str) -> None:
        if urgency is Urgency.CRITICAL:
            expire_ms = self.settings.alert_timeout * 1000
        else:
            expire_ms = NORMAL_NOTIFICATION_TIMEOUT_MS

        cmd = [
            "notify-send",
            "--app-name",
            APP_NAME,
            "--urgency",
            urgency.value,
            "--expire-time",
            str(expire_ms),
            "--icon",
            self.settings.icon_low,
            title,
            body,
        ]
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=5)
        except subprocess.CalledProcessError as exc:
            logger.warning("notify-send failed: %s", (exc.stderr or "").strip())
        except FileNotFoundError:
            logger.warning("notify-send not found; %s: %s", title, body)
        except subprocess.TimeoutExpired:
            logger.warning("notify-send timed out")

    def show_blocking_alert(self, title: str, body: str) -> None:
        self.dismiss_blocking_alert()
        cmd = ["zenity", "--warning", "--modal", "--title", title, "--text", body]
        try:
            self._alert = subprocess.Popen(
                cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
            )
        except OSError as exc:
            logger.warning("Could not show alert dialog: %s", exc)
            self._alert = None

    def dismiss_blocking_alert(self) -> None:
        alert, self._alert = self._alert, None
        if alert is None or alert.poll() is not None:
            return
        alert.terminate()
        try:
            alert.wait(timeout=2)
        except subprocess.TimeoutExpired:
            alert.kill()
