"""The periodic monitor loop."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Final

from battwatch.common.enums import SequenceOutcome, SeverityTier, Urgency
from battwatch.monitor.alerts import AlertScheduler, AlertState
from battwatch.monitor.classifier import classify
from battwatch.monitor.sequencer import SuspendSequencer
from battwatch.presentation.protocols import Presenter
from battwatch.settings.user import MonitorSettings
from battwatch.system.power_source import PowerSource
from battwatch.system.suspend import SuspendExecutor
from battwatch.utils.formatting import warning_alert_text

logger: Final = logging.getLogger(__name__)


class MonitorLoop:
    """Samples the battery every ``check_interval`` seconds and escalates.

    Each cycle:
    - Samples the power source and classifies the reading
    - Pushes the tier and reading to the presenter (always)
    - Clears escalation state when the battery is charging or healthy
    - Raises warning alerts, debounced per tier
    - Runs the suspend sequence on a debounced critical alert

    Only one cycle runs at a time, on the thread that called ``run``.
    Settings changes from other threads go through ``reconfigure`` and are
    swapped in at a cycle boundary, never in the middle of a suspend
    sequence.
    """

    def __init__(
        self,
        settings: MonitorSettings,
        presenter: Presenter,
        power_source: PowerSource,
        executor: SuspendExecutor,
        scheduler: AlertScheduler | None = None,
        sequencer: SuspendSequencer | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_settings_applied: Callable[[MonitorSettings], None] | None = None,
    ) -> None:
        self.presenter = presenter
        self.power_source = power_source
        self.executor = executor
        self.scheduler = scheduler or AlertScheduler()
        self.state = AlertState()
        self.clock = clock
        self.on_settings_applied = on_settings_applied

        self._settings = settings
        self._pending: MonitorSettings | None = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._wake = threading.Event()

        # Grace-window waits end early when the loop is stopped
        self.sequencer = sequencer or SuspendSequencer(wait=self._stop.wait)

        self.last_tier: SeverityTier | None = None
        self.last_outcome: SequenceOutcome | None = None

    @property
    def settings(self) -> MonitorSettings:
        """Settings the loop is currently running under."""
        return self._settings

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def reconfigure(self, settings: MonitorSettings) -> None:
        """Queue new settings; applied at the next cycle boundary.

        Safe to call from any thread. A newer call replaces a queued one.
        """
        with self._lock:
            self._pending = settings
        self._wake.set()

    def stop(self) -> None:
        """Stop the loop. A suspend already dispatched is not interrupted."""
        self._stop.set()
        self._wake.set()

    def _apply_pending(self) -> bool:
        """Swap in queued settings.

        Returns:
            True if the check interval changed
        """
        with self._lock:
            pending, self._pending = self._pending, None
        if pending is None:
            return False

        previous, self._settings = self._settings, pending
        logger.info(
            "Settings applied: warning %d%%, critical %d%%, every %ds",
            pending.warning_level,
            pending.critical_level,
            pending.check_interval,
        )
        if self.on_settings_applied:
            self.on_settings_applied(pending)
        return pending.check_interval != previous.check_interval

    def run_cycle(self) -> SeverityTier:
        """Run one sample-classify-alert cycle.

        Returns:
            The tier of this cycle's reading
        """
        self._apply_pending()
        settings = self._settings

        reading = self.power_source.sample()
        tier = classify(reading, settings)
        self.presenter.update_status(tier, reading)

        previous = self.last_tier
        if tier is not previous:
            logger.info("Battery %s → %s", reading.formatted_percentage, tier.value)
            self.last_tier = tier

        now = self.clock()
        if tier in (SeverityTier.NORMAL, SeverityTier.CHARGING):
            if self.scheduler.reset(self.state):
                self.presenter.dismiss_blocking_alert()

        elif tier is SeverityTier.WARNING:
            if previous is SeverityTier.CRITICAL and self.scheduler.clear_blocking_alert(
                self.state
            ):
                self.presenter.dismiss_blocking_alert()
            if self.scheduler.should_alert(tier, now, self.state, settings):
                self.scheduler.record(tier, now, self.state)
                title, body = warning_alert_text(reading.percentage, settings)
                logger.info("Low battery alert at %d%%", reading.percentage)
                self.presenter.notify(Urgency.CRITICAL, title, body)
                if settings.impossible_alerts:
                    self.presenter.show_blocking_alert(title, body)
                    self.state.active_blocking_alert = True

        elif tier is SeverityTier.CRITICAL:
            if self.scheduler.should_alert(tier, now, self.state, settings):
                self.scheduler.record(tier, now, self.state)
                if settings.impossible_alerts:
                    self.state.active_blocking_alert = True
                self.last_outcome = self.sequencer.run_critical_sequence(
                    settings, self.presenter, self.power_source, self.executor, reading
                )
                logger.info("Critical sequence finished: %s", self.last_outcome.value)

        self._apply_pending()
        return tier

    def _wait_for_next_cycle(self) -> None:
        deadline = self.clock() + self._settings.check_interval
        while not self._stop.is_set():
            remaining = deadline - self.clock()
            if remaining <= 0:
                return
            if not self._wake.wait(remaining):
                continue
            self._wake.clear()
            if self._apply_pending():
                # Restart the single timer with the new interval
                deadline = self.clock() + self._settings.check_interval

    def run(self) -> None:
        """Check immediately, then every ``check_interval`` until stopped."""
        logger.info("Battery monitor active (every %ds)", self._settings.check_interval)
        while not self._stop.is_set():
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Battery check failed")
            self._wait_for_next_cycle()
        logger.info("Battery monitor stopped")
