"""Critical-tier sequence: warn, wait, re-check, suspend with fallback."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Final

from battwatch.common.enums import SequenceOutcome, SuspendMethod, Urgency
from battwatch.presentation.protocols import Presenter
from battwatch.settings.user import MonitorSettings
from battwatch.system.power_source import PowerSource
from battwatch.system.status import BatteryReading
from battwatch.system.suspend import SuspendExecutor
from battwatch.utils.formatting import (
    SUSPEND_FAILED_BODY,
    SUSPEND_FAILED_TITLE,
    SUSPENDING_BODY,
    SUSPENDING_TITLE,
    critical_alert_text,
)

logger: Final = logging.getLogger(__name__)

# Blocks for the given seconds; returns True if cancelled meanwhile
WaitFunc = Callable[[float], bool]


def try_suspend_methods(methods: Iterable[SuspendMethod], executor: SuspendExecutor) -> bool:
    """Attempt each method in order until one succeeds.

    Args:
        methods: Suspend methods, primary first
        executor: Executor that performs each attempt

    Returns:
        True if any method succeeded, False if all failed
    """
    for index, method in enumerate(methods):
        if index:
            logger.info("Trying fallback suspend method: %s", method.label)
        if executor.attempt(method):
            return True
        logger.warning("Suspend method %s failed", method.label)
    return False


class SuspendSequencer:
    """Runs the confirm-then-suspend sequence for a critical alert.

    A single stale reading must never trigger a suspend: after alerting,
    the sequencer waits out a grace window and samples the battery again
    before acting.
    """

    def __init__(self, wait: WaitFunc | None = None) -> None:
        """Initialize the sequencer.

        Args:
            wait: Grace-window wait; returns True if the wait was cancelled.
                Defaults to an uninterruptible wait.
        """
        self._wait = wait or threading.Event().wait

    def run_critical_sequence(
        self,
        settings: MonitorSettings,
        presenter: Presenter,
        power_source: PowerSource,
        executor: SuspendExecutor,
        reading: BatteryReading,
    ) -> SequenceOutcome:
        """Alert about a critical battery and suspend if it stays critical.

        Args:
            settings: Threshold snapshot for this cycle
            presenter: Where alerts go
            power_source: Sensor used for the re-check
            executor: Suspend mechanism runner
            reading: The reading that triggered the sequence

        Returns:
            ABORTED if informational only, cancelled or resolved by the
            re-check; SUSPENDED if a method succeeded; SUSPEND_FAILED if
            every method failed
        """
        title, body = critical_alert_text(reading.percentage, settings)
        presenter.notify(Urgency.CRITICAL, title, body)
        if settings.impossible_alerts:
            presenter.show_blocking_alert(title, body)

        if not settings.force_suspend:
            return SequenceOutcome.ABORTED

        logger.info(
            "Battery critical at %d%%, re-checking in %gs before suspending",
            reading.percentage,
            settings.grace_seconds,
        )
        if self._wait(settings.grace_seconds):
            logger.info("Monitor stopping, suspend sequence cancelled")
            return SequenceOutcome.ABORTED

        final = power_source.sample()
        if not final.present or final.charging or final.percentage > settings.critical_level:
            logger.info(
                "Suspend averted: battery now %s%s",
                final.formatted_percentage,
                ", charging" if final.charging else "",
            )
            return SequenceOutcome.ABORTED

        logger.warning("FORCING SYSTEM SUSPEND (battery at %d%%)", final.percentage)
        presenter.notify(Urgency.CRITICAL, SUSPENDING_TITLE, SUSPENDING_BODY)

        if try_suspend_methods(settings.suspend_method_order, executor):
            return SequenceOutcome.SUSPENDED

        logger.error("All suspend methods failed")
        presenter.notify(Urgency.CRITICAL, SUSPEND_FAILED_TITLE, SUSPEND_FAILED_BODY)
        return SequenceOutcome.SUSPEND_FAILED
