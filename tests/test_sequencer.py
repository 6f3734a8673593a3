"""Tests for the critical-tier suspend sequence."""

from __future__ import annotations

import pytest

from battwatch.common.enums import SequenceOutcome, SuspendMethod, Urgency
from battwatch.monitor.sequencer import SuspendSequencer, try_suspend_methods
from battwatch.presentation.protocols import MockPresenter
from battwatch.settings.user import MonitorSettings
from battwatch.system.status import BatteryReading
from battwatch.utils.formatting import SUSPEND_FAILED_TITLE

from conftest import FakeExecutor, FakePowerSource, battery

ALL_METHODS = (
    SuspendMethod.SYSTEMD,
    SuspendMethod.PM_UTILS,
    SuspendMethod.DBUS_LOGIN,
    SuspendMethod.KERNEL_DIRECT,
)


class _RecordingWait:
    def __init__(self, cancelled: bool = False) -> None:
        self.cancelled = cancelled
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> bool:
        self.calls.append(seconds)
        return self.cancelled


def _run(
    settings: MonitorSettings,
    presenter: MockPresenter,
    recheck: BatteryReading,
    executor: FakeExecutor,
    wait: _RecordingWait | None = None,
) -> SequenceOutcome:
    sequencer = SuspendSequencer(wait=wait or _RecordingWait())
    return sequencer.run_critical_sequence(
        settings, presenter, FakePowerSource(recheck), executor, battery(8)
    )


def test_alerts_before_anything_else(
    settings: MonitorSettings, presenter: MockPresenter
) -> None:
    _run(settings, presenter, battery(8), FakeExecutor((SuspendMethod.SYSTEMD,)))

    urgency, title, body = presenter.notifications[0]
    assert urgency is Urgency.CRITICAL
    assert "8%" in title and "8%" in body
    assert len(presenter.blocking_alerts) == 1


def test_no_blocking_alert_when_disabled(presenter: MockPresenter) -> None:
    cfg = MonitorSettings(impossible_alerts=False, force_suspend=False)
    _run(cfg, presenter, battery(8), FakeExecutor())
    assert presenter.blocking_alerts == []
    assert len(presenter.notifications) == 1


def test_informational_mode_never_suspends(presenter: MockPresenter) -> None:
    cfg = MonitorSettings(force_suspend=False)
    executor = FakeExecutor(ALL_METHODS)
    wait = _RecordingWait()

    outcome = _run(cfg, presenter, battery(8), executor, wait)

    assert outcome is SequenceOutcome.ABORTED
    assert executor.attempts == []
    assert wait.calls == []


def test_waits_grace_window_before_recheck(presenter: MockPresenter) -> None:
    cfg = MonitorSettings()  # default grace window
    wait = _RecordingWait()
    _run(cfg, presenter, battery(8), FakeExecutor((SuspendMethod.SYSTEMD,)), wait)
    assert wait.calls == [10.0]


def test_charger_plugged_in_during_grace_aborts(
    settings: MonitorSettings, presenter: MockPresenter
) -> None:
    executor = FakeExecutor(ALL_METHODS)
    outcome = _run(settings, presenter, battery(8, charging=True), executor)

    assert outcome is SequenceOutcome.ABORTED
    assert executor.attempts == []


@pytest.mark.parametrize(
    "recheck",
    [battery(11), BatteryReading.missing()],
)
def test_resolved_recheck_aborts(
    settings: MonitorSettings, presenter: MockPresenter, recheck: BatteryReading
) -> None:
    executor = FakeExecutor(ALL_METHODS)
    assert _run(settings, presenter, recheck, executor) is SequenceOutcome.ABORTED
    assert executor.attempts == []


def test_recheck_at_threshold_still_suspends(
    settings: MonitorSettings, presenter: MockPresenter
) -> None:
    executor = FakeExecutor((SuspendMethod.SYSTEMD,))
    assert _run(settings, presenter, battery(10), executor) is SequenceOutcome.SUSPENDED


def test_cancelled_during_grace_aborts(
    settings: MonitorSettings, presenter: MockPresenter
) -> None:
    executor = FakeExecutor(ALL_METHODS)
    outcome = _run(settings, presenter, battery(8), executor, _RecordingWait(cancelled=True))
    assert outcome is SequenceOutcome.ABORTED
    assert executor.attempts == []


def test_fallback_stops_at_first_success(
    settings: MonitorSettings, presenter: MockPresenter
) -> None:
    executor = FakeExecutor((SuspendMethod.PM_UTILS,))

    outcome = _run(settings, presenter, battery(7), executor)

    assert outcome is SequenceOutcome.SUSPENDED
    assert executor.attempts == [SuspendMethod.SYSTEMD, SuspendMethod.PM_UTILS]


def test_primary_method_comes_first(presenter: MockPresenter) -> None:
    cfg = MonitorSettings(grace_seconds=0, suspend_method=SuspendMethod.DBUS_LOGIN)
    executor = FakeExecutor((SuspendMethod.PM_UTILS,))

    _run(cfg, presenter, battery(7), executor)

    assert executor.attempts == [
        SuspendMethod.DBUS_LOGIN,
        SuspendMethod.SYSTEMD,
        SuspendMethod.PM_UTILS,
    ]


def test_all_methods_exhausted(settings: MonitorSettings, presenter: MockPresenter) -> None:
    executor = FakeExecutor()

    outcome = _run(settings, presenter, battery(5), executor)

    assert outcome is SequenceOutcome.SUSPEND_FAILED
    assert executor.attempts == list(ALL_METHODS)
    failures = [n for n in presenter.notifications if n[1] == SUSPEND_FAILED_TITLE]
    assert len(failures) == 1
    assert failures[0][0] is Urgency.CRITICAL


def test_try_suspend_methods_empty() -> None:
    assert try_suspend_methods([], FakeExecutor(ALL_METHODS)) is False
