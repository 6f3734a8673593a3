import pytest

from battwatch.common.enums import SeverityTier
from battwatch.monitor.alerts import AlertScheduler, AlertState
from battwatch.settings.user import AlertRepeat, MonitorSettings


@pytest.fixture
def scheduler() -> AlertScheduler:
    return AlertScheduler()


@pytest.mark.parametrize(
    "tier", [SeverityTier.NORMAL, SeverityTier.CHARGING, SeverityTier.UNKNOWN]
)
def test_quiet_tiers_never_alert(
    scheduler: AlertScheduler, settings: MonitorSettings, tier: SeverityTier
) -> None:
    assert scheduler.should_alert(tier, 0.0, AlertState(), settings) is False


@pytest.mark.parametrize("tier", [SeverityTier.WARNING, SeverityTier.CRITICAL])
def test_first_alert_is_due(
    scheduler: AlertScheduler, settings: MonitorSettings, tier: SeverityTier
) -> None:
    assert scheduler.should_alert(tier, 1000.0, AlertState(), settings) is True


def test_decision_is_stable_without_record(
    scheduler: AlertScheduler, settings: MonitorSettings
) -> None:
    state = AlertState()
    first = scheduler.should_alert(SeverityTier.WARNING, 50.0, state, settings)
    second = scheduler.should_alert(SeverityTier.WARNING, 50.0, state, settings)
    assert first is second is True


def test_warning_debounce(scheduler: AlertScheduler, settings: MonitorSettings) -> None:
    state = AlertState()
    scheduler.record(SeverityTier.WARNING, 100.0, state)

    assert scheduler.should_alert(SeverityTier.WARNING, 100.0, state, settings) is False
    assert scheduler.should_alert(SeverityTier.WARNING, 219.9, state, settings) is False
    assert scheduler.should_alert(SeverityTier.WARNING, 220.0, state, settings) is True


def test_critical_debounce_uses_critical_interval(
    scheduler: AlertScheduler, settings: MonitorSettings
) -> None:
    state = AlertState()
    scheduler.record(SeverityTier.CRITICAL, 0.0, state)

    assert scheduler.should_alert(SeverityTier.CRITICAL, 29.0, state, settings) is False
    assert scheduler.should_alert(SeverityTier.CRITICAL, 30.0, state, settings) is True


def test_tiers_are_debounced_independently(
    scheduler: AlertScheduler, settings: MonitorSettings
) -> None:
    state = AlertState()
    scheduler.record(SeverityTier.WARNING, 0.0, state)
    assert scheduler.should_alert(SeverityTier.CRITICAL, 1.0, state, settings) is True


def test_custom_repeat_intervals(scheduler: AlertScheduler) -> None:
    cfg = MonitorSettings(alert_repeat=AlertRepeat(warning=10, critical=5))
    state = AlertState()
    scheduler.record(SeverityTier.WARNING, 0.0, state)
    assert scheduler.should_alert(SeverityTier.WARNING, 9.0, state, cfg) is False
    assert scheduler.should_alert(SeverityTier.WARNING, 10.0, state, cfg) is True


@pytest.mark.parametrize("recovered", [SeverityTier.NORMAL, SeverityTier.CHARGING])
def test_recovery_resets_escalation(
    scheduler: AlertScheduler, settings: MonitorSettings, recovered: SeverityTier
) -> None:
    state = AlertState(active_blocking_alert=True)
    scheduler.record(SeverityTier.WARNING, 100.0, state)
    scheduler.record(SeverityTier.CRITICAL, 100.0, state)

    assert scheduler.should_alert(recovered, 101.0, state, settings) is False
    assert state.last_alert == {}
    assert state.active_blocking_alert is False
    # re-entering warning alerts right away
    assert scheduler.should_alert(SeverityTier.WARNING, 102.0, state, settings) is True


def test_unknown_keeps_state(scheduler: AlertScheduler, settings: MonitorSettings) -> None:
    state = AlertState(active_blocking_alert=True)
    scheduler.record(SeverityTier.WARNING, 100.0, state)

    scheduler.should_alert(SeverityTier.UNKNOWN, 101.0, state, settings)

    assert SeverityTier.WARNING in state.last_alert
    assert state.active_blocking_alert is True


def test_reset_reports_active_alert(scheduler: AlertScheduler) -> None:
    assert scheduler.reset(AlertState(active_blocking_alert=True)) is True
    assert scheduler.reset(AlertState()) is False


def test_clear_blocking_alert_keeps_debounce(scheduler: AlertScheduler) -> None:
    state = AlertState(active_blocking_alert=True)
    scheduler.record(SeverityTier.CRITICAL, 100.0, state)

    assert scheduler.clear_blocking_alert(state) is True
    assert state.active_blocking_alert is False
    assert state.last_alert[SeverityTier.CRITICAL] == 100.0
    assert scheduler.clear_blocking_alert(state) is False
