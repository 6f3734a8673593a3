from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from battwatch import controller
from battwatch.cli import app
from battwatch.common.enums import SuspendMethod
from battwatch.settings.store import KeyValueConfigStore
from battwatch.system.status import BatteryReading

from conftest import FakeExecutor, battery

runner = CliRunner()


def _fake_power_source(reading: BatteryReading) -> type:
    class _Source:
        def sample(self) -> BatteryReading:
            return reading

    return _Source


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "battery.conf"


def test_config_init_and_validate(config_file: Path) -> None:
    result = runner.invoke(app, ["config", "init", str(config_file)])
    assert result.exit_code == 0
    assert config_file.exists()

    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 0
    assert "Config valid" in result.output


def test_config_init_refuses_overwrite(config_file: Path) -> None:
    config_file.write_text("warning_level=30\n")
    result = runner.invoke(app, ["config", "init", str(config_file)])
    assert result.exit_code == 1
    assert config_file.read_text() == "warning_level=30\n"


def test_config_validate_rejects_bad_levels(config_file: Path) -> None:
    config_file.write_text("warning_level=10\ncritical_level=30\n")
    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 1


def test_config_show(config_file: Path) -> None:
    config_file.write_text("check_interval=90\n")
    result = runner.invoke(app, ["config", "show", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "check_interval: 90" in result.output


def test_status(monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
    monkeypatch.setattr(controller, "SysfsPowerSource", _fake_power_source(battery(42)))
    result = runner.invoke(app, ["status", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "Battery: 42%" in result.output


def test_run_without_battery_exits(monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
    monkeypatch.setattr(
        controller, "SysfsPowerSource", _fake_power_source(BatteryReading.missing())
    )
    result = runner.invoke(app, ["run", "--console", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "No battery detected" in result.output


def test_suspend_methods_select(monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
    monkeypatch.setattr(controller, "SysfsPowerSource", _fake_power_source(battery(80)))
    result = runner.invoke(
        app, ["suspend-methods", "--config", str(config_file), "--select", "pm-utils"]
    )
    assert result.exit_code == 0
    assert "* 1 pm_utils" in result.output
    assert KeyValueConfigStore(config_file).read().suspend_method is SuspendMethod.PM_UTILS


def test_suspend_methods_unknown(config_file: Path) -> None:
    result = runner.invoke(
        app, ["suspend-methods", "--config", str(config_file), "--select", "hibernate"]
    )
    assert result.exit_code == 2


def test_test_suspend_failure(monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
    executor = FakeExecutor()
    monkeypatch.setattr(controller, "CommandSuspendExecutor", lambda: executor)
    monkeypatch.setattr(controller.time, "sleep", lambda _s: None)

    result = runner.invoke(app, ["test-suspend", "--yes", "--config", str(config_file)])

    assert result.exit_code == 1
    assert executor.attempts == [SuspendMethod.SYSTEMD]


def test_test_suspend_declined(monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
    executor = FakeExecutor((SuspendMethod.SYSTEMD,))
    monkeypatch.setattr(controller, "CommandSuspendExecutor", lambda: executor)

    result = runner.invoke(app, ["test-suspend", "--config", str(config_file)], input="n\n")

    assert result.exit_code == 1
    assert executor.attempts == []


def test_config_set_saves_settings(config_file: Path) -> None:
    config_file.write_text("warning_level=30\nimpossible_alerts=0\n")

    result = runner.invoke(
        app, ["config", "set", "warning_level=25", "force_suspend=0", "--config", str(config_file)]
    )

    assert result.exit_code == 0
    assert "SIGHUP" in result.output
    cfg = KeyValueConfigStore(config_file).read()
    assert cfg.warning_level == 25
    assert cfg.force_suspend is False
    assert cfg.impossible_alerts is False


@pytest.mark.parametrize(
    "pair, code",
    [("warning_level", 2), ("volume=3", 1), ("critical_level=50", 1)],
)
def test_config_set_rejects_bad_input(config_file: Path, pair: str, code: int) -> None:
    config_file.write_text("warning_level=30\n")

    result = runner.invoke(app, ["config", "set", pair, "--config", str(config_file)])

    assert result.exit_code == code
    assert config_file.read_text() == "warning_level=30\n"
