from __future__ import annotations

from collections.abc import Callable

import pytest

from battwatch.common.enums import SuspendMethod
from battwatch.presentation.protocols import MockPresenter
from battwatch.settings.user import MonitorSettings
from battwatch.system.status import BatteryReading


class FakePowerSource:
    """Returns queued readings in order; the last one repeats."""

    def __init__(self, *readings: BatteryReading) -> None:
        self.readings = list(readings)
        self.samples = 0
        self.on_sample: Callable[[int], None] | None = None

    def sample(self) -> BatteryReading:
        self.samples += 1
        if self.on_sample:
            self.on_sample(self.samples)
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


class FakeExecutor:
    """Records attempts; succeeds only for the given methods."""

    def __init__(self, succeed: tuple[SuspendMethod, ...] = ()) -> None:
        self.succeed = succeed
        self.attempts: list[SuspendMethod] = []

    def attempt(self, method: SuspendMethod) -> bool:
        self.attempts.append(method)
        return method in self.succeed


def battery(pct: int, charging: bool = False) -> BatteryReading:
    return BatteryReading(
        present=True,
        percentage=pct,
        charging=charging,
        raw_status_label="Charging" if charging else "Discharging",
    )


@pytest.fixture
def settings() -> MonitorSettings:
    return MonitorSettings(
        warning_level=20,
        critical_level=10,
        check_interval=30,
        grace_seconds=0,
    )


@pytest.fixture
def presenter() -> MockPresenter:
    return MockPresenter()
