"""Battery sensors."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from battwatch.constants import BATTERY_NAMES, POWER_SUPPLY_ROOT
from battwatch.system.status import BatteryReading

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class PowerSource(Protocol):
    """Protocol for battery sensors."""

    def sample(self) -> BatteryReading:
        """Take one battery reading.

        Never raises; a missing battery is reported with ``present=False``.
        """
        ...


class SysfsPowerSource:
    """Linux power_supply class reader (``/sys/class/power_supply/BATn``)."""

    def __init__(
        self,
        root: Path = POWER_SUPPLY_ROOT,
        battery_names: Sequence[str] = BATTERY_NAMES,
    ) -> None:
        """Initialize with the sysfs root and the devices to probe.

        Args:
            root: Directory holding power_supply devices
            battery_names: Device names tried in order
        """
        self.root = root
        self.battery_names = tuple(battery_names)

    def sample(self) -> BatteryReading:
        """Read the first present battery device."""
        for name in self.battery_names:
            device = self.root / name
            present = self._read_int(device / "present")
            if not present:
                continue

            capacity = self._read_int(device / "capacity") or 0
            label = self._read_text(device / "status") or ""
            reading = BatteryReading(
                present=True,
                percentage=max(0, min(100, capacity)),
                charging=label == "Charging",
                raw_status_label=label,
            )
            logger.debug("%s: %d%% (%s)", name, reading.percentage, label or "no status")
            return reading

        return BatteryReading.missing()

    def _read_text(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError:
            return None

    def _read_int(self, path: Path) -> int | None:
        text = self._read_text(path)
        if text is None:
            return None
        try:
            return int(text)
        except ValueError:
            logger.debug("Unparsable value %r in %s", text, path)
            return None
