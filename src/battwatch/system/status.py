from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BatteryReading:
    """One instantaneous battery sample.

    Produced fresh on every check and discarded after use:
    - Whether a battery device was found at all
    - State of charge (percentage, 0-100)
    - Charging status and the raw status label reported by the device

    When ``present`` is False the percentage and charging fields carry no
    meaning and must not be interpreted.
    """

    present: bool
    percentage: int = 0
    charging: bool = False
    raw_status_label: str = ""

    @classmethod
    def missing(cls) -> BatteryReading:
        """Reading for a machine with no battery device."""
        return cls(present=False)

    @property
    def formatted_percentage(self) -> str:
        """Return formatted battery percentage string."""
        return f"{self.percentage}%" if self.present else "n/a"
