# src/battwatch/system/__init__.py
"""System module for battery sensing and suspend control."""

# Re-export commonly used classes for cleaner imports
from battwatch.system.power_source import PowerSource, SysfsPowerSource
from battwatch.system.status import BatteryReading
from battwatch.system.suspend import CommandSuspendExecutor, SuspendExecutor

# Define the public API
__all__ = [
    "BatteryReading",
    "CommandSuspendExecutor",
    "PowerSource",
    "SuspendExecutor",
    "SysfsPowerSource",
]
