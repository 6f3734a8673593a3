"""Battery state machine: classification, alert debounce and suspend control."""

from battwatch.monitor.alerts import AlertScheduler, AlertState
from battwatch.monitor.classifier import classify
from battwatch.monitor.loop import MonitorLoop
from battwatch.monitor.sequencer import SuspendSequencer, try_suspend_methods

__all__ = [
    "AlertScheduler",
    "AlertState",
    "MonitorLoop",
    "SuspendSequencer",
    "classify",
    "try_suspend_methods",
]
