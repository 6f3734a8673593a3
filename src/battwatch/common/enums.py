from enum import Enum


class SeverityTier(Enum):
    """Classification bucket derived from charge level and charging state."""

    NORMAL = "normal"
    CHARGING = "charging"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"  # no battery device found


class SuspendMethod(Enum):
    """OS-level suspend mechanisms.

    Values are the integer codes stored in the config file, and also the
    canonical fallback order.
    """

    SYSTEMD = 0  # systemctl suspend
    PM_UTILS = 1  # pm-suspend
    DBUS_LOGIN = 2  # org.freedesktop.login1 over the system bus
    KERNEL_DIRECT = 3  # write "mem" to /sys/power/state

    @property
    def label(self) -> str:
        """Human-readable name shown in menus and status output."""
        return _METHOD_LABELS[self]

    @classmethod
    def from_name(cls, value: str) -> "SuspendMethod":
        """Parse a method from its code, enum name or a dashed alias."""
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        return cls[text.upper().replace("-", "_")]


_METHOD_LABELS = {
    SuspendMethod.SYSTEMD: "systemctl suspend (Systemd)",
    SuspendMethod.PM_UTILS: "pm-suspend (PM Utils)",
    SuspendMethod.DBUS_LOGIN: "D-Bus (Login Manager)",
    SuspendMethod.KERNEL_DIRECT: "Kernel Direct (/sys/power/state)",
}


class SequenceOutcome(Enum):
    """Result of one critical-tier suspend sequence."""

    ABORTED = "aborted"
    SUSPENDED = "suspended"
    SUSPEND_FAILED = "suspend_failed"


class Urgency(Enum):
    """Notification urgency, matching the freedesktop levels."""

    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"
