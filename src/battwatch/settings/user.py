"""User-configurable thresholds and behaviour switches."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battwatch.common.enums import SuspendMethod
from battwatch.constants import (
    DEFAULT_ALERT_TIMEOUT,
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_CRITICAL_LEVEL,
    DEFAULT_CRITICAL_REPEAT,
    DEFAULT_GRACE_SECONDS,
    DEFAULT_ICON_BATTERY,
    DEFAULT_ICON_CHARGING,
    DEFAULT_ICON_LOW,
    DEFAULT_WARNING_LEVEL,
    DEFAULT_WARNING_REPEAT,
)


def _coerce_method(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return SuspendMethod.from_name(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"unknown suspend method: {value!r}") from exc
    return value


class AlertRepeat(BaseModel):
    """Minimum seconds between repeated alerts of the same tier."""

    model_config = ConfigDict(frozen=True)

    warning: int = Field(DEFAULT_WARNING_REPEAT, ge=0)
    critical: int = Field(DEFAULT_CRITICAL_REPEAT, ge=0)


class MonitorSettings(BaseModel):
    """Thresholds and switches the monitor runs under.

    Instances are immutable. A settings change produces a new instance
    (``model_copy(update=...)``) which the monitor loop swaps in at a
    cycle boundary.
    """

    model_config = ConfigDict(frozen=True)

    # Thresholds
    warning_level: int = Field(
        DEFAULT_WARNING_LEVEL, ge=1, le=100, description="Warn at or below this %"
    )
    critical_level: int = Field(
        DEFAULT_CRITICAL_LEVEL, ge=1, le=99, description="Suspend at or below this %"
    )

    # Timing
    check_interval: int = Field(
        DEFAULT_CHECK_INTERVAL, gt=0, description="Seconds between battery checks"
    )
    alert_timeout: int = Field(
        DEFAULT_ALERT_TIMEOUT, gt=0, description="Seconds a critical notification stays up"
    )
    alert_repeat: AlertRepeat = Field(default_factory=AlertRepeat)
    grace_seconds: float = Field(
        DEFAULT_GRACE_SECONDS,
        ge=0,
        description="Delay between the critical alert and the suspend re-check",
    )

    # Behaviour
    force_suspend: bool = True
    impossible_alerts: bool = True
    suspend_method: SuspendMethod = SuspendMethod.SYSTEMD
    fallback_methods: tuple[SuspendMethod, ...] | None = Field(
        None, description="Fallback order; defaults to the remaining methods"
    )

    # Icon theme names
    icon_charging: str = DEFAULT_ICON_CHARGING
    icon_battery: str = DEFAULT_ICON_BATTERY
    icon_low: str = DEFAULT_ICON_LOW

    # ---- validators ----
    @field_validator("suspend_method", mode="before")
    @classmethod
    def parse_method(cls, v: Any) -> Any:
        return _coerce_method(v)

    @field_validator("fallback_methods", mode="before")
    @classmethod
    def parse_fallbacks(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        if isinstance(v, (list, tuple)):
            return tuple(_coerce_method(item) for item in v)
        return v

    @model_validator(mode="after")
    def check_levels(self) -> MonitorSettings:
        if self.critical_level >= self.warning_level:
            raise ValueError(
                f"critical_level ({self.critical_level}) must be below "
                f"warning_level ({self.warning_level})"
            )
        return self

    # ---- convenience methods ----
    @property
    def suspend_method_order(self) -> tuple[SuspendMethod, ...]:
        """Primary suspend method first, then the fallbacks without repeats."""
        rest = self.fallback_methods
        if rest is None:
            rest = tuple(SuspendMethod)
        order = [self.suspend_method]
        order.extend(m for m in rest if m not in order)
        return tuple(order)
