"""Configuration stores: where MonitorSettings are loaded from and saved to."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from battwatch.constants import CONFIG_ENV_VAR, CONFIG_FILE_NAME, FALLBACK_CONFIG_PATH
from battwatch.errors import ConfigError
from battwatch.settings.user import MonitorSettings

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

# Flat key -> (nested) MonitorSettings field
_REPEAT_KEYS: Final = {"warning_repeat": "warning", "critical_repeat": "critical"}
_SCALAR_KEYS: Final = (
    "warning_level",
    "critical_level",
    "check_interval",
    "alert_timeout",
    "force_suspend",
    "impossible_alerts",
    "suspend_method",
    "grace_seconds",
    "icon_charging",
    "icon_battery",
    "icon_low",
)

_HEADER: Final = "# Cool Little Battery Monitor Configuration"
_COMMENTS: Final = {
    "warning_level": "Warning level percentage (when to show alerts)",
    "critical_level": "Critical level percentage (when to force suspend)",
    "check_interval": "Check interval in seconds",
    "alert_timeout": "Alert timeout in seconds",
    "warning_repeat": "Seconds between repeated warning alerts",
    "critical_repeat": "Seconds between repeated critical alerts",
    "grace_seconds": "Seconds to wait for a charger before suspending",
    "force_suspend": "Force suspend at critical level (1=yes, 0=no)",
    "impossible_alerts": "Show impossible to dismiss alerts (1=yes, 0=no)",
    "suspend_method": "Suspend method (0=systemctl, 1=pm-suspend, 2=dbus, 3=kernel)",
    "suspend_fallback": "Fallback order, comma separated (empty = all others)",
    "icon_charging": "Icon paths",
}


def default_config_path() -> Path:
    """Return the per-user config file path."""
    home = os.environ.get("HOME")
    if not home:
        return FALLBACK_CONFIG_PATH
    return Path(home) / ".config" / CONFIG_FILE_NAME


def resolve_config_path(path: Path | None = None) -> Path:
    """Pick the config file: explicit path, then $BATTWATCH_CONFIG, then default."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return default_config_path()


@runtime_checkable
class ConfigStore(Protocol):
    """Protocol for loading and saving monitor settings."""

    path: Path

    def load(self) -> MonitorSettings:
        """Load settings, skipping values that do not validate.

        Each bad value is logged and replaced by its default. The whole
        file falls back to defaults only when it cannot be read or the
        remaining values contradict each other.

        Returns:
            Valid MonitorSettings
        """
        ...

    def read(self) -> MonitorSettings:
        """Load settings strictly.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        ...

    def save(self, settings: MonitorSettings) -> None:
        """Persist settings.

        Raises:
            ConfigError: If the file cannot be written
        """
        ...


def _drop_field(data: dict[str, Any], loc: tuple[int | str, ...]) -> bool:
    """Remove the value a validation error points at.

    Nested mappings (``alert_repeat``) lose only the offending key.

    Returns:
        True if something was removed
    """
    if not loc or loc[0] not in data:
        return False
    nested = data[loc[0]]
    if len(loc) > 1 and isinstance(nested, dict) and loc[1] in nested:
        nested = dict(nested)
        del nested[loc[1]]
        data[loc[0]] = nested
        return True
    del data[loc[0]]
    return True


class _FileConfigStore:
    """Shared load/save plumbing; subclasses convert text <-> field dicts."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _parse(self, text: str) -> dict[str, Any]:
        raise NotImplementedError

    def _render(self, settings: MonitorSettings) -> str:
        raise NotImplementedError

    def _read_data(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"unable to read config: {exc}", self.path) from exc
        return self._parse(text)

    def read(self) -> MonitorSettings:
        data = self._read_data()
        try:
            return MonitorSettings.model_validate(data)
        except ValidationError as err:
            raise ConfigError(f"invalid configuration:\n{err}", self.path) from err

    def _validate_leniently(self, data: dict[str, Any]) -> MonitorSettings:
        """Validate, dropping each field that fails on its own.

        Raises:
            ConfigError: If the remaining fields are still inconsistent
        """
        data = dict(data)
        while True:
            try:
                return MonitorSettings.model_validate(data)
            except ValidationError as err:
                dropped = False
                for error in err.errors():
                    if _drop_field(data, error["loc"]):
                        logger.warning(
                            "%s: ignoring %s=%r (%s)",
                            self.path,
                            ".".join(str(part) for part in error["loc"]),
                            error.get("input"),
                            error["msg"],
                        )
                        dropped = True
                if not dropped:
                    raise ConfigError(f"invalid configuration:\n{err}", self.path) from err

    def load(self) -> MonitorSettings:
        if not self.path.exists():
            logger.info("No config file at %s, using defaults", self.path)
            return MonitorSettings()
        try:
            settings = self._validate_leniently(self._read_data())
        except ConfigError as exc:
            logger.warning("%s; using defaults", exc)
            return MonitorSettings()
        logger.info("Configuration loaded from %s", self.path)
        return settings

    def save(self, settings: MonitorSettings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self._render(settings), encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed to save config: {exc}", self.path) from exc
        logger.info("Configuration saved to %s", self.path)


class KeyValueConfigStore(_FileConfigStore):
    """``key=value`` text file, one pair per line, ``#`` comments ignored."""

    def _parse(self, text: str) -> dict[str, Any]:
        data: dict[str, Any] = {}
        repeat: dict[str, str] = {}

        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            key, value = key.strip(), value.strip()
            if not sep or not key:
                logger.warning("%s:%d: ignoring malformed line %r", self.path, lineno, raw)
                continue

            if key in _REPEAT_KEYS:
                repeat[_REPEAT_KEYS[key]] = value
            elif key == "suspend_fallback":
                data["fallback_methods"] = value or None
            elif key in _SCALAR_KEYS:
                data[key] = value
            else:
                logger.warning("%s:%d: unknown key %r", self.path, lineno, key)

        if repeat:
            data["alert_repeat"] = repeat
        return data

    def _render(self, settings: MonitorSettings) -> str:
        fallback = settings.fallback_methods
        values: dict[str, Any] = {
            "warning_level": settings.warning_level,
            "critical_level": settings.critical_level,
            "check_interval": settings.check_interval,
            "alert_timeout": settings.alert_timeout,
            "warning_repeat": settings.alert_repeat.warning,
            "critical_repeat": settings.alert_repeat.critical,
            "grace_seconds": f"{settings.grace_seconds:g}",
            "force_suspend": int(settings.force_suspend),
            "impossible_alerts": int(settings.impossible_alerts),
            "suspend_method": settings.suspend_method.value,
            "suspend_fallback": (
                ",".join(str(m.value) for m in fallback) if fallback is not None else ""
            ),
            "icon_charging": settings.icon_charging,
            "icon_battery": settings.icon_battery,
            "icon_low": settings.icon_low,
        }

        lines = [_HEADER]
        for key, value in values.items():
            if key in _COMMENTS:
                lines.append(f"# {_COMMENTS[key]}")
            lines.append(f"{key}={value}")
        return "\n".join(lines) + "\n"


class YamlConfigStore(_FileConfigStore):
    """YAML file mirroring the MonitorSettings field layout."""

    def _parse(self, text: str) -> dict[str, Any]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"unable to parse config YAML: {exc}", self.path) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("config YAML must be a mapping", self.path)
        return data

    def _render(self, settings: MonitorSettings) -> str:
        return yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False)


def create_config_store(path: Path | None = None) -> ConfigStore:
    """Create a config store for a path, chosen by file suffix.

    Args:
        path: Config file (optional, resolved via resolve_config_path if None)

    Returns:
        YamlConfigStore for .yaml/.yml files, KeyValueConfigStore otherwise
    """
    resolved = resolve_config_path(path)
    if resolved.suffix.lower() in (".yaml", ".yml"):
        return YamlConfigStore(resolved)
    return KeyValueConfigStore(resolved)


def apply_overrides(settings: MonitorSettings, overrides: Mapping[str, str]) -> MonitorSettings:
    """Return ``settings`` with config-file style ``key=value`` overrides applied.

    Keys are the ones the key=value config file uses; field names of
    MonitorSettings are accepted too.

    Raises:
        ConfigError: If a key is unknown or the result does not validate
    """
    data = settings.model_dump()
    for key, value in overrides.items():
        if key in _REPEAT_KEYS:
            data["alert_repeat"] = {**data["alert_repeat"], _REPEAT_KEYS[key]: value}
        elif key in ("suspend_fallback", "fallback_methods"):
            data["fallback_methods"] = value or None
        elif key in _SCALAR_KEYS:
            data[key] = value
        else:
            raise ConfigError(f"unknown setting: {key!r}")

    try:
        return MonitorSettings.model_validate(data)
    except ValidationError as err:
        raise ConfigError(f"invalid settings:\n{err}") from err
