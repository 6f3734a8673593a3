"""Settings management.

This package provides:
- MonitorSettings: validated thresholds and behaviour switches
- ConfigStore implementations that load and save them
"""

from battwatch.settings.store import (
    ConfigStore,
    KeyValueConfigStore,
    YamlConfigStore,
    apply_overrides,
    create_config_store,
    resolve_config_path,
)
from battwatch.settings.user import AlertRepeat, MonitorSettings

__all__ = [
    "AlertRepeat",
    "ConfigStore",
    "KeyValueConfigStore",
    "MonitorSettings",
    "YamlConfigStore",
    "apply_overrides",
    "create_config_store",
    "resolve_config_path",
]
