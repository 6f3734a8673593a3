"""Exception classes for battwatch.

Nothing in the monitoring loop raises these; they are surfaced by the
configuration layer and by the host process at startup.
"""

from __future__ import annotations

from pathlib import Path


class BattwatchError(Exception):
    """Base class for all battwatch errors."""


class ConfigError(BattwatchError):
    """Configuration could not be read, validated or written.

    Raised by config stores on save failures and by explicit validation
    of a config file. Normal loading falls back to defaults instead.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            path: Config file involved, if any
        """
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path


class NoBatteryError(BattwatchError):
    """Raised when no battery device can be found at startup."""
