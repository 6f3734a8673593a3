"""Battery monitor that escalates from notifications to a forced suspend."""

__version__ = "0.3.0"
