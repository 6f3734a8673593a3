"""Shared enumerations."""

from battwatch.common.enums import SequenceOutcome, SeverityTier, SuspendMethod, Urgency

__all__ = ["SequenceOutcome", "SeverityTier", "SuspendMethod", "Urgency"]
