"""Enums for fitment-related constants."""

from enum import Enum


class BaselineState(str, Enum):
    """Where a session's baseline stands.

    Comparisons may only run when the baseline is VALID.
    """

    ABSENT = "absent"
    VALID = "valid"
    REJECTED = "rejected"


class AlertLevel(str, Enum):
    """Severity of a fitment alert shown to the user."""

    GOOD = "good"
    WARN = "warn"
    BAD = "bad"

    @classmethod
    def from_pass(cls, passed: bool) -> "AlertLevel":
        """Map a pass/fail verdict to an alert level."""
        return cls.GOOD if passed else cls.BAD
