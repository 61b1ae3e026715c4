"""
Exception hierarchy for the parametrization engine.

Every failure raised here is a caller contract violation: schedule or
geometry inconsistencies at construction, parameter-vector shape mismatches,
and time or identifier range violations. Nothing is retried internally.
"""

from __future__ import annotations


class ParametrizationError(Exception):
    """Base class for all gaitpro errors."""


# Construction-time errors


class ScheduleError(ParametrizationError, ValueError):
    """Raised when a contact schedule cannot be turned into motion segments."""


class ScheduleHorizonMismatch(ScheduleError):
    """Raised when the limbs of a schedule do not share the same total time."""


class InvalidDuration(ScheduleError):
    """Raised for non-positive or non-finite phase durations."""


class MissingInitialPosition(ScheduleError):
    """Raised when a scheduled limb has no initial position."""


class EmptySchedule(ScheduleError):
    """Raised when a schedule holds no limbs or a limb holds no phases."""


# Shape errors


class ParameterVectorLengthMismatch(ParametrizationError, ValueError):
    """Raised when a parameter vector does not match the stored length."""

    def __init__(self, expected: int, received: int, owner: str = "motion"):
        self.expected = expected
        self.received = received
        super().__init__(
            f"{owner} expects {expected} optimization parameters, got {received}",
        )


class InvalidParameterCount(ParameterVectorLengthMismatch):
    """Raised when a limb receives a free-parameter vector of the wrong size."""


# Range errors


class TimeOutOfRange(ParametrizationError, ValueError):
    """Raised for query times outside the valid interval."""

    def __init__(self, t: float, lower: float, upper: float):
        self.t = t
        self.lower = lower
        self.upper = upper
        super().__init__(f"time {t!r} outside [{lower}, {upper}]")


class NoActivePhase(TimeOutOfRange):
    """Raised when no phase is active at the requested time."""


class UnknownLimb(ParametrizationError, KeyError):
    """Raised for limb ids that are not part of the motion."""

    def __init__(self, limb: object):
        self.limb = limb
        super().__init__(f"unknown limb {limb!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class WrongPhaseKind(ParametrizationError, ValueError):
    """Raised when phase metadata is read from a segment of the wrong kind."""
