"""gaitpro: polynomial limb-motion parametrization for gradient-based gait optimization."""
from __future__ import annotations

from gaitpro.config import ParametrizationSettings, ScheduleSettings
from gaitpro.errors import (
    InvalidDuration,
    InvalidParameterCount,
    NoActivePhase,
    ParameterVectorLengthMismatch,
    ParametrizationError,
    ScheduleHorizonMismatch,
    TimeOutOfRange,
    UnknownLimb,
)
from gaitpro.logging import get_logger
from gaitpro.motion import EndeffectorsMotion, LimbMotion, PolynomialSegment
from gaitpro.schedule import ContactSchedule, Phase
from gaitpro.types import Coords, Derivative, PhaseKind, StateLin2d

__version__ = "0.1.0"

log = get_logger(__name__)

__all__ = [
    "ContactSchedule",
    "Coords",
    "Derivative",
    "EndeffectorsMotion",
    "InvalidDuration",
    "InvalidParameterCount",
    "LimbMotion",
    "NoActivePhase",
    "ParameterVectorLengthMismatch",
    "ParametrizationError",
    "ParametrizationSettings",
    "Phase",
    "PhaseKind",
    "PolynomialSegment",
    "ScheduleHorizonMismatch",
    "ScheduleSettings",
    "StateLin2d",
    "TimeOutOfRange",
    "UnknownLimb",
]
