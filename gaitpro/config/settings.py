"""
Settings objects for the parametrization engine.

Settings are plain dataclasses validated on construction. They fix the
topology of a motion (which coefficients are free) and the default phase
durations used when a contact schedule is generated from a step sequence.
"""

from __future__ import annotations

from dataclasses import dataclass

from gaitpro.constants import (
    COEFF_COUNT,
    DEFAULT_FINAL_STANCE_TIME,
    DEFAULT_INITIAL_STANCE_TIME,
    DEFAULT_INTERMEDIATE_STANCE_TIME,
    DEFAULT_SWING_FREE_COEFFICIENTS,
    DEFAULT_SWING_TIME,
    DIM2D,
    TIME_TOLERANCE,
)

from .parameter_manager import ParameterValidator


@dataclass(frozen=True)
class ParametrizationSettings:
    """Settings deciding which polynomial coefficients are optimized."""

    swing_free_coefficients: tuple[int, ...] = DEFAULT_SWING_FREE_COEFFICIENTS
    free_axes: tuple[int, ...] = tuple(range(DIM2D))
    time_tolerance: float = TIME_TOLERANCE

    def __post_init__(self):
        """Validate parametrization settings."""
        if not ParameterValidator.validate_index_range(
            self.swing_free_coefficients, "swing_free_coefficients", 0, COEFF_COUNT - 1,
        ):
            raise ValueError(
                f"Invalid swing free coefficients: {self.swing_free_coefficients}",
            )
        if not ParameterValidator.validate_index_range(
            self.free_axes, "free_axes", 0, DIM2D - 1,
        ):
            raise ValueError(f"Invalid free axes: {self.free_axes}")
        if not ParameterValidator.validate_positive_float(
            self.time_tolerance, "time_tolerance",
        ):
            raise ValueError("Time tolerance must be positive")

    @property
    def n_swing_parameters(self) -> int:
        """Free parameters contributed by one airborne segment."""
        return len(self.swing_free_coefficients) * len(self.free_axes)


@dataclass(frozen=True)
class ScheduleSettings:
    """Phase durations used when building a schedule from a step sequence."""

    t_initial_stance: float = DEFAULT_INITIAL_STANCE_TIME
    t_swing: float = DEFAULT_SWING_TIME
    t_intermediate_stance: float = DEFAULT_INTERMEDIATE_STANCE_TIME
    t_final_stance: float = DEFAULT_FINAL_STANCE_TIME
    insert_intermediate_stance: bool = True

    def __post_init__(self):
        """Validate schedule settings."""
        for name in (
            "t_initial_stance",
            "t_swing",
            "t_intermediate_stance",
            "t_final_stance",
        ):
            if not ParameterValidator.validate_positive_float(getattr(self, name), name):
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
