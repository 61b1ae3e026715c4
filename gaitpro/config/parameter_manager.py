"""
Parameter validation utilities.

This module provides tools for validating the scalar parameters handed to
the settings objects of the parametrization engine.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from gaitpro.logging import get_logger

log = get_logger(__name__)


class ParameterValidator:
    """Validator for configuration parameters."""

    @staticmethod
    def validate_positive_float(value: Any, name: str) -> bool:
        """Validate that a value is a positive, finite float."""
        try:
            float_val = float(value)
        except (ValueError, TypeError):
            log.error(f"{name} must be a number, got {type(value)}")
            return False
        if not math.isfinite(float_val) or float_val <= 0:
            log.error(f"{name} must be positive and finite, got {float_val}")
            return False
        return True

    @staticmethod
    def validate_index_range(
        values: Iterable[Any], name: str, min_val: int, max_val: int,
    ) -> bool:
        """Validate that every value is a unique integer in ``[min_val, max_val]``."""
        seen: set[int] = set()
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                log.error(f"{name} entries must be integers, got {type(value)}")
                return False
            if not (min_val <= value <= max_val):
                log.error(
                    f"{name} entries must be between {min_val} and {max_val}, got {value}",
                )
                return False
            if value in seen:
                log.error(f"{name} contains duplicate entry {value}")
                return False
            seen.add(value)
        return True
