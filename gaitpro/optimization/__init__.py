"""
Solver-facing interfaces of the motion parametrization.
"""

from .base import Parametrization
from .history import IterationHistory, IterationRecord
from .jacobian import jacobian_matrix, stacked_jacobian

__all__ = [
    "IterationHistory",
    "IterationRecord",
    "Parametrization",
    "jacobian_matrix",
    "stacked_jacobian",
]
