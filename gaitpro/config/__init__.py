"""
Configuration for the parametrization engine.
"""

from .parameter_manager import ParameterValidator
from .settings import ParametrizationSettings, ScheduleSettings

__all__ = [
    "ParameterValidator",
    "ParametrizationSettings",
    "ScheduleSettings",
]
