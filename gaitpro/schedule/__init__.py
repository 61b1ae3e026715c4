"""
Contact schedules consumed by the motion parametrization.
"""

from .contact_schedule import ContactSchedule, Phase

__all__ = [
    "ContactSchedule",
    "Phase",
]
