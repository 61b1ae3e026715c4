"""
Polynomial parametrization of limb motions.
"""

from .endeffectors_motion import EndeffectorsMotion
from .limb_motion import ActivePhase, LimbMotion, free_mask_for_phase
from .polynomial import PolynomialSegment

__all__ = [
    "ActivePhase",
    "EndeffectorsMotion",
    "LimbMotion",
    "PolynomialSegment",
    "free_mask_for_phase",
]
