"""
Shared enumerations and state containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

import numpy as np
from numpy.typing import NDArray

from gaitpro.constants import DIM2D


class PhaseKind(Enum):
    """Kind of contact phase a segment represents."""

    INITIAL_MULTI_CONTACT = "initial_multi_contact"
    SWING = "swing"
    INTERMEDIATE_MULTI_CONTACT = "intermediate_multi_contact"
    FINAL_MULTI_CONTACT = "final_multi_contact"

    @property
    def is_multi_contact(self) -> bool:
        return self is not PhaseKind.SWING


class Coords(IntEnum):
    """Spatial axes of a segment."""

    X = 0
    Y = 1


class Derivative(IntEnum):
    """Derivative order extracted from a segment."""

    POS = 0
    VEL = 1
    ACC = 2


@dataclass
class StateLin2d:
    """Linear position, velocity and acceleration in the plane."""

    pos: NDArray[np.float64] = field(default_factory=lambda: np.zeros(DIM2D))
    vel: NDArray[np.float64] = field(default_factory=lambda: np.zeros(DIM2D))
    acc: NDArray[np.float64] = field(default_factory=lambda: np.zeros(DIM2D))

    def to_dict(self) -> dict[str, NDArray[np.float64]]:
        return {"position": self.pos, "velocity": self.vel, "acceleration": self.acc}
