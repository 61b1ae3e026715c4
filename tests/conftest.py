"""
Pytest configuration for the gaitpro test suite.

Pins the package log level before gaitpro is imported and provides the
motions shared by the test modules.
"""

import os

# Log level is read once at import time
os.environ["GAITPRO_LOG_LEVEL"] = "INFO"

import pytest

from gaitpro.motion import EndeffectorsMotion
from gaitpro.schedule import ContactSchedule, Phase
from gaitpro.types import PhaseKind

QUADRUPED_LIMBS = (0, 1, 2, 3)
QUADRUPED_STANCE = {
    0: (0.3, 0.2),
    1: (0.3, -0.2),
    2: (-0.3, 0.2),
    3: (-0.3, -0.2),
}


@pytest.fixture
def single_limb_schedule() -> ContactSchedule:
    """Swing of 0.5s followed by a 0.3s stance."""
    return ContactSchedule(
        {
            0: [
                Phase(PhaseKind.SWING, 0.5, limb=0),
                Phase(PhaseKind.FINAL_MULTI_CONTACT, 0.3),
            ],
        },
    )


@pytest.fixture
def single_limb_motion(single_limb_schedule) -> EndeffectorsMotion:
    return EndeffectorsMotion({0: (0.0, 0.0)}, single_limb_schedule)


@pytest.fixture
def two_limb_motion() -> EndeffectorsMotion:
    """Two limbs owning 5 and 3 optimization parameters."""
    schedule = ContactSchedule(
        {
            0: [
                Phase(
                    PhaseKind.SWING,
                    0.6,
                    limb=0,
                    free_coefficients=((0, 0), (0, 1), (0, 2), (1, 0), (1, 1)),
                ),
                Phase(PhaseKind.FINAL_MULTI_CONTACT, 0.4),
            ],
            1: [
                Phase(PhaseKind.INITIAL_MULTI_CONTACT, 0.6, limb=1),
                Phase(
                    PhaseKind.SWING,
                    0.4,
                    limb=1,
                    free_coefficients=((0, 1), (1, 1), (1, 2)),
                ),
            ],
        },
    )
    return EndeffectorsMotion({0: (0.0, 0.0), 1: (1.0, -1.0)}, schedule)


@pytest.fixture
def quadruped_stance() -> dict[int, tuple[float, float]]:
    return dict(QUADRUPED_STANCE)


@pytest.fixture
def quadruped_schedule() -> ContactSchedule:
    return ContactSchedule.from_step_sequence(QUADRUPED_LIMBS, [1, 2, 0, 3])


@pytest.fixture
def quadruped_motion(quadruped_schedule) -> EndeffectorsMotion:
    return EndeffectorsMotion(QUADRUPED_STANCE, quadruped_schedule)
