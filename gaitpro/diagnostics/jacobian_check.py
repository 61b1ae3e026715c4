"""
Analytic vs. numeric Jacobian comparison.

Perturbs every optimization parameter of a motion and compares the central
finite differences of one limb coordinate with the analytic Jacobian row.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from gaitpro.constants import FINITE_DIFFERENCE_STEP, JACOBIAN_CHECK_TOLERANCE
from gaitpro.logging import get_logger
from gaitpro.motion import EndeffectorsMotion

log = get_logger(__name__)


@dataclass
class JacobianCheckReport:
    passed: bool
    max_abs_error: float
    analytic: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))
    numeric: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))


def check_jacobian(
    motion: EndeffectorsMotion,
    t_global: float,
    limb: int,
    coord: int,
    step: float = FINITE_DIFFERENCE_STEP,
    tolerance: float = JACOBIAN_CHECK_TOLERANCE,
) -> JacobianCheckReport:
    """Compare an analytic Jacobian row with central finite differences.

    Every parameter is perturbed in turn; the motion's parameters are
    restored before returning.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    analytic = motion.get_jacobian_wrt_opt_params(t_global, limb, coord)
    x0 = motion.get_optimization_parameters()
    numeric = np.zeros_like(x0)
    try:
        for i in range(x0.size):
            xp = x0.copy()
            xp[i] += step
            motion.set_optimization_parameters(xp)
            f_plus = motion.limb_motion(limb).state_at(t_global).pos[coord]

            xm = x0.copy()
            xm[i] -= step
            motion.set_optimization_parameters(xm)
            f_minus = motion.limb_motion(limb).state_at(t_global).pos[coord]

            numeric[i] = (f_plus - f_minus) / (2.0 * step)
    finally:
        motion.set_optimization_parameters(x0)

    max_err = float(np.max(np.abs(analytic - numeric))) if x0.size else 0.0
    passed = max_err <= tolerance
    if not passed:
        log.warning(
            "Jacobian check failed for limb %s coord %s at t=%.4f: max error %.3e",
            limb,
            coord,
            t_global,
            max_err,
        )
    return JacobianCheckReport(passed, max_err, analytic, numeric)
