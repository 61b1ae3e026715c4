"""
Motion of all endeffectors (feet, hands) of a machine.

This module transforms the flat optimization-parameter vector into the
position, velocity and acceleration of every limb, and provides the exact
Jacobian rows the solver needs. Each limb owns a contiguous block of the
parameter vector; the block offsets are fixed at construction.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gaitpro.config import ParametrizationSettings
from gaitpro.constants import HORIZON_TOLERANCE
from gaitpro.errors import (
    EmptySchedule,
    MissingInitialPosition,
    ParameterVectorLengthMismatch,
    ScheduleHorizonMismatch,
    UnknownLimb,
)
from gaitpro.logging import get_logger
from gaitpro.optimization.base import Parametrization
from gaitpro.schedule import ContactSchedule
from gaitpro.types import Coords, StateLin2d

from .limb_motion import ActivePhase, LimbMotion

log = get_logger(__name__)


class EndeffectorsMotion(Parametrization):
    """
    Represents the motion of all the endeffectors of a system.

    Limbs are laid out in the parameter vector in ascending id order, each as
    one contiguous block. A query about one limb never depends on the
    parameters of another limb.
    """

    def __init__(
        self,
        initial_positions: Mapping[int, ArrayLike],
        contact_schedule: ContactSchedule,
        settings: ParametrizationSettings | None = None,
    ):
        super().__init__("EndeffectorsMotion")
        self.settings = settings or ParametrizationSettings()

        missing = [limb for limb in contact_schedule.limb_ids if limb not in initial_positions]
        if missing:
            log.error("No initial position for limbs %s", missing)
            raise MissingInitialPosition(f"No initial position for limbs {missing}")

        self._limbs: dict[int, LimbMotion] = {}
        for limb in contact_schedule.limb_ids:
            self._limbs[limb] = LimbMotion.from_phases(
                limb,
                contact_schedule.phases(limb),
                initial_positions[limb],
                self.settings,
            )
        self._set_parameter_structure()

    @classmethod
    def from_limb_motions(
        cls, limb_motions: Mapping[int, LimbMotion], name: str = "EndeffectorsMotion",
    ) -> EndeffectorsMotion:
        """Assemble a motion from prebuilt limb motions."""
        if not limb_motions:
            raise EmptySchedule("No limb motions given")
        obj = cls.__new__(cls)
        Parametrization.__init__(obj, name)
        obj.settings = ParametrizationSettings()
        obj._limbs = {limb: limb_motions[limb] for limb in sorted(limb_motions)}
        obj._set_parameter_structure()
        return obj

    def _set_parameter_structure(self) -> None:
        """Assign each limb's block offset and check the shared horizon."""
        totals = {limb: motion.get_total_time() for limb, motion in self._limbs.items()}
        reference = next(iter(totals.values()))
        tol = min(self.settings.time_tolerance, HORIZON_TOLERANCE)
        for limb, total in totals.items():
            if abs(total - reference) > tol:
                raise ScheduleHorizonMismatch(
                    f"Limb {limb} spans {total}s, expected {reference}s",
                )
        # Every limb accepts times up to the shortest total
        self._total_time = min(totals.values())

        self._offsets: dict[int, int] = {}
        n_opt_params = 0
        for limb, motion in self._limbs.items():
            self._offsets[limb] = n_opt_params
            n_opt_params += motion.n_parameters
        self._n_opt_params = n_opt_params

        log.info(
            "Endeffector motion: %d limbs, %d segments, %d optimization parameters",
            len(self._limbs),
            sum(len(m.segments) for m in self._limbs.values()),
            self._n_opt_params,
        )

    # Structure

    @property
    def n_parameters(self) -> int:
        return self._n_opt_params

    @property
    def limb_ids(self) -> tuple[int, ...]:
        return tuple(self._limbs)

    def get_number_of_endeffectors(self) -> int:
        return len(self._limbs)

    def limb_motion(self, limb: int) -> LimbMotion:
        try:
            return self._limbs[limb]
        except KeyError:
            raise UnknownLimb(limb) from None

    def index_start(self, limb: int) -> int:
        """Position of ``limb``'s first parameter in the optimization vector."""
        if limb not in self._offsets:
            raise UnknownLimb(limb)
        return self._offsets[limb]

    def parameter_slice(self, limb: int) -> slice:
        start = self.index_start(limb)
        return slice(start, start + self._limbs[limb].n_parameters)

    def get_total_time(self) -> float:
        return self._total_time

    # Optimization vector

    def get_optimization_parameters(self) -> NDArray[np.float64]:
        if not self._n_opt_params:
            return np.zeros(0)
        return np.concatenate([m.get_free_parameter_vector() for m in self._limbs.values()])

    def set_optimization_parameters(self, values: ArrayLike) -> None:
        arr = np.asarray(values, dtype=float).ravel()
        if arr.size != self._n_opt_params:
            raise ParameterVectorLengthMismatch(self._n_opt_params, arr.size, owner=self.name)
        for limb, motion in self._limbs.items():
            motion.set_free_parameter_vector(arr[self.parameter_slice(limb)])
        log.debug("Updated %d optimization parameters", arr.size)

    def get_jacobian_wrt_opt_params(
        self, t_global: float, limb: int, coord: int,
    ) -> NDArray[np.float64]:
        motion = self.limb_motion(limb)
        row = np.zeros(self._n_opt_params)
        row[self.parameter_slice(limb)] = motion.jacobian_row_at(t_global, Coords(coord))
        return row

    # State queries

    def get_endeffectors(self, t_global: float) -> dict[int, StateLin2d]:
        """State of every limb at ``t_global``."""
        return {limb: motion.state_at(t_global) for limb, motion in self._limbs.items()}

    def get_endeffectors_vec(self, t_global: float) -> list[StateLin2d]:
        """State of every limb at ``t_global``, in limb order."""
        return list(self.get_endeffectors(t_global).values())

    def active_phase_at(self, t_global: float, limb: int) -> ActivePhase:
        return self.limb_motion(limb).active_phase_at(t_global)

    def swinging_limbs_at(self, t_global: float) -> list[int]:
        """Limbs airborne at ``t_global``."""
        return [
            limb
            for limb, motion in self._limbs.items()
            if motion.active_phase_at(t_global).swing_limb == limb
        ]

    def __repr__(self) -> str:
        return (
            f"EndeffectorsMotion(limbs={list(self._limbs)}, "
            f"n_parameters={self._n_opt_params}, total_time={self._total_time})"
        )
