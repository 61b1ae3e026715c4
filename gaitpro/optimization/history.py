"""
In-memory record of solver iterates.

The solver loop appends every candidate parameter vector it accepts. The
recorded iterates can later be replayed through the motion to inspect how
the trajectory evolved over the iterations.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gaitpro.constants import DEFAULT_MAX_HISTORY_ENTRIES, DEFAULT_TRAJECTORY_DT
from gaitpro.errors import ParameterVectorLengthMismatch
from gaitpro.logging import get_logger
from gaitpro.sampling import EndeffectorsSnapshot, sample_trajectory

if TYPE_CHECKING:
    from gaitpro.motion import EndeffectorsMotion

log = get_logger(__name__)


@dataclass
class IterationRecord:
    """One recorded solver iterate."""

    iteration: int
    parameters: NDArray[np.float64]
    objective_value: float | None = None
    timestamp: float = field(default_factory=time.time)


class IterationHistory:
    """
    Bounded in-memory store of parameter vectors.

    When ``max_entries`` is reached the oldest record is dropped; iteration
    numbers keep counting from the first recorded iterate.
    """

    def __init__(self, n_parameters: int, max_entries: int = DEFAULT_MAX_HISTORY_ENTRIES):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.n_parameters = int(n_parameters)
        self.max_entries = max_entries
        self._records: list[IterationRecord] = []
        self._n_recorded = 0

    def record(self, parameters: ArrayLike, objective_value: float | None = None) -> IterationRecord:
        """Store a copy of ``parameters`` as the next iterate."""
        arr = np.array(parameters, dtype=float).ravel()
        if arr.size != self.n_parameters:
            raise ParameterVectorLengthMismatch(self.n_parameters, arr.size, owner="history")
        if len(self._records) >= self.max_entries:
            dropped = self._records.pop(0)
            log.debug("Dropping iterate %d to make space", dropped.iteration)
        entry = IterationRecord(self._n_recorded, arr, objective_value)
        self._records.append(entry)
        self._n_recorded += 1
        return entry

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[IterationRecord]:
        return self._records.copy()

    def latest(self) -> IterationRecord | None:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()
        self._n_recorded = 0

    def trajectories(
        self, motion: EndeffectorsMotion, dt: float = DEFAULT_TRAJECTORY_DT,
    ) -> list[list[EndeffectorsSnapshot]]:
        """
        Sampled trajectory of every recorded iterate.

        The motion's current parameters are restored afterwards.
        """
        if motion.n_parameters != self.n_parameters:
            raise ParameterVectorLengthMismatch(
                self.n_parameters, motion.n_parameters, owner="history",
            )
        current = motion.get_optimization_parameters()
        trajectories = []
        try:
            for entry in self._records:
                motion.set_optimization_parameters(entry.parameters)
                trajectories.append(sample_trajectory(motion, dt))
        finally:
            motion.set_optimization_parameters(current)
        log.info("Replayed %d iterates", len(trajectories))
        return trajectories
