"""
Trajectory sampling.

Samples the state of every limb on a fixed time step over the motion
horizon, producing snapshots for the publishing or logging layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from gaitpro.constants import DEFAULT_TRAJECTORY_DT, TIME_TOLERANCE
from gaitpro.logging import get_logger
from gaitpro.types import StateLin2d

if TYPE_CHECKING:
    from gaitpro.motion import EndeffectorsMotion

log = get_logger(__name__)


@dataclass
class EndeffectorsSnapshot:
    """State of every limb at one time instance."""

    time: float
    states: dict[int, StateLin2d] = field(default_factory=dict)


def sample_times(total_time: float, dt: float = DEFAULT_TRAJECTORY_DT) -> NDArray[np.float64]:
    """
    Sample instants ``0, dt, 2 dt, ...`` ending exactly at ``total_time``.

    Args:
        total_time: Horizon length
        dt: Time step

    Returns:
        Strictly increasing sample times
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if total_time < 0:
        raise ValueError(f"total_time must be non-negative, got {total_time}")

    n_steps = int(np.floor(total_time / dt + TIME_TOLERANCE))
    times = dt * np.arange(n_steps + 1)
    times = times[times < total_time - TIME_TOLERANCE]
    return np.append(times, total_time)


def sample_trajectory(
    motion: EndeffectorsMotion, dt: float = DEFAULT_TRAJECTORY_DT,
) -> list[EndeffectorsSnapshot]:
    """State snapshots of every limb over the whole horizon."""
    times = sample_times(motion.get_total_time(), dt)
    log.debug("Sampling %d snapshots at dt=%.4f", len(times), dt)
    return [EndeffectorsSnapshot(float(t), motion.get_endeffectors(float(t))) for t in times]


def trajectory_arrays(
    snapshots: Sequence[EndeffectorsSnapshot],
) -> dict[int, dict[str, NDArray[np.float64]]]:
    """
    Convert snapshots to per-limb arrays.

    Returns:
        ``{limb: {"time", "position", "velocity", "acceleration"}}`` where the
        state arrays have shape ``(n_samples, 2)``
    """
    if not snapshots:
        return {}
    time = np.array([s.time for s in snapshots])
    result: dict[int, dict[str, NDArray[np.float64]]] = {}
    for limb in snapshots[0].states:
        result[limb] = {
            "time": time,
            "position": np.array([s.states[limb].pos for s in snapshots]),
            "velocity": np.array([s.states[limb].vel for s in snapshots]),
            "acceleration": np.array([s.states[limb].acc for s in snapshots]),
        }
    return result
