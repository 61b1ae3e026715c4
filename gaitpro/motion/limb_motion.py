"""
Motion of a single limb.

A limb's motion is an ordered, contiguous sequence of polynomial segments.
Global query times are resolved to a segment and a local time through a
prefix sum of the segment durations; only the free coefficients of the
segments are exchanged with the optimizer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gaitpro.config import ParametrizationSettings
from gaitpro.constants import COEFF_COUNT, DIM2D, TIME_TOLERANCE
from gaitpro.errors import (
    EmptySchedule,
    InvalidParameterCount,
    NoActivePhase,
    TimeOutOfRange,
)
from gaitpro.logging import get_logger
from gaitpro.schedule import Phase
from gaitpro.types import Coords, PhaseKind, StateLin2d

from .polynomial import PolynomialSegment

log = get_logger(__name__)


@dataclass(frozen=True)
class ActivePhase:
    """Phase active at a queried time."""

    kind: PhaseKind
    limb: int | None
    segment_id: int

    @property
    def swing_limb(self) -> int | None:
        """Limb swinging, ``None`` during multi-contact phases."""
        return self.limb if self.kind is PhaseKind.SWING else None

    @property
    def next_swing_limb(self) -> int | None:
        """Limb planned to swing next, ``None`` during swing phases."""
        return self.limb if self.kind.is_multi_contact else None


def free_mask_for_phase(
    phase: Phase, limb: int, settings: ParametrizationSettings,
) -> NDArray[np.bool_]:
    """
    Coefficients of ``limb``'s segment for ``phase`` that the optimizer may change.

    Only the limb swinging during ``phase`` has free coefficients; a limb in
    contact is pinned to its foothold. The phase's ``free_coefficients``
    replace the default free set of the swinging limb and are ignored for
    every other limb sharing the phase.
    """
    mask = np.zeros((DIM2D, COEFF_COUNT), dtype=bool)
    if not phase.is_airborne(limb):
        return mask
    if phase.free_coefficients is not None:
        for axis, index in phase.free_coefficients:
            mask[axis, index] = True
    else:
        for axis in settings.free_axes:
            mask[axis, list(settings.swing_free_coefficients)] = True
    return mask


class LimbMotion:
    """
    Ordered polynomial segments describing one limb over the whole horizon.

    Segment durations are fixed at construction. The free-parameter vector
    concatenates the free coefficients of every segment in segment order.
    """

    def __init__(
        self,
        segments: Sequence[PolynomialSegment],
        limb: int | None = None,
        time_tolerance: float = TIME_TOLERANCE,
    ):
        if not segments:
            raise EmptySchedule(f"Limb {limb} motion needs at least one segment")
        self._segments = tuple(segments)
        self._limb = limb
        self._time_tolerance = float(time_tolerance)

        durations = np.array([s.duration for s in self._segments])
        self._ends = np.cumsum(durations)
        self._starts = np.concatenate(([0.0], self._ends[:-1]))

        n_free = np.array([s.n_free for s in self._segments], dtype=int)
        self._param_offsets = np.concatenate(([0], np.cumsum(n_free)))
        self._n_parameters = int(self._param_offsets[-1])

    @classmethod
    def from_phases(
        cls,
        limb: int,
        phases: Sequence[Phase],
        initial_position: ArrayLike,
        settings: ParametrizationSettings | None = None,
    ) -> LimbMotion:
        """
        Build one segment per phase for ``limb``.

        The zero-order coefficients of every segment start at the current
        foothold: the initial position, replaced by the foothold of any phase
        that pins one. Segments in which the limb does not swing are constant
        polynomials and fully fixed.

        Args:
            limb: Limb id.
            phases: Ordered phases of the limb.
            initial_position: Initial (x, y) position of the limb.
            settings: Free coefficient selection.

        Returns:
            LimbMotion for the limb.
        """
        settings = settings or ParametrizationSettings()
        foothold = np.asarray(initial_position, dtype=float).reshape(DIM2D)

        segments = []
        for segment_id, phase in enumerate(phases):
            if phase.foothold is not None:
                foothold = np.asarray(phase.foothold, dtype=float)
            coefficients = np.zeros((DIM2D, COEFF_COUNT))
            coefficients[:, 0] = foothold
            segments.append(
                PolynomialSegment(
                    segment_id,
                    phase.duration,
                    phase.kind,
                    phase.limb,
                    coefficients=coefficients,
                    free_mask=free_mask_for_phase(phase, limb, settings),
                    time_tolerance=settings.time_tolerance,
                ),
            )
        return cls(segments, limb=limb, time_tolerance=settings.time_tolerance)

    @property
    def limb(self) -> int | None:
        return self._limb

    @property
    def segments(self) -> tuple[PolynomialSegment, ...]:
        return self._segments

    @property
    def n_parameters(self) -> int:
        """Length of the free-parameter vector."""
        return self._n_parameters

    def get_total_time(self) -> float:
        return float(self._ends[-1])

    def segment_parameter_slice(self, index: int) -> slice:
        """Positions of segment ``index``'s free coefficients in the limb vector."""
        return slice(int(self._param_offsets[index]), int(self._param_offsets[index + 1]))

    # Time resolution

    def locate(self, t_global: float) -> tuple[int, float]:
        """
        Resolve a global time to ``(segment index, local time)``.

        A time on a segment boundary belongs to the earlier segment, evaluated
        at its end; ``t_global == total time`` resolves to the last segment.

        Raises:
            TimeOutOfRange: If ``t_global`` lies outside ``[0, total time]``.
        """
        return self._locate(t_global, TimeOutOfRange)

    def _locate(self, t_global: float, error: type[TimeOutOfRange]) -> tuple[int, float]:
        t = float(t_global)
        total = float(self._ends[-1])
        tol = self._time_tolerance
        if not (-tol <= t <= total + tol):
            raise error(t, 0.0, total)
        t = min(max(t, 0.0), total)

        index = int(np.searchsorted(self._ends, t, side="left"))
        index = min(index, len(self._segments) - 1)
        segment = self._segments[index]
        t_local = min(max(t - float(self._starts[index]), 0.0), segment.duration)
        return index, t_local

    def segment_at(self, t_global: float) -> PolynomialSegment:
        index, _ = self.locate(t_global)
        return self._segments[index]

    # Parameter vector

    def get_free_parameter_vector(self) -> NDArray[np.float64]:
        return np.concatenate([s.get_free_values() for s in self._segments])

    def set_free_parameter_vector(self, values: ArrayLike) -> None:
        arr = np.asarray(values, dtype=float).ravel()
        if arr.size != self._n_parameters:
            raise InvalidParameterCount(self._n_parameters, arr.size, owner=f"limb {self._limb}")
        for index, segment in enumerate(self._segments):
            if segment.n_free:
                segment.set_free_values(arr[self.segment_parameter_slice(index)])

    # Queries

    def state_at(self, t_global: float) -> StateLin2d:
        index, t_local = self.locate(t_global)
        return self._segments[index].state(t_local)

    def jacobian_row_at(self, t_global: float, coord: int) -> NDArray[np.float64]:
        """
        Derivative of the ``coord`` position at ``t_global`` w.r.t. the limb vector.

        Only the active segment's free coefficients carry non-zero entries.
        """
        coord = Coords(coord)
        index, t_local = self.locate(t_global)
        row = np.zeros(self._n_parameters)
        row[self.segment_parameter_slice(index)] = self._segments[index].free_partials(
            coord, t_local,
        )
        return row

    def active_phase_at(self, t_global: float) -> ActivePhase:
        """
        Phase active at ``t_global``.

        Raises:
            NoActivePhase: If ``t_global`` lies outside ``[0, total time]``.
        """
        index, _ = self._locate(t_global, NoActivePhase)
        segment = self._segments[index]
        return ActivePhase(kind=segment.kind, limb=segment.limb, segment_id=segment.id)

    def __repr__(self) -> str:
        return (
            f"LimbMotion(limb={self._limb}, segments={len(self._segments)}, "
            f"n_parameters={self._n_parameters}, total_time={self.get_total_time()})"
        )
