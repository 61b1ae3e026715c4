"""
Polynomial motion segments.

A segment is a quintic polynomial per spatial axis that is active for one
phase of the contact schedule. Coefficient ``k`` multiplies ``t**k`` where
``t`` is the time since the segment started, so the zero-order coefficients
hold the position at the start of the segment.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gaitpro.constants import COEFF_COUNT, DERIV_COUNT, DIM2D, TIME_TOLERANCE
from gaitpro.errors import InvalidDuration, TimeOutOfRange, WrongPhaseKind
from gaitpro.types import Coords, Derivative, PhaseKind, StateLin2d


# _DERIV_FACTORS[d, k] = k! / (k - d)!, zero where k < d
_DERIV_FACTORS = np.array(
    [
        [math.perm(k, d) if k >= d else 0 for k in range(COEFF_COUNT)]
        for d in range(DERIV_COUNT)
    ],
    dtype=float,
)
_POWERS = np.arange(COEFF_COUNT)


def _basis(derivative: int, t: float) -> NDArray[np.float64]:
    """Row vector mapping coefficients to the ``derivative``-th time derivative at ``t``."""
    exponents = np.clip(_POWERS - derivative, 0, None)
    return _DERIV_FACTORS[derivative] * np.power(t, exponents)


class PolynomialSegment:
    """
    Quintic 2D polynomial active for the duration of one contact phase.

    Besides the coefficients, a segment carries its phase metadata and a
    fixed-size boolean mask marking the coefficients exposed to the optimizer.
    The free coefficients are ordered axis first (x block, then y block) and
    by ascending power inside each block.
    """

    def __init__(
        self,
        segment_id: int,
        duration: float,
        kind: PhaseKind = PhaseKind.SWING,
        limb: int | None = None,
        coefficients: ArrayLike | None = None,
        free_mask: ArrayLike | None = None,
        time_tolerance: float = TIME_TOLERANCE,
    ):
        duration = float(duration)
        if not math.isfinite(duration) or duration <= 0.0:
            raise InvalidDuration(f"Segment {segment_id} duration must be positive, got {duration}")

        self._id = int(segment_id)
        self._duration = duration
        self._kind = PhaseKind(kind)
        self._limb = limb
        self._time_tolerance = float(time_tolerance)

        self._coeffs = np.zeros((DIM2D, COEFF_COUNT))
        if coefficients is not None:
            self.set_coefficients(coefficients)

        self._free_mask = np.zeros((DIM2D, COEFF_COUNT), dtype=bool)
        if free_mask is not None:
            mask = np.asarray(free_mask, dtype=bool)
            if mask.shape != (DIM2D, COEFF_COUNT):
                raise ValueError(
                    f"Free mask must have shape {(DIM2D, COEFF_COUNT)}, got {mask.shape}",
                )
            self._free_mask[:] = mask
        self._free_mask.flags.writeable = False

    # Phase metadata

    @property
    def id(self) -> int:
        return self._id

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def kind(self) -> PhaseKind:
        return self._kind

    @property
    def limb(self) -> int | None:
        """Swinging limb for swing segments, next planned swing limb otherwise."""
        return self._limb

    def is_multi_contact(self) -> bool:
        return self._kind.is_multi_contact

    def current_swing_limb(self) -> int | None:
        """Limb swinging during this segment.

        Raises:
            WrongPhaseKind: If the segment is a multi-contact segment; use
                :meth:`next_planned_swing_limb` instead.
        """
        if self.is_multi_contact():
            raise WrongPhaseKind(
                f"Segment {self._id} is {self._kind.value}, no limb is swinging",
            )
        return self._limb

    def next_planned_swing_limb(self) -> int | None:
        """Limb planned to swing once this multi-contact segment ends."""
        if not self.is_multi_contact():
            raise WrongPhaseKind(
                f"Segment {self._id} is a swing segment, use current_swing_limb()",
            )
        return self._limb

    def node_count(self, dt: float) -> int:
        """Number of whole ``dt`` steps fitting into the segment."""
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        return int(math.floor(self._duration / dt))

    # Coefficients

    def set_coefficients(self, values: ArrayLike) -> None:
        """Overwrite the full 2x6 coefficient block (free and fixed)."""
        arr = np.asarray(values, dtype=float)
        if arr.shape != (DIM2D, COEFF_COUNT):
            raise ValueError(
                f"Coefficients must have shape {(DIM2D, COEFF_COUNT)}, got {arr.shape}",
            )
        self._coeffs[:] = arr

    def get_coefficients(self) -> NDArray[np.float64]:
        """Copy of the full 2x6 coefficient block."""
        return self._coeffs.copy()

    @property
    def coefficients(self) -> NDArray[np.float64]:
        """Read-only view of the coefficients for diagnostics and export."""
        view = self._coeffs.view()
        view.flags.writeable = False
        return view

    @property
    def free_mask(self) -> NDArray[np.bool_]:
        return self._free_mask

    @property
    def n_free(self) -> int:
        return int(np.count_nonzero(self._free_mask))

    def get_free_values(self) -> NDArray[np.float64]:
        return self._coeffs[self._free_mask]

    def set_free_values(self, values: ArrayLike) -> None:
        arr = np.asarray(values, dtype=float).ravel()
        if arr.size != self.n_free:
            raise ValueError(
                f"Segment {self._id} has {self.n_free} free coefficients, got {arr.size}",
            )
        self._coeffs[self._free_mask] = arr

    # Evaluation

    def local_time(self, t_local: float) -> float:
        """Validate a local time, absorbing floating-point overrun at the ends."""
        t_local = float(t_local)
        tol = self._time_tolerance
        if not (-tol <= t_local <= self._duration + tol):
            raise TimeOutOfRange(t_local, 0.0, self._duration)
        return min(max(t_local, 0.0), self._duration)

    def evaluate(self, derivative: int, t_local: float) -> NDArray[np.float64]:
        """Position, velocity or acceleration (x, y) at ``t_local``."""
        derivative = Derivative(derivative)
        t = self.local_time(t_local)
        return self._coeffs @ _basis(derivative, t)

    def state(self, t_local: float) -> StateLin2d:
        t = self.local_time(t_local)
        return StateLin2d(
            pos=self._coeffs @ _basis(Derivative.POS, t),
            vel=self._coeffs @ _basis(Derivative.VEL, t),
            acc=self._coeffs @ _basis(Derivative.ACC, t),
        )

    def partial_derivative_wrt_coefficient(
        self, axis: int, coefficient: int, t_local: float, coord: int | None = None,
    ) -> float:
        """Exact derivative of the position along ``coord`` w.r.t. one coefficient.

        Args:
            axis: Axis the coefficient belongs to.
            coefficient: Coefficient index (power of t).
            t_local: Local time inside the segment.
            coord: Position coordinate being differentiated; defaults to ``axis``.

        Returns:
            ``t_local ** coefficient`` when ``coord == axis``, otherwise 0.
        """
        axis = Coords(axis)
        coord = axis if coord is None else Coords(coord)
        if not 0 <= coefficient < COEFF_COUNT:
            raise IndexError(f"Coefficient index {coefficient} out of range")
        t = self.local_time(t_local)
        if coord != axis:
            return 0.0
        return float(t**coefficient)

    def free_partials(self, coord: int, t_local: float) -> NDArray[np.float64]:
        """Derivatives of the ``coord`` position w.r.t. every free coefficient."""
        coord = Coords(coord)
        t = self.local_time(t_local)
        partials = np.zeros((DIM2D, COEFF_COUNT))
        partials[coord] = np.power(t, _POWERS)
        return partials[self._free_mask]

    def to_dict(self) -> dict[str, Any]:
        """Convert the segment to dictionary format."""
        return {
            "id": self._id,
            "kind": self._kind.value,
            "limb": self._limb,
            "duration": self._duration,
            "coefficients": self._coeffs.tolist(),
            "free_mask": self._free_mask.tolist(),
        }

    def __repr__(self) -> str:
        return (
            f"PolynomialSegment(id={self._id}, kind={self._kind.value}, "
            f"duration={self._duration}, limb={self._limb}, n_free={self.n_free})"
        )
