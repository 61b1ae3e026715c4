"""
Contact schedules.

A contact schedule lists, for every limb, the ordered phases of the motion
(multi-contact phases and swing phases) with their durations. It decides how
many polynomial segments each limb needs and which of their coefficients are
optimized.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from gaitpro.config import ScheduleSettings
from gaitpro.constants import COEFF_COUNT, DIM2D, HORIZON_TOLERANCE
from gaitpro.errors import (
    EmptySchedule,
    InvalidDuration,
    ScheduleHorizonMismatch,
    UnknownLimb,
)
from gaitpro.logging import get_logger
from gaitpro.types import PhaseKind

log = get_logger(__name__)


@dataclass(frozen=True)
class Phase:
    """
    One phase of a limb's contact schedule.

    Attributes:
        kind: Phase kind.
        duration: Phase duration in seconds, strictly positive.
        limb: Swinging limb for swing phases, next planned swing limb (or
            ``None``) for multi-contact phases.
        foothold: Optional contact position pinned from this phase onwards.
        free_coefficients: Optional explicit ``(axis, index)`` pairs exposed to
            the optimizer for the swinging limb, overriding the default free set.
    """

    kind: PhaseKind
    duration: float
    limb: int | None = None
    foothold: tuple[float, float] | None = None
    free_coefficients: tuple[tuple[int, int], ...] | None = None

    def __post_init__(self):
        """Validate the phase."""
        object.__setattr__(self, "kind", PhaseKind(self.kind))
        duration = float(self.duration)
        if not math.isfinite(duration) or duration <= 0.0:
            raise InvalidDuration(f"Phase duration must be positive, got {self.duration}")
        object.__setattr__(self, "duration", duration)

        if self.foothold is not None:
            foothold = tuple(float(v) for v in self.foothold)
            if len(foothold) != DIM2D:
                raise ValueError(f"Foothold must be 2D, got {self.foothold}")
            object.__setattr__(self, "foothold", foothold)

        if self.free_coefficients is not None:
            pairs = tuple((int(a), int(k)) for a, k in self.free_coefficients)
            for axis, index in pairs:
                if not (0 <= axis < DIM2D and 0 <= index < COEFF_COUNT):
                    raise ValueError(f"Free coefficient ({axis}, {index}) out of range")
            if len(set(pairs)) != len(pairs):
                raise ValueError(f"Duplicate free coefficients: {pairs}")
            object.__setattr__(self, "free_coefficients", pairs)

    def is_airborne(self, limb: int) -> bool:
        """True if ``limb`` is the limb swinging during this phase."""
        return self.kind is PhaseKind.SWING and self.limb == limb


class ContactSchedule:
    """
    Ordered per-limb phase lists sharing one global timeline.

    Limbs are enumerated in ascending id order; this order fixes the layout
    of the optimization-parameter vector.
    """

    def __init__(self, phases: Mapping[int, Sequence[Phase]]):
        if not phases:
            raise EmptySchedule("Contact schedule has no limbs")
        self._phases: dict[int, tuple[Phase, ...]] = {}
        for limb in sorted(phases):
            limb_phases = tuple(phases[limb])
            if not limb_phases:
                raise EmptySchedule(f"Limb {limb} has no phases")
            self._phases[limb] = limb_phases
        self.validate()

    @classmethod
    def from_phase_list(
        cls, limb_ids: Iterable[int], phases: Sequence[Phase],
    ) -> ContactSchedule:
        """Share one phase sequence between all limbs."""
        return cls({limb: tuple(phases) for limb in limb_ids})

    @classmethod
    def from_step_sequence(
        cls,
        limb_ids: Iterable[int],
        steps: Sequence[int],
        settings: ScheduleSettings | None = None,
    ) -> ContactSchedule:
        """
        Build a schedule from the order in which limbs step.

        The sequence starts with a multi-contact phase announcing the first
        step, continues with one swing phase per step (separated by
        intermediate multi-contact phases if enabled) and ends with a final
        multi-contact phase.

        Args:
            limb_ids: Limbs of the machine.
            steps: Swinging limb of each step, in execution order.
            settings: Phase durations.

        Returns:
            ContactSchedule with the same phase timeline for every limb.
        """
        settings = settings or ScheduleSettings()
        limb_ids = sorted(limb_ids)
        for step in steps:
            if step not in limb_ids:
                raise UnknownLimb(step)

        first_step = steps[0] if steps else None
        sequence = [
            Phase(PhaseKind.INITIAL_MULTI_CONTACT, settings.t_initial_stance, first_step),
        ]
        for i, step in enumerate(steps):
            sequence.append(Phase(PhaseKind.SWING, settings.t_swing, step))
            is_last = i == len(steps) - 1
            if settings.insert_intermediate_stance and not is_last:
                sequence.append(
                    Phase(
                        PhaseKind.INTERMEDIATE_MULTI_CONTACT,
                        settings.t_intermediate_stance,
                        steps[i + 1],
                    ),
                )
        sequence.append(Phase(PhaseKind.FINAL_MULTI_CONTACT, settings.t_final_stance, None))

        log.info(
            "Built contact schedule: %d limbs, %d steps, %d phases",
            len(limb_ids),
            len(steps),
            len(sequence),
        )
        return cls.from_phase_list(limb_ids, sequence)

    @property
    def limb_ids(self) -> tuple[int, ...]:
        return tuple(self._phases)

    def phases(self, limb: int) -> tuple[Phase, ...]:
        try:
            return self._phases[limb]
        except KeyError:
            raise UnknownLimb(limb) from None

    def n_phases(self, limb: int) -> int:
        return len(self.phases(limb))

    def total_time(self, limb: int) -> float:
        return math.fsum(p.duration for p in self.phases(limb))

    def horizon(self) -> float:
        """Total time shared by all limbs, the shortest per-limb total."""
        return min(self.total_time(limb) for limb in self.limb_ids)

    def validate(self) -> None:
        """
        Check that every limb spans the same total horizon.

        Raises:
            ScheduleHorizonMismatch: If the per-limb totals differ.
        """
        totals = {limb: self.total_time(limb) for limb in self._phases}
        reference = next(iter(totals.values()))
        for limb, total in totals.items():
            if abs(total - reference) > HORIZON_TOLERANCE:
                log.error("Schedule horizon mismatch: %s", totals)
                raise ScheduleHorizonMismatch(
                    f"Limb {limb} spans {total}s but limb {self.limb_ids[0]} spans {reference}s",
                )

    def __repr__(self) -> str:
        counts = {limb: len(p) for limb, p in self._phases.items()}
        return f"ContactSchedule(phases={counts}, horizon={self.horizon()})"
