from __future__ import annotations

import math

import numpy as np
import pytest

from gaitpro.errors import InvalidDuration, TimeOutOfRange, WrongPhaseKind
from gaitpro.motion import PolynomialSegment
from gaitpro.types import Coords, Derivative, PhaseKind


def _random_segment(duration: float = 0.5, seed: int = 7) -> PolynomialSegment:
    rng = np.random.default_rng(seed)
    return PolynomialSegment(
        0, duration, PhaseKind.SWING, limb=0, coefficients=rng.uniform(-1.0, 1.0, (2, 6)),
    )


def test_evaluate_position_is_polynomial() -> None:
    """Coefficient k multiplies t**k on each axis."""
    coeffs = np.zeros((2, 6))
    coeffs[0] = [1.0, 2.0, 0.0, 3.0, 0.0, 0.0]
    coeffs[1] = [0.0, 0.0, 0.0, 0.0, 0.0, 1.0]
    seg = PolynomialSegment(0, 1.0, coefficients=coeffs)
    pos = seg.evaluate(Derivative.POS, 0.5)
    assert pos[0] == pytest.approx(1.0 + 2.0 * 0.5 + 3.0 * 0.125)
    assert pos[1] == pytest.approx(0.5**5)


@pytest.mark.parametrize("t", [0.05, 0.17, 0.25, 0.41, 0.45])
def test_velocity_and_acceleration_match_numerical_derivatives(t: float) -> None:
    seg = _random_segment()
    h = 1e-5
    vel_fd = (seg.evaluate(0, t + h) - seg.evaluate(0, t - h)) / (2 * h)
    acc_fd = (seg.evaluate(1, t + h) - seg.evaluate(1, t - h)) / (2 * h)
    np.testing.assert_allclose(seg.evaluate(1, t), vel_fd, atol=1e-6)
    np.testing.assert_allclose(seg.evaluate(2, t), acc_fd, atol=1e-6)


def test_state_matches_evaluate() -> None:
    seg = _random_segment()
    state = seg.state(0.3)
    np.testing.assert_allclose(state.pos, seg.evaluate(Derivative.POS, 0.3))
    np.testing.assert_allclose(state.vel, seg.evaluate(Derivative.VEL, 0.3))
    np.testing.assert_allclose(state.acc, seg.evaluate(Derivative.ACC, 0.3))


def test_start_values_come_from_low_order_coefficients() -> None:
    seg = _random_segment()
    coeffs = seg.get_coefficients()
    np.testing.assert_allclose(seg.evaluate(0, 0.0), coeffs[:, 0])
    np.testing.assert_allclose(seg.evaluate(1, 0.0), coeffs[:, 1])
    np.testing.assert_allclose(seg.evaluate(2, 0.0), 2.0 * coeffs[:, 2])


@pytest.mark.parametrize("k", range(6))
def test_partial_derivative_is_power_of_time(k: int) -> None:
    seg = _random_segment()
    assert seg.partial_derivative_wrt_coefficient(Coords.X, k, 0.3) == pytest.approx(0.3**k)
    assert seg.partial_derivative_wrt_coefficient(Coords.Y, k, 0.3) == pytest.approx(0.3**k)
    assert seg.partial_derivative_wrt_coefficient(Coords.X, k, 0.3, coord=Coords.Y) == 0.0


def test_partial_derivative_rejects_bad_index() -> None:
    seg = _random_segment()
    with pytest.raises(IndexError):
        seg.partial_derivative_wrt_coefficient(Coords.X, 6, 0.1)


def test_get_coefficients_returns_copy() -> None:
    seg = _random_segment()
    coeffs = seg.get_coefficients()
    coeffs[:] = 0.0
    assert np.any(seg.get_coefficients() != 0.0)


def test_set_coefficients_rejects_wrong_shape() -> None:
    seg = _random_segment()
    with pytest.raises(ValueError):
        seg.set_coefficients(np.zeros((2, 5)))


def test_coefficients_accessor_is_read_only() -> None:
    seg = _random_segment()
    view = seg.coefficients
    with pytest.raises(ValueError):
        view[0, 0] = 42.0
    # Writes through the setter stay visible through the view
    seg.set_coefficients(np.ones((2, 6)))
    assert seg.coefficients[1, 5] == 1.0


@pytest.mark.parametrize("duration", [0.0, -0.1, math.nan, math.inf])
def test_non_positive_duration_rejected(duration: float) -> None:
    with pytest.raises(InvalidDuration):
        PolynomialSegment(0, duration)


def test_local_time_outside_segment_fails() -> None:
    seg = _random_segment(duration=0.5)
    with pytest.raises(TimeOutOfRange):
        seg.evaluate(0, 0.5 + 1e-6)
    with pytest.raises(TimeOutOfRange):
        seg.evaluate(0, -1e-6)


def test_local_time_overrun_within_tolerance_is_clamped() -> None:
    seg = _random_segment(duration=0.5)
    np.testing.assert_allclose(seg.evaluate(0, 0.5 + 1e-12), seg.evaluate(0, 0.5))
    assert seg.local_time(-1e-12) == 0.0


def test_free_values_follow_axis_then_power_order() -> None:
    mask = np.zeros((2, 6), dtype=bool)
    mask[0, [1, 2]] = True
    mask[1, 0] = True
    coeffs = np.arange(12, dtype=float).reshape(2, 6)
    seg = PolynomialSegment(3, 0.4, free_mask=mask, coefficients=coeffs)

    assert seg.n_free == 3
    np.testing.assert_array_equal(seg.get_free_values(), [1.0, 2.0, 6.0])

    seg.set_free_values([-1.0, -2.0, -6.0])
    expected = coeffs.copy()
    expected[0, 1], expected[0, 2], expected[1, 0] = -1.0, -2.0, -6.0
    np.testing.assert_array_equal(seg.get_coefficients(), expected)


def test_set_free_values_rejects_wrong_size() -> None:
    mask = np.zeros((2, 6), dtype=bool)
    mask[0, :4] = True
    seg = PolynomialSegment(0, 0.4, free_mask=mask)
    with pytest.raises(ValueError):
        seg.set_free_values([1.0, 2.0])


def test_free_mask_is_immutable() -> None:
    seg = PolynomialSegment(0, 0.4, free_mask=np.ones((2, 6), dtype=bool))
    with pytest.raises(ValueError):
        seg.free_mask[0, 0] = False


def test_free_partials_only_on_requested_axis() -> None:
    mask = np.zeros((2, 6), dtype=bool)
    mask[:, :4] = True
    seg = PolynomialSegment(0, 0.5, free_mask=mask)
    np.testing.assert_allclose(
        seg.free_partials(Coords.X, 0.25),
        [1.0, 0.25, 0.0625, 0.015625, 0.0, 0.0, 0.0, 0.0],
    )
    np.testing.assert_allclose(
        seg.free_partials(Coords.Y, 0.25),
        [0.0, 0.0, 0.0, 0.0, 1.0, 0.25, 0.0625, 0.015625],
    )


def test_swing_segment_phase_metadata() -> None:
    seg = PolynomialSegment(2, 0.6, PhaseKind.SWING, limb=3)
    assert not seg.is_multi_contact()
    assert seg.current_swing_limb() == 3
    with pytest.raises(WrongPhaseKind):
        seg.next_planned_swing_limb()


def test_multi_contact_segment_phase_metadata() -> None:
    seg = PolynomialSegment(0, 0.4, PhaseKind.INITIAL_MULTI_CONTACT, limb=1)
    assert seg.is_multi_contact()
    assert seg.next_planned_swing_limb() == 1
    with pytest.raises(WrongPhaseKind):
        seg.current_swing_limb()


def test_node_count() -> None:
    seg = PolynomialSegment(0, 0.45)
    assert seg.node_count(0.1) == 4
    with pytest.raises(ValueError):
        seg.node_count(0.0)


def test_to_dict_contains_metadata() -> None:
    seg = PolynomialSegment(5, 0.3, PhaseKind.INTERMEDIATE_MULTI_CONTACT, limb=2)
    data = seg.to_dict()
    assert data["id"] == 5
    assert data["kind"] == "intermediate_multi_contact"
    assert data["limb"] == 2
    assert data["duration"] == 0.3
    assert len(data["coefficients"]) == 2 and len(data["coefficients"][0]) == 6
