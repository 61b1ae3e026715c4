from __future__ import annotations

import pytest

from gaitpro.config import ParameterValidator, ParametrizationSettings, ScheduleSettings


def test_default_parametrization_settings() -> None:
    settings = ParametrizationSettings()
    assert settings.swing_free_coefficients == (0, 1, 2, 3)
    assert settings.free_axes == (0, 1)
    assert settings.n_swing_parameters == 8


@pytest.mark.parametrize(
    "kwargs",
    [
        {"swing_free_coefficients": (0, 6)},
        {"swing_free_coefficients": (1, 1)},
        {"swing_free_coefficients": (-1,)},
        {"free_axes": (2,)},
        {"time_tolerance": 0.0},
    ],
)
def test_invalid_parametrization_settings(kwargs) -> None:
    with pytest.raises(ValueError):
        ParametrizationSettings(**kwargs)


def test_empty_free_set_is_allowed() -> None:
    assert ParametrizationSettings(swing_free_coefficients=()).n_swing_parameters == 0


@pytest.mark.parametrize(
    "name", ["t_initial_stance", "t_swing", "t_intermediate_stance", "t_final_stance"],
)
def test_schedule_durations_must_be_positive(name: str) -> None:
    with pytest.raises(ValueError):
        ScheduleSettings(**{name: 0.0})


def test_validator_helpers() -> None:
    assert ParameterValidator.validate_positive_float(0.1, "x")
    assert not ParameterValidator.validate_positive_float("abc", "x")
    assert not ParameterValidator.validate_positive_float(float("inf"), "x")
    assert ParameterValidator.validate_index_range([0, 5], "idx", 0, 5)
    assert not ParameterValidator.validate_index_range([True], "idx", 0, 5)
    assert not ParameterValidator.validate_index_range([1.0], "idx", 0, 5)
