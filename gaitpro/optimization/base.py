"""
Base parametrization interface.

This module defines the contract between a motion parametrization and the
external gradient-based solver: the solver reads and writes a flat parameter
vector and requests Jacobian rows of the quantities it constrains.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gaitpro.logging import get_logger

log = get_logger(__name__)


class Parametrization(ABC):
    """
    Base class for quantities described by optimization parameters.

    Implementations transform the scalar parameters of the solver into
    physical quantities and provide exact derivatives of those quantities.
    """

    def __init__(self, name: str = "Parametrization"):
        self.name = name

    @property
    @abstractmethod
    def n_parameters(self) -> int:
        """Length of the optimization-parameter vector."""

    @abstractmethod
    def get_optimization_parameters(self) -> NDArray[np.float64]:
        """
        Current optimization parameters.

        Returns:
            Flat parameter vector handed to the solver
        """

    @abstractmethod
    def set_optimization_parameters(self, values: ArrayLike) -> None:
        """
        Overwrite the optimization parameters.

        Args:
            values: Flat parameter vector produced by the solver
        """

    @abstractmethod
    def get_jacobian_wrt_opt_params(
        self, t_global: float, limb: int, coord: int,
    ) -> NDArray[np.float64]:
        """
        Derivative of one position coordinate w.r.t. every parameter.

        Args:
            t_global: Global query time
            limb: Limb id
            coord: Position coordinate

        Returns:
            Row of length ``n_parameters``
        """

    @abstractmethod
    def get_total_time(self) -> float:
        """Length of the shared time horizon."""

    @property
    @abstractmethod
    def limb_ids(self) -> tuple[int, ...]:
        """Limbs described by the parametrization, in parameter order."""
