"""
Sparse Jacobian assembly.

Stacks the Jacobian rows of a parametrization into scipy sparse matrices.
Only the queried limb's block carries non-zero entries, so a constraint
evaluated at many time instants yields a banded, very sparse matrix.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from scipy import sparse

from gaitpro.logging import get_logger

from .base import Parametrization

log = get_logger(__name__)


def stacked_jacobian(
    motion: Parametrization, queries: Iterable[tuple[float, int, int]],
) -> sparse.csr_matrix:
    """
    Jacobian of several ``(t_global, limb, coord)`` position queries.

    Args:
        motion: Parametrization answering the queries
        queries: One ``(time, limb, coordinate)`` triple per row

    Returns:
        CSR matrix of shape ``(n_queries, motion.n_parameters)``
    """
    rows: list[int] = []
    cols: list[np.ndarray] = []
    vals: list[np.ndarray] = []
    n_rows = 0
    for t_global, limb, coord in queries:
        row = motion.get_jacobian_wrt_opt_params(t_global, limb, coord)
        nz = np.flatnonzero(row)
        rows.extend([n_rows] * nz.size)
        cols.append(nz)
        vals.append(row[nz])
        n_rows += 1

    data = np.concatenate(vals) if vals else np.zeros(0)
    indices = np.concatenate(cols) if cols else np.zeros(0, dtype=int)
    jac = sparse.coo_matrix(
        (data, (np.asarray(rows, dtype=int), indices)),
        shape=(n_rows, motion.n_parameters),
    ).tocsr()
    log.debug("Assembled Jacobian %s with %d non-zeros", jac.shape, jac.nnz)
    return jac


def jacobian_matrix(
    motion: Parametrization, times: Sequence[float], limb: int, coord: int,
) -> sparse.csr_matrix:
    """Jacobian of one limb coordinate sampled at ``times``, one row per time."""
    return stacked_jacobian(motion, ((float(t), limb, coord) for t in times))
