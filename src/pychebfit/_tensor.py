"""Tensor-product grid and basis assembly.

Every routine here orders multi-indices the same way: C order, dimension 0
varying slowest. That is the order of ``np.ndindex``, of
``np.meshgrid(..., indexing="ij")`` raveled, and of ``np.kron(A0, A1, ...)``
with dimension 0 as the left-most factor. Sample rows, design-matrix columns,
design-matrix rows and coefficient entries all share it, so a coefficient
vector produced by :func:`design_matrix` is consumed correctly by
:func:`basis_vector` and :func:`batch_basis`.
"""

from __future__ import annotations

from functools import reduce
from typing import Callable, List, Sequence

import numpy as np

from pychebfit._basis import chebyshev_polynomials


def tensor_grid(nodes_per_dim: Sequence[np.ndarray]) -> np.ndarray:
    """Cartesian product of per-dimension node arrays.

    Parameters
    ----------
    nodes_per_dim : sequence of 1-D arrays
        Nodes for each dimension, length ``N_i``.

    Returns
    -------
    ndarray of shape (prod(N_i), d)
        Row ``j`` is the ``j``-th grid point in C order.
    """
    grids = np.meshgrid(*nodes_per_dim, indexing="ij")
    return np.column_stack([g.ravel() for g in grids])


def design_matrix(basis_per_dim: Sequence[np.ndarray]) -> np.ndarray:
    """Compose per-dimension basis matrices into the multivariate design matrix.

    Parameters
    ----------
    basis_per_dim : sequence of 2-D arrays
        ``basis_per_dim[i]`` has shape ``(degree + 1, N_i)``: rows are
        polynomial order, columns are the nodes of dimension ``i`` (as
        returned by :func:`chebyshev_polynomials` on a vector).

    Returns
    -------
    ndarray of shape ((degree + 1)^d, prod(N_i))
        ``np.kron`` of the inputs taken left to right. Column ``j`` belongs
        to row ``j`` of :func:`tensor_grid` built from the same nodes.
    """
    return reduce(np.kron, basis_per_dim)


def sample_values(function: Callable, grid: np.ndarray) -> np.ndarray:
    """Evaluate *function* once per grid row, in grid order.

    *function* is called as ``function(point, None)`` with ``point`` a list
    of floats.
    """
    values = np.empty(grid.shape[0])
    for j in range(grid.shape[0]):
        values[j] = function(grid[j].tolist(), None)
    return values


def basis_vector(u: Sequence[float], degree: int) -> np.ndarray:
    """Tensor-product basis at one canonical point.

    Returns an array of length ``(degree + 1)^d`` ordered like the rows of
    :func:`design_matrix`.
    """
    return reduce(np.kron, [chebyshev_polynomials(float(ui), degree) for ui in u])


def batch_basis(us: np.ndarray, degree: int) -> np.ndarray:
    """Tensor-product basis at many canonical points (row-wise Kronecker product).

    Parameters
    ----------
    us : ndarray of shape (m, d)
        Canonical points.
    degree : int
        Polynomial degree per dimension.

    Returns
    -------
    ndarray of shape (m, (degree + 1)^d)
        Row ``i`` equals ``basis_vector(us[i], degree)``.
    """
    us = np.atleast_2d(np.asarray(us, dtype=float))
    m, ndim = us.shape
    result = np.ones((m, 1))
    for d in range(ndim):
        # (degree + 1, m) -> (m, degree + 1)
        T = chebyshev_polynomials(us[:, d], degree).T
        width = result.shape[1] * T.shape[1]
        result = (result[:, :, np.newaxis] * T[:, np.newaxis, :]).reshape(m, width)
    return result


def _basis_per_dim(nodes_canonical: List[np.ndarray], degree: int) -> List[np.ndarray]:
    """Per-dimension basis matrices at the canonical nodes of each dimension."""
    return [chebyshev_polynomials(nodes, degree) for nodes in nodes_canonical]
