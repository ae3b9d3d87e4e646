"""Least-squares solve for Chebyshev coefficients via column-pivoted QR.

References
----------
- Golub & Van Loan (2013), "Matrix Computations", 4th ed., Section 5.4.1
  (QR with column pivoting) and Section 5.5 (rank-deficient least squares).
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def lstsq_qr(A: np.ndarray, z: np.ndarray, rcond: float | None = None) -> Tuple[np.ndarray, int]:
    """Solve ``A.T @ c ~= z`` in the least-squares sense.

    The design matrix is stored coefficient-major (rows are basis functions,
    columns are samples), so the system matrix is ``A.T`` of shape
    ``(n_samples, n_coeffs)``. It is factorised as ``A.T[:, P] = Q R`` with
    Householder QR and column pivoting; normal equations are never formed.

    The numerical rank ``r`` is the number of diagonal entries of ``R`` with
    ``|R_ii| > rcond * |R_00|``. The leading ``r x r`` triangle is solved and
    the remaining (pivoted) unknowns are set to zero, which gives the basic
    solution of a rank-deficient system. Nothing is regularised, so an
    ill-conditioned but full-rank system returns whatever the factorisation
    yields.

    Parameters
    ----------
    A : ndarray of shape (n_coeffs, n_samples)
        Design matrix, ``n_samples >= n_coeffs``.
    z : ndarray of shape (n_samples,)
        Sampled function values.
    rcond : float, optional
        Relative rank threshold. Default is ``eps * max(A.shape)``.

    Returns
    -------
    c : ndarray of shape (n_coeffs,)
        Coefficient vector.
    rank : int
        Numerical rank of ``A``.

    Raises
    ------
    ValueError
        If the shapes of *A* and *z* disagree.
    """
    from scipy.linalg import qr, solve_triangular

    A = np.asarray(A, dtype=float)
    z = np.asarray(z, dtype=float)
    if A.ndim != 2 or z.ndim != 1 or A.shape[1] != z.shape[0]:
        raise ValueError(
            f"Shape mismatch: design matrix {A.shape} vs sample vector {z.shape}"
        )

    n_coeffs = A.shape[0]
    if rcond is None:
        rcond = np.finfo(float).eps * max(A.shape)

    Q, R, piv = qr(A.T, mode="economic", pivoting=True)
    diag = np.abs(np.diag(R))
    if diag.size == 0 or diag[0] == 0.0:
        return np.zeros(n_coeffs), 0
    rank = int(np.count_nonzero(diag > rcond * diag[0]))

    qtz = Q[:, :rank].T @ z
    c_piv = np.zeros(n_coeffs)
    c_piv[:rank] = solve_triangular(R[:rank, :rank], qtz, lower=False)

    c = np.empty(n_coeffs)
    c[piv] = c_piv
    return c, rank
