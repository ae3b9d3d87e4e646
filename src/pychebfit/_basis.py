"""Chebyshev–Gauss nodes and the three-term recurrence for T_0 ... T_degree.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 2–3.
"""

from __future__ import annotations

import numpy as np
from numpy.polynomial.chebyshev import chebpts1

from pychebfit._exceptions import ConfigurationError


def chebyshev_nodes(n: int) -> np.ndarray:
    """Return the *n* Chebyshev–Gauss nodes on [-1, 1].

    Node ``k`` (1-based) is ``cos(pi * (2k - 1) / (2n))``, so the nodes come
    out in **descending** order, starting just below 1.

    Parameters
    ----------
    n : int
        Number of nodes, ``n >= 1``.

    Returns
    -------
    ndarray of shape (n,)
        Roots of T_n, descending.

    Raises
    ------
    ConfigurationError
        If *n* is not a positive integer.

    Examples
    --------
    >>> chebyshev_nodes(1)
    array([0.])
    """
    if not isinstance(n, (int, np.integer)) or n < 1:
        raise ConfigurationError(f"Number of nodes must be an int >= 1, got {n!r}")
    # chebpts1 returns the same points in ascending order
    return chebpts1(int(n))[::-1].copy()


def chebyshev_polynomials(x, degree: int) -> np.ndarray:
    """Evaluate T_0(x), ..., T_degree(x) by the three-term recurrence.

    ``T_0 = 1``, ``T_1 = x``, ``T_{k+1} = 2 x T_k - T_{k-1}``.

    Parameters
    ----------
    x : float or array_like of shape (m,)
        Canonical input(s), normally in [-1, 1].
    degree : int
        Highest polynomial order, ``degree >= 0``.

    Returns
    -------
    ndarray
        Shape ``(degree + 1,)`` for scalar *x*; shape ``(degree + 1, m)``
        for a vector of inputs (rows are polynomial order, columns are
        points).

    Raises
    ------
    ConfigurationError
        If *degree* is not an integer or is negative.
    """
    if not isinstance(degree, (int, np.integer)) or isinstance(degree, bool):
        raise ConfigurationError(f"degree must be an int, got {type(degree).__name__}")
    if degree < 0:
        raise ConfigurationError(f"degree must be >= 0, got {degree}")

    u = np.asarray(x, dtype=float)
    T = np.empty((degree + 1,) + u.shape)
    T[0] = 1.0
    if degree > 0:
        T[1] = u
    for k in range(1, degree):
        T[k + 1] = 2.0 * u * T[k] - T[k - 1]
    return T
