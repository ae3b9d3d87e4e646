"""Multi-dimensional Chebyshev approximation by least-squares fitting.

The function is sampled on the full tensor grid of Chebyshev–Gauss nodes,
the tensor-product Chebyshev basis is assembled with Kronecker products and
the expansion coefficients are obtained from a column-pivoted QR
least-squares solve. With the default ``n_samples = degree + 1`` the system
is square and the fit is the unique interpolant on the grid.

References
----------
- Mason & Handscomb (2003), "Chebyshev Polynomials", Chapman & Hall/CRC,
  Chapters 6 and 8.
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapter 4.
"""

from __future__ import annotations

import os
import pickle
import time
import warnings
from typing import Callable, List, Tuple

import numpy as np

from pychebfit._basis import chebyshev_nodes, chebyshev_polynomials
from pychebfit._domain import (
    _canonical_point,
    _normalize_domain,
    _normalize_fit_config,
    to_canonical,
    to_physical,
)
from pychebfit._exceptions import ConfigurationError, NotFittedError
from pychebfit._lstsq import lstsq_qr
from pychebfit._tensor import (
    _basis_per_dim,
    basis_vector,
    batch_basis,
    design_matrix,
    sample_values,
    tensor_grid,
)


class ChebyshevFit:
    """Tensor-product Chebyshev approximation fitted by least squares.

    Parameters
    ----------
    function : callable
        Function to approximate. Signature: ``f(point, data) -> float``
        where ``point`` is a list of floats and ``data`` is always None.
    num_dimensions : int
        Number of input dimensions.
    domain : list of (float, float), optional
        Bounds [(lo, hi), ...] for each dimension. Defaults to [-1, 1] in
        every dimension.

    Raises
    ------
    ConfigurationError
        If *num_dimensions* is not a positive integer or *domain* is
        malformed (wrong length, ``lo >= hi``, non-finite bounds).

    Examples
    --------
    >>> def f(x, _):
    ...     return x[0] * x[1] * x[2]
    >>> cheb = ChebyshevFit(f, 3)
    >>> cheb.fit(5, n_samples=10, verbose=False)
    >>> round(cheb.approximate(0.5, 0.5, 0.5), 10)
    0.125
    """

    def __init__(
        self,
        function: Callable,
        num_dimensions: int,
        domain: List[Tuple[float, float]] | None = None,
    ):
        self.function = function
        self.num_dimensions = num_dimensions
        self.domain = _normalize_domain(domain, num_dimensions)

        self.degree: int | None = None
        self.n_samples: int | None = None
        self.nodes_per_dim: List[np.ndarray] | None = None
        self.coefficients: np.ndarray | None = None
        self.rank: int | None = None
        self.fit_time: float = 0.0
        self.n_evaluations: int = 0

    @property
    def is_fitted(self) -> bool:
        """True once :meth:`fit` (or :meth:`from_values`) has produced coefficients."""
        return self.coefficients is not None

    def fit(self, degree: int, n_samples: int | None = None, verbose: bool = True) -> None:
        """Sample the function on the Chebyshev grid and solve for coefficients.

        Parameters
        ----------
        degree : int
            Polynomial degree in every dimension, ``degree >= 0``.
        n_samples : int, optional
            Chebyshev nodes per dimension. Defaults to ``degree + 1``.
            Smaller values are raised to ``degree + 1``.
        verbose : bool, optional
            If True, print fit progress. Default is True.

        Raises
        ------
        ConfigurationError
            If *degree* is negative or not an integer.
        RuntimeError
            If no function is attached (object created via
            :meth:`from_values` or :meth:`load`).

        Warns
        -----
        InsufficientSamplesWarning
            If ``n_samples < degree + 1``.
        """
        if self.function is None:
            raise RuntimeError(
                "Cannot fit: no function assigned. "
                "This object was created via from_values() or load()."
            )
        degree, n_samples = _normalize_fit_config(degree, n_samples)

        total = n_samples ** self.num_dimensions
        if verbose:
            print(f"Fitting {self.num_dimensions}D Chebyshev approximation "
                  f"(degree {degree}, {total:,} evaluations)...")

        start = time.time()

        # Step 1: nodes, canonical and physical
        canonical = [chebyshev_nodes(n_samples)] * self.num_dimensions
        physical = [
            to_physical(canonical[d], *self.domain[d])
            for d in range(self.num_dimensions)
        ]

        # Step 2: sample the function on the full grid
        values = sample_values(self.function, tensor_grid(physical))

        # Step 3: design matrix and least-squares solve
        A = design_matrix(_basis_per_dim(canonical, degree))
        coefficients, rank = lstsq_qr(A, values)

        # Publish only after the solve succeeded
        self.degree = degree
        self.n_samples = n_samples
        self.nodes_per_dim = physical
        self.coefficients = coefficients
        self.rank = rank
        self.n_evaluations = total
        self.fit_time = time.time() - start

        if verbose:
            print(f"  Fitted in {self.fit_time:.3f}s "
                  f"({coefficients.size} coefficients, rank {rank})")

    def _check_fitted(self) -> None:
        if self.coefficients is None:
            raise NotFittedError("Chebyshev approximation is not fitted. Call fit() first.")

    def approximate(self, *x) -> float:
        """Evaluate the fitted approximation at one point.

        Accepts either the coordinates as separate arguments,
        ``approximate(x1, ..., xd)``, or a single sequence,
        ``approximate([x1, ..., xd])``.

        Returns
        -------
        float
            Approximate function value.

        Raises
        ------
        NotFittedError
            If :meth:`fit` has not been called.
        ValueError
            If the number of coordinates is not ``num_dimensions``.
        """
        if len(x) == 1 and np.ndim(x[0]) == 1:
            x = x[0]
        return self.approximate_point(x)

    def approximate_point(self, point) -> float:
        """Evaluate the fitted approximation at *point* (a length-d sequence).

        Raises
        ------
        NotFittedError
            If :meth:`fit` has not been called.
        ValueError
            If ``len(point) != num_dimensions``.
        """
        self._check_fitted()
        if len(point) != self.num_dimensions:
            raise ValueError(
                f"Expected {self.num_dimensions} coordinates, got {len(point)}"
            )
        u = _canonical_point(point, self.domain)
        return float(basis_vector(u, self.degree) @ self.coefficients)

    def approximate_batch(self, points: np.ndarray) -> np.ndarray:
        """Evaluate at multiple points.

        Parameters
        ----------
        points : ndarray
            Points of shape (M, num_dimensions). For a 1-D fit a flat
            array of shape (M,) is also accepted.

        Returns
        -------
        ndarray
            Results of shape (M,). Empty for M = 0.
        """
        self._check_fitted()
        points = np.asarray(points, dtype=float)
        if points.ndim == 1 and self.num_dimensions == 1:
            points = points.reshape(-1, 1)
        points = np.atleast_2d(points)
        if points.shape[1] != self.num_dimensions:
            raise ValueError(
                f"points must have shape (M, {self.num_dimensions}), got {points.shape}"
            )
        us = np.column_stack([
            to_canonical(points[:, d], *self.domain[d])
            for d in range(self.num_dimensions)
        ])
        return batch_basis(us, self.degree) @ self.coefficients

    def chebyshev_polynomials(self, x, degree: int | None = None) -> np.ndarray:
        """Raw basis values T_0(x), ..., T_degree(x) at canonical *x*.

        *degree* defaults to the fitted degree. Intended for diagnostics and
        tests; no domain mapping is applied.
        """
        if degree is None:
            self._check_fitted()
            degree = self.degree
        return chebyshev_polynomials(x, degree)

    @property
    def coefficient_tensor(self) -> np.ndarray:
        """Coefficients reshaped to ``(degree + 1,) * num_dimensions``.

        Entry ``[k0, k1, ...]`` multiplies ``T_k0(u0) * T_k1(u1) * ...``.
        """
        self._check_fitted()
        return self.coefficients.reshape((self.degree + 1,) * self.num_dimensions)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict:
        """Return picklable state, excluding the original function."""
        from pychebfit._version import __version__

        state = self.__dict__.copy()
        state["function"] = None
        state["_pychebfit_version"] = __version__
        return state

    def __setstate__(self, state: dict) -> None:
        from pychebfit._version import __version__

        saved_version = state.pop("_pychebfit_version", None)
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This object was saved with pychebfit {saved_version}, "
                f"but you are loading it with {__version__}. "
                f"Evaluation results may differ if internal data layout changed.",
                UserWarning,
                stacklevel=2,
            )
        self.__dict__.update(state)
        self.function = None

    def save(self, path: str | os.PathLike) -> None:
        """Save the fitted approximation to a file.

        The original function is **not** saved, only the coefficients and
        the grid description needed for evaluation.

        Parameters
        ----------
        path : str or path-like
            Destination file path.

        Raises
        ------
        NotFittedError
            If the approximation has not been fitted yet.
        """
        if self.coefficients is None:
            raise NotFittedError(
                "Cannot save an unfitted approximation. Call fit() first."
            )
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "ChebyshevFit":
        """Load a previously saved approximation from a file.

        The loaded object evaluates immediately. Its ``function`` attribute
        is ``None``; assign one before calling :meth:`fit` again.

        .. warning::

            This method uses :mod:`pickle` internally. Pickle can execute
            arbitrary code during deserialization. **Only load files you
            trust.**

        Raises
        ------
        TypeError
            If the file does not contain a :class:`ChebyshevFit`.
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"Expected a {cls.__name__} instance, got {type(obj).__name__}"
            )
        return obj

    # ------------------------------------------------------------------
    # Pre-computed values: nodes first, values later
    # ------------------------------------------------------------------

    @staticmethod
    def nodes(
        num_dimensions: int,
        n_samples: int,
        domain: List[Tuple[float, float]] | None = None,
    ) -> dict:
        """Generate the sample grid without evaluating any function.

        Use this to obtain the grid points, evaluate your function
        externally, then pass the results to :meth:`from_values`.

        Returns
        -------
        dict
            ``'nodes_per_dim'`` : list of 1-D arrays, the physical nodes of
            each dimension in Chebyshev–Gauss order (descending).

            ``'full_grid'`` : 2-D array, shape ``(n_samples**num_dimensions,
            num_dimensions)``. Row order is the sample order used by
            :meth:`fit` (C order, dimension 0 slowest).

            ``'shape'`` : tuple of int, ``(n_samples,) * num_dimensions``.

        Examples
        --------
        >>> info = ChebyshevFit.nodes(2, 3)
        >>> info['full_grid'].shape
        (9, 2)
        """
        domain = _normalize_domain(domain, num_dimensions)
        canonical = chebyshev_nodes(n_samples)
        nodes_per_dim = [to_physical(canonical, lo, hi) for lo, hi in domain]
        return {
            "nodes_per_dim": nodes_per_dim,
            "full_grid": tensor_grid(nodes_per_dim),
            "shape": (n_samples,) * num_dimensions,
        }

    @classmethod
    def from_values(
        cls,
        values: np.ndarray,
        num_dimensions: int,
        degree: int,
        domain: List[Tuple[float, float]] | None = None,
    ) -> "ChebyshevFit":
        """Fit from function values computed on the grid of :meth:`nodes`.

        Parameters
        ----------
        values : numpy.ndarray
            Samples, either flat of length ``n_samples**num_dimensions`` in
            ``full_grid`` row order or shaped ``(n_samples,) * num_dimensions``.
        num_dimensions : int
            Number of dimensions.
        degree : int
            Polynomial degree per dimension.
        domain : list of (float, float), optional
            Bounds used when the grid was generated.

        Returns
        -------
        ChebyshevFit
            A fitted approximation with ``function=None``.

        Raises
        ------
        ConfigurationError
            If the grid has fewer than ``degree + 1`` nodes per dimension
            or the domain/degree are invalid.
        ValueError
            If *values* has an inconsistent size or contains NaN or Inf.
        """
        values = np.asarray(values, dtype=float).ravel()
        domain = _normalize_domain(domain, num_dimensions)
        degree, _ = _normalize_fit_config(degree)

        n_samples = int(round(values.size ** (1.0 / num_dimensions)))
        if n_samples < 1 or n_samples ** num_dimensions != values.size:
            raise ValueError(
                f"values.size={values.size} is not n_samples**{num_dimensions} "
                f"for any integer n_samples"
            )
        if n_samples < degree + 1:
            raise ConfigurationError(
                f"{n_samples} samples per dimension cannot determine a degree "
                f"{degree} fit; need at least {degree + 1}"
            )
        if not np.isfinite(values).all():
            raise ValueError("values contains NaN or Inf")

        canonical = [chebyshev_nodes(n_samples)] * num_dimensions
        A = design_matrix(_basis_per_dim(canonical, degree))
        coefficients, rank = lstsq_qr(A, values)

        obj = cls(None, num_dimensions, domain)
        obj.degree = degree
        obj.n_samples = n_samples
        obj.nodes_per_dim = [to_physical(canonical[d], *domain[d]) for d in range(num_dimensions)]
        obj.coefficients = coefficients
        obj.rank = rank
        return obj

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ChebyshevFit("
            f"dims={self.num_dimensions}, "
            f"degree={self.degree}, "
            f"fitted={self.is_fitted})"
        )

    def __str__(self) -> str:
        status = "fitted" if self.is_fitted else "not fitted"
        domain_str = " x ".join(f"[{lo}, {hi}]" for lo, hi in self.domain)
        lines = [
            f"ChebyshevFit ({self.num_dimensions}D, {status})",
            f"  Domain:       {domain_str}",
        ]
        if self.is_fitted:
            n_coeffs = (self.degree + 1) ** self.num_dimensions
            lines.append(
                f"  Degree:       {self.degree} ({n_coeffs:,} coefficients, rank {self.rank})"
            )
            lines.append(
                f"  Samples:      {self.n_samples} per dim "
                f"({self.n_samples ** self.num_dimensions:,} total)"
            )
            lines.append(
                f"  Fit:          {self.fit_time:.3f}s, "
                f"{self.n_evaluations:,} evaluations"
            )
        return "\n".join(lines)
