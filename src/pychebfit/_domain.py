"""Affine maps between a physical box and [-1, 1]^d, plus argument validation."""

from __future__ import annotations

import math
import warnings
from typing import List, Sequence, Tuple

import numpy as np

from pychebfit._exceptions import ConfigurationError, InsufficientSamplesWarning


def to_canonical(x, a, b):
    """Map *x* from the physical interval [a, b] to [-1, 1]."""
    return (2.0 * np.asarray(x, dtype=float) - a - b) / (b - a)


def to_physical(u, a, b):
    """Map *u* from [-1, 1] to the physical interval [a, b]."""
    return 0.5 * (b - a) * np.asarray(u, dtype=float) + 0.5 * (a + b)


def _normalize_domain(domain, num_dimensions: int) -> List[List[float]]:
    """Validate *domain* and return it as a list of ``[lo, hi]`` lists.

    ``None`` means ``[-1, 1]`` in every dimension.
    """
    if not isinstance(num_dimensions, (int, np.integer)) or num_dimensions < 1:
        raise ConfigurationError(
            f"num_dimensions must be an int >= 1, got {num_dimensions!r}"
        )
    if domain is None:
        return [[-1.0, 1.0] for _ in range(num_dimensions)]

    domain = [tuple(bounds) for bounds in domain]
    if len(domain) != num_dimensions:
        raise ConfigurationError(
            f"len(domain)={len(domain)} must equal num_dimensions={num_dimensions}"
        )

    normalized = []
    for d, bounds in enumerate(domain):
        if len(bounds) != 2:
            raise ConfigurationError(
                f"domain[{d}] must be a (lo, hi) pair, got {bounds!r}"
            )
        lo, hi = float(bounds[0]), float(bounds[1])
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ConfigurationError(f"domain[{d}] bounds must be finite, got [{lo}, {hi}]")
        if lo >= hi:
            raise ConfigurationError(
                f"domain[{d}]: lo={lo} must be strictly less than hi={hi}"
            )
        normalized.append([lo, hi])
    return normalized


def _normalize_fit_config(degree, n_samples=None) -> Tuple[int, int]:
    """Validate *degree* and return ``(degree, n_samples)``.

    *n_samples* defaults to ``degree + 1``. A smaller value cannot determine
    every coefficient, so it is raised to ``degree + 1`` with an
    :class:`InsufficientSamplesWarning`.
    """
    if not isinstance(degree, (int, np.integer)) or isinstance(degree, bool):
        raise ConfigurationError(f"degree must be an int, got {type(degree).__name__}")
    if degree < 0:
        raise ConfigurationError(f"degree must be >= 0, got {degree}")
    degree = int(degree)

    if n_samples is None:
        return degree, degree + 1
    if not isinstance(n_samples, (int, np.integer)) or isinstance(n_samples, bool):
        raise ConfigurationError(
            f"n_samples must be an int, got {type(n_samples).__name__}"
        )
    if n_samples < degree + 1:
        warnings.warn(
            f"n_samples={n_samples} is smaller than degree + 1 = {degree + 1}; "
            f"using n_samples={degree + 1}.",
            InsufficientSamplesWarning,
            stacklevel=3,
        )
        n_samples = degree + 1
    return degree, int(n_samples)


def _canonical_point(point: Sequence[float], domain: List[List[float]]) -> np.ndarray:
    """Map a physical query point to [-1, 1]^d, one coordinate per dimension."""
    return np.array([
        to_canonical(x, lo, hi) for x, (lo, hi) in zip(point, domain)
    ])
