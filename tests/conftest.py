"""Shared test fixtures for PyChebFit tests."""

import math

import pytest

from pychebfit import ChebyshevFit


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def cubic_cos_1d(x, _):
    """cos(x) + 0.3x^3 + 2x^2 + x - 10"""
    return math.cos(x[0]) + 0.3 * x[0] ** 3 + 2 * x[0] ** 2 + x[0] - 10


def product_3d(x, _):
    """x * y * z"""
    return x[0] * x[1] * x[2]


def poly_2d(x, _):
    """1 + 2x - 3y + x^2 y, degree 2 in each variable."""
    return 1.0 + 2.0 * x[0] - 3.0 * x[1] + x[0] ** 2 * x[1]


def exp_sin_2d(x, _):
    """exp(x) * sin(y)"""
    return math.exp(x[0]) * math.sin(x[1])


POLY_2D_DOMAIN = [[0.0, 2.0], [-1.0, 3.0]]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def cheb_cubic_cos_1d():
    """Degree-6 fit of cubic_cos_1d on [-1, 1] (7 nodes)."""
    cheb = ChebyshevFit(cubic_cos_1d, 1)
    cheb.fit(6, verbose=False)
    return cheb


@pytest.fixture(scope="module")
def cheb_product_3d():
    """Degree-5 least-squares fit of x*y*z on [-1, 1]^3 with 10 nodes per dim."""
    cheb = ChebyshevFit(product_3d, 3, [[-1, 1], [-1, 1], [-1, 1]])
    cheb.fit(5, n_samples=10, verbose=False)
    return cheb


@pytest.fixture(scope="module")
def cheb_poly_2d():
    """Degree-2 interpolant of poly_2d on a non-canonical box."""
    cheb = ChebyshevFit(poly_2d, 2, POLY_2D_DOMAIN)
    cheb.fit(2, verbose=False)
    return cheb


@pytest.fixture(scope="module")
def cheb_exp_sin_2d():
    """Degree-12 interpolant of exp(x)*sin(y) on [-1, 1] x [0, 2]."""
    cheb = ChebyshevFit(exp_sin_2d, 2, [[-1, 1], [0, 2]])
    cheb.fit(12, verbose=False)
    return cheb
