"""Tests for Chebyshev–Gauss nodes and the basis recurrence."""

import math

import numpy as np
import pytest
from numpy.polynomial.chebyshev import chebvander

from pychebfit import ConfigurationError, chebyshev_nodes, chebyshev_polynomials


class TestChebyshevNodes:
    @pytest.mark.parametrize("n", [1, 2, 5, 7, 16])
    def test_matches_cosine_formula(self, n):
        expected = [math.cos(math.pi * (2 * k - 1) / (2 * n)) for k in range(1, n + 1)]
        np.testing.assert_allclose(chebyshev_nodes(n), expected, atol=1e-15)

    def test_descending_inside_interval(self):
        nodes = chebyshev_nodes(9)
        assert np.all(np.diff(nodes) < 0)
        assert nodes.max() < 1.0
        assert nodes.min() > -1.0

    def test_single_node_is_zero(self):
        np.testing.assert_allclose(chebyshev_nodes(1), [0.0], atol=1e-16)

    def test_nodes_are_roots_of_t_n(self):
        n = 8
        T = chebyshev_polynomials(chebyshev_nodes(n), n)
        np.testing.assert_allclose(T[n], 0.0, atol=1e-13)

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_raises(self, n):
        with pytest.raises(ConfigurationError, match=">= 1"):
            chebyshev_nodes(n)

    def test_non_integer_raises(self):
        with pytest.raises(ConfigurationError):
            chebyshev_nodes(2.5)


class TestChebyshevPolynomials:
    def test_degree_zero_is_one(self):
        result = chebyshev_polynomials(0.3, 0)
        assert result.shape == (1,)
        assert result[0] == 1.0

    def test_degree_one(self):
        np.testing.assert_array_equal(chebyshev_polynomials(0.3, 1), [1.0, 0.3])

    def test_recurrence_matches_cosine_identity(self):
        theta = 0.7
        T = chebyshev_polynomials(math.cos(theta), 10)
        expected = [math.cos(k * theta) for k in range(11)]
        np.testing.assert_allclose(T, expected, atol=1e-14)

    def test_batched_shape(self):
        x = np.linspace(-1, 1, 6)
        T = chebyshev_polynomials(x, 4)
        assert T.shape == (5, 6)

    def test_batched_matches_numpy_vander(self):
        x = np.linspace(-1, 1, 13)
        T = chebyshev_polynomials(x, 7)
        np.testing.assert_allclose(T, chebvander(x, 7).T, atol=1e-14)

    def test_batched_columns_match_scalar(self):
        x = np.array([-0.9, -0.1, 0.4, 1.0])
        T = chebyshev_polynomials(x, 5)
        for j, xj in enumerate(x):
            np.testing.assert_allclose(T[:, j], chebyshev_polynomials(xj, 5), atol=1e-15)

    def test_endpoint_values(self):
        np.testing.assert_allclose(chebyshev_polynomials(1.0, 6), np.ones(7))
        np.testing.assert_allclose(
            chebyshev_polynomials(-1.0, 6), [(-1.0) ** k for k in range(7)]
        )

    @pytest.mark.parametrize("degree", [2.5, 3.0, True])
    def test_non_integer_degree_raises(self, degree):
        with pytest.raises(ConfigurationError, match="int"):
            chebyshev_polynomials(0.0, degree)

    def test_numpy_integer_degree(self):
        np.testing.assert_array_equal(chebyshev_polynomials(0.3, np.int64(1)), [1.0, 0.3])

    def test_negative_degree_raises(self):
        with pytest.raises(ConfigurationError, match="degree"):
            chebyshev_polynomials(0.0, -1)
