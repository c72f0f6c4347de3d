"""
Tests for quadsuite.libquadsuite.quadtables.

Every assertion derives from a defining property of the rule: symmetry,
the weight sums on the reference interval, polynomial exactness, or
agreement with an independently generated Gauss-Legendre rule.
"""

import math

import numpy as np
import pytest

from quadsuite.libquadsuite import quadtables as Q

ATOL = 1e-14


def _legendre_moment(k):
    """int_{-1}^{1} x^k dx"""
    return 0.0 if k % 2 else 2.0 / (k + 1)


# ═════════════════════════════════════════════════════════════════════
#  Gauss-Kronrod tables
# ═════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("rule, gauss_order", [(Q.GK15, 7), (Q.GK21, 10)])
class TestGaussKronrodTables:
    def test_lengths(self, rule, gauss_order):
        assert rule.nodes.shape == (rule.order,)
        assert rule.wgk.shape == (rule.order,)
        assert rule.wg.shape == (rule.order,)
        assert rule.gauss_order == gauss_order

    def test_nodes_inside_reference_interval(self, rule, gauss_order):
        assert np.all(np.abs(rule.nodes) < 1.0)
        assert len(np.unique(rule.nodes)) == rule.order

    def test_symmetry(self, rule, gauss_order):
        np.testing.assert_array_equal(rule.nodes, -rule.nodes[::-1])
        np.testing.assert_array_equal(rule.wgk, rule.wgk[::-1])
        np.testing.assert_array_equal(rule.wg, rule.wg[::-1])

    def test_weights_sum_to_interval_length(self, rule, gauss_order):
        np.testing.assert_allclose(rule.wgk.sum(), 2.0, atol=ATOL)
        np.testing.assert_allclose(rule.wg.sum(), 2.0, atol=ATOL)

    def test_kronrod_weights_positive(self, rule, gauss_order):
        assert np.all(rule.wgk > 0.0)

    def test_embedded_gauss_matches_legendre(self, rule, gauss_order):
        """Nonzero Gauss weights sit exactly on the Gauss-Legendre nodes."""
        x, w = np.polynomial.legendre.leggauss(gauss_order)
        mask = rule.wg != 0.0
        order = np.argsort(rule.nodes[mask])
        np.testing.assert_allclose(rule.nodes[mask][order], x, atol=ATOL)
        np.testing.assert_allclose(rule.wg[mask][order], w, atol=ATOL)

    def test_kronrod_polynomial_exactness(self, rule, gauss_order):
        """Kronrod extension of an n-point Gauss rule is exact to degree 3n+1."""
        for k in range(3 * gauss_order + 2):
            approx = np.dot(rule.wgk, rule.nodes ** k)
            np.testing.assert_allclose(approx, _legendre_moment(k), atol=ATOL)

    def test_gauss_polynomial_exactness(self, rule, gauss_order):
        for k in range(2 * gauss_order):
            approx = np.dot(rule.wg, rule.nodes ** k)
            np.testing.assert_allclose(approx, _legendre_moment(k), atol=ATOL)

    def test_tables_are_read_only(self, rule, gauss_order):
        for arr in (rule.nodes, rule.wgk, rule.wg):
            with pytest.raises(ValueError):
                arr[0] = 0.0


class TestGaussKronrodLookup:
    @pytest.mark.parametrize("order", [15, 21])
    def test_known_orders(self, order):
        rule = Q.gauss_kronrod_rule(order)
        assert rule.order == order
        assert rule is Q.gauss_kronrod_rule(order)

    @pytest.mark.parametrize("order", [7, 10, 31, 61])
    def test_unknown_order_raises(self, order):
        with pytest.raises(ValueError, match="No Gauss-Kronrod table"):
            Q.gauss_kronrod_rule(order)


# ═════════════════════════════════════════════════════════════════════
#  Gauss-Hermite tables
# ═════════════════════════════════════════════════════════════════════

class TestGaussHermiteTables:
    def test_gh64_shape(self):
        assert Q.GH64.order == 64
        assert Q.GH64.nodes.shape == (64,)
        assert Q.GH64.weights.shape == (64,)

    def test_weights_sum_to_sqrt_pi(self):
        np.testing.assert_allclose(Q.GH64.weights.sum(), math.sqrt(math.pi), rtol=1e-13)

    def test_nodes_symmetric(self):
        x = np.sort(Q.GH64.nodes)
        np.testing.assert_allclose(x, -x[::-1], atol=1e-13)

    def test_weights_positive(self):
        assert np.all(Q.GH64.weights > 0.0)

    def test_read_only(self):
        with pytest.raises(ValueError):
            Q.GH64.weights[0] = 1.0

    @pytest.mark.parametrize("order", [1, 5, 20])
    def test_custom_order_second_moment(self, order):
        """sum w x^2 = sqrt(pi)/2 whenever the rule is exact to degree 2."""
        rule = Q.gauss_hermite_rule(order)
        assert rule.order == order
        if order >= 2:
            np.testing.assert_allclose(
                np.dot(rule.weights, rule.nodes ** 2), math.sqrt(math.pi) / 2, rtol=1e-12
            )

    @pytest.mark.parametrize("order", [0, -3, 2.5, True])
    def test_invalid_order_raises(self, order):
        with pytest.raises(ValueError):
            Q.gauss_hermite_rule(order)
