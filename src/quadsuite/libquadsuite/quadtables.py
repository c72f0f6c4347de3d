"""
Node and weight tables for the quadrature rules used by ``integration``.

Gauss-Kronrod pairs (15 and 21 points) carry the Kronrod nodes on [-1, 1],
the Kronrod weights, and the weights of the embedded Gauss rule.  The Gauss
weights are zero-padded at the Kronrod-only nodes so both sums run over the
same function values.  Constants are QUADPACK's ``dqk15`` / ``dqk21``
values.

The 64-point Gauss-Hermite rule (weight ``exp(-x**2)`` on the real line) is
generated once at import and frozen.

All arrays are read-only.
"""

from dataclasses import dataclass

import numpy as np

dp = np.float64


def _frozen(values) -> np.ndarray:
    arr = np.asarray(values, dtype=dp)
    arr.setflags(write=False)
    return arr


def _mirror(half, center, odd_sign=1.0):
    """Build a symmetric table from the positive half (outermost first)."""
    half = list(half)
    return half + [center] + [odd_sign * v for v in reversed(half)]


@dataclass(frozen=True, eq=False)
class GaussKronrodRule:
    """Kronrod rule with its embedded Gauss rule."""

    order: int
    nodes: np.ndarray
    wgk: np.ndarray
    wg: np.ndarray

    @property
    def gauss_order(self) -> int:
        return int(np.count_nonzero(self.wg))


@dataclass(frozen=True, eq=False)
class GaussHermiteRule:
    order: int
    nodes: np.ndarray
    weights: np.ndarray


# ═════════════════════════════════════════════════════════════════════
#  15-point Kronrod / 7-point Gauss
# ═════════════════════════════════════════════════════════════════════

_XGK15 = [
    0.991455371120812639206854697526329,
    0.949107912342758524526189684047851,
    0.864864423359769072789712788640926,
    0.741531185599394439863864773280788,
    0.586087235467691130294144838258730,
    0.405845151377397166906606412076961,
    0.207784955007898467600689403773245,
]

_WGK15 = [
    0.022935322010529224963732008058970,
    0.063092092629978553290700663189204,
    0.104790010322250183839876322541518,
    0.140653259715525918745189590510238,
    0.169004726639267902826583426598550,
    0.190350578064785409913256402421014,
    0.204432940075298892414161999234649,
]
_WGK15_CENTER = 0.209482141084727828012999174891714

# Gauss nodes sit at the odd positions (1, 3, 5) of the half table
_WG15 = [
    0.0,
    0.129484966168869693270611432679082,
    0.0,
    0.279705391489276667901467771423780,
    0.0,
    0.381830050505118944950369775488975,
    0.0,
]
_WG15_CENTER = 0.417959183673469387755102040816327

GK15 = GaussKronrodRule(
    order=15,
    nodes=_frozen(_mirror(_XGK15, 0.0, odd_sign=-1.0)),
    wgk=_frozen(_mirror(_WGK15, _WGK15_CENTER)),
    wg=_frozen(_mirror(_WG15, _WG15_CENTER)),
)


# ═════════════════════════════════════════════════════════════════════
#  21-point Kronrod / 10-point Gauss
# ═════════════════════════════════════════════════════════════════════

_XGK21 = [
    0.995657163025808080735527280689003,
    0.973906528517171720077964012084452,
    0.930157491355708226001207180059508,
    0.865063366688984510732096688423493,
    0.780817726586416897063717578345042,
    0.679409568299024406234327365114874,
    0.562757134668604683339000099272694,
    0.433395394129247190799265943165784,
    0.294392862701460198131126603103866,
    0.148874338981631210884826001129720,
]

_WGK21 = [
    0.011694638867371874278064396062192,
    0.032558162307964727478818972459390,
    0.054755896574351996031381300244580,
    0.075039674810919952767043140916190,
    0.093125454583697605535065465083366,
    0.109387158802297641899210590325805,
    0.123491976262065851077958109831074,
    0.134709217311473325928054001771707,
    0.142775938577060080797094273138717,
    0.147739104901338491374841515972068,
]
_WGK21_CENTER = 0.149445554002916905664936468389821

# 10-point Gauss rule: no node at the center
_WG21 = [
    0.0,
    0.066671344308688137593568809893332,
    0.0,
    0.149451349150580593145776339657697,
    0.0,
    0.219086362515982043995534934228163,
    0.0,
    0.269266719309996355091226921569469,
    0.0,
    0.295524224714752870173892994651338,
]

GK21 = GaussKronrodRule(
    order=21,
    nodes=_frozen(_mirror(_XGK21, 0.0, odd_sign=-1.0)),
    wgk=_frozen(_mirror(_WGK21, _WGK21_CENTER)),
    wg=_frozen(_mirror(_WG21, 0.0)),
)

_GK_RULES = {15: GK15, 21: GK21}


def gauss_kronrod_rule(order: int) -> GaussKronrodRule:
    """
    Look up a precomputed Gauss-Kronrod rule.

    Parameters
    ----------
    order : int
        Number of Kronrod nodes, 15 or 21.

    Returns
    -------
    GaussKronrodRule

    Raises
    ------
    ValueError
        If no table exists for *order*.
    """
    try:
        return _GK_RULES[order]
    except KeyError:
        raise ValueError(
            f"No Gauss-Kronrod table for order {order!r}; "
            f"available: {sorted(_GK_RULES)}"
        ) from None


# ═════════════════════════════════════════════════════════════════════
#  Gauss-Hermite
# ═════════════════════════════════════════════════════════════════════

def gauss_hermite_rule(order: int) -> GaussHermiteRule:
    """
    Build an *order*-point Gauss-Hermite rule.

    Exact for ``exp(-x**2) * p(x)`` with ``deg p <= 2*order - 1``.

    Raises
    ------
    ValueError
        If *order* is not a positive integer.
    """
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)) or order < 1:
        raise ValueError(f"Gauss-Hermite order must be a positive integer, got {order!r}")
    nodes, weights = np.polynomial.hermite.hermgauss(int(order))
    return GaussHermiteRule(
        order=int(order), nodes=_frozen(nodes), weights=_frozen(weights)
    )


GH64 = gauss_hermite_rule(64)
