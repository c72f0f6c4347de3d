"""
Integrand wrappers.

``Function`` is the base for named real functions of one real variable.
The transforms below map an infinite or half-infinite integration domain
onto a finite interval in a new variable ``t`` and fold the Jacobian of the
substitution into the integrand, so the adaptive driver only ever sees
finite bounds.

    (-inf, inf) : x = t / (1 - t^2),   t in [-1, 1]
    [a, inf)    : x = a + t / (1 - t), t in [0, 1]
    (-inf, b]   : x = b + t / (1 + t), t in [-1, 0]

Gauss-Kronrod nodes are interior to each subinterval, but on subintervals
only a few ulps wide a mapped node can round onto a singular endpoint.
There the transformed integrand is taken to be zero (the integrand must
vanish at infinity for the integral to exist).
"""

import math
from abc import ABC, abstractmethod
from typing import Callable, Tuple


class Function(ABC):
    """Callable real function of one real variable."""

    @abstractmethod
    def __call__(self, x: float) -> float:
        ...

    def get_name(self) -> str:
        return type(self).__name__


class _Transform(Function):
    """Integrand ``f(x(t)) * dx/dt`` on a finite interval in ``t``."""

    bounds: Tuple[float, float] = (-1.0, 1.0)

    def __init__(self, f: Callable[[float], float]):
        self.f = f

    @abstractmethod
    def x(self, t: float) -> float:
        ...

    @abstractmethod
    def jacobian(self, t: float) -> float:
        ...

    @abstractmethod
    def at_infinity(self, t: float) -> bool:
        ...

    def __call__(self, t: float) -> float:
        if self.at_infinity(t):
            return 0.0
        return self.f(self.x(t)) * self.jacobian(t)


class InfiniteTransform(_Transform):
    """Whole real line onto ``[-1, 1]``."""

    bounds = (-1.0, 1.0)

    def at_infinity(self, t):
        return abs(t) >= 1.0

    def x(self, t):
        return t / (1.0 - t * t)

    def jacobian(self, t):
        d = 1.0 - t * t
        return (1.0 + t * t) / (d * d)


class UpperInfiniteTransform(_Transform):
    """``[a, inf)`` onto ``[0, 1]``."""

    bounds = (0.0, 1.0)

    def __init__(self, f, a: float):
        super().__init__(f)
        self.a = a

    def at_infinity(self, t):
        return t >= 1.0

    def x(self, t):
        return self.a + t / (1.0 - t)

    def jacobian(self, t):
        d = 1.0 - t
        return 1.0 / (d * d)


class LowerInfiniteTransform(_Transform):
    """``(-inf, b]`` onto ``[-1, 0]``."""

    bounds = (-1.0, 0.0)

    def __init__(self, f, b: float):
        super().__init__(f)
        self.b = b

    def at_infinity(self, t):
        return t <= -1.0

    def x(self, t):
        return self.b + t / (1.0 + t)

    def jacobian(self, t):
        d = 1.0 + t
        return 1.0 / (d * d)


def substitute(f: Callable[[float], float], a: float, b: float):
    """
    Choose the integrand and bounds the adaptive driver works on.

    Parameters
    ----------
    f : callable
        Original integrand.
    a, b : float
        Integration bounds in ``x``, ``a < b``; either may be infinite.

    Returns
    -------
    integrand : callable
        *f* itself for finite bounds, otherwise a transform of it.
    lo, hi : float
        Finite bounds in the integration variable of *integrand*.
    """
    lo_inf = math.isinf(a)
    hi_inf = math.isinf(b)
    if lo_inf and hi_inf:
        g = InfiniteTransform(f)
    elif hi_inf:
        g = UpperInfiniteTransform(f, a)
    elif lo_inf:
        g = LowerInfiniteTransform(f, b)
    else:
        return f, a, b
    lo, hi = g.bounds
    return g, lo, hi
