"""
QuadSuite: numerical definite integration of real functions of one variable.

This package provides an adaptive Gauss-Kronrod integrator for finite and
infinite domains and a fixed 64-point Gauss-Hermite rule for integrals
weighted by exp(-x^2) over the real line.
"""

# Import main sub-packages
from . import libquadsuite
from .libquadsuite.integration import (
    Integration,
    IntegrationDomainError,
    QuadgkConvergenceWarning,
    QuadgkResult,
    integrate_quadgh,
    integrate_quadgk,
    quadgk,
)

__all__ = [
    "libquadsuite",
    "Integration",
    "IntegrationDomainError",
    "QuadgkConvergenceWarning",
    "QuadgkResult",
    "integrate_quadgh",
    "integrate_quadgk",
    "quadgk",
]
