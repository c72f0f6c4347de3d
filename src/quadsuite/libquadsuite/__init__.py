"""libquadsuite sub-package for quadrature rules, integrands and drivers."""

# Import modules themselves (allows: from quadsuite.libquadsuite import integration)
from . import functions
from . import integration
from . import logger
from . import quadtables

__all__ = [
    "functions",
    "integration",
    "logger",
    "quadtables",
]
