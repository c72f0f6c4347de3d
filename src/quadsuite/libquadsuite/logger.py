"""
Thin wrapper around Python's ``logging`` module with quadsuite-specific
log levels for inner-loop quadrature tracing.

Usage
-----
>>> from quadsuite.libquadsuite.logger import get_logger
>>> log = get_logger(__name__)
>>> log.debug("call summary")           # one line per integration
>>> log.debug2("refinement round")      # custom level, per bisection
"""

import logging
import sys

# ── Custom levels (below DEBUG=10) ──────────────────────────────────────
DEBUG2 = 9
DEBUG3 = 8

logging.addLevelName(DEBUG2, "DEBUG2")
logging.addLevelName(DEBUG3, "DEBUG3")

ROOT_LOGGER = "quadsuite"


class _QuadLogger(logging.Logger):
    """Logger subclass that adds ``debug2`` and ``debug3`` convenience methods."""

    def debug2(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG2):
            self._log(DEBUG2, msg, args, **kwargs)

    def debug3(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG3):
            self._log(DEBUG3, msg, args, **kwargs)


class _QuadLoggerAdapter(logging.LoggerAdapter):
    """Gives a plain ``logging.Logger`` the ``debug2`` and ``debug3`` methods."""

    def __init__(self, logger):
        super().__init__(logger, {})

    def debug2(self, msg, *args, **kwargs):
        self.log(DEBUG2, msg, *args, **kwargs)

    def debug3(self, msg, *args, **kwargs):
        self.log(DEBUG3, msg, *args, **kwargs)


# ── Mapping from the integer verbosity scale to Python levels ───────────
VERBOSITY_LEVEL_MAP = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
    4: logging.DEBUG,
    5: DEBUG2,
    6: DEBUG3,
}


def get_logger(name: str | None = None) -> _QuadLogger | _QuadLoggerAdapter:
    """Return a logger under the ``quadsuite`` hierarchy.

    If *name* is a fully qualified module name (e.g.
    ``quadsuite.libquadsuite.integration``), the logger inherits from the
    ``quadsuite`` root logger so a single ``set_level()`` call
    controls everything.

    A plain ``logging.Logger`` created under *name* before this call (for
    example by ``logging.config.dictConfig``) is wrapped in an adapter so
    ``debug2``/``debug3`` still work.
    """
    name = name or ROOT_LOGGER
    manager = logging.Logger.manager
    existing = manager.loggerDict.get(name)
    if isinstance(existing, _QuadLogger):
        return existing
    if isinstance(existing, logging.Logger):
        return _QuadLoggerAdapter(existing)
    # Only quadsuite loggers get the extra methods; the global logger
    # class is left alone.
    previous = logging.getLoggerClass()
    logging.setLoggerClass(_QuadLogger)
    try:
        return logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the log level for *all* quadsuite loggers at once.

    Accepts Python level ints/names **or** the 0-6 verbosity scale.
    """
    if isinstance(level, int) and level in VERBOSITY_LEVEL_MAP:
        level = VERBOSITY_LEVEL_MAP[level]
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def setup(level: int | str = logging.INFO, stream=None) -> None:
    """One-time setup: attach a stderr handler with the quadsuite format.

    Safe to call multiple times; extra calls only update the level.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-7s: %(message)s"))
        root.addHandler(handler)
    set_level(level)
