"""Logging setup for fretshapes.

Modules log through ``logging.getLogger(__name__)``. Records propagate up to
the ``fretshapes`` package logger, which owns the only handler; this module
decides the levels and where that handler writes.
"""

import logging
import sys
from typing import Mapping, Optional, Union

from fretshapes.errors import ConfigError

PACKAGE_LOGGER = "fretshapes"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default level per logger; the config file's logging.levels is merged on top
MODULE_LOG_LEVELS = {
    "fretshapes": "WARNING",
    "fretshapes.config": "WARNING",
    # One DEBUG line per pruned branch
    "fretshapes.search": "WARNING",
    "fretshapes.cli": "INFO",
}

_handler: Optional[logging.Handler] = None


def to_level(level: Union[str, int]) -> int:
    """Numeric level for a name such as "debug"; ConfigError if unknown."""
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level {level!r}")
    return numeric


def setup_logging(
    level: Optional[str] = None,
    levels: Optional[Mapping[str, Union[str, int]]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """Route every fretshapes logger through one stdout handler.

    Args:
        level: Applied to every configured logger when given, e.g. from
            ``--log-level``. Wins over ``levels``.
        levels: Per-logger levels merged over MODULE_LOG_LEVELS, e.g. the
            config file's ``logging.levels``.
        fmt: Record format for the handler.

    Raises:
        ConfigError: a level name is not a logging level.
    """
    global _handler

    resolved = {name: to_level(lvl) for name, lvl in {**MODULE_LOG_LEVELS, **(levels or {})}.items()}
    if level:
        override = to_level(level)
        resolved = dict.fromkeys(resolved, override)

    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package.removeHandler(_handler)
    # Rebound on every call so the handler follows the current sys.stdout
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(fmt))
    package.addHandler(_handler)
    package.propagate = False

    for name, numeric in resolved.items():
        logging.getLogger(name).setLevel(numeric)
