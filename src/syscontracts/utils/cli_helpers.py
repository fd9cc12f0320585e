# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging

from .env import env

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def configure_logging_from_env(default: str = "info") -> int:
    """Configure root logging from ``SYSCONTRACTS_VERBOSITY``.

    Safe to call repeatedly: handlers are only installed once, later calls
    just adjust the level. Returns the level applied.
    """
    verbosity = (env("VERBOSITY") or default).lower()
    level = _LEVELS.get(verbosity, logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    root.setLevel(level)
    return level
