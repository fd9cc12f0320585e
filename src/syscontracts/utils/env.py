# SPDX-License-Identifier: Apache-2.0
"""Environment lookups under the ``SYSCONTRACTS_`` prefix."""

from __future__ import annotations

import os

PREFIX = "SYSCONTRACTS_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def env(key: str, default: str | None = None) -> str | None:
    """Return ``SYSCONTRACTS_<key>`` or ``default`` when unset or blank."""
    val = os.environ.get(PREFIX + key)
    if val is None or not val.strip():
        return default
    return val.strip()


def env_bool(key: str, default: bool = False) -> bool:
    val = env(key)
    if val is None:
        return default
    low = val.lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    return default
