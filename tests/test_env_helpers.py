# SPDX-License-Identifier: Apache-2.0
import logging

from syscontracts.utils.cli_helpers import configure_logging_from_env
from syscontracts.utils.env import env, env_bool


def test_env_prefix_and_blank(monkeypatch):
    monkeypatch.setenv("SYSCONTRACTS_VERBOSITY", "  debug ")
    assert env("VERBOSITY") == "debug"
    monkeypatch.setenv("SYSCONTRACTS_VERBOSITY", "   ")
    assert env("VERBOSITY", "info") == "info"


def test_env_bool_values(monkeypatch):
    monkeypatch.delenv("SYSCONTRACTS_STRICT", raising=False)
    assert env_bool("STRICT") is False
    monkeypatch.setenv("SYSCONTRACTS_STRICT", "yes")
    assert env_bool("STRICT") is True
    monkeypatch.setenv("SYSCONTRACTS_STRICT", "off")
    assert env_bool("STRICT", True) is False
    monkeypatch.setenv("SYSCONTRACTS_STRICT", "maybe")
    assert env_bool("STRICT", True) is True


def test_configure_logging_levels(monkeypatch):
    root = logging.getLogger()
    before = root.level
    try:
        monkeypatch.setenv("SYSCONTRACTS_VERBOSITY", "quiet")
        assert configure_logging_from_env() == logging.ERROR
        monkeypatch.setenv("SYSCONTRACTS_VERBOSITY", "debug")
        assert configure_logging_from_env() == logging.DEBUG
        monkeypatch.delenv("SYSCONTRACTS_VERBOSITY")
        assert configure_logging_from_env(default="info") == logging.INFO
    finally:
        root.setLevel(before)
