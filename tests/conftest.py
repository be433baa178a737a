"""Shared pytest fixtures for the arith test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path, monkeypatch):
    """Run from an empty directory so no arith.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
