"""Test configuration and fixtures for gitsparse."""

import pytest

from gitsparse.repository import Repository


@pytest.fixture
def repo(tmp_path):
    """A freshly initialized non-bare repository."""
    return Repository.init(tmp_path / "work")


@pytest.fixture
def bare_repo(tmp_path):
    """A freshly initialized bare repository."""
    return Repository.init(tmp_path / "bare.git", bare=True)
