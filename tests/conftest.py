"""Shared pytest fixtures for dumbjshell tests."""

import pytest

from dumbjshell.core.evaluator import Evaluator
from dumbjshell.core.store import VariableStore
from dumbjshell.shell import ShellSession


@pytest.fixture
def store() -> VariableStore:
    """Return an empty variable store."""
    return VariableStore()


@pytest.fixture
def evaluator(store: VariableStore) -> Evaluator:
    """Return an evaluator that owns the ``store`` fixture."""
    return Evaluator(store)


@pytest.fixture
def session() -> ShellSession:
    """Return a fresh shell session."""
    return ShellSession()
