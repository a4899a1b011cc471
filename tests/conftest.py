"""Shared test fixtures for the IPC ledger test suite."""

import copy
import sys
from pathlib import Path

import pytest

# Ensure the project root is on the path so `ipc_ledger` imports work
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ipc_ledger.models import GameState, Troop


class MemoryStore:
    """In-memory stand-in for FileStore."""

    def __init__(self, state=None):
        self.state = copy.deepcopy(state)
        self.saves = 0

    def load(self):
        return copy.deepcopy(self.state)

    def save(self, state):
        self.state = copy.deepcopy(state)
        self.saves += 1
        return True


class FailingStore(MemoryStore):
    """Loads normally but every save fails (disk full, permissions...)."""

    def save(self, state):
        self.saves += 1
        return False


@pytest.fixture
def empty_store():
    """No game set up yet."""
    return MemoryStore()


@pytest.fixture
def fresh_state():
    return GameState(balance=30)


@pytest.fixture
def mixed_state():
    """A turn in progress: 2 infantry, 1 tank, 1 aircraft carrier = 26 ipc."""
    return GameState(
        balance=40,
        pending={
            Troop.INFANTRY: 2,
            Troop.TANK: 1,
            Troop.AIRCRAFT_CARRIER: 1,
        },
    )
