"""
IPC Ledger - I/O
=================
Load and save the game state from a YAML file.

On-disk layout:

    balance: 20
    pending:
    - unit: tank
      quantity: 2
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from ipc_ledger.models import GameState, Troop

logger = logging.getLogger(__name__)

STATE_FILE = Path("state.yaml")
STATE_ENV_VAR = "IPC_LEDGER_STATE"


class StateFormatError(ValueError):
    """Raised when a state file parses as YAML but has the wrong shape."""


def resolve_state_file(path: Optional[str] = None) -> Path:
    """Pick the state file: explicit path, then $IPC_LEDGER_STATE, then default."""
    if path:
        return Path(path)
    env = os.environ.get(STATE_ENV_VAR)
    if env:
        return Path(env)
    return STATE_FILE


# ---------------------------------------------------------------------------
# Dict <-> GameState
# ---------------------------------------------------------------------------

def state_to_dict(state: GameState) -> dict:
    return {
        "balance": state.balance,
        "pending": [
            {"unit": troop.value, "quantity": qty}
            for troop, qty in state.pending.items()
        ],
    }


def state_from_dict(data) -> GameState:
    if not isinstance(data, dict):
        raise StateFormatError(f"expected a mapping, got {type(data).__name__}")
    if "balance" not in data:
        raise StateFormatError("missing 'balance'")
    balance = data["balance"]
    if not isinstance(balance, int) or isinstance(balance, bool):
        raise StateFormatError(f"'balance' must be an integer, got {balance!r}")

    entries = data.get("pending") or []
    if not isinstance(entries, list):
        raise StateFormatError("'pending' must be a list of unit/quantity entries")

    pending = {}
    for entry in entries:
        if not isinstance(entry, dict) or "unit" not in entry or "quantity" not in entry:
            raise StateFormatError(f"bad pending entry: {entry!r}")
        try:
            troop = Troop(entry["unit"])
        except ValueError:
            raise StateFormatError(f"unknown unit {entry['unit']!r}") from None
        qty = entry["quantity"]
        if not isinstance(qty, int) or isinstance(qty, bool):
            raise StateFormatError(f"quantity for {troop.value} must be an integer, got {qty!r}")
        pending[troop] = qty

    return GameState(balance=balance, pending=pending)


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

def load_state(filepath: Union[str, Path]) -> Optional[GameState]:
    """Read the state file. Returns None (after logging why) if it can't be used."""
    try:
        # Binary mode: PyYAML decodes and reports bad encodings as ReaderError
        with open(filepath, "rb") as f:
            data = yaml.safe_load(f)
        state = state_from_dict(data)
    except (OSError, yaml.YAMLError, StateFormatError) as e:
        logger.error(f"Failed to load game state from {filepath}: {e}")
        return None
    logger.debug(f"State loaded from {filepath}")
    return state


def save_state(state: GameState, filepath: Union[str, Path]) -> bool:
    """Write the state file, replacing any previous content."""
    try:
        with open(filepath, "w") as f:
            yaml.safe_dump(state_to_dict(state), f, default_flow_style=False, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to save game state to {filepath}: {e}")
        return False
    logger.debug(f"State saved to {filepath}")
    return True


class FileStore:
    """Load/save port bound to one state file."""

    def __init__(self, filepath: Union[str, Path] = STATE_FILE):
        self.filepath = Path(filepath)

    def load(self) -> Optional[GameState]:
        return load_state(self.filepath)

    def save(self, state: GameState) -> bool:
        return save_state(state, self.filepath)
