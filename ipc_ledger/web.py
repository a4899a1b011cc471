"""
IPC Ledger - Web Frontend
==========================
FastAPI server exposing the ledger operations as a JSON API.

Usage:
    python -m ipc_ledger.web
    python cli.py web [--port 8080]
"""

import logging
import threading
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from ipc_ledger.catalog import UNITS, cost, display_name, parse_troop
from ipc_ledger.io import FileStore, resolve_state_file
from ipc_ledger.ledger import (
    InsufficientFunds, add_purchase, commit_purchase, new_game, remove_purchase,
)
from ipc_ledger.models import GameState

logger = logging.getLogger(__name__)

app = FastAPI(title="IPC Ledger")

# Handlers run in a thread pool; every load-modify-save holds this lock
_lock = threading.Lock()
_store = FileStore(resolve_state_file())


def set_state_file(path):
    global _store
    _store = FileStore(path)


# ---------------------------------------------------------------------------
# Pydantic models for request bodies
# ---------------------------------------------------------------------------

class SetupRequest(BaseModel):
    initial_ipc: int


class PurchaseRequest(BaseModel):
    unit: str
    quantity: int = 1


class RemoveRequest(BaseModel):
    unit: str
    quantity: Optional[int] = None


class CommitRequest(BaseModel):
    ipc: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _state_to_dict(state: GameState) -> dict:
    return {
        "balance": state.balance,
        "pending": [
            {"unit": troop.value, "name": display_name(troop),
             "quantity": qty, "unit_cost": cost(troop)}
            for troop, qty in state.pending.items()
        ],
        "total_cost": state.total_cost,
        "remaining": state.remaining,
    }


def _troop(token: str):
    try:
        return parse_troop(token)
    except ValueError as e:
        raise HTTPException(400, str(e))


def _load() -> GameState:
    state = _store.load()
    if state is None:
        raise HTTPException(404, "No game in progress")
    return state


def _save(state: GameState) -> dict:
    if not _store.save(state):
        raise HTTPException(500, "Failed to save game state")
    return _state_to_dict(state)


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/units")
def api_units():
    """Return the unit catalog."""
    return {
        "units": {
            troop.value: {"name": info.name, "cost": info.cost, "branch": info.branch}
            for troop, info in UNITS.items()
        }
    }


@app.get("/api/status")
def api_status():
    with _lock:
        return _state_to_dict(_load())


@app.post("/api/setup")
def api_setup(req: SetupRequest):
    with _lock:
        logger.info(f"Setting up new game with {req.initial_ipc} ipc")
        return _save(new_game(req.initial_ipc))


@app.post("/api/purchase")
def api_purchase(req: PurchaseRequest):
    troop = _troop(req.unit)
    with _lock:
        return _save(add_purchase(_load(), troop, req.quantity))


@app.post("/api/remove")
def api_remove(req: RemoveRequest):
    troop = _troop(req.unit)
    with _lock:
        return _save(remove_purchase(_load(), troop, req.quantity))


@app.post("/api/commit")
def api_commit(req: CommitRequest):
    with _lock:
        state = _load()
        try:
            committed = commit_purchase(state, req.ipc)
        except InsufficientFunds as e:
            raise HTTPException(409, f"Not enough IPC to pay for purchases: {e}")
        return _save(committed)


def start_server(port: int = 8080, state_file=None):
    """Start the uvicorn server."""
    if state_file:
        set_state_file(state_file)
    print(f"Starting IPC Ledger at http://localhost:{port} (state: {_store.filepath})")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    start_server()
