"""Tests for the ledger state machine."""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import FailingStore, MemoryStore
from ipc_ledger.ledger import (
    InsufficientFunds, Ledger,
    add_purchase, commit_purchase, new_game, remove_purchase,
)
from ipc_ledger.models import GameState, Troop


# ---------------------------------------------------------------------------
# Pure transitions
# ---------------------------------------------------------------------------

def test_new_game_is_empty():
    state = new_game(42)
    assert state.balance == 42
    assert state.pending == {}


def test_purchase_accumulates(fresh_state):
    state = add_purchase(fresh_state, Troop.TANK, 2)
    state = add_purchase(state, Troop.TANK, 3)
    assert state.pending[Troop.TANK] == 5


def test_purchase_default_quantity(fresh_state):
    state = add_purchase(fresh_state, Troop.BOMBER)
    assert state.pending == {Troop.BOMBER: 1}


def test_purchase_does_not_mutate_input(fresh_state):
    add_purchase(fresh_state, Troop.TANK, 2)
    assert fresh_state.pending == {}


def test_purchase_accepts_negative_quantity():
    state = GameState(balance=10, pending={Troop.TANK: 3})
    state = add_purchase(state, Troop.TANK, -1)
    assert state.pending[Troop.TANK] == 2


def test_remove_below_zero_deletes_key():
    state = GameState(balance=10, pending={Troop.INFANTRY: 2})
    state = remove_purchase(state, Troop.INFANTRY, 5)
    assert Troop.INFANTRY not in state.pending


def test_remove_partial_keeps_key():
    state = GameState(balance=10, pending={Troop.INFANTRY: 4})
    state = remove_purchase(state, Troop.INFANTRY, 1)
    assert state.pending[Troop.INFANTRY] == 3


def test_remove_all_by_default():
    state = GameState(balance=10, pending={Troop.FIGHTER: 4, Troop.TANK: 1})
    state = remove_purchase(state, Troop.FIGHTER, None)
    assert state.pending == {Troop.TANK: 1}


@pytest.mark.parametrize("quantity", [None, 2])
def test_remove_absent_unit_is_tolerated(fresh_state, quantity):
    state = remove_purchase(fresh_state, Troop.SUBMARINE, quantity)
    assert state.pending == {}


def test_commit_success_arithmetic():
    state = GameState(balance=20, pending={Troop.INFANTRY: 2})
    state = commit_purchase(state, 30)
    assert state.balance == 44
    assert state.pending == {}


def test_commit_exact_balance_allowed():
    state = GameState(balance=20, pending={Troop.BATTLESHIP: 1})
    assert commit_purchase(state, 5).balance == 5


def test_commit_insufficient_funds_raises():
    state = GameState(balance=10, pending={Troop.BATTLESHIP: 1})
    with pytest.raises(InsufficientFunds) as exc:
        commit_purchase(state, 50)
    assert exc.value.remaining == -10
    assert state.pending == {Troop.BATTLESHIP: 1}


# ---------------------------------------------------------------------------
# Ledger against a store
# ---------------------------------------------------------------------------

def test_setup_overwrites_existing(mixed_state):
    store = MemoryStore(mixed_state)
    Ledger(store).setup(25)
    assert store.state == GameState(balance=25)


def test_purchase_without_game_is_noop(empty_store, capsys):
    assert Ledger(empty_store).purchase(Troop.TANK, 1) is None
    assert empty_store.state is None
    assert empty_store.saves == 0
    assert capsys.readouterr().out == ""


def test_purchase_reports_cost_and_remaining(fresh_state, capsys):
    store = MemoryStore(fresh_state)
    Ledger(store).purchase(Troop.AIRCRAFT_CARRIER, 2)
    out = capsys.readouterr().out
    assert "Added a purchase of 2 Aircraft Carriers for 28" in out
    assert "Remaining IPC: 2" in out
    assert store.state.pending == {Troop.AIRCRAFT_CARRIER: 2}


def test_remove_always_persists(fresh_state):
    store = MemoryStore(fresh_state)
    Ledger(store).remove(Troop.CRUISER, 3)
    assert store.saves == 1
    assert store.state.pending == {}


def test_remove_messages(capsys):
    store = MemoryStore(GameState(balance=30, pending={Troop.FIGHTER: 4}))
    ledger = Ledger(store)
    ledger.remove(Troop.FIGHTER, 1)
    ledger.remove(Troop.FIGHTER)
    out = capsys.readouterr().out
    assert "Removing 1 Fighters from purchase" in out
    assert "Removing all Fighters from purchase" in out
    assert store.state.pending == {}


def test_commit_rejection_is_non_mutating(capsys):
    original = GameState(balance=10, pending={Troop.BATTLESHIP: 1})
    store = MemoryStore(original)
    assert Ledger(store).commit(50) is None
    assert store.saves == 0
    assert store.state == original
    assert "don't have enough IPC" in capsys.readouterr().out


def test_commit_success_persists(capsys):
    store = MemoryStore(GameState(balance=20, pending={Troop.INFANTRY: 2}))
    Ledger(store).commit(30)
    assert store.state == GameState(balance=44)
    out = capsys.readouterr().out
    assert "IPC remaining 14" in out
    assert "New IPC total 44" in out


def test_commit_without_game_is_noop(empty_store):
    assert Ledger(empty_store).commit(10) is None
    assert empty_store.saves == 0


def test_status_without_game_prints_nothing(empty_store, capsys):
    assert Ledger(empty_store).status() is None
    assert capsys.readouterr().out == ""


def test_status_never_persists(mixed_state, capsys):
    store = MemoryStore(mixed_state)
    Ledger(store).status()
    assert store.saves == 0
    out = capsys.readouterr().out
    assert "Aircraft Carrier : 1 á 14 ipc" in out
    assert "At a total cost of 26 ipc" in out
    assert "Remaining IPC: 14" in out


def test_full_turn_cycle(empty_store):
    ledger = Ledger(empty_store)
    ledger.setup(30)
    ledger.purchase(Troop.TANK, 2)
    ledger.purchase(Troop.INFANTRY, 3)
    ledger.remove(Troop.INFANTRY, 1)
    ledger.commit(25)
    # 30 - (12 + 6) + 25
    assert empty_store.state == GameState(balance=37)


# ---------------------------------------------------------------------------
# Save failures
# ---------------------------------------------------------------------------

def test_failed_save_discards_result(capsys):
    store = FailingStore(GameState(balance=10))
    assert Ledger(store).purchase(Troop.TANK, 1) is None
    assert store.saves == 1
    # Effects were printed before the save was attempted
    out = capsys.readouterr().out
    assert "Added a purchase of 1 Tanks for 6" in out
    assert "Remaining IPC: 4" in out
    assert store.state == GameState(balance=10)


def test_failed_save_on_every_mutating_operation():
    store = FailingStore(GameState(balance=20, pending={Troop.INFANTRY: 2}))
    ledger = Ledger(store)
    assert ledger.setup(30) is None
    assert ledger.remove(Troop.INFANTRY, 1) is None
    assert ledger.commit(30) is None
    assert store.saves == 3
    assert store.state == GameState(balance=20, pending={Troop.INFANTRY: 2})


def test_operations_log(fresh_state, caplog):
    caplog.set_level(logging.DEBUG, logger="ipc_ledger.ledger")
    ledger = Ledger(MemoryStore(fresh_state))
    ledger.status()
    ledger.purchase(Troop.TANK, 2)
    ledger.remove(Troop.TANK)
    ledger.commit(10)
    assert "Status: balance=30" in caplog.text
    assert "Purchasing 2 x tank" in caplog.text
    assert "Removing all x tank" in caplog.text
    assert "Committing purchases: 30 ipc left, 10 ipc income" in caplog.text
