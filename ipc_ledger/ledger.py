"""
IPC Ledger - State Machine
===========================
Pure state transitions (new_game, add_purchase, remove_purchase,
commit_purchase) plus the Ledger, which runs each one against a store:
load, transform, print the effects, then persist.

A store is anything with ``load() -> Optional[GameState]`` and
``save(state) -> bool``; see ipc_ledger.io.FileStore.
"""

import copy
import logging
from typing import Optional

from ipc_ledger.catalog import cost
from ipc_ledger.format import plural, print_status
from ipc_ledger.models import GameState, Troop

logger = logging.getLogger(__name__)


class InsufficientFunds(Exception):
    def __init__(self, remaining: int):
        super().__init__(f"pending purchases exceed balance by {-remaining} ipc")
        self.remaining = remaining


# ---------------------------------------------------------------------------
# Pure transitions (never mutate their input)
# ---------------------------------------------------------------------------

def new_game(initial_ipc: int) -> GameState:
    return GameState(balance=initial_ipc)


def add_purchase(state: GameState, troop: Troop, quantity: int = 1) -> GameState:
    # Negative quantities are accepted as-is
    new = copy.deepcopy(state)
    new.pending[troop] = new.pending.get(troop, 0) + quantity
    return new


def remove_purchase(state: GameState, troop: Troop, quantity: Optional[int] = None) -> GameState:
    new = copy.deepcopy(state)
    if quantity is None:
        new.pending[troop] = 0
    else:
        new.pending[troop] = new.pending.get(troop, 0) - quantity

    if new.pending[troop] <= 0:
        del new.pending[troop]
    return new


def commit_purchase(state: GameState, new_ipc: int) -> GameState:
    remaining = state.remaining
    if remaining < 0:
        raise InsufficientFunds(remaining)
    return GameState(balance=remaining + new_ipc)


# ---------------------------------------------------------------------------
# Operations against a store
# ---------------------------------------------------------------------------

class Ledger:
    def __init__(self, store):
        self.store = store

    def _persist(self, state: GameState) -> Optional[GameState]:
        # Effects are already printed; on a failed save the result is dropped
        return state if self.store.save(state) else None

    def setup(self, initial_ipc: int) -> Optional[GameState]:
        logger.info(f"Setting up new game with {initial_ipc} ipc")
        state = new_game(initial_ipc)
        print(f"New game started with {initial_ipc} IPC")
        return self._persist(state)

    def status(self) -> Optional[GameState]:
        state = self.store.load()
        if state is not None:
            logger.debug(f"Status: balance={state.balance}, {len(state.pending)} unit types pending")
            print_status(state)
        return state

    def purchase(self, troop: Troop, quantity: int = 1) -> Optional[GameState]:
        state = self.store.load()
        if state is None:
            return None
        logger.debug(f"Purchasing {quantity} x {troop.value}")
        state = add_purchase(state, troop, quantity)
        print(f"Added a purchase of {quantity} {plural(troop)} for {cost(troop) * quantity}")
        print(f"Remaining IPC: {state.remaining}")
        return self._persist(state)

    def remove(self, troop: Troop, quantity: Optional[int] = None) -> Optional[GameState]:
        state = self.store.load()
        if state is None:
            return None
        logger.debug(f"Removing {'all' if quantity is None else quantity} x {troop.value}")
        state = remove_purchase(state, troop, quantity)
        if quantity is None:
            print(f"Removing all {plural(troop)} from purchase")
        else:
            print(f"Removing {quantity} {plural(troop)} from purchase")
        return self._persist(state)

    def commit(self, new_ipc: int) -> Optional[GameState]:
        state = self.store.load()
        if state is None:
            return None
        try:
            committed = commit_purchase(state, new_ipc)
        except InsufficientFunds as e:
            logger.info(f"Commit rejected: {e}")
            print("You don't have enough IPC to pay for your purchases")
            return None
        logger.info(f"Committing purchases: {state.remaining} ipc left, {new_ipc} ipc income")
        print("Committing purchases...")
        print(f"IPC remaining {state.remaining}")
        print(f"New IPC total {committed.balance}")
        return self._persist(committed)
