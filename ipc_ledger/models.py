"""
IPC Ledger - Data Models
=========================
Unit enum and the persisted game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


# ---------------------------------------------------------------------------
# Unit types (value = CLI / on-disk token)
# ---------------------------------------------------------------------------

class Troop(Enum):
    # Army
    INFANTRY = "infantry"
    TANK = "tank"
    ARTILLERY = "artillery"
    ANTI_AIR = "anti-air"
    INDUSTRIAL_COMPLEX = "industrial-complex"
    # Airforce
    FIGHTER = "fighter"
    BOMBER = "bomber"
    # Navy
    BATTLESHIP = "battleship"
    AIRCRAFT_CARRIER = "aircraft-carrier"
    DESTROYER = "destroyer"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    TRANSPORT = "transport"


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

@dataclass
class GameState:
    balance: int
    pending: Dict[Troop, int] = field(default_factory=dict)

    @property
    def total_cost(self) -> int:
        from ipc_ledger.catalog import cost
        return sum(cost(troop) * qty for troop, qty in self.pending.items())

    @property
    def remaining(self) -> int:
        return self.balance - self.total_cost
