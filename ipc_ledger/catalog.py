"""
IPC Ledger - Unit Catalog
==========================
Fixed purchase costs and display names for every unit type.
"""

from dataclasses import dataclass
from typing import Dict, List

from ipc_ledger.models import Troop


@dataclass(frozen=True)
class TroopInfo:
    name: str
    cost: int
    branch: str  # "army", "air", "navy"


UNITS: Dict[Troop, TroopInfo] = {
    # === ARMY ===
    Troop.INFANTRY: TroopInfo(name="Infantry", cost=3, branch="army"),
    Troop.TANK: TroopInfo(name="Tank", cost=6, branch="army"),
    Troop.ARTILLERY: TroopInfo(name="Artillery", cost=4, branch="army"),
    Troop.ANTI_AIR: TroopInfo(name="Anti-Air", cost=5, branch="army"),
    Troop.INDUSTRIAL_COMPLEX: TroopInfo(name="Industrial Complex", cost=15, branch="army"),

    # === AIRFORCE ===
    Troop.FIGHTER: TroopInfo(name="Fighter", cost=10, branch="air"),
    Troop.BOMBER: TroopInfo(name="Bomber", cost=12, branch="air"),

    # === NAVY ===
    Troop.BATTLESHIP: TroopInfo(name="Battleship", cost=20, branch="navy"),
    Troop.AIRCRAFT_CARRIER: TroopInfo(name="Aircraft Carrier", cost=14, branch="navy"),
    Troop.DESTROYER: TroopInfo(name="Destroyer", cost=8, branch="navy"),
    Troop.CRUISER: TroopInfo(name="Cruiser", cost=12, branch="navy"),
    Troop.SUBMARINE: TroopInfo(name="Submarine", cost=6, branch="navy"),
    Troop.TRANSPORT: TroopInfo(name="Transport", cost=7, branch="navy"),
}

TOKENS: List[str] = [t.value for t in Troop]


def cost(troop: Troop) -> int:
    return UNITS[troop].cost


def display_name(troop: Troop) -> str:
    return UNITS[troop].name


def parse_troop(token: str) -> Troop:
    """Resolve a CLI token (e.g. "aircraft-carrier") to its Troop.

    Matching is exact and case-sensitive.
    """
    try:
        return Troop(token)
    except ValueError:
        raise ValueError(
            f"Unknown unit: {token!r}. Valid units: {', '.join(TOKENS)}"
        ) from None
