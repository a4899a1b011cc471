"""
IPC Ledger - Output Formatting
===============================
Pretty-printing for the game state and the unit catalog.
"""

from ipc_ledger.catalog import UNITS, cost, display_name
from ipc_ledger.models import GameState, Troop


def fmt_ipc(val: int) -> str:
    return f"{val} ipc"


def plural(troop: Troop) -> str:
    return f"{display_name(troop)}s"


def status_lines(state: GameState) -> list:
    lines = ["Current game state:", "Purchases:"]
    for troop, qty in state.pending.items():
        lines.append(f"\t{display_name(troop)} : {qty} á {fmt_ipc(cost(troop))}")
    lines.append(f"At a total cost of {fmt_ipc(state.total_cost)}")
    lines.append(f"Remaining IPC: {state.remaining}")
    return lines


def print_status(state: GameState):
    for line in status_lines(state):
        print(line)


def print_units():
    print(f"\n{'Key':<20} {'Name':<20} {'Branch':<6} {'Cost':>5}")
    print("-" * 54)
    for troop, info in UNITS.items():
        print(f"{troop.value:<20} {info.name:<20} {info.branch:<6} {info.cost:>5}")
    print()


def print_unit_info(troop: Troop):
    info = UNITS[troop]
    print(f"\n  {info.name} ({troop.value})")
    print(f"  Branch:  {info.branch}")
    print(f"  Cost:    {fmt_ipc(info.cost)}")
    print()
