"""
IPC Ledger - Interactive REPL
==============================
"""

import cmd

from ipc_ledger.catalog import parse_troop
from ipc_ledger.format import print_unit_info, print_units
from ipc_ledger.ledger import Ledger


class LedgerREPL(cmd.Cmd):
    intro = (
        "\n"
        "================================================\n"
        "  IPC Ledger - Interactive Mode\n"
        "================================================\n"
        "Type 'help' for commands. Type 'units' for available unit keys.\n"
    )
    prompt = "ipc> "

    def __init__(self, store):
        super().__init__()
        self.ledger = Ledger(store)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def do_setup(self, arg):
        """Start a new game: setup <initial_ipc>"""
        amount = _int_arg(arg)
        if amount is None:
            print("Usage: setup <initial_ipc>")
            return
        self.ledger.setup(amount)

    def do_status(self, arg):
        """Show pending purchases and remaining IPC"""
        if self.ledger.status() is None:
            print("No game in progress. Use 'setup <initial_ipc>' first.")

    def do_purchase(self, arg):
        """Add units to this turn's purchase: purchase <unit> [quantity]"""
        parts = arg.split()
        if not parts or len(parts) > 2:
            print("Usage: purchase <unit> [quantity]")
            return
        troop = self._troop(parts[0])
        if troop is None:
            return
        quantity = _int_arg(parts[1]) if len(parts) > 1 else 1
        if quantity is None:
            print("Usage: purchase <unit> [quantity]")
            return
        self.ledger.purchase(troop, quantity)

    def do_remove(self, arg):
        """Remove units from this turn's purchase: remove <unit> [quantity]
        Without a quantity, all units of that type are removed."""
        parts = arg.split()
        if not parts or len(parts) > 2:
            print("Usage: remove <unit> [quantity]")
            return
        troop = self._troop(parts[0])
        if troop is None:
            return
        quantity = None
        if len(parts) > 1:
            quantity = _int_arg(parts[1])
            if quantity is None:
                print("Usage: remove <unit> [quantity]")
                return
        self.ledger.remove(troop, quantity)

    def do_commit(self, arg):
        """Pay for the purchase and add this turn's income: commit <ipc>"""
        amount = _int_arg(arg)
        if amount is None:
            print("Usage: commit <ipc>")
            return
        self.ledger.commit(amount)

    def do_units(self, arg):
        """List available unit keys"""
        print_units()

    def do_info(self, arg):
        """Show unit info: info <unit>"""
        if not arg:
            print("Usage: info <unit>")
            return
        troop = self._troop(arg.strip())
        if troop:
            print_unit_info(troop)

    def do_quit(self, arg):
        """Exit the REPL"""
        print("Bye!")
        return True

    do_exit = do_quit
    do_q = do_quit

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _troop(self, token):
        try:
            return parse_troop(token)
        except ValueError as e:
            print(e)
            return None


def _int_arg(text):
    try:
        return int(text.strip())
    except ValueError:
        return None
