"""
IPC Ledger - CLI Entry Point
=============================
Usage:
    python cli.py setup <initial_ipc>
    python cli.py status
    python cli.py purchase <unit> [quantity]
    python cli.py remove <unit> [quantity]
    python cli.py commit <ipc>
    python cli.py units
    python cli.py interactive
    python cli.py web [--port 8080]
"""

import argparse
import logging

from ipc_ledger.catalog import TOKENS, parse_troop
from ipc_ledger.format import print_units
from ipc_ledger.io import FileStore, resolve_state_file
from ipc_ledger.ledger import Ledger

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_setup(ledger, args):
    ledger.setup(args.initial_ipc)


def cmd_status(ledger, args):
    ledger.status()


def cmd_purchase(ledger, args):
    ledger.purchase(parse_troop(args.unit), args.quantity)


def cmd_remove(ledger, args):
    ledger.remove(parse_troop(args.unit), args.quantity)


def cmd_commit(ledger, args):
    ledger.commit(args.ipc)


def cmd_interactive(store):
    from ipc_ledger.repl import LedgerREPL
    repl = LedgerREPL(store)
    repl.cmdloop()


def build_parser():
    parser = argparse.ArgumentParser(
        description="Track IPC and unit purchases turn by turn",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--state-file", "-f", default=None,
                        help="Game state file (default: $IPC_LEDGER_STATE or state.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # setup
    p_setup = sub.add_parser("setup", help="Setup a new game")
    p_setup.add_argument("initial_ipc", type=int,
                         help="The IPC you start out with")

    # status
    sub.add_parser("status", help="Show the current status of the game")

    # purchase
    p_buy = sub.add_parser("purchase", aliases=["buy"],
                           help="Add a unit type to the current purchase")
    p_buy.add_argument("unit", choices=TOKENS, metavar="unit",
                       help=f"Unit to add: {', '.join(TOKENS)}")
    p_buy.add_argument("quantity", type=int, nargs="?", default=1,
                       help="How many to add (default: 1)")

    # remove
    p_rm = sub.add_parser("remove", aliases=["rm"],
                          help="Remove something from this turn's purchase")
    p_rm.add_argument("unit", choices=TOKENS, metavar="unit",
                      help=f"Unit to remove: {', '.join(TOKENS)}")
    p_rm.add_argument("quantity", type=int, nargs="?", default=None,
                      help="How many to remove (default: all)")

    # commit
    p_commit = sub.add_parser("commit",
                              help="Check and commit the purchase, then add this turn's IPC")
    p_commit.add_argument("ipc", type=int, help="The IPC you get this round")

    # units
    sub.add_parser("units", help="List unit types and costs")

    # interactive
    sub.add_parser("interactive", aliases=["repl", "i"],
                   help="Interactive REPL mode")

    # web
    p_web = sub.add_parser("web", aliases=["serve"],
                           help="Start the web frontend")
    p_web.add_argument("--port", type=int, default=8080,
                       help="Port to serve on (default: 8080)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    state_file = resolve_state_file(args.state_file)
    logger.debug(f"Using state file {state_file}")
    store = FileStore(state_file)
    ledger = Ledger(store)

    if args.command == "setup":
        cmd_setup(ledger, args)
    elif args.command == "status":
        cmd_status(ledger, args)
    elif args.command in ("purchase", "buy"):
        cmd_purchase(ledger, args)
    elif args.command in ("remove", "rm"):
        cmd_remove(ledger, args)
    elif args.command == "commit":
        cmd_commit(ledger, args)
    elif args.command == "units":
        print_units()
    elif args.command in ("interactive", "repl", "i"):
        cmd_interactive(store)
    elif args.command in ("web", "serve"):
        from ipc_ledger.web import start_server
        start_server(port=args.port, state_file=state_file)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
