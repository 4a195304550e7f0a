from __future__ import annotations

import argparse
import textwrap
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import __version__

SELECTIVE_HELP = "Make collection more selective, only filtering collections with the exact same name"


@dataclass
class Options:
    command: str
    config_path: Optional[Path] = None
    assume_yes: bool = False
    collections: List[str] = field(default_factory=list)
    selective: bool = False
    runner: Optional[str] = None
    menu: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None
    query: Optional[str] = None
    name: Optional[str] = None
    collection_query: Optional[str] = None


COMMAND_ALIASES = {
    "r": "run",
    "t": "terminal-run",
    "a": "add-item",
    "ri": "remove-item",
    "ac": "add-collection",
    "rc": "remove-collection",
    "l": "list",
    "s": "search",
    "cr": "change-runner",
    "cm": "change-menu",
    "gcf": "generate-config-file",
}


def build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent(
        """\
        Examples:
          qtai run                         # Pick from every collection with the default menu
          qtai run -d "fzf" web            # Use fzf, only collections matching "web"
          qtai terminal-run -s web         # Pick in the terminal from the "web" collection only
          qtai add-item deploy ./deploy.sh web
          qtai change-runner 'sh -c "$1"' -q web
        """
    )
    parser = argparse.ArgumentParser(
        prog="qtai",
        description="Run dmenu with configured items and runners",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument("-y", "--assume-yes", action="store_true", help="Assume yes during confirmations")
    parser.add_argument("-c", "--config", dest="config_path", type=Path, help="Custom config path")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    run = sub.add_parser("run", aliases=["r"], help="Run dmenu application")
    run.add_argument("-d", "--menu", "--dmenu", dest="menu", help='Menu application. Default is the configured "default_menu".')
    run.add_argument("-r", "--runner", help="Command to run from item.")
    run.add_argument("-s", "--selective", action="store_true", help=SELECTIVE_HELP)
    run.add_argument("collections", nargs="*", help="Collections to input")

    terminal = sub.add_parser("terminal-run", aliases=["t"], help="Run within terminal")
    terminal.add_argument("-r", "--runner", help="Command to run from item.")
    terminal.add_argument("-s", "--selective", action="store_true", help=SELECTIVE_HELP)
    terminal.add_argument("collections", nargs="*", help="Collections to input")

    add_item = sub.add_parser("add-item", aliases=["a"], help="Adds an item into a collection")
    add_item.add_argument("key", help="Key to add.")
    add_item.add_argument("value", help="Value linked to the key to add.")
    add_item.add_argument("collection_query", help="Determine what collection to edit.")

    remove_item = sub.add_parser("remove-item", aliases=["ri"], help="Removes an item from a config.")
    remove_item.add_argument("query")

    add_collection = sub.add_parser("add-collection", aliases=["ac"], help="Adds a collection into a config.")
    add_collection.add_argument("name", help="Collection name to add.")

    remove_collection = sub.add_parser("remove-collection", aliases=["rc"], help="Remove a collection from the config.")
    remove_collection.add_argument("query")

    list_cmd = sub.add_parser("list", aliases=["l"], help="Lists items from a config.")
    list_cmd.add_argument("collections", nargs="*", help="Collections to list. Default is all.")
    list_cmd.add_argument("-s", "--selective", action="store_true", help=SELECTIVE_HELP)

    search = sub.add_parser("search", aliases=["s"], help="Search an item from a config.")
    search.add_argument("query")

    change_runner = sub.add_parser("change-runner", aliases=["cr"], help="Alter the default runner.")
    change_runner.add_argument("new_runner")
    change_runner.add_argument(
        "-q",
        "--collection",
        dest="collection_query",
        help="Collection to change runner. Default is changing global runner.",
    )

    change_menu = sub.add_parser("change-menu", aliases=["cm"], help="Alter the default menu for qtai run.")
    change_menu.add_argument("new_menu")

    sub.add_parser("generate-config-file", aliases=["gcf"], help="Generates config file.")
    return parser


def parse_args(argv: List[str]) -> Options:
    args = build_parser().parse_args(argv)
    command = COMMAND_ALIASES.get(args.command, args.command)

    value = getattr(args, "value", None)
    if command == "change-runner":
        value = args.new_runner
    elif command == "change-menu":
        value = args.new_menu

    return Options(
        command=command,
        config_path=args.config_path,
        assume_yes=args.assume_yes,
        collections=list(getattr(args, "collections", None) or []),
        selective=getattr(args, "selective", False),
        runner=getattr(args, "runner", None),
        menu=getattr(args, "menu", None),
        key=getattr(args, "key", None),
        value=value,
        query=getattr(args, "query", None),
        name=getattr(args, "name", None),
        collection_query=getattr(args, "collection_query", None),
    )
