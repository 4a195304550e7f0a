from __future__ import annotations

import sys
from typing import List

from .args import Options, parse_args
from .config import Config, default_config_path, load_config
from .config_edit import (
    add_collection,
    add_item,
    change_menu,
    change_runner,
    generate_config_file,
    remove_collection,
    remove_item,
)
from .context import Context
from .errors import QtaiError, UserDeclined
from .output import error, info, warning
from .prompt import confirm
from .query import list_collections, search_items
from .runner import run, terminal_run

GENERATE_COMMAND = "generate-config-file"


def determine_config(ctx: Context, command: str) -> Config:
    """Load the config, generating it first when missing or when asked to."""

    path = ctx.config_path
    if command == GENERATE_COMMAND and path.is_file():
        info("Existing config file will be overwritten.")
        if not confirm("Is this okay?", assume_yes=ctx.assume_yes):
            raise UserDeclined("No changes are written.")
        info("Config file is overwritten.")
        return generate_config_file(path)

    if command == GENERATE_COMMAND or not path.is_file():
        if command != GENERATE_COMMAND:
            info("Cannot find config file.")
        info("We will generate the config automatically.")
        if not confirm("Is this okay?", default=True, assume_yes=ctx.assume_yes):
            info("No changes are written.")
            raise UserDeclined("No config file.")
        info("Writing to config file.")
        return generate_config_file(path)

    return load_config(path)


def dispatch(opts: Options, ctx: Context, config: Config) -> int:
    command = opts.command
    if command == "run":
        return run(opts.menu, opts.collections, opts.runner, config, opts.selective, ctx.shell)
    if command == "terminal-run":
        return terminal_run(opts.collections, opts.runner, config, opts.selective, ctx.chooser, ctx.shell)
    if command == "add-item":
        add_item(ctx, config, opts.key, opts.value, opts.collection_query)
    elif command == "remove-item":
        remove_item(ctx, config, opts.query)
    elif command == "add-collection":
        add_collection(ctx, config, opts.name)
    elif command == "remove-collection":
        remove_collection(ctx, config, opts.query)
    elif command == "list":
        list_collections(config, opts.collections, opts.selective)
    elif command == "search":
        search_items(config, opts.query)
    elif command == "change-runner":
        change_runner(ctx, config, opts.value, opts.collection_query)
    elif command == "change-menu":
        change_menu(ctx, config, opts.value)
    return 0


def main(argv: List[str] | None = None) -> int:
    opts = parse_args(list(sys.argv[1:] if argv is None else argv))
    ctx = Context(
        config_path=opts.config_path or default_config_path(),
        assume_yes=opts.assume_yes,
    )

    try:
        config = determine_config(ctx, opts.command)
        return dispatch(opts, ctx, config)
    except UserDeclined as exc:
        warning(str(exc))
        return exc.exit_code
    except QtaiError as exc:
        error("Error: %s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
