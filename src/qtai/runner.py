from __future__ import annotations

from typing import Optional, Sequence

from .config import Config
from .errors import NotFound, UserDeclined
from .output import info, warning
from .query import Candidate, filter_collections, flatten_items
from .selection import Chooser, display_pairs, read_menu_selection, resolve
from .shell import ShellRunner, run_shell


def resolve_runner(override: Optional[str], origin: Optional[str], config: Config) -> str:
    """Runner for an item: explicit override, then its collection's default, then the global default."""

    if override is not None:
        return override
    if origin is not None:
        collection = config.collections.get(origin)
        if collection is not None and collection.default_runner is not None:
            return collection.default_runner
    return config.default_runner


def _candidates(config: Config, names: Sequence[str], selective: bool) -> list[Candidate]:
    candidates = flatten_items(filter_collections(config, names, selective))
    if not candidates:
        raise NotFound("No items are found")
    return candidates


def run_command(
    origin: Optional[str],
    payload: str,
    override: Optional[str],
    config: Config,
    shell: ShellRunner = run_shell,
) -> int:
    command = resolve_runner(override, origin, config)
    if not command:
        warning("No runner configured. Set one with `qtai change-runner` or pass --runner.")
        return 1

    result = shell(command, [payload])
    if result.returncode != 0:
        warning("Runner '%s' exited with status %s", command, result.returncode)
    return result.returncode


def run(
    menu: Optional[str],
    names: Sequence[str],
    override: Optional[str],
    config: Config,
    selective: bool,
    shell: ShellRunner = run_shell,
) -> int:
    """Pick an item through the external menu program and run it.

    Whatever the menu prints that is not one of the offered labels is taken
    as a free-text payload with no collection, so only the global runner (or
    the override) applies to it.
    """

    candidates = _candidates(config, names, selective)
    labels = display_pairs(candidates)

    selection = read_menu_selection(menu or config.default_menu, labels, shell)
    if not selection:
        raise UserDeclined("Nothing selected.")

    if selection in labels:
        chosen = candidates[labels.index(selection)]
        return run_command(chosen.collection, chosen.payload, override, config, shell)
    return run_command(None, selection, override, config, shell)


def terminal_run(
    names: Sequence[str],
    override: Optional[str],
    config: Config,
    selective: bool,
    chooser: Chooser,
    shell: ShellRunner = run_shell,
) -> int:
    candidates = _candidates(config, names, selective)
    chosen = resolve(candidates, display_pairs(candidates), chooser, "No items are found")
    info("Running %s", chosen.label)
    return run_command(chosen.collection, chosen.payload, override, config, shell)
