from __future__ import annotations

from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .config import Collection, Config
from .errors import IndexOutOfBounds, IOFailure, NotFound, UserDeclined
from .output import info
from .query import Candidate, query_all_items, query_collections_by_name
from .shell import ShellRunner, run_shell

T = TypeVar("T")

Chooser = Callable[[Sequence[str]], Optional[int]]

CHOOSE_PROMPT = "What do you choose?"


def resolve(candidates: Sequence[T], labels: Sequence[str], chooser: Chooser, missing: str) -> T:
    """Pick exactly one candidate.

    Zero candidates raise ``NotFound(missing)``; a single candidate is returned
    without asking; otherwise ``chooser`` gets the labels (same order as
    ``candidates``) and answers with a zero-based index.
    """

    if not candidates:
        raise NotFound(missing)
    if len(candidates) == 1:
        return candidates[0]

    index = chooser(labels)
    if index is None:
        raise UserDeclined("Nothing selected.")
    if not 0 <= index < len(candidates):
        raise IndexOutOfBounds(f"Index out of bounds: {index} (of {len(candidates)} choices)")
    return candidates[index]


def display_pairs(candidates: Sequence[Candidate]) -> List[str]:
    """Menu labels for items, naming the collection only where labels collide."""

    counts = Counter(candidate.label for candidate in candidates)
    return [
        f'{candidate.label} (from collection "{candidate.collection}")' if counts[candidate.label] > 1 else candidate.label
        for candidate in candidates
    ]


def select_collection(config: Config, query: str, chooser: Chooser) -> Tuple[str, Collection]:
    if not config.collections:
        raise NotFound("No collections are found!")
    matches = query_collections_by_name(config, query)
    if len(matches) > 1:
        info("Multiple collections had been found.")
    return resolve(matches, [name for name, _ in matches], chooser, "Cannot find any collections with that query.")


def select_item(config: Config, query: str, chooser: Chooser) -> Candidate:
    candidates = [
        Candidate(name, label, payload)
        for name, pairs in query_all_items(config, query)
        for label, payload in pairs
    ]
    return resolve(candidates, display_pairs(candidates), chooser, "Cannot find any items with that query.")


def terminal_chooser(labels: Sequence[str]) -> Optional[int]:
    """Numbered in-terminal selector. ``None`` when input is closed or interrupted."""

    while True:
        print(CHOOSE_PROMPT)
        for idx, label in enumerate(labels, start=1):
            print(f"  {idx}. {label}")
        try:
            choice = input("Enter number: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        if choice.isdigit():
            index = int(choice) - 1
            if 0 <= index < len(labels):
                return index
        print(f"Invalid selection '{choice}'. Please try again.")


def read_menu_selection(menu: str, labels: Sequence[str], shell: ShellRunner = run_shell) -> str:
    """Pipe ``labels`` into the menu program and return the line it prints."""

    result = shell(menu, stdin_text="\n".join(labels) + "\n", capture=True)
    # sh reports 126/127 when the menu program cannot be executed.
    if result.returncode in (126, 127):
        raise IOFailure(
            f"Cannot run menu '{menu}' (exit status {result.returncode}). "
            "Your menu application might not be installed or you might have messed up your flags."
        )
    lines = result.stdout.splitlines()
    return lines[0] if lines else ""

