from __future__ import annotations

from typing import Optional

YES = {"y", "yes"}
NO = {"n", "no"}


def _suffix(default: Optional[bool]) -> str:
    if default is True:
        return "(Y/n)"
    if default is False:
        return "(y/N)"
    return "(y/n)"


def confirm(question: str, *, default: Optional[bool] = None, assume_yes: bool = False) -> bool:
    """Ask a yes/no question. With no ``default`` an explicit answer is required."""

    if assume_yes:
        return True

    while True:
        try:
            response = input(f"{question} {_suffix(default)}: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return bool(default)
        if response in YES:
            return True
        if response in NO:
            return False
        if not response and default is not None:
            return default
        print("Please answer y or n.")
