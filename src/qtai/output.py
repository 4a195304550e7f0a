from __future__ import annotations

import os
import sys

GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
RED = "\033[0;31m"
BOLD = "\033[1m"
NC = "\033[0m"

COMPLETION_MESSAGE = "Done (^-^)b"


def _paint(colour: str, text: str) -> str:
    if os.environ.get("NO_COLOR"):
        return text
    return colour + text + NC


def bold(text: str) -> str:
    return _paint(BOLD, text)


def success(message: str, *args: object) -> None:
    print(_paint(GREEN, message % args if args else message))


def warning(message: str, *args: object) -> None:
    print(_paint(YELLOW, message % args if args else message), file=sys.stderr)


def error(message: str, *args: object) -> None:
    print(_paint(RED, message % args if args else message), file=sys.stderr)


def info(message: str, *args: object) -> None:
    print(message % args if args else message)


def done() -> None:
    success(COMPLETION_MESSAGE)
