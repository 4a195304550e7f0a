from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .selection import Chooser, terminal_chooser
from .shell import ShellRunner, run_shell


@dataclass
class Context:
    """Per-invocation state handed to every command handler."""

    config_path: Path
    assume_yes: bool = False
    chooser: Chooser = terminal_chooser
    shell: ShellRunner = run_shell
