from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .config import APP_NAME
from .errors import IOFailure


@dataclass
class ShellResult:
    returncode: int
    stdout: str = ""


class ShellRunner(Protocol):
    def __call__(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        stdin_text: Optional[str] = None,
        capture: bool = False,
    ) -> ShellResult: ...


def run_shell(
    command: str,
    args: Sequence[str] = (),
    *,
    stdin_text: Optional[str] = None,
    capture: bool = False,
) -> ShellResult:
    """Run ``command`` through ``sh -c``; ``args`` become ``$1``, ``$2``, ..."""

    cmd = ["sh", "-c", command, APP_NAME, *args]
    try:
        result = subprocess.run(
            cmd,
            input=stdin_text,
            text=True,
            stdout=subprocess.PIPE if capture else None,
        )
    except OSError as exc:
        raise IOFailure(f"Cannot run the command: {exc}") from exc
    return ShellResult(returncode=result.returncode, stdout=result.stdout if capture else "")
