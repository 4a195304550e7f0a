from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from qtai.config import Config, config_from_dict, load_config
from qtai.context import Context
from qtai.shell import ShellResult

SAMPLE_CONFIG = """\
# qtai launcher config
default_runner = 'sh -c'
default_menu = "dmenu"

# Web things
[collections.web]
default_runner = 'xdg-open $1'
deploy = "./deploy.sh"  # production
"Docs Site" = "https://docs.example.com"

[collections.db]
default_runner = 'psql -f $1'
deploy = "./db-deploy.sh"
backup = "pg_dump prod"

[collections."Empty One"]
"""


class ScriptedChooser:
    """Answers every prompt with the next scripted index and records the labels shown."""

    def __init__(self, *answers: Optional[int]):
        self.answers = list(answers)
        self.calls: List[List[str]] = []

    def __call__(self, labels: Sequence[str]) -> Optional[int]:
        self.calls.append(list(labels))
        if not self.answers:
            raise AssertionError(f"Unexpected chooser call with {labels!r}")
        return self.answers.pop(0)


class RecordingShell:
    def __init__(self, *outputs: str, returncode: int = 0):
        self.outputs = list(outputs)
        self.returncode = returncode
        self.calls: List[dict] = []

    def __call__(self, command, args=(), *, stdin_text=None, capture=False) -> ShellResult:
        self.calls.append({"command": command, "args": list(args), "stdin_text": stdin_text, "capture": capture})
        stdout = self.outputs.pop(0) if capture and self.outputs else ""
        return ShellResult(returncode=self.returncode, stdout=stdout)


@pytest.fixture
def scripted_chooser():
    return ScriptedChooser


@pytest.fixture
def recording_shell():
    return RecordingShell


@pytest.fixture(autouse=True)
def no_color(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CONFIG


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "qtai.toml"
    path.write_text(SAMPLE_CONFIG)
    return path


@pytest.fixture
def config(config_file: Path) -> Config:
    return load_config(config_file)


@pytest.fixture
def web_db_config() -> Config:
    return config_from_dict(
        {
            "default_runner": "sh -c",
            "default_menu": "dmenu",
            "collections": {
                "web": {"default_runner": "web-runner $1", "deploy": "./deploy.sh"},
                "db": {"default_runner": "db-runner $1", "deploy": "./db-deploy.sh"},
            },
        }
    )


@pytest.fixture
def make_context(config_file: Path):
    def _make(*answers: Optional[int], assume_yes: bool = False, shell=None) -> Context:
        ctx = Context(config_path=config_file, assume_yes=assume_yes, chooser=ScriptedChooser(*answers))
        if shell is not None:
            ctx.shell = shell
        return ctx

    return _make


@pytest.fixture
def answer_input(monkeypatch: pytest.MonkeyPatch):
    """Feed scripted answers to ``input()``; an exhausted script behaves like a closed stdin."""

    def _answer(*responses: str) -> List[str]:
        remaining = list(responses)
        prompts: List[str] = []

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts

    return _answer

