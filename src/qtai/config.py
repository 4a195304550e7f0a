from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - Python <3.11 fallback
    import tomli as tomllib  # type: ignore[no-redef]

from .errors import IOFailure, StructureMismatch

APP_NAME = "qtai"
CONFIG_FILE_NAME = "qtai.toml"
CONFIG_ENV_VAR = "QTAI_CONFIG"

RUNNER_KEY = "default_runner"
MENU_KEY = "default_menu"
COLLECTIONS_KEY = "collections"

TEMPLATE_RUNNER = "notify-send $1"
TEMPLATE_MENU = "dmenu"
TEMPLATE_COLLECTION = "example"
TEMPLATE_ITEMS = {"example key": "example value"}


@dataclass(frozen=True)
class Collection:
    default_runner: Optional[str] = None
    items: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Config:
    default_runner: str
    default_menu: str
    collections: Dict[str, Collection] = field(default_factory=dict)


def default_config_path() -> Path:
    """Resolve the config file location: $QTAI_CONFIG, then the XDG config dir."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME")
    config_dir = Path(base) if base else Path.home() / ".config"
    return config_dir / APP_NAME / CONFIG_FILE_NAME


def load_config(path: Path) -> Config:
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise StructureMismatch(f"Cannot parse config file {path}: {exc}") from exc
    except OSError as exc:
        raise IOFailure(f"Cannot read config file {path}: {exc}") from exc
    return config_from_dict(data)


def config_from_dict(data: dict) -> Config:
    default_runner = data.get(RUNNER_KEY)
    default_menu = data.get(MENU_KEY)
    if not isinstance(default_runner, str) or not isinstance(default_menu, str):
        raise StructureMismatch(
            "Something went wrong from reading config file. "
            "Make sure to have default runner and default menu set on the top level."
        )

    raw_collections = data.get(COLLECTIONS_KEY, {})
    if not isinstance(raw_collections, dict):
        raise StructureMismatch(f"'{COLLECTIONS_KEY}' must be a table")

    collections: Dict[str, Collection] = {}
    for name, raw in raw_collections.items():
        collections[name] = _collection_from_dict(name, raw)
    return Config(default_runner=default_runner, default_menu=default_menu, collections=collections)


def _collection_from_dict(name: str, raw: object) -> Collection:
    if not isinstance(raw, dict):
        raise StructureMismatch(f"Collection \"{name}\" is not a table")

    runner = raw.get(RUNNER_KEY)
    if runner is not None and not isinstance(runner, str):
        raise StructureMismatch(f"Collection \"{name}\" has a non-string default_runner")

    items: Dict[str, str] = {}
    for label, payload in raw.items():
        if label == RUNNER_KEY:
            continue
        if not isinstance(payload, str):
            raise StructureMismatch(f"Item \"{label}\" in collection \"{name}\" must be a string")
        items[label] = payload
    return Collection(default_runner=runner, items=items)


def template() -> Config:
    return Config(
        default_runner=TEMPLATE_RUNNER,
        default_menu=TEMPLATE_MENU,
        collections={TEMPLATE_COLLECTION: Collection(items=dict(TEMPLATE_ITEMS))},
    )
