from __future__ import annotations

from pathlib import Path
from typing import Optional

import tomlkit

from .config import COLLECTIONS_KEY, MENU_KEY, RUNNER_KEY, Config, template
from .context import Context
from .document import (
    append_collection_block,
    command_string,
    load_document,
    read_text,
    remove_key,
    save_document,
    set_value,
    write_text,
)
from .errors import DuplicateKey, UserDeclined
from .output import bold, done, info
from .prompt import confirm
from .selection import select_collection, select_item


def add_item(ctx: Context, config: Config, key: str, value: str, collection_query: str) -> None:
    name, collection = select_collection(config, collection_query, ctx.chooser)
    if key in collection.items or (key == RUNNER_KEY and collection.default_runner is not None):
        raise DuplicateKey("Collection already has key.")

    doc = load_document(ctx.config_path)
    set_value(doc, [COLLECTIONS_KEY, name, key], value)
    save_document(ctx.config_path, doc)
    info('Key pair added to collection "%s".', name)
    done()


def remove_item(ctx: Context, config: Config, query: str) -> None:
    chosen = select_item(config, query, ctx.chooser)
    info('Deleting "%s": "%s" from collection "%s"', chosen.label, chosen.payload, chosen.collection)

    doc = load_document(ctx.config_path)
    remove_key(doc, [COLLECTIONS_KEY, chosen.collection], chosen.label)
    save_document(ctx.config_path, doc)
    info("Item removed.")
    done()


def add_collection(ctx: Context, config: Config, name: str) -> None:
    if name in config.collections:
        raise DuplicateKey("Config already has this key.")

    write_text(ctx.config_path, append_collection_block(read_text(ctx.config_path), name))
    info("Collection added.")
    done()


def remove_collection(ctx: Context, config: Config, query: str) -> None:
    name, _ = select_collection(config, query, ctx.chooser)
    info('Found collection: "%s"', bold(name))
    if not confirm("Are you sure? This cannot be undone.", default=False, assume_yes=ctx.assume_yes):
        raise UserDeclined("User changed their mind.")

    doc = load_document(ctx.config_path)
    remove_key(doc, [COLLECTIONS_KEY], name)
    save_document(ctx.config_path, doc)
    info('Collection "%s" removed.', name)
    done()


def change_runner(ctx: Context, config: Config, new_runner: str, collection_query: Optional[str] = None) -> None:
    if collection_query is None:
        path = [RUNNER_KEY]
    else:
        name, _ = select_collection(config, collection_query, ctx.chooser)
        info('Found collection: "%s"', bold(name))
        path = [COLLECTIONS_KEY, name, RUNNER_KEY]

    doc = load_document(ctx.config_path)
    set_value(doc, path, command_string(new_runner))
    save_document(ctx.config_path, doc)
    done()


def change_menu(ctx: Context, config: Config, new_menu: str) -> None:
    doc = load_document(ctx.config_path)
    set_value(doc, [MENU_KEY], command_string(new_menu))
    save_document(ctx.config_path, doc)
    done()


def render_template() -> str:
    cfg = template()
    doc = tomlkit.document()
    doc.add(RUNNER_KEY, command_string(cfg.default_runner))
    doc.add(MENU_KEY, cfg.default_menu)
    doc.add(tomlkit.nl())

    collections = tomlkit.table(is_super_table=True)
    for name, collection in cfg.collections.items():
        table = tomlkit.table()
        for label, payload in collection.items.items():
            table.add(label, payload)
        collections.add(name, table)
    doc.add(COLLECTIONS_KEY, collections)
    return tomlkit.dumps(doc)


def generate_config_file(path: Path) -> Config:
    parent = path.parent
    if not parent.is_dir():
        parent.mkdir(parents=True, exist_ok=True)
        info("Created parent directories.")

    write_text(path, render_template())
    info("Config generated (^-^)b")
    return template()
