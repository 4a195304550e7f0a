from __future__ import annotations

from typing import Dict, List, Mapping, NamedTuple, Sequence, Tuple

from .config import Collection, Config
from .errors import NotFound
from .output import bold, info

Pair = Tuple[str, str]


class Candidate(NamedTuple):
    collection: str
    label: str
    payload: str


def filter_collections(config: Config, names: Sequence[str], selective: bool) -> Dict[str, Collection]:
    """Collections matching any of ``names``; all of them when ``names`` is empty.

    ``selective`` switches from substring matching to exact (case-insensitive)
    name equality. Ordering follows the config file.
    """

    if not names:
        return dict(config.collections)

    wanted = [name.lower() for name in names]
    if selective:
        return {
            name: collection
            for name, collection in config.collections.items()
            if name.lower() in wanted
        }
    return {
        name: collection
        for name, collection in config.collections.items()
        if any(query in name.lower() for query in wanted)
    }


def query_items_in_collection(collection: Collection, query: str) -> List[Pair]:
    # An empty query matches every item.
    needle = query.lower()
    return [
        (label, payload)
        for label, payload in collection.items.items()
        if needle in label.lower() or needle in payload.lower()
    ]


def query_collections_by_name(config: Config, query: str) -> List[Tuple[str, Collection]]:
    needle = query.lower()
    return [(name, collection) for name, collection in config.collections.items() if needle in name.lower()]


def query_all_items(config: Config, query: str) -> List[Tuple[str, List[Pair]]]:
    results = []
    for name, collection in config.collections.items():
        matches = query_items_in_collection(collection, query)
        if matches:
            results.append((name, matches))
    return results


def flatten_items(collections: Mapping[str, Collection]) -> List[Candidate]:
    return [
        Candidate(name, label, payload)
        for name, collection in collections.items()
        for label, payload in collection.items.items()
    ]


def _print_pairs(pairs: Sequence[Pair]) -> None:
    for label, payload in pairs:
        info('"%s": "%s"', label, payload)


def list_collections(config: Config, names: Sequence[str], selective: bool) -> None:
    collections = filter_collections(config, names, selective)
    if not collections:
        raise NotFound("No collections are found")

    for name, collection in collections.items():
        info(bold(name))
        if not collection.items:
            info("This collection is empty.")
        _print_pairs(list(collection.items.items()))
        info("")


def search_items(config: Config, query: str) -> None:
    results = query_all_items(config, query)
    if not results:
        raise NotFound("Cannot find any results with query.")

    for name, pairs in results:
        info(bold(name))
        _print_pairs(pairs)
        info("")
