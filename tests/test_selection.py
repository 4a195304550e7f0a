from __future__ import annotations

import pytest

from qtai.config import Config
from qtai.errors import IndexOutOfBounds, IOFailure, NotFound, UserDeclined
from qtai.query import Candidate
from qtai.selection import (
    display_pairs,
    read_menu_selection,
    resolve,
    select_collection,
    select_item,
    terminal_chooser,
)


def test_resolve_without_candidates_fails(scripted_chooser):
    with pytest.raises(NotFound, match="nothing here"):
        resolve([], [], scripted_chooser(), "nothing here")


def test_resolve_single_candidate_skips_chooser(scripted_chooser):
    chooser = scripted_chooser()
    assert resolve(["only"], ["only"], chooser, "missing") == "only"
    assert chooser.calls == []


def test_resolve_multiple_uses_chooser_index(scripted_chooser):
    chooser = scripted_chooser(2)
    candidates = [("a", 1), ("b", 2), ("c", 3)]
    assert resolve(candidates, ["a", "b", "c"], chooser, "missing") == ("c", 3)
    assert chooser.calls == [["a", "b", "c"]]


@pytest.mark.parametrize("index", [3, -1])
def test_resolve_rejects_out_of_range_index(scripted_chooser, index):
    with pytest.raises(IndexOutOfBounds):
        resolve(["a", "b", "c"], ["a", "b", "c"], scripted_chooser(index), "missing")


def test_resolve_cancelled_chooser_is_a_decline(scripted_chooser):
    with pytest.raises(UserDeclined):
        resolve(["a", "b"], ["a", "b"], scripted_chooser(None), "missing")


def test_display_pairs_only_disambiguates_colliding_labels():
    candidates = [
        Candidate("A", "build", "make"),
        Candidate("B", "build", "cargo build"),
        Candidate("A", "deploy", "./deploy.sh"),
    ]
    assert display_pairs(candidates) == [
        'build (from collection "A")',
        'build (from collection "B")',
        "deploy",
    ]


def test_select_item_disambiguates_by_collection(config, scripted_chooser):
    chooser = scripted_chooser(1)
    chosen = select_item(config, "deploy", chooser)
    assert chosen == Candidate("db", "deploy", "./db-deploy.sh")
    assert chooser.calls == [['deploy (from collection "web")', 'deploy (from collection "db")']]


def test_select_item_unique_match(config, scripted_chooser):
    assert select_item(config, "PG_DUMP", scripted_chooser()) == Candidate("db", "backup", "pg_dump prod")


def test_select_item_not_found(config, scripted_chooser):
    with pytest.raises(NotFound, match="Cannot find any items"):
        select_item(config, "nothing-like-this", scripted_chooser())


def test_select_collection(config, scripted_chooser):
    name, collection = select_collection(config, "DB", scripted_chooser())
    assert name == "db"
    assert collection.default_runner == "psql -f $1"

    chooser = scripted_chooser(1)
    name, _ = select_collection(config, "e", chooser)
    assert name == "Empty One"
    assert chooser.calls == [["web", "Empty One"]]


def test_select_collection_failures(config, scripted_chooser):
    with pytest.raises(NotFound, match="Cannot find any collections"):
        select_collection(config, "nope", scripted_chooser())
    empty = Config(default_runner="", default_menu="dmenu")
    with pytest.raises(NotFound, match="No collections are found!"):
        select_collection(empty, "", scripted_chooser())


def test_terminal_chooser_reprompts_until_valid(answer_input, capsys):
    prompts = answer_input("x", "5", "2")
    assert terminal_chooser(["first", "second"]) == 1
    assert len(prompts) == 3
    out = capsys.readouterr().out
    assert "  1. first" in out
    assert "Invalid selection '5'" in out


def test_terminal_chooser_closed_input_cancels(answer_input):
    answer_input()
    assert terminal_chooser(["first", "second"]) is None


def test_read_menu_selection_pipes_labels(recording_shell):
    shell = recording_shell("second\n")
    assert read_menu_selection("dmenu -l 10", ["first", "second"], shell) == "second"
    assert shell.calls == [
        {"command": "dmenu -l 10", "args": [], "stdin_text": "first\nsecond\n", "capture": True}
    ]


def test_read_menu_selection_dismissed_menu(recording_shell):
    assert read_menu_selection("dmenu", ["first"], recording_shell("", returncode=1)) == ""


def test_read_menu_selection_missing_program(recording_shell):
    with pytest.raises(IOFailure, match="Cannot run menu"):
        read_menu_selection("not-a-menu", ["first"], recording_shell("", returncode=127))
