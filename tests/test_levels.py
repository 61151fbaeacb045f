import gzip

import pytest

from sokoban_engine.levels.io import (
    builtin_level_names,
    decode_level_bytes,
    iterate_level_files,
    load_builtin_levels,
    load_level_by_id,
    load_level_file,
    load_levels,
    parse_level_id,
)
from sokoban_engine.levels.progress import first_unsolved, is_last_left, max_allowed_level
from sokoban_engine.parser import parse_levels

PACK = "; Pack\n\n#####\n#@$.#\n#####\n\n######\n#@ $.#\n######\n"

FIVE = "\n\n".join("#" * (5 + i) + "\n#@" + " " * i + "$.#\n" + "#" * (5 + i) for i in range(5))


def test_builtin_levels():
    assert "starter" in builtin_level_names()
    levels = load_builtin_levels()
    assert len(levels) == 3
    assert levels.comment == "Starter levels"
    assert [lv.title for lv in levels] == ["1", "2", "3"]
    assert levels.skipped == []
    with pytest.raises(FileNotFoundError):
        load_builtin_levels("nope")


def test_gzip_and_encodings():
    raw = PACK.encode("utf-8")
    assert decode_level_bytes(gzip.compress(raw)) == PACK
    assert decode_level_bytes(raw) == PACK
    assert decode_level_bytes("; caf\xe9\n".encode("latin-1")) == "; caf\xe9\n"
    assert len(load_levels(gzip.compress(raw))) == 2


def test_iterate_and_load_files(tmp_path):
    sub = tmp_path / "packs"
    sub.mkdir()
    (sub / "a.xsb").write_text(PACK)
    (sub / "b.txt.gz").write_bytes(gzip.compress(PACK.encode("utf-8")))
    (sub / "notes.md").write_text("nothing")
    files = list(iterate_level_files(str(tmp_path), ["packs", "missing"]))
    assert [f.rsplit("/", 1)[-1] for f in files] == ["a.xsb", "b.txt.gz"]
    for f in files:
        assert len(load_level_file(f)) == 2


def test_level_ids(tmp_path):
    path = tmp_path / "pack.xsb"
    path.write_text(PACK)
    assert parse_level_id("x/y.xsb#3") == ("x/y.xsb", 3)
    assert parse_level_id("x/y.xsb") == ("x/y.xsb", 0)
    level = load_level_by_id(f"{path}#1")
    assert level.index == 1
    assert level.start.width == 6
    with pytest.raises(IndexError):
        load_level_by_id(f"{path}#5")


def test_level_selection_helpers():
    levels = parse_levels(FIVE)
    assert len(levels) == 5
    assert first_unsolved(levels) == 0
    assert max_allowed_level(levels) == 3
    assert not is_last_left(levels, 0)

    for lv in levels.levels[:2]:
        lv.known_solution = "R"
    assert first_unsolved(levels) == 2
    assert max_allowed_level(levels) == 5

    for i in (2, 3):
        levels[i].known_solution = "R"
    assert is_last_left(levels, 4)
    assert not is_last_left(levels, 3)
    assert not is_last_left(levels, -1)

    levels[4].known_solution = "R"
    assert first_unsolved(levels) == 0
