import pytest

from sokoban_engine.errors import IllegalReplay, InvalidSolutionSyntax
from sokoban_engine.history import History, solution_stats, validate_solution
from sokoban_engine.moves import Direction, move
from sokoban_engine.parser import parse_levels

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def test_record_and_undo_counts():
    h = History()
    assert h.undo() is None
    h.record(Direction.RIGHT, False)
    h.record(Direction.DOWN, True)
    assert str(h) == "rD"
    assert (h.move_count, h.push_count) == (2, 1)
    assert h.undo() == "D"
    assert (h.move_count, h.push_count) == (1, 0)
    h.clear()
    assert len(h) == 0 and str(h) == ""


def test_validate_solution():
    assert validate_solution("3rU \n") == "3rU"
    for bad in ["", "   ", "urx", "ur3", "u r"]:
        with pytest.raises(InvalidSolutionSyntax):
            validate_solution(bad)


def test_from_solution_decompresses():
    h = History.from_solution("3r2Ul")
    assert str(h) == "rrrUUl"
    assert (h.move_count, h.push_count) == (6, 2)
    assert h.compressed() == "3r2Ul"
    assert solution_stats("3r2Ul") == (6, 2)
    assert len(History.from_solution("999999999r")) == 9


def test_replay_matches_live_play():
    level = parse_levels(LVL)[0]
    live = level.start
    h = History()
    for d in (Direction.LEFT, Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.UP):
        live, out = move(live, d)
        h.record_outcome(out)
    assert str(h) == "rDlu"
    replayed, last = h.replay(level)
    assert replayed == live
    assert last.symbol == "u"


def test_replay_solves_level():
    level = parse_levels(LVL)[0]
    state, last = History.from_solution("rD").replay(level)
    assert state.is_solved()
    assert last.solved


def test_replay_prefix_and_empty():
    level = parse_levels(LVL)[0]
    h = History("rD")
    state, last = h.replay(level, limit=1)
    assert state.player == level.start.xy_to_idx(2, 1)
    assert last.symbol == "r"
    state, last = History().replay(level.start)
    assert state == level.start and last is None


def test_blocked_replay_is_surfaced():
    level = parse_levels(LVL)[0]
    with pytest.raises(IllegalReplay) as exc:
        History("rDD").replay(level)
    assert exc.value.step == 2
    assert exc.value.symbol == "D"
