import pytest

from sokoban_engine.errors import IllegalReplay, InvalidSolutionSyntax
from sokoban_engine.moves import Direction, Result
from sokoban_engine.parser import parse_levels
from sokoban_engine.session import GameSession
from sokoban_engine.store import SolutionStore

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def _session():
    return GameSession(parse_levels(LVL)[0])


def test_move_records_history_and_solves():
    s = _session()
    assert s.move(Direction.LEFT).blocked
    assert s.score() == (0, 0)
    s.move(Direction.RIGHT)
    out = s.move(Direction.DOWN)
    assert out.result == Result.PUSHED | Result.SOLVED
    assert s.is_solved
    assert str(s.history) == "rD"
    assert s.score() == (2, 1)


def test_resolve_then_apply():
    s = _session()
    start = s.state
    out = s.resolve(Direction.RIGHT)
    assert s.state == start
    assert len(s.history) == 0
    s.apply(out)
    assert s.state != start
    assert str(s.history) == "r"


def test_undo_restores_previous_state_exactly():
    s = _session()
    s.move(Direction.RIGHT)
    before = s.state
    s.move(Direction.DOWN)
    assert s.undo()
    assert s.state == before
    assert s.score() == (1, 0)
    assert s.undo()
    assert s.state == s.level.start
    assert not s.undo()


def test_restart():
    s = _session()
    s.move(Direction.RIGHT)
    s.restart()
    assert s.state == s.level.start
    assert str(s.history) == ""


def test_load_solution():
    s = _session()
    s.move(Direction.RIGHT)
    last = s.load_solution("rD")
    assert last.solved
    assert s.is_solved
    assert s.score() == (2, 1)

    with pytest.raises(InvalidSolutionSyntax):
        s.load_solution("rDx")
    assert s.is_solved

    with pytest.raises(IllegalReplay):
        s.load_solution("uuu")
    assert s.state == s.level.start
    assert str(s.history) == ""


def test_load_solution_recomputes_push_tags(tmp_path):
    s = _session()
    s.load_solution("RD")
    assert str(s.history) == "rD"
    assert s.score() == (2, 1)

    store = SolutionStore(str(tmp_path))
    assert store.record_solution(s.level, s.history)
    assert store.load(s.level.fingerprint, "sol") == "rD"


def test_playback_yields_every_move():
    s = _session()
    outcomes = list(s.playback("rD"))
    assert [o.symbol for o in outcomes] == ["r", "D"]
    assert s.is_solved

    gen = s.playback("rl2u")
    assert next(gen).symbol == "r"
    assert next(gen).symbol == "l"
    with pytest.raises(IllegalReplay):
        next(gen)


def test_best_score():
    s = _session()
    assert s.best_score() is None
    s.level.known_solution = "r2dD"
    assert s.best_score() == (4, 1)
