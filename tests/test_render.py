"""Tests for the render module."""

from sokoban_engine.levels.io import load_builtin_levels
from sokoban_engine.moves import Direction
from sokoban_engine.parser import parse_levels
from sokoban_engine.render import dump_session, dump_snapshot, render_ascii
from sokoban_engine.session import GameSession

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def test_render_basic_level():
    """Rendering a freshly parsed level gives back its rows."""
    level = parse_levels(LVL)[0]
    assert render_ascii(level.start) == LVL.strip("\n")


def test_render_outside_is_blank():
    level = load_builtin_levels()[2]
    lines = render_ascii(level.start).splitlines()
    assert lines[0] == "  ####"
    assert lines[4] == "# . .#@ #"


def test_render_after_moves():
    s = GameSession(parse_levels(LVL)[0])
    s.move(Direction.RIGHT)
    s.move(Direction.DOWN)
    assert render_ascii(s.state).splitlines()[1:4] == ["#   #", "# @ #", "# * #"]


def test_dump_snapshot():
    s = GameSession(parse_levels(LVL)[0])
    text = dump_snapshot(s.level)
    assert text.startswith(f"; Level id: {s.level.fingerprint:X}\n\n#####\n")
    assert text.endswith("\n; No solution available\n")

    s.move(Direction.RIGHT)
    s.move(Direction.DOWN)
    text = dump_session(s.level, s.state, s.history)
    assert "# * #" in text
    assert text.endswith("; Solution\n; rD\n")
