from __future__ import annotations
from typing import Optional

from .history import History
from .state import Level, State


def render_ascii(state: State) -> str:
    """ASCII (XSB) visualization of the state."""
    out_lines = []
    for y in range(state.height):
        row_chars = []
        for x in range(state.width):
            idx = y * state.width + x
            if state.is_wall(idx):
                row_chars.append('#')
                continue
            if not state.is_floor(idx):
                row_chars.append(' ')
                continue
            has_goal = state.is_goal_cell(idx)
            if idx == state.player:
                row_chars.append('+' if has_goal else '@')
            elif state.has_box(idx):
                row_chars.append('*' if has_goal else '$')
            else:
                row_chars.append('.' if has_goal else ' ')
        out_lines.append(''.join(row_chars).rstrip())
    return "\n".join(out_lines)


def dump_snapshot(level: Level, state: Optional[State] = None, history: Optional[str] = None) -> str:
    """Text export of a level position and its moves, for pasting elsewhere.

    With no state the level's start position is used; `history` may be a
    History or a plain solution string.
    """
    state = state if state is not None else level.start
    moves = str(history) if history is not None else ""
    parts = [f"; Level id: {level.fingerprint:X}", "", render_ascii(state), ""]
    if moves:
        parts += ["; Solution", f"; {moves}"]
    else:
        parts.append("; No solution available")
    return "\n".join(parts) + "\n"


def dump_session(level: Level, state: State, history: History) -> str:
    return dump_snapshot(level, state, str(history))
