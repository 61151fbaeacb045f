from __future__ import annotations
from typing import Sequence

from sokoban_engine.state import Level


def first_unsolved(levels: Sequence[Level]) -> int:
    """Index of the first level without a known solution; 0 when every level is solved."""
    for i, level in enumerate(levels):
        if not level.is_solved:
            return i
    return 0


def max_allowed_level(levels: Sequence[Level], preview: int = 3) -> int:
    """How many levels, counted from the start, a player may pick from.

    Solved levels are always open and at most `preview` unsolved ones are shown.
    """
    unsolved = 0
    for i, level in enumerate(levels):
        if not level.is_solved:
            unsolved += 1
            if unsolved > preview:
                return i
    return len(levels)


def is_last_left(levels: Sequence[Level], index: int) -> bool:
    """True when levels[index] is the only level of the set still unsolved."""
    if index < 0 or index >= len(levels) or levels[index].is_solved:
        return False
    return all(level.is_solved for i, level in enumerate(levels) if i != index)
