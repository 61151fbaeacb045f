from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional, Tuple

from .state import State, clear_bit, set_bit


class Direction(Enum):
    """Player directions with their (dx, dy) offset and history symbol."""

    UP = (0, -1, "u")
    DOWN = (0, 1, "d")
    LEFT = (-1, 0, "l")
    RIGHT = (1, 0, "r")

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def symbol(self) -> str:
        return self.value[2]

    def record_symbol(self, was_push: bool) -> str:
        return self.symbol.upper() if was_push else self.symbol

    @staticmethod
    def from_symbol(ch: str) -> "Direction":
        try:
            return _BY_SYMBOL[ch.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown move symbol: {ch!r}") from exc


_BY_SYMBOL = {d.symbol: d for d in Direction}


class Result(Flag):
    BLOCKED = auto()
    STEPPED = auto()
    PUSHED = auto()
    SOLVED = auto()


@dataclass(frozen=True)
class Outcome:
    """What a move does to a given state. Cell fields are board indexes, -1 when unused."""

    direction: Direction
    result: Result
    player_from: int
    player_to: int = -1
    box_from: int = -1
    box_to: int = -1

    @property
    def blocked(self) -> bool:
        return Result.BLOCKED in self.result

    @property
    def pushed(self) -> bool:
        return Result.PUSHED in self.result

    @property
    def solved(self) -> bool:
        return Result.SOLVED in self.result

    @property
    def symbol(self) -> str:
        """History symbol of the move; uppercase for pushes."""
        return self.direction.record_symbol(self.pushed)


def _step(state: State, idx: int, d: Direction) -> Optional[int]:
    """Neighbour of `idx` along `d`, None outside the board."""
    x, y = state.idx_to_xy(idx)
    nx, ny = x + d.dx, y + d.dy
    if not state.in_bounds(nx, ny):
        return None
    return state.xy_to_idx(nx, ny)


def _solved_after(state: State, boxes: int) -> bool:
    return boxes == state.goals


def resolve(state: State, direction: Direction) -> Outcome:
    """Decides between step, push and blocked without touching the state."""
    here = state.player
    target = _step(state, here, direction)
    if target is None or state.is_wall(target) or not state.is_floor(target):
        return Outcome(direction, Result.BLOCKED, here)

    if not state.has_box(target):
        result = Result.STEPPED
        if _solved_after(state, state.boxes):
            result |= Result.SOLVED
        return Outcome(direction, result, here, target)

    beyond = _step(state, target, direction)
    if beyond is None or not state.is_free_floor(beyond):
        return Outcome(direction, Result.BLOCKED, here)

    boxes = set_bit(clear_bit(state.boxes, target), beyond)
    result = Result.PUSHED
    if _solved_after(state, boxes):
        result |= Result.SOLVED
    return Outcome(direction, result, here, target, target, beyond)


def apply(state: State, outcome: Outcome) -> State:
    """Returns the state after `outcome`; a blocked outcome leaves it as is."""
    if outcome.player_from != state.player:
        raise ValueError("outcome was resolved against a different state")
    if outcome.blocked:
        return state
    boxes = state.boxes
    if outcome.pushed:
        boxes = set_bit(clear_bit(boxes, outcome.box_from), outcome.box_to)
    return State(
        width=state.width,
        height=state.height,
        walls=state.walls,
        goals=state.goals,
        boxes=boxes,
        player=outcome.player_to,
        floor=state.floor,
    )


def move(state: State, direction: Direction) -> Tuple[State, Outcome]:
    outcome = resolve(state, direction)
    return apply(state, outcome), outcome
