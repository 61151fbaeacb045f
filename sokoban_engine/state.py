from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, Optional, Tuple

# Bit helpers
__all__ = [
    "Cell",
    "State",
    "Level",
    "LevelSet",
    "MAX_DIM",
    "bit",
    "has_bit",
    "set_bit",
    "clear_bit",
    "popcount",
]

MAX_DIM = 64


def bit(idx: int) -> int:
    return 1 << idx

def has_bit(mask: int, idx: int) -> bool:
    return (mask >> idx) & 1 == 1

def set_bit(mask: int, idx: int) -> int:
    return mask | bit(idx)

def clear_bit(mask: int, idx: int) -> int:
    return mask & ~bit(idx)

def popcount(mask: int) -> int:
    return bin(mask).count("1")


class Cell(IntFlag):
    """Flags of one playfield cell. WALL never combines with the others."""
    NONE = 0
    FLOOR = 1
    WALL = 2
    GOAL = 4
    BOX = 8


@dataclass(frozen=True, slots=True)
class State:
    """
    Immutable playfield of a Sokoban level.

    Stores the field as bitmaps: walls, goals, boxes, floor, plus the player position.
    Cell indexing: idx = y*width + x.
    floor: bits for every cell inside the playfield (blank cells outside are not floor).
    """

    width: int
    height: int
    walls: int # bitset
    goals: int # bitset
    boxes: int # bitset
    player: int # index (y*W + x)
    floor: int # bitset: cells the player and boxes may occupy


    # ---- state properties
    def is_solved(self) -> bool:
        """Every goal holds a box (boxes and goals are equal in number)."""
        return (self.goals & ~self.boxes) == 0 and (self.boxes & ~self.goals) == 0


    @property
    def box_count(self) -> int:
        return popcount(self.boxes)


    @property
    def goal_count(self) -> int:
        return popcount(self.goals)


    @property
    def player_x(self) -> int:
        return self.player % self.width


    @property
    def player_y(self) -> int:
        return self.player // self.width


    # ---- convenient checks/conversions
    def idx_to_xy(self, idx: int) -> Tuple[int, int]:
        return (idx % self.width, idx // self.width)


    def xy_to_idx(self, x: int, y: int) -> int:
        return y * self.width + x


    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


    def is_wall(self, idx: int) -> bool:
        return has_bit(self.walls, idx)


    def is_goal_cell(self, idx: int) -> bool:
        return has_bit(self.goals, idx)


    def has_box(self, idx: int) -> bool:
        return has_bit(self.boxes, idx)


    def is_floor(self, idx: int) -> bool:
        return has_bit(self.floor, idx)


    def is_free_floor(self, idx: int) -> bool:
        """Floor cell without a box."""
        return self.is_floor(idx) and not self.has_box(idx)


    def cell(self, x: int, y: int) -> Cell:
        """Flag view of a single cell, as in a field[x][y] grid."""
        if not self.in_bounds(x, y):
            return Cell.NONE
        idx = self.xy_to_idx(x, y)
        if self.is_wall(idx):
            return Cell.WALL
        flags = Cell.NONE
        if self.is_floor(idx):
            flags |= Cell.FLOOR
        if self.is_goal_cell(idx):
            flags |= Cell.GOAL
        if self.has_box(idx):
            flags |= Cell.BOX
        return flags


    def field(self) -> List[List[Cell]]:
        """The whole board as field[x][y]."""
        return [[self.cell(x, y) for y in range(self.height)] for x in range(self.width)]


@dataclass
class Level:
    """A parsed level: its starting playfield plus the metadata used for lookup and display."""

    index: int
    fingerprint: int
    start: State
    title: str = ""
    known_solution: Optional[str] = None

    @property
    def is_solved(self) -> bool:
        return self.known_solution is not None

    @property
    def fingerprint_hex(self) -> str:
        return f"{self.fingerprint:08X}"


@dataclass
class LevelSet:
    levels: List[Level]
    comment: str = ""
    # (block number, reason) for every block that failed to parse
    skipped: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.levels)

    def __getitem__(self, i: int) -> Level:
        return self.levels[i]

    def __iter__(self):
        return iter(self.levels)
