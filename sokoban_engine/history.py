from __future__ import annotations
from typing import Iterable, List, Optional, Tuple, Union

from .errors import IllegalReplay, InvalidSolutionSyntax
from .moves import Direction, Outcome, move
from .rle import DIGITS, compress, decompress
from .state import Level, State

MOVE_SYMBOLS = frozenset("udlrUDLR")


def validate_solution(text: str) -> str:
    """Checks an externally supplied solution string and returns it trimmed.

    Only move symbols and repeat counts are accepted, and a count must be
    followed by a symbol. Raises InvalidSolutionSyntax otherwise.
    """
    code = (text or "").rstrip()
    if not code:
        raise InvalidSolutionSyntax("solution string is empty")
    for pos, ch in enumerate(code):
        if ch in DIGITS:
            continue
        if ch not in MOVE_SYMBOLS:
            raise InvalidSolutionSyntax(f"illegal character {ch!r} at position {pos}")
    if code[-1] in DIGITS:
        raise InvalidSolutionSyntax("solution ends with a repeat count")
    return code


def solution_stats(code: str) -> Tuple[int, int]:
    """(moves, pushes) of a possibly run-length encoded solution."""
    moves = decompress(code)
    return len(moves), sum(1 for ch in moves if ch.isupper())


class History:
    """Append-only move log of one play session.

    Symbols are u/d/l/r, uppercase when the move pushed a box.
    """

    def __init__(self, symbols: Iterable[str] = ()) -> None:
        self._moves: List[str] = []
        self._pushes = 0
        for ch in symbols:
            self.record(Direction.from_symbol(ch), ch.isupper())

    @classmethod
    def from_solution(cls, text: str) -> "History":
        """Builds a history out of an external (possibly RLE) solution string."""
        return cls(decompress(validate_solution(text)))

    def record(self, direction: Direction, was_push: bool) -> None:
        self._moves.append(direction.record_symbol(was_push))
        if was_push:
            self._pushes += 1

    def record_outcome(self, outcome: Outcome) -> None:
        if not outcome.blocked:
            self.record(outcome.direction, outcome.pushed)

    def undo(self) -> Optional[str]:
        """Drops the last move and returns its symbol; None on an empty log."""
        if not self._moves:
            return None
        ch = self._moves.pop()
        if ch.isupper():
            self._pushes -= 1
        return ch

    def clear(self) -> None:
        self._moves.clear()
        self._pushes = 0

    @property
    def move_count(self) -> int:
        return len(self._moves)

    @property
    def push_count(self) -> int:
        return self._pushes

    def compressed(self) -> str:
        return compress(str(self))

    def replay(self, start: Union[Level, State], limit: Optional[int] = None) -> Tuple[State, Optional[Outcome]]:
        """Re-applies the first `limit` moves (all by default) to a fresh start state.

        Returns the final state and the last outcome (None when nothing was replayed).
        Raises IllegalReplay as soon as a recorded move is blocked.
        """
        state = start.start if isinstance(start, Level) else start
        symbols = self._moves if limit is None else self._moves[:limit]
        last: Optional[Outcome] = None
        for step, ch in enumerate(symbols):
            state, last = move(state, Direction.from_symbol(ch))
            if last.blocked:
                raise IllegalReplay(f"move {step + 1} ({ch!r}) is blocked on this level", step, ch)
        return state, last

    def __len__(self) -> int:
        return len(self._moves)

    def __str__(self) -> str:
        return "".join(self._moves)

    def __repr__(self) -> str:
        return f"History({str(self)!r})"
