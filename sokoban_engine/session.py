from __future__ import annotations
import logging
from typing import Iterator, Optional, Tuple

from .errors import IllegalReplay
from .history import History, solution_stats
from .moves import Direction, Outcome, apply, resolve
from .state import Level, State

log = logging.getLogger(__name__)


class GameSession:
    """One level being played: the live state plus its move history.

    Callers that animate moves use resolve() then apply(); others just call move().
    Undo replays the level from its start through all but the last recorded move.
    """

    def __init__(self, level: Level) -> None:
        self.level = level
        self.state: State = level.start
        self.history = History()

    # ---- moves
    def resolve(self, direction: Direction) -> Outcome:
        return resolve(self.state, direction)

    def apply(self, outcome: Outcome) -> Outcome:
        self.state = apply(self.state, outcome)
        self.history.record_outcome(outcome)
        return outcome

    def move(self, direction: Direction) -> Outcome:
        return self.apply(self.resolve(direction))

    def undo(self) -> bool:
        """Takes back the last move. Returns False when there was nothing to undo."""
        if self.history.undo() is None:
            return False
        self.state, _ = self.history.replay(self.level)
        return True

    def restart(self) -> None:
        self.state = self.level.start
        self.history.clear()

    # ---- solutions
    def load_solution(self, text: str) -> Optional[Outcome]:
        """Restarts the level and plays a whole solution string at once.

        The history is rebuilt from the replayed moves, so push tags follow the
        board rather than the case of the pasted text. Raises
        InvalidSolutionSyntax before touching anything, IllegalReplay when the
        moves do not fit this level (the session is left restarted).
        """
        last: Optional[Outcome] = None
        try:
            for last in self.playback(text):
                pass
        except IllegalReplay:
            self.restart()
            raise
        return last

    def playback(self, text: str) -> Iterator[Outcome]:
        """Restarts the level and yields one outcome per replayed move.

        The session state advances as the generator is consumed, so a caller can
        draw every intermediate position.
        """
        moves = History.from_solution(text)
        self.restart()
        for step, ch in enumerate(str(moves)):
            outcome = self.move(Direction.from_symbol(ch))
            if outcome.blocked:
                log.warning("playback of level %s blocked at move %d", self.level.fingerprint_hex, step + 1)
                raise IllegalReplay(f"move {step + 1} ({ch!r}) is blocked on this level", step, ch)
            yield outcome

    # ---- scoring
    @property
    def is_solved(self) -> bool:
        return self.state.is_solved()

    def score(self) -> Tuple[int, int]:
        return self.history.move_count, self.history.push_count

    def best_score(self) -> Optional[Tuple[int, int]]:
        if self.level.known_solution is None:
            return None
        return solution_stats(self.level.known_solution)
