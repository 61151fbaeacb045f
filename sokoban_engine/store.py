from __future__ import annotations
import contextlib
import logging
import os
import tempfile
from typing import Iterable, Optional

from .errors import StoreUnavailable
from .history import History, solution_stats
from .state import Level

log = logging.getLogger(__name__)

SOLUTION_NAMESPACE = "sol"
SAVE_NAMESPACE = "sav"


class SolutionStore:
    """Solution strings on disk, one file per (fingerprint, namespace).

    File name: <fingerprint as 8 hex digits>.<namespace>, e.g. "0A1B2C3D.sol".
    """

    def __init__(self, root_dir: str) -> None:
        self.root_dir = root_dir

    def path_for(self, fingerprint: int, namespace: str) -> str:
        return os.path.join(self.root_dir, f"{fingerprint & 0xFFFFFFFF:08X}.{namespace}")

    def save(self, fingerprint: int, history: str, namespace: str = SAVE_NAMESPACE) -> None:
        """Writes `history` under the key, replacing any previous entry."""
        path = self.path_for(fingerprint, namespace)
        tmp = None
        try:
            os.makedirs(self.root_dir, exist_ok=True)
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self.root_dir,
                                             prefix=".tmp_", delete=False) as f:
                tmp = f.name
                f.write(history)
            os.replace(tmp, path)
        except OSError as e:
            if tmp is not None:
                with contextlib.suppress(OSError):
                    os.remove(tmp)
            raise StoreUnavailable(f"cannot save solution to {path}: {e}") from e

    def load(self, fingerprint: int, namespace: str = SAVE_NAMESPACE) -> Optional[str]:
        """The stored string, or None when nothing was saved under the key."""
        path = self.path_for(fingerprint, namespace)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read().strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreUnavailable(f"cannot read solution from {path}: {e}") from e
        return text or None

    def attach_best_known(self, levels: Iterable[Level], namespace: str = SOLUTION_NAMESPACE) -> int:
        """Sets known_solution on every level that has a stored solution.

        An unreachable store leaves the remaining levels without solutions.
        Returns how many levels got one.
        """
        found = 0
        for level in levels:
            try:
                level.known_solution = self.load(level.fingerprint, namespace)
            except StoreUnavailable as e:
                log.warning("solution store unavailable, no solutions known: %s", e)
                return found
            if level.known_solution is not None:
                found += 1
        return found

    def record_solution(self, level: Level, history: History, namespace: str = SOLUTION_NAMESPACE) -> bool:
        """Keeps `history` as the level's solution if it beats the stored one.

        Fewer moves win, then fewer pushes. Returns True when it was stored.
        """
        current = self.load(level.fingerprint, namespace)
        if current is not None:
            best = solution_stats(current)
            if best <= (history.move_count, history.push_count):
                level.known_solution = current
                return False
        code = history.compressed()
        self.save(level.fingerprint, code, namespace)
        level.known_solution = code
        log.info("new best solution for level %s: %d moves, %d pushes",
                 level.fingerprint_hex, history.move_count, history.push_count)
        return True
