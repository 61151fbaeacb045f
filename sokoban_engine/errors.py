from __future__ import annotations
from typing import List, Optional, Tuple

__all__ = [
    "SokobanError",
    "LevelError",
    "LevelTooLarge",
    "UnbalancedLevel",
    "EmptyLevel",
    "MisplacedPlayer",
    "NoLevelsLoaded",
    "MalformedCode",
    "InvalidSolutionSyntax",
    "IllegalReplay",
    "StoreUnavailable",
    "FetchError",
    "CatalogUnavailable",
    "LevelFetchFailed",
]


class SokobanError(Exception):
    """Base class of every engine error.

    `code` is a short stable identifier, str(exc) the human-readable reason.
    """
    code = "error"


# ---- level parsing

class LevelError(SokobanError, ValueError):
    """A single level block could not be turned into a playable state."""
    code = "invalid_level"


class LevelTooLarge(LevelError):
    code = "level_too_large"


class UnbalancedLevel(LevelError):
    code = "unbalanced_level"


class EmptyLevel(LevelError):
    code = "empty_level"


class MisplacedPlayer(LevelError):
    code = "misplaced_player"


class NoLevelsLoaded(SokobanError):
    """No level block of a source parsed successfully."""
    code = "no_levels_loaded"

    def __init__(self, reason: str, skipped: Optional[List[Tuple[int, LevelError]]] = None) -> None:
        super().__init__(reason)
        self.skipped = list(skipped or [])


# ---- move strings

class MalformedCode(SokobanError, ValueError):
    code = "malformed_code"


class InvalidSolutionSyntax(SokobanError, ValueError):
    code = "invalid_solution_syntax"


class IllegalReplay(SokobanError):
    """A recorded move turned out to be blocked when replayed."""
    code = "illegal_replay"

    def __init__(self, reason: str, step: int = -1, symbol: str = "") -> None:
        super().__init__(reason)
        self.step = step
        self.symbol = symbol


# ---- persistence / transport

class StoreUnavailable(SokobanError, OSError):
    code = "store_unavailable"


class FetchError(SokobanError):
    code = "fetch_failed"


class CatalogUnavailable(FetchError):
    code = "catalog_unavailable"


class LevelFetchFailed(FetchError):
    code = "level_fetch_failed"
