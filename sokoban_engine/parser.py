from __future__ import annotations
import logging
import zlib
from collections import deque
from typing import List, Optional, Tuple

from .errors import EmptyLevel, LevelError, LevelTooLarge, MisplacedPlayer, NoLevelsLoaded, UnbalancedLevel
from .rle import expand_rows
from .state import MAX_DIM, Level, LevelSet, State, has_bit, popcount, set_bit

log = logging.getLogger(__name__)

TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_VOID = " "
FLOOR_ALIASES = "-_"

ROW_CHARS = frozenset("#.$*@+ -_|0123456789")


def is_level_row(line: str) -> bool:
    """True for lines made of level symbols (possibly run-length encoded)."""
    s = line.rstrip()
    if not s or TOK_WALL not in s:
        return False
    return all(ch in ROW_CHARS for ch in s)


def normalize_rows(lines: List[str]) -> List[str]:
    """RLE-expands level lines, maps floor aliases to spaces and trims trailing blanks."""
    rows: List[str] = []
    for line in lines:
        for row in expand_rows(line.rstrip()):
            for alias in FLOOR_ALIASES:
                row = row.replace(alias, TOK_VOID)
            rows.append(row.rstrip())
    while rows and not rows[-1]:
        rows.pop()
    return rows


def fingerprint(rows: List[str]) -> int:
    """CRC-32 of the normalized level text, the lookup key of saved solutions."""
    return zlib.crc32("\n".join(rows).encode("utf-8")) & 0xFFFFFFFF


def _flood_floor(width: int, height: int, walls: int, start: int) -> int:
    """Cells reachable from `start` without crossing walls; boxes do not block."""
    floor = set_bit(0, start)
    q = deque([start])
    while q:
        cur = q.popleft()
        y, x = divmod(cur, width)
        for nx, ny in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            nb = ny * width + nx
            if has_bit(walls, nb) or has_bit(floor, nb):
                continue
            floor = set_bit(floor, nb)
            q.append(nb)
    return floor


def build_state(rows: List[str]) -> State:
    """Turns normalized rows into a validated State.

    Raises LevelTooLarge, EmptyLevel, MisplacedPlayer or UnbalancedLevel.
    """
    if not rows:
        raise EmptyLevel("level has no rows")
    height = len(rows)
    width = max(len(row) for row in rows)
    if width > MAX_DIM or height > MAX_DIM:
        raise LevelTooLarge(f"level is {width}x{height}, the limit is {MAX_DIM}x{MAX_DIM}")

    walls = goals = boxes = 0
    players: List[int] = []

    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            idx = y * width + x
            if ch == TOK_WALL:
                walls = set_bit(walls, idx)
            elif ch == TOK_GOAL:
                goals = set_bit(goals, idx)
            elif ch == TOK_BOX:
                boxes = set_bit(boxes, idx)
            elif ch == TOK_BOX_ON_GOAL:
                boxes = set_bit(boxes, idx)
                goals = set_bit(goals, idx)
            elif ch == TOK_PLAYER:
                players.append(idx)
            elif ch == TOK_PLAYER_ON_GOAL:
                players.append(idx)
                goals = set_bit(goals, idx)

    if not players:
        raise EmptyLevel("no player '@' or '+' found in level")
    if len(players) > 1:
        raise MisplacedPlayer(f"level has {len(players)} players, expected exactly one")
    if boxes == 0 or goals == 0:
        raise EmptyLevel("level needs at least one box and one goal")
    nboxes, ngoals = popcount(boxes), popcount(goals)
    if nboxes != ngoals:
        raise UnbalancedLevel(f"level has {nboxes} boxes but {ngoals} goals")

    player = players[0]
    floor = _flood_floor(width, height, walls, player)
    if (boxes | goals) & ~floor:
        raise UnbalancedLevel("box or goal outside the playfield")

    return State(width=width, height=height, walls=walls, goals=goals,
                 boxes=boxes, player=player, floor=floor)


def parse_level_str(level_str: str) -> State:
    """Parses a single ASCII level into State.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      ' ', '-', '_': floor, or void when outside the walls
    Rows may be run-length encoded ("4#|#@$.#|4#"). Comment lines are ignored.
    """
    lines = [line for line in level_str.splitlines() if is_level_row(line)]
    return build_state(normalize_rows(lines))


def _comment_text(line: str) -> str:
    s = line.strip()
    if s.startswith(";"):
        s = s[1:].strip()
    return s


def _strip_key(note: str) -> str:
    return note.split(":", 1)[1].strip()


def split_level_blocks(text: str) -> Tuple[str, List[Tuple[List[str], str]]]:
    """Splits XSB text into (shared comment, [(raw rows, title), ...]).

    A blank line or a comment line closes a block. The last comment line seen
    before a block is its title; a "Title:" line right below a block overrides it
    and other "Key: value" lines there are ignored.
    The first comment line of the source becomes the shared comment when a blank
    line separates it from the first level.
    """
    blocks: List[Tuple[List[str], str]] = []
    comment = ""
    first_comment: Optional[str] = None
    cur_rows: Optional[List[str]] = None
    cur_title = ""
    pending = ""
    trailing: Optional[int] = None  # block still collecting the notes written below it

    for raw in text.splitlines():
        line = raw.rstrip()
        if not line:
            if cur_rows is not None:
                blocks.append((cur_rows, cur_title))
                cur_rows = None
            elif not blocks and first_comment and not comment:
                comment = first_comment
            trailing = None
            continue

        if is_level_row(line):
            if cur_rows is None:
                cur_rows, cur_title = [], pending
                pending = ""
                trailing = None
            cur_rows.append(line)
            continue

        note = _comment_text(line)
        key = note.split(":", 1)[0].strip().lower() if ":" in note else ""
        if cur_rows is not None:
            blocks.append((cur_rows, cur_title))
            cur_rows = None
            trailing = len(blocks) - 1
        if trailing is not None and key:
            # "Title:", "Author:", ... notes about the level above
            if key == "title":
                rows, _ = blocks[trailing]
                blocks[trailing] = (rows, _strip_key(note))
            continue
        if not note:
            continue
        if first_comment is None and not blocks:
            first_comment = note
        pending = _strip_key(note) if key == "title" else note

    if cur_rows is not None:
        blocks.append((cur_rows, cur_title))
    return comment, blocks


def parse_levels(text: str) -> LevelSet:
    """Parses every level of an XSB source.

    Invalid blocks are skipped and listed in LevelSet.skipped; NoLevelsLoaded
    is raised when none of them parses.
    """
    comment, blocks = split_level_blocks(text)
    levels: List[Level] = []
    skipped: List[Tuple[int, LevelError]] = []

    for n, (lines, title) in enumerate(blocks):
        rows = normalize_rows(lines)
        try:
            state = build_state(rows)
        except LevelError as e:
            log.debug("skipping level block %d: %s", n + 1, e)
            skipped.append((n, e))
            continue
        levels.append(Level(index=len(levels), fingerprint=fingerprint(rows),
                            start=state, title=title))

    if not levels:
        raise NoLevelsLoaded(f"no valid level among {len(blocks)} block(s)", skipped)
    if skipped:
        log.info("loaded %d level(s), skipped %d invalid block(s)", len(levels), len(skipped))
    return LevelSet(levels=levels, comment=comment, skipped=skipped)
