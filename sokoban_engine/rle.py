from __future__ import annotations
from typing import List

from .errors import MalformedCode

ROW_SEPARATOR = "|"
DIGITS = "0123456789"
MAX_RUN = 9


def decompress(code: str, strict: bool = False) -> str:
    """Expands a run-length encoded string.

    A digit is the repeat count of the next symbol, every other character is
    a literal:  "3r2Ul" -> "rrrUUl". Counts are single digits; of several
    digits in a row only the last one counts ("12r" -> "rr").
    A count left dangling at the end of the input is dropped, or raises
    MalformedCode when `strict` is set.
    """
    out: List[str] = []
    count = ""
    for ch in code:
        if ch in DIGITS:
            count = ch
            continue
        out.append(ch * (int(count) if count else 1))
        count = ""
    if count and strict:
        raise MalformedCode(f"repeat count '{count}' is not followed by a symbol")
    return "".join(out)


def compress(text: str) -> str:
    """Run-length encodes `text`; runs shorter than two are kept literal.

    Runs longer than MAX_RUN are split, since a count is a single digit.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        j = i + 1
        while j < n and text[j] == ch:
            j += 1
        run = j - i
        while run > 0:
            chunk = min(run, MAX_RUN)
            out.append(f"{chunk}{ch}" if chunk > 1 else ch)
            run -= chunk
        i = j
    return "".join(out)


def expand_rows(line: str) -> List[str]:
    """Decompresses one level line; '|' splits it into several rows."""
    if not any(ch in DIGITS for ch in line) and ROW_SEPARATOR not in line:
        return [line]
    return decompress(line).split(ROW_SEPARATOR)
