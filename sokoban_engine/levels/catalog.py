from __future__ import annotations
from dataclasses import dataclass
from typing import List

MAX_CATALOG_ENTRIES = 1024


@dataclass(frozen=True)
class CatalogEntry:
    """One line of the net-levels catalog: path<TAB>title<TAB>author<TAB>description."""

    path: str
    title: str = ""
    author: str = ""
    description: str = ""


def parse_catalog_line(line: str) -> CatalogEntry:
    fields = line.rstrip("\r\n").split("\t")
    fields += [""] * (4 - len(fields))
    path, title, author, description = fields[:4]
    return CatalogEntry(path=path, title=title, author=author, description=description)


def parse_catalog(text: str) -> List[CatalogEntry]:
    """Parses a newline-delimited catalog; blank lines are skipped."""
    entries: List[CatalogEntry] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        entries.append(parse_catalog_line(line))
        if len(entries) >= MAX_CATALOG_ENTRIES:
            break
    return entries
