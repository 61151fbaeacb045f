"""
Client for the net-levels service: a plain-text catalog at BASE_URL plus one
XSB file per catalog entry at BASE_URL + entry.path.

Only transport lives here; the returned bytes go to the level parser unchanged.
Failures are reported once, there is no retry policy.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from sokoban_engine.errors import CatalogUnavailable, LevelFetchFailed
from sokoban_engine.levels.catalog import CatalogEntry, parse_catalog

log = logging.getLogger(__name__)

BASE_URL = "http://simplesok.osdn.io/netlevels/"


class NetLevelsClient:
    def __init__(self, base_url: str = BASE_URL, timeout_s: float = 30.0,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def _get(self, url: str) -> bytes:
        r = self.session.get(url, timeout=self.timeout_s)
        r.raise_for_status()
        return r.content

    def fetch_catalog(self) -> List[CatalogEntry]:
        try:
            body = self._get(self.base_url)
        except requests.RequestException as e:
            raise CatalogUnavailable(f"Failed GET {self.base_url}: {e}") from e
        entries = parse_catalog(body.decode("utf-8", errors="replace"))
        if not entries:
            raise CatalogUnavailable(f"Empty catalog at {self.base_url}")
        log.debug("catalog %s: %d entries", self.base_url, len(entries))
        return entries

    def level_url(self, entry: CatalogEntry) -> str:
        return self.base_url + entry.path.lstrip("/")

    def fetch_level(self, entry: CatalogEntry) -> bytes:
        url = self.level_url(entry)
        try:
            body = self._get(url)
        except requests.RequestException as e:
            raise LevelFetchFailed(f"Failed GET {url}: {e}") from e
        if not body:
            raise LevelFetchFailed(f"Empty level file at {url}")
        return body
