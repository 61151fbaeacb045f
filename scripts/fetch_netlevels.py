#!/usr/bin/env python3
"""
List the net-levels catalog or download one of its level sets.

Usage:
  python -m scripts.fetch_netlevels                # list the catalog
  python -m scripts.fetch_netlevels --get 3 --out levels/net
"""

from __future__ import annotations

import argparse
import os
import re
from typing import List, Optional

from sokoban_engine.config import load_config
from sokoban_engine.errors import FetchError, NoLevelsLoaded
from sokoban_engine.levels.io import load_levels
from sokoban_engine.levels.netlevels import NetLevelsClient


def _slugify(s: str, max_len: int = 80) -> str:
    s = s.strip()
    s = s.replace(os.sep, "_")
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^0-9A-Za-z._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    if not s:
        return "levels"
    return s[:max_len]


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Fetch Sokoban level sets from the net-levels catalog.")
    p.add_argument("--config", type=str, default="configs/engine.yaml")
    p.add_argument("--url", type=str, default=None, help="catalog base URL")
    p.add_argument("--get", type=int, default=None, help="catalog entry number to download")
    p.add_argument("--out", type=str, default="levels/net")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    cfg.setup_logging()
    client = NetLevelsClient(args.url or cfg.netlevels_url, timeout_s=cfg.netlevels_timeout_s)

    try:
        entries = client.fetch_catalog()
    except FetchError as e:
        print(f"[!] {e}")
        return 2

    if args.get is None:
        for i, entry in enumerate(entries):
            print(f"{i:4d}  {entry.title}  (C) {entry.author}")
        print(f"[=] {len(entries)} level sets")
        return 0

    if not 0 <= args.get < len(entries):
        print(f"[!] no catalog entry {args.get} (have {len(entries)})")
        return 2
    entry = entries[args.get]
    try:
        body = client.fetch_level(entry)
        levels = load_levels(body)
    except (FetchError, NoLevelsLoaded) as e:
        print(f"[!] {entry.title}: {e}")
        return 2

    os.makedirs(args.out, exist_ok=True)
    name = _slugify(os.path.splitext(os.path.basename(entry.path))[0] or entry.title)
    out_file = os.path.join(args.out, f"{name}.xsb")
    with open(out_file, "wb") as f:
        f.write(body)
    print(f"[+] {entry.title}: {len(levels)} levels -> {out_file}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
