from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import os

import yaml

from .levels.netlevels import BASE_URL
from .store import SAVE_NAMESPACE, SOLUTION_NAMESPACE, SolutionStore

DEFAULT_CONFIG = "configs/engine.yaml"
APP_DIR = "simplesok"


def default_store_dir() -> str:
    env = os.environ.get("SOKOBAN_DATA_DIR")
    if env:
        return env
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.join(base, APP_DIR)


@dataclass
class EngineConfig:
    store_dir: str = field(default_factory=default_store_dir)
    solution_namespace: str = SOLUTION_NAMESPACE
    save_namespace: str = SAVE_NAMESPACE
    netlevels_url: str = BASE_URL
    netlevels_timeout_s: float = 30.0
    levels_root: str = "levels"
    level_sources: List[str] = field(default_factory=lambda: ["."])
    log_level: str = "WARNING"

    def store(self) -> SolutionStore:
        return SolutionStore(self.store_dir)

    def setup_logging(self) -> None:
        logging.basicConfig(level=getattr(logging, self.log_level.upper(), logging.WARNING),
                            format="%(levelname)s %(name)s: %(message)s")


def config_from_dict(cfg: Dict[str, Any]) -> EngineConfig:
    out = EngineConfig()
    store = cfg.get("store") or {}
    net = cfg.get("netlevels") or {}
    levels = cfg.get("levels") or {}
    logs = cfg.get("logging") or {}

    if store.get("root_dir"):
        out.store_dir = os.path.expanduser(str(store["root_dir"]))
    out.solution_namespace = str(store.get("solution_namespace", out.solution_namespace))
    out.save_namespace = str(store.get("save_namespace", out.save_namespace))
    out.netlevels_url = str(net.get("base_url", out.netlevels_url))
    out.netlevels_timeout_s = float(net.get("timeout_s", out.netlevels_timeout_s))
    out.levels_root = str(levels.get("root_dir", out.levels_root))
    out.level_sources = list(levels.get("sources", out.level_sources))
    out.log_level = str(logs.get("level", out.log_level))
    # the environment wins over the file
    if os.environ.get("SOKOBAN_DATA_DIR"):
        out.store_dir = os.environ["SOKOBAN_DATA_DIR"]
    return out


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Reads the YAML config; a missing file means defaults."""
    path = path or DEFAULT_CONFIG
    if not os.path.isfile(path):
        return config_from_dict({})
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    return config_from_dict(cfg)
