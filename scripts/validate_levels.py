from __future__ import annotations
import argparse

from tqdm import tqdm

from sokoban_engine.config import load_config
from sokoban_engine.errors import NoLevelsLoaded
from sokoban_engine.levels.io import iterate_level_files, load_level_file


def main(argv=None):
    p = argparse.ArgumentParser(description="Parse every level file and report the levels that get skipped.")
    p.add_argument("--config", type=str, default="configs/engine.yaml")
    p.add_argument("--root", type=str, default=None, help="override levels.root_dir")
    p.add_argument("--attach", action="store_true", help="also count levels with a stored solution")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    cfg.setup_logging()
    root = args.root or cfg.levels_root
    store = cfg.store() if args.attach else None

    files = list(iterate_level_files(root, cfg.level_sources))
    ok = 0
    bad = 0
    solved = 0
    for path in tqdm(files, desc="Validating", unit="file"):
        try:
            levels = load_level_file(path)
        except NoLevelsLoaded as e:
            bad += len(e.skipped)
            tqdm.write(f"[fail] {path}: {e}")
            continue
        ok += len(levels)
        for n, err in levels.skipped:
            bad += 1
            tqdm.write(f"[skip] {path}#{n}: {err.code}: {err}")
        if store is not None:
            solved += store.attach_best_known(levels, cfg.solution_namespace)
    print(f"files: {len(files)}, valid: {ok}, skipped: {bad}")
    if store is not None:
        print(f"with known solution: {solved}")
    return 0 if bad == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
