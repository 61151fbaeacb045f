#!/usr/bin/env python3
"""Replay a solution on a level and write every position as ASCII."""

import argparse
import sys

from sokoban_engine.config import load_config
from sokoban_engine.errors import IllegalReplay, InvalidSolutionSyntax, StoreUnavailable
from sokoban_engine.levels.io import load_level_by_id
from sokoban_engine.render import dump_session, render_ascii
from sokoban_engine.session import GameSession


def main(argv=None):
    parser = argparse.ArgumentParser(description='Replay a solution on a level')
    parser.add_argument('level_id', help='Level file and index, e.g. levels/microban.xsb#4')
    parser.add_argument('--solution', default=None, help='Solution string (u/d/l/r, uppercase for pushes, RLE allowed)')
    parser.add_argument('--from-save', action='store_true', help='Replay the saved game instead of a solution')
    parser.add_argument('--config', default='configs/engine.yaml')
    parser.add_argument('--out', default=None, help='Output text file (default: stdout)')
    parser.add_argument('--record', action='store_true', help='Store the solution if it solves the level')
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    cfg.setup_logging()
    store = cfg.store()

    level = load_level_by_id(args.level_id)
    store.attach_best_known([level], cfg.solution_namespace)

    solution = args.solution
    if args.from_save:
        solution = store.load(level.fingerprint, cfg.save_namespace)
    elif solution is None:
        solution = level.known_solution
    if solution is None:
        print(f"No solution available for level {level.fingerprint_hex}")
        return 1

    session = GameSession(level)
    out = open(args.out, 'w', encoding='utf-8') if args.out else sys.stdout
    try:
        out.write(f"Level {level.index + 1} [{level.fingerprint_hex}] {level.title}\n\n")
        out.write(render_ascii(session.state) + "\n\n")
        for outcome in session.playback(solution):
            moves, pushes = session.score()
            out.write(f"Move {moves} ({outcome.symbol}), pushes {pushes}\n")
            out.write(render_ascii(session.state) + "\n\n")
        out.write(dump_session(level, session.state, session.history))
    except (InvalidSolutionSyntax, IllegalReplay) as e:
        print(f"Cannot replay: {e}", file=sys.stderr)
        return 2
    finally:
        if out is not sys.stdout:
            out.close()

    if not session.is_solved:
        print("The solution does not solve the level", file=sys.stderr)
        return 1
    if args.record:
        try:
            if store.record_solution(level, session.history, cfg.solution_namespace):
                print(f"Recorded new best solution for {level.fingerprint_hex}")
        except StoreUnavailable as e:
            print(f"Cannot record solution: {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
