#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo's src/ directory to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from retro_chess.engine.game import apply_move, new_game
from retro_chess.engine.move import parse_uci
from retro_chess.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft from the start position")
    parser.add_argument(
        "--moves",
        nargs="*",
        default=[],
        help="Moves in long algebraic form to play before counting (e.g. e2e4 e7e5)",
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    args = parser.parse_args()

    state = new_game()
    for text in args.moves:
        state = apply_move(state, parse_uci(text))

    start = time.perf_counter()
    nodes = perft(state, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
