#!/usr/bin/env python3
# ruff: noqa: E402
"""Count move paths from a position, optionally broken down by root move.

Promotions always use the position's configured piece, so counts only match
published tables where no pawn can promote within the searched depth.
"""

from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from minimax_chess.engine.perft import divide, perft
from minimax_chess.engine.position import STARTPOS_FEN, Position


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Validate the minimax_chess move rules by counting leaf positions"
    )
    parser.add_argument(
        "--fen", default=STARTPOS_FEN, help="Position to start from (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Plies to expand (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the leaf count below each root move"
    )
    args = parser.parse_args()

    try:
        position = Position.from_fen(args.fen)
    except ValueError as e:
        parser.error(f"invalid FEN: {e}")

    start = time.perf_counter()
    if args.divide and args.depth >= 1:
        counts = divide(position, args.depth)
        for uci in sorted(counts):
            print(f"{uci}: {counts[uci]}")
        nodes = sum(counts.values())
        print(f"moves: {len(counts)}")
    else:
        nodes = perft(position, args.depth)
    elapsed = time.perf_counter() - start

    nps = int(nodes / max(elapsed, 1e-9))
    print(f"perft({args.depth}) = {nodes}  [{elapsed:.2f}s, {nps} nodes/s]")


if __name__ == "__main__":
    main()
