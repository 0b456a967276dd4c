#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/tour.py`
# by adding the repo root (which contains `knights_tour/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from knights_tour.engine.bitboard import mark_visited
from knights_tour.engine.square import str_to_square
from knights_tour.protocol.console.loop import render_board, render_route, render_tour_grid
from knights_tour.search.service import SearchService


def main() -> None:
    parser = argparse.ArgumentParser(description="Search a knight's tour from a starting square")
    parser.add_argument("--start", type=str, default="a1", help="Starting square (default: a1)")
    parser.add_argument("--board", action="store_true", help="Print the visited-squares board")
    parser.add_argument("--grid", action="store_true", help="Print visit order numbers per square")
    args = parser.parse_args()

    try:
        start_sq = str_to_square(args.start)
    except ValueError as e:
        raise SystemExit(str(e))

    start = time.perf_counter()
    res = SearchService().search(start_sq)
    dt = time.perf_counter() - start
    print(
        f"success={res.success} nodes={res.nodes} time_ms={int(dt*1000)} nps={int(res.nodes/max(dt,1e-9))}"
    )
    if not res.success:
        return

    if args.board:
        mask = 0
        for sq in res.path:
            mask = mark_visited(mask, sq)
        print("\n".join(render_board(mask)))
    if args.grid:
        print("\n".join(render_tour_grid(res.path)))
    print("\n".join(render_route(res.path)))


if __name__ == "__main__":
    main()
