#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import subprocess
import sys
import time
from typing import Any, Dict, List, Optional

# Ensure repo root (which contains `knights_tour/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from knights_tour.engine.square import square_to_str, str_to_square
from knights_tour.engine.tour import is_valid_tour
from knights_tour.search.service import SearchService


def _git_info() -> Dict[str, Optional[str]]:
    def run(cmd: List[str]) -> Optional[str]:
        try:
            out = subprocess.check_output(cmd, cwd=REPO_ROOT, stderr=subprocess.DEVNULL)
            return out.decode().strip()
        except (OSError, subprocess.CalledProcessError):
            return None

    return {
        "commit": run(["git", "rev-parse", "HEAD"]),
        "describe": run(["git", "describe", "--dirty", "--tags", "--always"]),
    }


def bench_square(svc: SearchService, sq: int, *, iterations: int) -> Dict[str, Any]:
    total_time = 0
    total_nodes = 0
    success = True
    valid = True
    for _ in range(max(1, iterations)):
        res = svc.search(sq)
        total_time += max(0, res.time_ms)
        total_nodes += res.nodes
        success = success and res.success
        valid = valid and res.success and is_valid_tour(res.path, sq)

    avg_time = int(total_time / max(1, iterations))
    avg_nodes = int(total_nodes / max(1, iterations))
    nps = int(avg_nodes * 1000 / max(1, avg_time)) if avg_time > 0 else 0
    return {
        "start": square_to_str(sq),
        "success": success,
        "valid": valid,
        "time_ms": avg_time,
        "nodes": avg_nodes,
        "nps": nps,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark tour searches over starting squares")
    parser.add_argument(
        "--squares", nargs="*", default=None, help="Starting squares (default: all 64)"
    )
    parser.add_argument(
        "--iterations", type=int, default=1, help="Repeat runs per square and average"
    )
    parser.add_argument("--out", type=str, default=None, help="Write JSON results to file path")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument(
        "--progress", action="store_true", help="Print per-square progress to stderr"
    )
    args = parser.parse_args()

    try:
        squares = [str_to_square(s) for s in args.squares] if args.squares else list(range(64))
    except ValueError as e:
        raise SystemExit(str(e))

    svc = SearchService()
    results: List[Dict[str, Any]] = []
    t0 = time.perf_counter()
    for idx, sq in enumerate(squares, start=1):
        if args.progress:
            sys.stderr.write(f"[{idx}/{len(squares)}] {square_to_str(sq)}: running...\n")
            sys.stderr.flush()
        res = bench_square(svc, sq, iterations=max(1, args.iterations))
        results.append(res)
        if args.progress:
            sys.stderr.write(
                f"    success={res['success']} time={res['time_ms']}ms nodes={res['nodes']} nps={res['nps']}\n"
            )
            sys.stderr.flush()

    dt_ms = int((time.perf_counter() - t0) * 1000)
    total_nodes = sum(r["nodes"] for r in results)
    overall_nps = int(total_nodes * 1000 / max(1, dt_ms)) if dt_ms > 0 else 0

    payload = {
        "meta": {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "git": _git_info(),
            "engine": {"version": "0.1.0"},
            "config": {"iterations": max(1, args.iterations), "squares": len(squares)},
        },
        "results": results,
        "summary": {
            "squares": len(results),
            "found": sum(1 for r in results if r["success"]),
            "total_time_ms": dt_ms,
            "total_nodes": total_nodes,
            "overall_nps": overall_nps,
        },
    }

    if args.out:
        out_path = args.out
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2 if args.pretty else None)
        print(out_path)
    else:
        print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
