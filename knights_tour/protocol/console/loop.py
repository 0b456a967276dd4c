from __future__ import annotations

import sys
import time
from typing import Callable, List, Optional, Sequence

from ...engine.bitboard import is_visited, square_of
from ...engine.square import square_to_str, str_to_square
from ...search.service import SearchResult, SearchService


Writer = Callable[[str], None]
Reader = Callable[[], Optional[str]]

BANNER = r"""
        |\__/,|   (`\
      _.|o o  |_   ) )
    -(((---(((--------
        KNIGHT'S TOUR
"""
PROMPT = "Please enter starting square (ex: a1): "


def render_board(mask: int) -> List[str]:
    """Render a visited mask as 8 rank rows (8 down to 1) plus a file footer."""
    lines: List[str] = []
    for row in range(7, -1, -1):
        cells = ("1" if is_visited(mask, square_of(row, col)) else "." for col in range(8))
        lines.append(f"{row + 1} " + " ".join(cells))
    lines.append("  A B C D E F G H")
    return lines


def render_route(path: Sequence[int]) -> List[str]:
    return [f"{i}: {square_to_str(sq)}" for i, sq in enumerate(path, start=1)]


def render_tour_grid(path: Sequence[int]) -> List[str]:
    """Render the visit order number of each square, rank 8 at the top."""
    order = {sq: i for i, sq in enumerate(path, start=1)}
    lines: List[str] = []
    for row in range(7, -1, -1):
        cells = []
        for col in range(8):
            n = order.get(square_of(row, col))
            cells.append(f"{n:>2}" if n is not None else " .")
        lines.append(f"{row + 1} " + " ".join(cells))
    lines.append("   " + "  ".join("ABCDEFGH"))
    return lines


class ConsoleSession:
    """Interactive front end: read a starting square, search, report.

    Notes:
    - The engine stays free of I/O; everything printed happens here.
    - Reader returns None on end of input.
    """

    def __init__(self, read: Reader, write: Writer) -> None:
        self.read = read
        self.write = write
        self.search = SearchService()

    def prompt_square(self) -> Optional[int]:
        while True:
            self.write(PROMPT)
            raw = self.read()
            if raw is None:
                return None
            try:
                return str_to_square(raw.strip())
            except ValueError:
                self.write("Invalid square, try again.")

    def report(self, res: SearchResult, elapsed_s: float) -> None:
        nps = int(res.nodes / max(elapsed_s, 1e-9))
        self.write(f"Time taken: {elapsed_s:.6f}")
        self.write(f"Nodes: {res.nodes}")
        self.write(f"Nodes per second: {nps}")
        if not res.success:
            self.write("No tour found.")
            return
        self.write("")
        self.write("Route:")
        for line in render_route(res.path):
            self.write(line)

    def run(self) -> Optional[SearchResult]:
        self.write(BANNER)
        sq = self.prompt_square()
        if sq is None:
            return None
        self.write(f"Starting backtrack from {square_to_str(sq)}:")
        start = time.perf_counter()
        res = self.search.search(sq)
        elapsed = time.perf_counter() - start
        self.report(res, elapsed)
        return res


def _default_reader() -> Optional[str]:
    line = sys.stdin.readline()
    return line if line else None


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_console() -> None:
    ConsoleSession(_default_reader, _default_writer).run()


if __name__ == "__main__":
    run_console()
