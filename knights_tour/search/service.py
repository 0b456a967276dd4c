from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import List, Tuple

from knights_tour.engine.bitboard import (
    FULL_BOARD,
    degree,
    iter_squares,
    legal_targets,
    mark_visited,
    unmark_visited,
)
from knights_tour.engine.square import square_to_str


logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Signal returned by every frame of the recursive search.

    - EXHAUSTED: no tour below this frame; the frame undid its own visit.
    - TERMINAL: this frame covered the last square of the board.
    - FOUND: a frame below returned TERMINAL; the path is left intact.
    """

    EXHAUSTED = "exhausted"
    TERMINAL = "terminal"
    FOUND = "found"


@dataclass
class SearchResult:
    start: int
    success: bool
    path: List[int]
    nodes: int
    time_ms: int


def order_moves(mask: int, sq: int) -> List[Tuple[int, int]]:
    """Return ``(target, onward_degree)`` candidates from ``sq``, best first.

    Warnsdorff ordering: fewest onward options first. ``mask`` must already
    include ``sq``. The sort is stable over the lowest-square-first scan, so
    equal degrees keep ascending square order.
    """
    candidates = [(t, degree(mask, t)) for t in iter_squares(legal_targets(mask, sq))]
    candidates.sort(key=lambda c: c[1])
    return candidates


class TourSearch:
    """Single-use search context owning the visited mask and the path.

    One instance serves exactly one call to :meth:`run`; a new search needs a
    new instance.
    """

    def __init__(self) -> None:
        self.mask: int = 0
        self.path: List[int] = []
        self.nodes: int = 0
        self._used = False

    def run(self, start_sq: int) -> Outcome:
        if not 0 <= start_sq < 64:
            raise ValueError(f"invalid start square index: {start_sq}")
        if self._used or self.mask or self.path:
            raise RuntimeError("TourSearch instances are single-use")
        self._used = True
        return self._visit(start_sq)

    def _visit(self, sq: int) -> Outcome:
        self.nodes += 1
        self.mask = mark_visited(self.mask, sq)
        self.path.append(sq)

        if self.mask == FULL_BOARD:
            return Outcome.TERMINAL

        for target, _ in order_moves(self.mask, sq):
            if self._visit(target) is not Outcome.EXHAUSTED:
                return Outcome.FOUND

        # Dead end or every candidate exhausted
        self.mask = unmark_visited(self.mask, sq)
        self.path.pop()
        return Outcome.EXHAUSTED


class SearchService:
    """Entry point for knight's tour searches.

    Each call to :meth:`search` runs on a fresh :class:`TourSearch`; no state
    is shared between calls.
    """

    def search(self, start_sq: int) -> SearchResult:
        """Search for an open knight's tour beginning at ``start_sq``.

        Args:
            start_sq (int): Starting square index in range 0..63.

        Returns:
            SearchResult: ``success`` is True when ``path`` holds all 64
            squares. When False, ``path`` is meaningless and must be discarded.

        Raises:
            ValueError: If ``start_sq`` is outside 0..63.
        """
        ctx = TourSearch()
        start = time.perf_counter()
        outcome = ctx.run(start_sq)
        time_ms = int((time.perf_counter() - start) * 1000)
        success = outcome is not Outcome.EXHAUSTED
        logger.debug(
            "tour search finished",
            extra={
                "start": square_to_str(start_sq),
                "success": success,
                "nodes": ctx.nodes,
                "time_ms": time_ms,
            },
        )
        return SearchResult(
            start=start_sq,
            success=success,
            path=list(ctx.path),
            nodes=ctx.nodes,
            time_ms=time_ms,
        )
