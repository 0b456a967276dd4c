from __future__ import annotations

from typing import List, Optional, Sequence

from .square import Step, square_to_str


BOARD_SQUARES = 64


def steps(path: Sequence[int]) -> List[Step]:
    """Return the knight jumps between consecutive squares of ``path``."""
    return [Step(a, b) for a, b in zip(path, path[1:])]


def validate_tour(path: Sequence[int], start: Optional[int] = None) -> None:
    """Check that ``path`` is a complete open knight's tour.

    Args:
        path (Sequence[int]): Squares in visitation order.
        start (Optional[int]): Required first square, if any.

    Raises:
        ValueError: If the path is not 64 long, repeats or skips a square,
            begins elsewhere than ``start``, or contains a non-knight jump.
    """
    if len(path) != BOARD_SQUARES:
        raise ValueError(f"tour must visit {BOARD_SQUARES} squares, got {len(path)}")
    if sorted(path) != list(range(BOARD_SQUARES)):
        raise ValueError("tour must visit every square exactly once")
    if start is not None and path[0] != start:
        raise ValueError(f"tour starts at {square_to_str(path[0])}, expected {square_to_str(start)}")
    for i, step in enumerate(steps(path)):
        if not step.is_knight_step():
            raise ValueError(f"illegal knight jump {step.to_str()} at step {i + 1}")


def is_valid_tour(path: Sequence[int], start: Optional[int] = None) -> bool:
    try:
        validate_tour(path, start)
    except ValueError:
        return False
    return True
