from __future__ import annotations

from dataclasses import dataclass

from .bitboard import column_of, row_of, square_of


@dataclass(frozen=True)
class Step:
    """One knight jump between two squares.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).
    """

    from_sq: int
    to_sq: int

    def is_knight_step(self) -> bool:
        return is_knight_step(self.from_sq, self.to_sq)

    def to_str(self) -> str:
        """Serialize the step like ``"a1c2"``."""
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)


def str_to_square(s: str) -> int:
    """Convert a coordinate token into a 0-based square index.

    Args:
        s (str): Square name such as ``"e4"``; file ``a``-``h`` then rank
            ``1``-``8``.

    Returns:
        int: Zero-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    column = ord(s[0]) - ord("a")
    row = ord(s[1]) - ord("1")
    return square_of(row, column)


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into a coordinate token.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    return chr(ord("a") + column_of(idx)) + str(row_of(idx) + 1)


def is_knight_step(a: int, b: int) -> bool:
    dr = abs(row_of(a) - row_of(b))
    dc = abs(column_of(a) - column_of(b))
    return (dr, dc) in ((1, 2), (2, 1))
