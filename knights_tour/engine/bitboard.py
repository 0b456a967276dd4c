"""Board state as a 64-bit visited mask plus square/bit helpers.

Squares are 0..63 (a1=0 .. h8=63), rank-major: ``square = row * 8 + column``.
All functions here are pure; masks are plain Python ints kept within 64 bits.
"""

from __future__ import annotations

from typing import Final, Iterator


MASK64: Final = 0xFFFFFFFFFFFFFFFF
FULL_BOARD: Final = MASK64

FILE_A: Final = 0x0101010101010101
FILE_B: Final = FILE_A << 1
FILE_G: Final = FILE_A << 6
FILE_H: Final = FILE_A << 7

# Sources that may not use a given shift because the destination would wrap
NOT_A: Final = ~FILE_A & MASK64
NOT_H: Final = ~FILE_H & MASK64
NOT_AB: Final = ~(FILE_A | FILE_B) & MASK64
NOT_GH: Final = ~(FILE_G | FILE_H) & MASK64


def square_of(row: int, column: int) -> int:
    return row * 8 + column


def row_of(sq: int) -> int:
    return sq // 8


def column_of(sq: int) -> int:
    return sq % 8


def is_visited(mask: int, sq: int) -> bool:
    return (mask >> sq) & 1 == 1


def mark_visited(mask: int, sq: int) -> int:
    return mask | (1 << sq)


def unmark_visited(mask: int, sq: int) -> int:
    return mask & ~(1 << sq) & MASK64


def lsb(bb: int) -> int:
    """Return the index of the lowest set bit of ``bb``.

    Raises:
        ValueError: If ``bb`` is empty.
    """
    if bb == 0:
        raise ValueError("lsb of empty bitboard")
    return (bb & -bb).bit_length() - 1


def pop_count(bb: int) -> int:
    return bb.bit_count()


def iter_squares(bb: int) -> Iterator[int]:
    """Yield the squares set in ``bb``, lowest index first."""
    while bb:
        yield lsb(bb)
        bb &= bb - 1


def knight_attacks(sq: int) -> int:
    """Bitboard of on-board knight destinations from ``sq``.

    Each shift is applied only to sources on files where it cannot wrap
    around to the opposite edge of the board.
    """
    bb = 1 << sq
    attacks = 0
    attacks |= (bb & NOT_A) << 15
    attacks |= (bb & NOT_H) << 17
    attacks |= (bb & NOT_AB) << 6
    attacks |= (bb & NOT_GH) << 10

    attacks |= (bb & NOT_A) >> 17
    attacks |= (bb & NOT_H) >> 15
    attacks |= (bb & NOT_AB) >> 10
    attacks |= (bb & NOT_GH) >> 6
    return attacks & MASK64


KNIGHT_ATTACKS: Final = tuple(knight_attacks(sq) for sq in range(64))


def legal_targets(mask: int, sq: int) -> int:
    """Bitboard of knight destinations from ``sq`` not yet set in ``mask``."""
    return KNIGHT_ATTACKS[sq] & ~mask & MASK64


def degree(mask: int, sq: int) -> int:
    """Number of unvisited knight destinations from ``sq`` under ``mask``."""
    return pop_count(legal_targets(mask, sq))
