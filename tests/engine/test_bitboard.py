from __future__ import annotations

import random

import pytest

from knights_tour.engine.bitboard import (
    FILE_A,
    FILE_H,
    FULL_BOARD,
    KNIGHT_ATTACKS,
    column_of,
    degree,
    is_visited,
    iter_squares,
    knight_attacks,
    legal_targets,
    lsb,
    mark_visited,
    pop_count,
    row_of,
    square_of,
    unmark_visited,
)


def test_square_projections() -> None:
    assert square_of(0, 0) == 0
    assert square_of(7, 7) == 63
    assert row_of(63) == 7
    assert column_of(63) == 7
    for sq in range(64):
        assert square_of(row_of(sq), column_of(sq)) == sq


def test_corner_a1_has_two_targets() -> None:
    targets = set(iter_squares(legal_targets(0, square_of(0, 0))))
    assert targets == {square_of(1, 2), square_of(2, 1)}
    assert targets == {10, 17}
    assert degree(0, 0) == 2


def test_corner_h1_targets_do_not_wrap() -> None:
    assert set(iter_squares(legal_targets(0, 7))) == {13, 22}


@pytest.mark.parametrize("sq", [0, 7, 56, 63, 1, 6, 8, 15, 33, 38])
def test_edge_files_never_wrap(sq: int) -> None:
    for t in iter_squares(knight_attacks(sq)):
        assert abs(column_of(t) - column_of(sq)) <= 2
        assert (abs(row_of(t) - row_of(sq)), abs(column_of(t) - column_of(sq))) in ((1, 2), (2, 1))


def test_attack_counts_match_coordinate_generation() -> None:
    for sq in range(64):
        r, f = row_of(sq), column_of(sq)
        expected = 0
        for dr, df in ((1, 2), (2, 1), (-1, 2), (-2, 1), (1, -2), (2, -1), (-1, -2), (-2, -1)):
            tr, tf = r + dr, f + df
            if 0 <= tr < 8 and 0 <= tf < 8:
                expected |= 1 << square_of(tr, tf)
        assert KNIGHT_ATTACKS[sq] == expected, sq


def test_center_degree_is_eight() -> None:
    assert degree(0, square_of(3, 3)) == 8


def test_legal_targets_exclude_visited_and_stay_on_board() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        mask = rng.getrandbits(64)
        sq = rng.randrange(64)
        for t in iter_squares(legal_targets(mask, sq)):
            assert 0 <= t < 64
            assert not is_visited(mask, t)


def test_mark_unmark_round_trip() -> None:
    rng = random.Random(99)
    for sq in range(64):
        mask = rng.getrandbits(64) & ~(1 << sq)
        marked = mark_visited(mask, sq)
        assert is_visited(marked, sq)
        assert unmark_visited(marked, sq) == mask


def test_unmark_stays_within_64_bits() -> None:
    assert unmark_visited(FULL_BOARD, 0) == FULL_BOARD - 1
    assert unmark_visited(0, 5) == 0


def test_degree_non_increasing_as_mask_fills() -> None:
    rng = random.Random(7)
    for sq in range(64):
        order = list(range(64))
        rng.shuffle(order)
        mask = 0
        prev = degree(mask, sq)
        for other in order:
            mask = mark_visited(mask, other)
            d = degree(mask, sq)
            assert d <= prev
            prev = d
        assert prev == 0


def test_bit_helpers() -> None:
    assert lsb(0b1000) == 3
    assert lsb(1 << 63) == 63
    assert pop_count(FULL_BOARD) == 64
    assert pop_count(FILE_A | FILE_H) == 16
    assert list(iter_squares((1 << 40) | (1 << 2) | (1 << 17))) == [2, 17, 40]
    with pytest.raises(ValueError):
        lsb(0)


def test_iter_squares_scans_with_lsb() -> None:
    assert list(iter_squares(0)) == []
    assert list(iter_squares(FULL_BOARD)) == list(range(64))
    bb = legal_targets(0, square_of(3, 3))
    squares = list(iter_squares(bb))
    assert squares[0] == lsb(bb)
    assert squares == sorted(squares)
    assert len(squares) == pop_count(bb)
