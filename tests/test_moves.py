from __future__ import annotations

import pytest

from engine.moves import (
    Move,
    auxiliary_peg,
    format_step_count,
    generate_moves,
    generate_moves_auto,
    min_moves,
)


def test_move_count_is_two_to_the_n_minus_one() -> None:
    for n in range(0, 11):
        assert len(generate_moves(n, 0, 2, 1)) == 2**n - 1


def test_no_move_stays_on_the_same_peg() -> None:
    moves = generate_moves(6, 2, 0, 1)
    assert all(move.from_peg != move.to_peg for move in moves)


def test_single_disk_moves_straight_across() -> None:
    assert generate_moves_auto(1, 0, 2) == [(0, 2)]


def test_two_disks_use_the_middle_peg() -> None:
    assert generate_moves_auto(2, 0, 2) == [(0, 1), (0, 2), (1, 2)]


def test_auxiliary_peg_is_derived_from_start_and_end() -> None:
    moves = generate_moves_auto(3, 1, 2)
    assert len(moves) == 7
    assert moves == generate_moves(3, 1, 2, 0)
    assert moves[0] == Move(1, 2)
    assert moves[3] == Move(1, 2)


def test_same_start_and_end_yields_no_moves() -> None:
    assert generate_moves_auto(5, 1, 1) == []


def test_non_positive_disk_count_yields_no_moves() -> None:
    assert generate_moves(0, 0, 2, 1) == []
    assert generate_moves(-3, 0, 2, 1) == []
    assert generate_moves_auto(0, 0, 2) == []


def test_auxiliary_peg() -> None:
    assert auxiliary_peg(0, 2) == 1
    assert auxiliary_peg(2, 1) == 0
    assert auxiliary_peg(1, 0) == 2
    with pytest.raises(ValueError):
        auxiliary_peg(1, 1)


def test_min_moves_is_exact_for_large_n() -> None:
    assert min_moves(0) == 0
    assert min_moves(-1) == 0
    assert min_moves(1) == 1
    assert min_moves(12) == 4095
    assert min_moves(64) == 18446744073709551615
    assert min_moves(64) > 2**63 - 1
    for n in range(0, 65):
        assert min_moves(n) == 2**n - 1


def test_min_moves_matches_generated_length() -> None:
    for n in range(0, 9):
        assert min_moves(n) == len(generate_moves_auto(n, 0, 2))


def test_format_step_count_groups_thousands() -> None:
    assert format_step_count(0) == "0"
    assert format_step_count(4095) == "4,095"
    assert format_step_count(min_moves(64)) == "18,446,744,073,709,551,615"
