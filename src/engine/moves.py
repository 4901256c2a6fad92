"""Optimal move generation for the three-peg Tower of Hanoi."""

from __future__ import annotations

from typing import List, NamedTuple

PEGS = (0, 1, 2)


class Move(NamedTuple):
    """Relocation of the top disk of ``from_peg`` onto ``to_peg``."""

    from_peg: int
    to_peg: int


def auxiliary_peg(start_peg: int, end_peg: int) -> int:
    """Return the one peg that is neither ``start_peg`` nor ``end_peg``."""

    if start_peg == end_peg:
        raise ValueError(f"No auxiliary peg when start and end are both {start_peg}")
    return next(peg for peg in PEGS if peg not in (start_peg, end_peg))


def _generate(n: int, from_peg: int, to_peg: int, aux_peg: int, acc: List[Move]) -> None:
    if n <= 0:
        return
    _generate(n - 1, from_peg, aux_peg, to_peg, acc)
    acc.append(Move(from_peg, to_peg))
    _generate(n - 1, aux_peg, to_peg, from_peg, acc)


def generate_moves(n: int, from_peg: int, to_peg: int, aux_peg: int) -> List[Move]:
    """Return the ``2**n - 1`` moves that carry the top ``n`` disks across.

    The three pegs must be distinct; the recursion relies on it and does not
    check.  ``n <= 0`` yields an empty list.
    """

    acc: List[Move] = []
    _generate(n, from_peg, to_peg, aux_peg, acc)
    return acc


def generate_moves_auto(n: int, start_peg: int, end_peg: int) -> List[Move]:
    """Like :func:`generate_moves` with the auxiliary peg derived once up front.

    ``start_peg == end_peg`` needs no relocation and returns an empty list.
    """

    if n <= 0 or start_peg == end_peg:
        return []
    return generate_moves(n, start_peg, end_peg, auxiliary_peg(start_peg, end_peg))


def min_moves(n: int) -> int:
    """Exact minimal step count ``2**n - 1`` (0 for ``n <= 0``)."""

    if n <= 0:
        return 0
    return (1 << n) - 1


def format_step_count(value: int) -> str:
    """Group digits in threes, e.g. ``18,446,744,073,709,551,615``."""

    return f"{int(value):,}"


__all__ = [
    "Move",
    "PEGS",
    "auxiliary_peg",
    "format_step_count",
    "generate_moves",
    "generate_moves_auto",
    "min_moves",
]
