"""Replay of move lists into per-step peg configurations."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .moves import Move

PegState = List[int]
Configuration = List[PegState]


def initial_configuration(n: int, start_peg: int = 0) -> Configuration:
    """All ``n`` disks on ``start_peg``, largest at the bottom."""

    config: Configuration = [[], [], []]
    config[start_peg] = list(range(n, 0, -1))
    return config


def _apply(config: Configuration, move: Tuple[int, int]) -> None:
    from_peg, to_peg = move
    if not config[from_peg]:
        return
    config[to_peg].append(config[from_peg].pop())


def _copy(config: Configuration) -> Configuration:
    return [list(peg) for peg in config]


def compute_snapshots(n: int, moves: Sequence[Move], start_peg: int = 0) -> List[Configuration]:
    """Return the configuration before any move and after each move.

    Every entry is an independent copy, so callers may mutate one snapshot
    without affecting the others.  A move off an empty peg leaves the
    configuration unchanged.
    """

    state = initial_configuration(n, start_peg)
    snapshots = [_copy(state)]
    for move in moves:
        _apply(state, move)
        snapshots.append(_copy(state))
    return snapshots


def state_after_k_moves(n: int, moves: Sequence[Move], k: int, start_peg: int = 0) -> Configuration:
    """Configuration after the first ``k`` moves, ``k`` clamped to the move count."""

    state = initial_configuration(n, start_peg)
    steps = max(0, min(len(moves), int(k)))
    for index in range(steps):
        _apply(state, moves[index])
    return state


def check_configuration(config: Iterable[Sequence[int]], n: int) -> bool:
    """Return ``True`` when ``config`` is a legal arrangement of disks ``1..n``."""

    pegs = [list(peg) for peg in config]
    if len(pegs) != 3:
        return False
    if sorted(size for peg in pegs for size in peg) != list(range(1, n + 1)):
        return False
    return all(peg[i] > peg[i + 1] for peg in pegs for i in range(len(peg) - 1))


__all__ = [
    "Configuration",
    "PegState",
    "check_configuration",
    "compute_snapshots",
    "initial_configuration",
    "state_after_k_moves",
]
