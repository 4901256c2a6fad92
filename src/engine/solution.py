"""Solution value combining moves, snapshots and the minimal step count."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .moves import Move, auxiliary_peg, format_step_count, generate_moves, min_moves
from .playback import DEFAULT_ANIMATION_CEILING, is_animatable
from .snapshots import Configuration, compute_snapshots


@dataclass(frozen=True)
class Solution:
    """Immutable result of solving one ``(n, start, end)`` puzzle.

    When the puzzle is not animatable ``moves`` is empty and ``snapshots``
    holds only the initial configuration, while ``min_moves`` still carries
    the exact optimal step count.
    """

    n: int
    start_peg: int
    end_peg: int
    aux_peg: Optional[int]
    moves: Tuple[Move, ...]
    snapshots: Tuple[Configuration, ...]
    min_moves: int
    animatable: bool

    @property
    def length(self) -> int:
        return len(self.moves)

    @property
    def min_moves_display(self) -> str:
        return format_step_count(self.min_moves)

    def to_payload(self, *, include_snapshots: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "n": self.n,
            "start": self.start_peg,
            "end": self.end_peg,
            "aux": self.aux_peg,
            "min_moves": str(self.min_moves),
            "animatable": self.animatable,
            "moves": [[move.from_peg, move.to_peg] for move in self.moves],
        }
        if include_snapshots:
            payload["snapshots"] = [[list(peg) for peg in config] for config in self.snapshots]
        return payload


def solve(n: int, start_peg: int, end_peg: int, *, ceiling: int = DEFAULT_ANIMATION_CEILING) -> Solution:
    """Solve the puzzle, materialising moves only when it is animatable."""

    n = max(0, int(n))
    animatable = is_animatable(n, start_peg, end_peg, ceiling)
    aux = None if start_peg == end_peg else auxiliary_peg(start_peg, end_peg)
    moves = generate_moves(n, start_peg, end_peg, aux) if animatable and aux is not None else []
    snapshots = compute_snapshots(n, moves, start_peg)
    return Solution(
        n=n,
        start_peg=start_peg,
        end_peg=end_peg,
        aux_peg=aux,
        moves=tuple(moves),
        snapshots=tuple(snapshots),
        min_moves=min_moves(n),
        animatable=animatable,
    )


__all__ = ["Solution", "solve"]
