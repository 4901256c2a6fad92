"""Tower of Hanoi simulation engine: moves, snapshots and playback cursor."""

from __future__ import annotations

from .moves import (
    PEGS,
    Move,
    auxiliary_peg,
    format_step_count,
    generate_moves,
    generate_moves_auto,
    min_moves,
)
from .playback import DEFAULT_ANIMATION_CEILING, PlaybackCursor, is_animatable, pending_move
from .snapshots import (
    Configuration,
    PegState,
    check_configuration,
    compute_snapshots,
    initial_configuration,
    state_after_k_moves,
)
from .solution import Solution, solve

__all__ = [
    "Configuration",
    "DEFAULT_ANIMATION_CEILING",
    "Move",
    "PEGS",
    "PegState",
    "PlaybackCursor",
    "Solution",
    "auxiliary_peg",
    "check_configuration",
    "compute_snapshots",
    "format_step_count",
    "generate_moves",
    "generate_moves_auto",
    "initial_configuration",
    "is_animatable",
    "min_moves",
    "pending_move",
    "solve",
    "state_after_k_moves",
]
