"""Playback cursor over a snapshot sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .moves import Move

DEFAULT_ANIMATION_CEILING = 12


@dataclass
class PlaybackCursor:
    """Integer cursor bounded to ``[0, length]``.

    ``length`` is the number of moves, so the cursor addresses
    ``length + 1`` snapshots.  ``playing`` gates an external timed driver
    which calls :meth:`tick` until the final snapshot is reached.
    """

    length: int = 0
    index: int = 0
    playing: bool = False

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("length must be >= 0")
        self.index = self._clamp(self.index)

    def _clamp(self, k: int) -> int:
        return max(0, min(self.length, int(k)))

    @property
    def at_end(self) -> bool:
        return self.index >= self.length

    @property
    def progress(self) -> float:
        if self.length == 0:
            return 0.0
        return self.index / self.length

    def next(self) -> int:
        self.index = min(self.index + 1, self.length)
        return self.index

    def prev(self) -> int:
        self.index = max(self.index - 1, 0)
        return self.index

    def jump_to(self, k: int) -> int:
        self.index = self._clamp(k)
        return self.index

    def reset(self) -> int:
        self.index = 0
        return self.index

    def play(self) -> bool:
        """Start playback, rewinding first when already at the end."""

        if self.length == 0:
            self.playing = False
            return False
        if self.at_end:
            self.index = 0
        self.playing = True
        return True

    def pause(self) -> None:
        self.playing = False

    def toggle(self) -> bool:
        if self.playing:
            self.pause()
            return False
        return self.play()

    def tick(self) -> int:
        """Advance one step while playing; stop once the end is reached."""

        if not self.playing:
            return self.index
        if not self.at_end:
            self.next()
        if self.at_end:
            self.playing = False
        return self.index


def pending_move(moves: Sequence[Move], index: int) -> Move | None:
    """The move about to be applied at ``index``, or ``None`` at the end."""

    if 0 <= index < len(moves):
        return moves[index]
    return None


def is_animatable(n: int, start_peg: int, end_peg: int, ceiling: int = DEFAULT_ANIMATION_CEILING) -> bool:
    return n <= ceiling and start_peg != end_peg


__all__ = [
    "DEFAULT_ANIMATION_CEILING",
    "PlaybackCursor",
    "is_animatable",
    "pending_move",
]
