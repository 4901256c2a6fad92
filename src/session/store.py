"""Session state container for an interactive Hanoi player.

The engine only computes values.  :class:`HanoiSession` is the single owner
of everything that changes while a user explores a puzzle: the current
parameters, the solution computed from them, the playback cursor and the
presentation lookup tables (peg names, disk colors, playback speed).  Every
change is announced to subscribed listeners as a small JSON-safe mapping.

All mutations run under one re-entrant lock.  Regeneration swaps the
solution and resets the cursor inside that lock, so a playback driver on
another thread never observes a cursor that belongs to a stale solution.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from contracts.errors import ParamsValidationError, ValidationReport
from contracts.params import PuzzleParams, decode_params, default_disk_colors, default_params, validate_peg
from engine.moves import Move
from engine.playback import PlaybackCursor, pending_move
from engine.snapshots import Configuration, check_configuration
from engine.solution import Solution, solve
from feature_flags import is_auto_swap_enabled
from project_config import (
    PlaybackSettings,
    PuzzleSettings,
    get_playback_settings,
    get_puzzle_settings,
)

_LOGGER = logging.getLogger(__name__)

SessionEvent = Dict[str, Any]
Listener = Callable[[SessionEvent], Any]


class HanoiSession:
    """Mutable session state with change notification."""

    def __init__(
        self,
        settings: PuzzleSettings | None = None,
        playback: PlaybackSettings | None = None,
        *,
        auto_swap: bool | None = None,
        profile: str | None = None,
        params: PuzzleParams | None = None,
    ) -> None:
        self.settings = settings or get_puzzle_settings()
        self.playback = playback or get_playback_settings()
        if auto_swap is None:
            auto_swap = is_auto_swap_enabled(dict(os.environ), profile=profile)
        self.auto_swap = auto_swap

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        params = params or default_params(self.settings)
        self.n = params.n
        self.start_peg = params.start_peg
        self.end_peg = params.end_peg
        self.middle_peg: Optional[int] = None
        self.peg_names: Tuple[str, str, str] = params.peg_names
        self.disk_colors: Dict[int, str] = dict(params.disk_colors)
        self.base_ms = self.playback.base_ms
        self.speed_multiplier = self.playback.speed_default

        self.solution: Solution = solve(self.n, self.start_peg, self.end_peg, ceiling=self.settings.animation_ceiling)
        self.middle_peg = self.solution.aux_peg
        self.cursor = PlaybackCursor(self.solution.length)

    @classmethod
    def from_params(
        cls,
        raw: Any,
        settings: PuzzleSettings | None = None,
        playback: PlaybackSettings | None = None,
        *,
        auto_swap: bool | None = None,
        profile: str | None = None,
    ) -> Tuple["HanoiSession", ValidationReport]:
        """Build a session from a decoded parameter mapping."""

        settings = settings or get_puzzle_settings()
        params, report = decode_params(raw, settings=settings)
        session = cls(settings, playback, auto_swap=auto_swap, profile=profile, params=params)
        return session, report

    # Subscription -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent | None) -> None:
        if event is None:
            return
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(dict(event))

    def _cursor_event(self) -> SessionEvent:
        return {
            "type": "session.cursor",
            "index": self.cursor.index,
            "length": self.cursor.length,
            "playing": self.cursor.playing,
        }

    # Parameters -------------------------------------------------------

    def _regenerate_locked(self) -> SessionEvent:
        self.solution = solve(self.n, self.start_peg, self.end_peg, ceiling=self.settings.animation_ceiling)
        self.middle_peg = self.solution.aux_peg
        self.cursor = PlaybackCursor(self.solution.length)
        _LOGGER.debug(
            "regenerated n=%s start=%s end=%s moves=%s animatable=%s",
            self.n,
            self.start_peg,
            self.end_peg,
            self.solution.length,
            self.solution.animatable,
        )
        if _LOGGER.isEnabledFor(logging.DEBUG):
            bad = [k for k, config in enumerate(self.solution.snapshots) if not check_configuration(config, self.n)]
            if bad:
                _LOGGER.debug("illegal configurations at steps %s", bad)
        return {
            "type": "session.regenerated",
            "n": self.n,
            "start": self.start_peg,
            "end": self.end_peg,
            "aux": self.solution.aux_peg,
            "moves": self.solution.length,
            "min_moves": str(self.solution.min_moves),
            "animatable": self.solution.animatable,
        }

    def regenerate(self) -> Solution:
        """Recompute the solution from the current parameters and rewind."""

        with self._lock:
            event = self._regenerate_locked()
            solution = self.solution
        self._emit(event)
        return solution

    def set_disks(self, n: int) -> Solution:
        """Clamp ``n`` to the configured bounds and regenerate."""

        with self._lock:
            self.n = self.settings.clamp_disks(n)
            event = self._regenerate_locked()
            solution = self.solution
        self._emit(event)
        return solution

    def _set_pegs(self, start: int, end: int) -> Solution:
        with self._lock:
            self.start_peg, self.end_peg = start, end
            event = self._regenerate_locked()
            solution = self.solution
        self._emit(event)
        return solution

    def set_start_peg(self, start: Any) -> Solution:
        """Choose the start peg; with auto-swap, picking the end peg swaps both."""

        start = validate_peg(start, "$.start")
        with self._lock:
            old_start, old_end = self.start_peg, self.end_peg
        if self.auto_swap and start == old_end:
            return self._set_pegs(old_end, old_start)
        return self._set_pegs(start, old_end)

    def set_end_peg(self, end: Any) -> Solution:
        """Choose the end peg; with auto-swap, picking the start peg swaps both."""

        end = validate_peg(end, "$.end")
        with self._lock:
            old_start, old_end = self.start_peg, self.end_peg
        if self.auto_swap and end == old_start:
            return self._set_pegs(old_end, old_start)
        return self._set_pegs(old_start, end)

    def reset_all(self) -> Solution:
        """Return pegs to their defaults and rewind playback."""

        return self._set_pegs(self.settings.default_start, self.settings.default_end)

    # Presentation tables ----------------------------------------------

    def set_peg_names(self, names: Sequence[str]) -> None:
        if len(names) != 3:
            raise ParamsValidationError("names.invalid", "exactly three peg names are required", "$.names")
        with self._lock:
            self.peg_names = (str(names[0]), str(names[1]), str(names[2]))
            event = {"type": "session.display", "names": list(self.peg_names)}
        self._emit(event)

    def init_disk_colors(self, n: int | None = None) -> Dict[int, str]:
        with self._lock:
            self.disk_colors = default_disk_colors(self.n if n is None else n, self.settings.disk_palette)
            colors = dict(self.disk_colors)
        self._emit({"type": "session.display", "colors": {str(k): v for k, v in colors.items()}})
        return colors

    def set_disk_colors(self, colors: Mapping[int, str]) -> None:
        with self._lock:
            self.disk_colors = {int(size): str(color) for size, color in colors.items()}
            event = {"type": "session.display", "colors": {str(k): v for k, v in self.disk_colors.items()}}
        self._emit(event)

    def disk_color(self, size: int) -> str:
        """Color for disk ``size``; sizes missing from the table cycle the palette."""

        color = self.disk_colors.get(size)
        if color is not None:
            return color
        palette = self.settings.disk_palette
        return palette[(size - 1) % len(palette)]

    def set_speed_multiplier(self, multiplier: float) -> float:
        with self._lock:
            self.speed_multiplier = self.playback.clamp_speed(multiplier)
            event = {"type": "session.speed", "speed": self.speed_multiplier}
        self._emit(event)
        return self.speed_multiplier

    # Playback ---------------------------------------------------------

    def _cursor_op(self, op: Callable[[PlaybackCursor], Any], *, pause: bool = False) -> int:
        with self._lock:
            if pause:
                self.cursor.pause()
            op(self.cursor)
            index = self.cursor.index
            event = self._cursor_event()
        self._emit(event)
        return index

    def next(self) -> int:
        return self._cursor_op(PlaybackCursor.next, pause=True)

    def prev(self) -> int:
        return self._cursor_op(PlaybackCursor.prev, pause=True)

    def jump_to(self, k: int) -> int:
        return self._cursor_op(lambda cursor: cursor.jump_to(k), pause=True)

    def select_move(self, i: int) -> int:
        """Jump to the configuration right after move ``i`` (0-based)."""

        return self.jump_to(i + 1)

    def reset(self) -> int:
        return self._cursor_op(PlaybackCursor.reset, pause=True)

    def play(self) -> bool:
        with self._lock:
            started = self.cursor.play()
            event = self._cursor_event()
        self._emit(event)
        return started

    def pause(self) -> None:
        self._cursor_op(PlaybackCursor.pause)

    def toggle_play(self) -> bool:
        with self._lock:
            playing = self.cursor.toggle()
            event = self._cursor_event()
        self._emit(event)
        return playing

    def tick(self) -> int:
        """Driver step: advance while playing; stops at the final snapshot."""

        return self._cursor_op(PlaybackCursor.tick)

    # Views ------------------------------------------------------------

    @property
    def index(self) -> int:
        return self.cursor.index

    @property
    def length(self) -> int:
        return self.cursor.length

    @property
    def playing(self) -> bool:
        return self.cursor.playing

    @property
    def progress(self) -> float:
        return self.cursor.progress

    @property
    def animatable(self) -> bool:
        return self.solution.animatable

    @property
    def moves(self) -> Tuple[Move, ...]:
        return self.solution.moves

    @property
    def current_snapshot(self) -> Configuration:
        with self._lock:
            return [list(peg) for peg in self.solution.snapshots[self.cursor.index]]

    @property
    def pending_move(self) -> Move | None:
        with self._lock:
            return pending_move(self.solution.moves, self.cursor.index)

    @property
    def min_moves_display(self) -> str:
        return self.solution.min_moves_display

    def peg_label(self, peg: int) -> str:
        return self.peg_names[peg]

    def step_label(self, i: int) -> str:
        move = self.solution.moves[i]
        return f"{i + 1}. {self.peg_label(move.from_peg)} -> {self.peg_label(move.to_peg)}"

    def move_list_text(self) -> str:
        return "\n".join(self.step_label(i) for i in range(self.solution.length))


__all__ = ["HanoiSession", "Listener", "SessionEvent"]
