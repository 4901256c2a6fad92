"""Timed playback driver that advances a session until its final snapshot."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .store import HanoiSession

_LOGGER = logging.getLogger(__name__)

WaitFn = Callable[[float], bool]


class PlaybackDriver:
    """Issue ``tick`` on a session at the configured interval while it plays.

    ``wait`` receives the interval in seconds and returns ``True`` when the
    driver should stop early.  It defaults to waiting on the driver's stop
    event; tests pass a function that returns ``False`` immediately.
    """

    def __init__(self, session: HanoiSession, *, wait: Optional[WaitFn] = None) -> None:
        self.session = session
        self._stop = threading.Event()
        self._wait: WaitFn = wait or self._stop.wait
        self._thread: Optional[threading.Thread] = None

    def interval_seconds(self) -> float:
        playback = self.session.playback
        effective_ms = max(playback.min_interval_ms, self.session.base_ms / self.session.speed_multiplier)
        return effective_ms / 1000.0

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until playback stops and return the number of ticks issued."""

        ticks = 0
        if not self.session.playing:
            return ticks
        _LOGGER.info("playback started at step %s/%s", self.session.index, self.session.length)
        while self.session.playing and not self._stop.is_set():
            if max_ticks is not None and ticks >= max_ticks:
                break
            if self._wait(self.interval_seconds()):
                break
            # Regeneration between the wait and the tick stops playback.
            if not self.session.playing:
                break
            self.session.tick()
            ticks += 1
        _LOGGER.info("playback stopped at step %s/%s after %s ticks", self.session.index, self.session.length, ticks)
        return ticks

    def start(self) -> threading.Thread:
        """Begin playback on a daemon thread."""

        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self.session.play()
        self._thread = threading.Thread(target=self.run, name="hanoi-playback", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        """Pause the session and wait for the driver thread to exit."""

        self.session.pause()
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


__all__ = ["PlaybackDriver", "WaitFn"]
