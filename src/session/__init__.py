"""Interactive session state, playback driver and event journal."""

from __future__ import annotations

from . import journal
from .driver import PlaybackDriver
from .store import HanoiSession, Listener, SessionEvent

__all__ = ["HanoiSession", "Listener", "PlaybackDriver", "SessionEvent", "journal"]
