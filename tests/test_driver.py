from __future__ import annotations

import pytest

from project_config import PlaybackSettings, PuzzleSettings
from session.driver import PlaybackDriver
from session.store import HanoiSession


def _session(n: int = 3, playback: PlaybackSettings | None = None) -> HanoiSession:
    session = HanoiSession(PuzzleSettings(), playback or PlaybackSettings(), auto_swap=False)
    session.set_disks(n)
    return session


def _no_wait(_seconds: float) -> bool:
    return False


def test_run_ticks_until_final_snapshot() -> None:
    session = _session()
    session.play()
    driver = PlaybackDriver(session, wait=_no_wait)
    assert driver.run() == 7
    assert session.index == 7
    assert not session.playing


def test_run_without_play_does_nothing() -> None:
    session = _session()
    driver = PlaybackDriver(session, wait=_no_wait)
    assert driver.run() == 0
    assert session.index == 0


def test_interval_follows_speed_and_floor() -> None:
    session = _session()
    driver = PlaybackDriver(session)
    assert driver.interval_seconds() == pytest.approx(0.6)
    session.set_speed_multiplier(3.0)
    assert driver.interval_seconds() == pytest.approx(0.2)

    fast = _session(playback=PlaybackSettings(base_ms=10, min_interval_ms=20))
    assert PlaybackDriver(fast).interval_seconds() == pytest.approx(0.02)


def test_max_ticks_limits_run() -> None:
    session = _session()
    session.play()
    driver = PlaybackDriver(session, wait=_no_wait)
    assert driver.run(max_ticks=2) == 2
    assert session.index == 2
    assert session.playing


def test_wait_returning_true_stops_run() -> None:
    session = _session()
    session.play()
    driver = PlaybackDriver(session, wait=lambda _seconds: True)
    assert driver.run() == 0
    assert session.index == 0


def test_regeneration_during_wait_ends_run() -> None:
    session = _session()
    session.play()
    calls = []

    def wait(_seconds: float) -> bool:
        calls.append(_seconds)
        if len(calls) == 3:
            session.set_disks(2)
        return False

    driver = PlaybackDriver(session, wait=wait)
    assert driver.run() == 2
    assert session.index == 0
    assert session.length == 3
    assert not session.playing


def test_threaded_playback_completes() -> None:
    session = _session(playback=PlaybackSettings(base_ms=1, min_interval_ms=1))
    driver = PlaybackDriver(session)
    thread = driver.start()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert session.index == 7
    assert not session.playing
    driver.stop(timeout=1)


def test_stop_interrupts_long_wait() -> None:
    session = _session(playback=PlaybackSettings(base_ms=60_000))
    driver = PlaybackDriver(session)
    thread = driver.start()
    assert session.playing
    driver.stop(timeout=5)
    assert not thread.is_alive()
    assert not session.playing
    assert session.index == 0
