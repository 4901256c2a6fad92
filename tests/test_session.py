from __future__ import annotations

import pytest

from contracts.errors import ParamsValidationError
from project_config import PlaybackSettings, PuzzleSettings
from session.store import HanoiSession


def _session(auto_swap: bool = False) -> HanoiSession:
    return HanoiSession(PuzzleSettings(), PlaybackSettings(), auto_swap=auto_swap)


def test_new_session_uses_defaults() -> None:
    session = _session()
    assert session.n == 4
    assert (session.start_peg, session.end_peg, session.middle_peg) == (0, 2, 1)
    assert session.length == 15
    assert session.index == 0
    assert not session.playing
    assert session.current_snapshot == [[4, 3, 2, 1], [], []]


def test_set_disks_clamps_and_regenerates() -> None:
    session = _session()
    events = []
    session.subscribe(events.append)

    session.set_disks(0)
    assert session.n == 1
    assert session.length == 1

    session.set_disks(3)
    assert events[-1] == {
        "type": "session.regenerated",
        "n": 3,
        "start": 0,
        "end": 2,
        "aux": 1,
        "moves": 7,
        "min_moves": "7",
        "animatable": True,
    }


def test_large_disk_count_is_not_animatable() -> None:
    session = _session()
    session.set_disks(20)
    assert not session.animatable
    assert session.length == 0
    assert session.min_moves_display == "1,048,575"
    assert session.pending_move is None


def test_unsubscribe_stops_notifications() -> None:
    session = _session()
    events = []
    unsubscribe = session.subscribe(events.append)
    session.next()
    unsubscribe()
    session.next()
    assert len(events) == 1
    assert events[0]["type"] == "session.cursor"


def test_auto_swap_exchanges_pegs() -> None:
    session = _session(auto_swap=True)
    session.set_start_peg(2)
    assert (session.start_peg, session.end_peg) == (2, 0)
    session.set_end_peg(2)
    assert (session.start_peg, session.end_peg) == (0, 2)
    session.set_end_peg(1)
    assert (session.start_peg, session.end_peg, session.middle_peg) == (0, 1, 2)


def test_equal_pegs_without_auto_swap_give_empty_solution() -> None:
    session = _session()
    session.set_start_peg(2)
    assert (session.start_peg, session.end_peg) == (2, 2)
    assert session.middle_peg is None
    assert session.length == 0
    assert not session.animatable
    assert session.current_snapshot == [[], [], [4, 3, 2, 1]]

    session.reset_all()
    assert (session.start_peg, session.end_peg) == (0, 2)
    assert session.length == 15


def test_invalid_peg_is_rejected() -> None:
    session = _session()
    with pytest.raises(ParamsValidationError):
        session.set_start_peg(3)
    with pytest.raises(ParamsValidationError):
        session.set_end_peg("1")
    assert (session.start_peg, session.end_peg) == (0, 2)


def test_navigation() -> None:
    session = _session()
    session.set_disks(3)
    assert session.next() == 1
    assert session.jump_to(100) == 7
    assert session.next() == 7
    assert session.prev() == 6
    assert session.select_move(0) == 1
    assert session.reset() == 0
    assert session.prev() == 0


def test_manual_step_pauses_playback() -> None:
    session = _session()
    assert session.play()
    session.next()
    assert not session.playing


def test_play_from_end_rewinds() -> None:
    session = _session()
    session.set_disks(2)
    session.jump_to(3)
    assert session.play()
    assert session.index == 0
    assert session.playing


def test_tick_runs_to_final_snapshot() -> None:
    session = _session()
    session.set_disks(3)
    session.play()
    for _ in range(7):
        session.tick()
    assert session.index == 7
    assert not session.playing
    assert session.current_snapshot == [[], [], [3, 2, 1]]
    assert session.progress == 1.0


def test_regeneration_rewinds_and_stops_playback() -> None:
    session = _session()
    session.set_disks(3)
    session.play()
    session.tick()
    session.tick()
    session.set_disks(2)
    assert session.index == 0
    assert session.length == 3
    assert not session.playing


def test_toggle_play() -> None:
    session = _session()
    assert session.toggle_play() is True
    assert session.toggle_play() is False


def test_current_snapshot_is_a_copy() -> None:
    session = _session()
    snapshot = session.current_snapshot
    snapshot[0].clear()
    assert session.current_snapshot[0] == [4, 3, 2, 1]


def test_pending_move_and_labels() -> None:
    session = _session()
    session.set_disks(2)
    session.set_peg_names(["L", "M", "R"])
    assert session.pending_move == (0, 1)
    assert session.step_label(1) == "2. L -> R"
    assert session.move_list_text() == "1. L -> M\n2. L -> R\n3. M -> R"
    session.jump_to(3)
    assert session.pending_move is None


def test_peg_names_need_three_entries() -> None:
    session = _session()
    with pytest.raises(ParamsValidationError) as excinfo:
        session.set_peg_names(["only", "two"])
    assert excinfo.value.code == "names.invalid"
    assert session.peg_names == ("A", "B", "C")


def test_disk_colors_fall_back_to_palette() -> None:
    session = _session()
    assert session.disk_color(5) == "#ffff00"
    session.set_disk_colors({1: "red"})
    assert session.disk_color(1) == "red"
    assert session.disk_color(2) == "#0000ff"
    colors = session.init_disk_colors(2)
    assert colors == {1: "#ffff00", 2: "#0000ff"}


def test_speed_multiplier_is_clamped() -> None:
    session = _session()
    events = []
    session.subscribe(events.append)
    assert session.set_speed_multiplier(10) == 3.0
    assert session.set_speed_multiplier(0.1) == 0.5
    assert events[-1] == {"type": "session.speed", "speed": 0.5}


def test_from_params() -> None:
    session, report = HanoiSession.from_params(
        {"n": 3, "start": 1, "end": 0, "names": "x,y,z"},
        PuzzleSettings(),
        PlaybackSettings(),
        auto_swap=False,
    )
    assert report.ok
    assert session.length == 7
    assert session.middle_peg == 2
    assert session.peg_names == ("x", "y", "z")
    assert session.current_snapshot == [[], [3, 2, 1], []]


def test_parity_profile_enables_auto_swap(monkeypatch) -> None:
    from feature_flags import reload as reload_features

    monkeypatch.delenv("CLI_HANOI_AUTO_SWAP", raising=False)
    monkeypatch.delenv("HANOI_AUTO_SWAP", raising=False)
    reload_features()

    session = HanoiSession(PuzzleSettings(), PlaybackSettings(), profile="parity")
    assert session.auto_swap
    session.set_start_peg(2)
    assert (session.start_peg, session.end_peg) == (2, 0)

    session = HanoiSession(PuzzleSettings(), PlaybackSettings(), profile="dev")
    assert not session.auto_swap
    session.set_start_peg(2)
    assert (session.start_peg, session.end_peg) == (2, 2)


def test_from_params_solves_once(monkeypatch) -> None:
    import session.store as store

    calls = []
    original = store.solve

    def counting_solve(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(store, "solve", counting_solve)
    session, _ = HanoiSession.from_params({"n": 5}, PuzzleSettings(), PlaybackSettings(), auto_swap=False)
    assert calls == [(5, 0, 2)]
    assert session.length == 31
