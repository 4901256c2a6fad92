"""Command line front-end for the Hanoi engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from contracts.errors import ValidationReport
from contracts.jsoncanon import jcs_sha256
from contracts.params import PuzzleParams, decode_params
from engine.solution import solve
from project_config import get_puzzle_settings, get_section
from session import journal
from session.driver import PlaybackDriver
from session.store import HanoiSession, SessionEvent


def _raw_params(args: argparse.Namespace) -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    if args.disks is not None:
        raw["n"] = args.disks
    if args.start is not None:
        raw["start"] = args.start
    if args.end is not None:
        raw["end"] = args.end
    names = getattr(args, "names", None)
    if names:
        raw["names"] = names
    return raw


def _report_issues(report: ValidationReport) -> None:
    for issue in report.issues:
        print(f"warning: {issue.path}: {issue.msg} [{issue.code}]", file=sys.stderr)


def _decode(args: argparse.Namespace) -> PuzzleParams:
    params, report = decode_params(_raw_params(args))
    _report_issues(report)
    return params


def _format_config(config: List[List[int]], names: tuple[str, str, str]) -> str:
    return " ".join(f"{names[peg]}:{config[peg]}" for peg in range(3))


def _step_line(session: HanoiSession) -> str:
    line = f"step {session.index}/{session.length}  {_format_config(session.current_snapshot, session.peg_names)}"
    pending = session.pending_move
    if pending is not None:
        line += f"  next: {session.peg_label(pending.from_peg)} -> {session.peg_label(pending.to_peg)}"
    return line


def cmd_solve(args: argparse.Namespace) -> int:
    params = _decode(args)
    settings = get_puzzle_settings()
    solution = solve(params.n, params.start_peg, params.end_peg, ceiling=settings.animation_ceiling)
    payload = solution.to_payload()
    digest = jcs_sha256(payload)
    if not args.snapshots:
        del payload["snapshots"]
    payload["min_moves_display"] = solution.min_moves_display
    payload["digest"] = digest
    print(json.dumps(payload, indent=2, sort_keys=True))
    return 0


def cmd_steps(args: argparse.Namespace) -> int:
    session, report = HanoiSession.from_params(_raw_params(args), profile=args.profile)
    _report_issues(report)
    if not session.animatable:
        print(
            f"{session.n} disks need {session.min_moves_display} moves; "
            f"step list is only produced up to {session.settings.animation_ceiling} disks "
            "with distinct start and end pegs.",
            file=sys.stderr,
        )
        return 1
    print(session.move_list_text())
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    session, report = HanoiSession.from_params(_raw_params(args), profile=args.profile)
    _report_issues(report)
    if args.speed is not None:
        session.set_speed_multiplier(args.speed)

    if args.journal:
        base_dir = get_section("journal.base_dir") if args.journal is True else args.journal
        journal.configure(base_dir, max_bytes=int(get_section("journal.max_bytes", 0)) or None)
        session.subscribe(journal.append_event)
        session.regenerate()

    def show(event: SessionEvent) -> None:
        if event["type"] == "session.cursor":
            print(_step_line(session))

    print(_step_line(session))
    if not session.animatable:
        print(f"not animatable; minimal moves: {session.min_moves_display}")
        return 0

    wait = (lambda _seconds: False) if args.no_wait else None
    driver = PlaybackDriver(session, wait=wait)
    session.play()
    session.subscribe(show)
    try:
        driver.run()
    except KeyboardInterrupt:  # pragma: no cover - interactive
        driver.stop()
        return 130
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    try:
        raw = json.loads(args.params)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"PARAMS must be a JSON object: {exc.msg}") from exc
    params, report = decode_params(raw)
    output = {
        "params": params.to_payload(),
        "ok": report.ok,
        "issues": [
            {"code": issue.code, "msg": issue.msg, "path": issue.path, "severity": issue.severity}
            for issue in report.issues
        ],
    }
    print(json.dumps(output, indent=2, sort_keys=True))
    return 0


def _add_puzzle_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--disks", "-n", type=int, default=None, help="Number of disks (clamped to 1-64)")
    parser.add_argument("--start", type=int, default=None, help="Start peg index (0-2)")
    parser.add_argument("--end", type=int, default=None, help="End peg index (0-2)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tower of Hanoi solver and player")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument(
        "--profile",
        default=None,
        help="Feature profile from config/features.toml, e.g. parity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    solve_cmd = sub.add_parser("solve", help="Print the optimal solution as JSON")
    _add_puzzle_args(solve_cmd)
    solve_cmd.add_argument("--snapshots", action="store_true", help="Include every intermediate configuration")
    solve_cmd.set_defaults(func=cmd_solve)

    steps = sub.add_parser("steps", help="Print the numbered move list")
    _add_puzzle_args(steps)
    steps.add_argument("--names", default=None, help="Comma-separated peg names, e.g. 'L,M,R'")
    steps.set_defaults(func=cmd_steps)

    play = sub.add_parser("play", help="Replay the solution step by step")
    _add_puzzle_args(play)
    play.add_argument("--names", default=None, help="Comma-separated peg names")
    play.add_argument("--speed", type=float, default=None, help="Speed multiplier (0.5-3.0)")
    play.add_argument("--no-wait", action="store_true", help="Do not sleep between steps")
    play.add_argument(
        "--journal",
        nargs="?",
        const=True,
        default=None,
        help="Journal session events as JSONL (default directory from config.toml)",
    )
    play.set_defaults(func=cmd_play)

    decode = sub.add_parser("decode", help="Re-validate a decoded parameter object")
    decode.add_argument("params", help="JSON object with n/start/end/names/colors")
    decode.set_defaults(func=cmd_decode)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
