"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"


@dataclass(frozen=True)
class PuzzleSettings:
    """Puzzle bounds and display defaults from the ``[puzzle]`` table."""

    default_disks: int = 4
    min_disks: int = 1
    max_disks: int = 64
    animation_ceiling: int = 12
    default_start: int = 0
    default_end: int = 2
    peg_names: Tuple[str, str, str] = ("A", "B", "C")
    disk_palette: Tuple[str, ...] = ("#ffff00", "#0000ff", "#00ff00", "#ff0000")

    def clamp_disks(self, n: int) -> int:
        return max(self.min_disks, min(self.max_disks, int(n)))


@dataclass(frozen=True)
class PlaybackSettings:
    """Timing knobs for the playback driver from the ``[playback]`` table."""

    base_ms: int = 600
    min_interval_ms: int = 20
    speed_min: float = 0.5
    speed_max: float = 3.0
    speed_default: float = 1.0

    def clamp_speed(self, multiplier: float) -> float:
        return max(self.speed_min, min(self.speed_max, float(multiplier)))


def _config_path() -> Path:
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary."""
    path = _config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise RuntimeError(
            f"Configuration file '{_CONFIG_FILENAME}' was not found next to the project root"
        ) from exc


def get_section(path: str, default: Any = None) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@lru_cache(maxsize=1)
def get_puzzle_settings() -> PuzzleSettings:
    """Return the ``[puzzle]`` table as :class:`PuzzleSettings`."""

    block = _as_dict(get_config().get("puzzle"))
    defaults = PuzzleSettings()
    names = block.get("peg_names", defaults.peg_names)
    palette = block.get("disk_palette", defaults.disk_palette)
    if not isinstance(names, (list, tuple)) or len(names) != 3:
        raise RuntimeError("puzzle.peg_names must list exactly three names")
    return PuzzleSettings(
        default_disks=int(block.get("default_disks", defaults.default_disks)),
        min_disks=int(block.get("min_disks", defaults.min_disks)),
        max_disks=int(block.get("max_disks", defaults.max_disks)),
        animation_ceiling=int(block.get("animation_ceiling", defaults.animation_ceiling)),
        default_start=int(block.get("default_start", defaults.default_start)),
        default_end=int(block.get("default_end", defaults.default_end)),
        peg_names=(str(names[0]), str(names[1]), str(names[2])),
        disk_palette=tuple(str(color) for color in palette) or defaults.disk_palette,
    )


@lru_cache(maxsize=1)
def get_playback_settings() -> PlaybackSettings:
    """Return the ``[playback]`` table as :class:`PlaybackSettings`."""

    block = _as_dict(get_config().get("playback"))
    defaults = PlaybackSettings()
    return PlaybackSettings(
        base_ms=int(block.get("base_ms", defaults.base_ms)),
        min_interval_ms=int(block.get("min_interval_ms", defaults.min_interval_ms)),
        speed_min=float(block.get("speed_min", defaults.speed_min)),
        speed_max=float(block.get("speed_max", defaults.speed_max)),
        speed_default=float(block.get("speed_default", defaults.speed_default)),
    )


__all__ = [
    "PlaybackSettings",
    "PuzzleSettings",
    "get_config",
    "get_playback_settings",
    "get_puzzle_settings",
    "get_section",
]
