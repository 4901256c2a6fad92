"""Runtime feature flag helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

__all__ = ["get_auto_swap_feature", "is_auto_swap_enabled", "reload"]

_FEATURES_FILENAME = "config/features.toml"

# Checked in order; the first key holding a recognisable boolean wins.
_AUTO_SWAP_OVERRIDE_KEYS = (
    "CLI_HANOI_AUTO_SWAP",
    "HANOI_AUTO_SWAP",
)


def _features_path() -> Path:
    return Path(__file__).resolve().parents[1] / _FEATURES_FILENAME


@lru_cache(maxsize=1)
def _load_features() -> dict[str, Any]:
    path = _features_path()
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def reload() -> None:
    """Clear the cached feature configuration."""

    _load_features.cache_clear()


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def get_auto_swap_feature(profile: str | None = None) -> dict[str, Any]:
    """Return the merged auto-swap feature block for the given profile."""

    features = _load_features()
    entry = features.get("auto_swap")
    merged: dict[str, Any] = {}
    if isinstance(entry, dict):
        for key, value in entry.items():
            if key == "by_profile":
                continue
            merged[key] = value

        if profile:
            by_profile = entry.get("by_profile")
            if isinstance(by_profile, dict):
                profile_block = by_profile.get(profile.lower())
                if isinstance(profile_block, dict):
                    merged.update(profile_block)
    return merged


def is_auto_swap_enabled(env: Mapping[str, str] | None = None, *, profile: str | None = None) -> bool:
    """Return ``True`` when choosing a start peg equal to the end peg swaps them."""

    feature_block = get_auto_swap_feature(profile)
    enabled = bool(feature_block.get("enabled", False))

    if env:
        for key in _AUTO_SWAP_OVERRIDE_KEYS:
            override = _coerce_bool(env.get(key))
            if override is not None:
                enabled = override
                break

    return enabled
