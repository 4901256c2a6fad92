"""Canonical JSON helpers for solution payloads.

Objects are serialised with recursively sorted keys, no insignificant
whitespace and UTF-8 output, so two equal payloads always produce the same
bytes and the same digest.  Tuples (moves, snapshots) are emitted as arrays.
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any

__all__ = ["jcs_dump", "jcs_sha256"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity are not permitted in canonical payloads")
        if obj.is_integer():
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonicalisation: {type(obj)!r}")


def jcs_dump(obj: Any) -> bytes:
    """Return canonical UTF-8 JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def jcs_sha256(obj: Any) -> str:
    """Return the ``sha256`` digest of the canonical representation of ``obj``."""

    digest = hashlib.sha256(jcs_dump(obj)).hexdigest()
    return f"sha256-{digest}"
