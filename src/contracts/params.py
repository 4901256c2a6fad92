"""Re-validation of decoded puzzle parameters.

Parameters arriving from a shared link, a saved session or the command line
are decoded by the presentation layer and handed over as a plain mapping with
the keys ``n``, ``start``, ``end``, ``names`` and ``colors``.  Nothing in that
mapping is trusted: each field is checked against a JSON schema, normalised,
and replaced by its configured default when it does not conform.  Decoding
never aborts; every fallback is reported as a warning in the returned
:class:`~contracts.errors.ValidationReport`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

import jsonschema

from engine.moves import PEGS
from project_config import PuzzleSettings, get_puzzle_settings

from .errors import (
    ParamsValidationError,
    ValidationIssue,
    ValidationReport,
    make_report,
    make_warning,
)

_LOGGER = logging.getLogger(__name__)

_PEG_SCHEMA = {"enum": [0, 1, 2, "0", "1", "2"]}

PARAMS_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "hanoi:params@1",
    "type": "object",
    "properties": {
        "n": {
            "type": ["integer", "string"],
            "pattern": r"^\s*-?\d+\s*$",
        },
        "start": _PEG_SCHEMA,
        "end": _PEG_SCHEMA,
        "names": {
            "oneOf": [
                {"type": "string"},
                {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 3,
                    "maxItems": 3,
                },
            ]
        },
        "colors": {"type": ["object", "string"]},
    },
}

COLORS_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "hanoi:colors@1",
    "type": "object",
    "propertyNames": {"pattern": r"^[1-9][0-9]*$"},
    "additionalProperties": {"type": "string", "minLength": 1},
}

_PARAMS_VALIDATOR = jsonschema.Draft202012Validator(PARAMS_SCHEMA)
_COLORS_VALIDATOR = jsonschema.Draft202012Validator(COLORS_SCHEMA)


@dataclass(frozen=True)
class PuzzleParams:
    """Validated puzzle parameters ready to be handed to the engine."""

    n: int
    start_peg: int
    end_peg: int
    peg_names: Tuple[str, str, str]
    disk_colors: Mapping[int, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "n": self.n,
            "start": self.start_peg,
            "end": self.end_peg,
            "names": list(self.peg_names),
            "colors": {str(size): color for size, color in sorted(self.disk_colors.items())},
        }


def default_disk_colors(n: int, palette: Sequence[str]) -> Dict[int, str]:
    """Cycle ``palette`` over disk sizes ``1..n``."""

    if not palette:
        return {}
    return {size: palette[(size - 1) % len(palette)] for size in range(1, n + 1)}


def default_params(settings: PuzzleSettings | None = None) -> PuzzleParams:
    settings = settings or get_puzzle_settings()
    return PuzzleParams(
        n=settings.default_disks,
        start_peg=settings.default_start,
        end_peg=settings.default_end,
        peg_names=settings.peg_names,
        disk_colors=default_disk_colors(settings.default_disks, settings.disk_palette),
    )


def validate_peg(value: Any, path: str = "$.peg") -> int:
    """Return ``value`` as a peg identifier or raise :class:`ParamsValidationError`."""

    if isinstance(value, bool) or not isinstance(value, int) or value not in PEGS:
        raise ParamsValidationError("peg.invalid", f"peg must be one of {list(PEGS)}, got {value!r}", path)
    return value


def _schema_path(error: jsonschema.ValidationError) -> str:
    path = list(error.absolute_path)
    if not path:
        return "$"
    components: List[str] = ["$"]
    for part in path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _schema_failures(raw: Mapping[str, Any], issues: List[ValidationIssue]) -> Set[str]:
    failed: Set[str] = set()
    for error in sorted(_PARAMS_VALIDATOR.iter_errors(dict(raw)), key=lambda err: [str(part) for part in err.absolute_path]):
        path = list(error.absolute_path)
        if path:
            failed.add(str(path[0]))
        issues.append(make_warning("schema.invalid", error.message, _schema_path(error)))
    return failed


def _decode_names(value: Any, issues: List[ValidationIssue]) -> Optional[Tuple[str, str, str]]:
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
    else:
        parts = [str(part).strip() for part in value]
    if len(parts) != 3 or not all(parts):
        issues.append(make_warning("names.invalid", "names must hold three non-empty entries", "$.names"))
        return None
    return (parts[0], parts[1], parts[2])


def _decode_colors(value: Any, issues: List[ValidationIssue]) -> Optional[Dict[int, str]]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            issues.append(make_warning("colors.malformed", f"colors is not valid JSON: {exc.msg}", "$.colors"))
            return None
    if not isinstance(value, Mapping):
        issues.append(make_warning("colors.malformed", "colors must be an object", "$.colors"))
        return None
    errors = list(_COLORS_VALIDATOR.iter_errors(dict(value)))
    if errors:
        issues.append(make_warning("colors.malformed", errors[0].message, "$.colors"))
        return None
    return {int(size): str(color) for size, color in value.items()}


def decode_params(
    raw: Any,
    *,
    settings: PuzzleSettings | None = None,
) -> Tuple[PuzzleParams, ValidationReport]:
    """Normalise a decoded parameter mapping, falling back field by field."""

    settings = settings or get_puzzle_settings()
    defaults = default_params(settings)
    issues: List[ValidationIssue] = []

    if not isinstance(raw, Mapping):
        issues.append(make_warning("params.not_mapping", "parameters must be an object", "$"))
        raw = {}
    failed = _schema_failures(raw, issues)

    def usable(key: str) -> bool:
        return key in raw and key not in failed

    n = defaults.n
    if usable("n"):
        value = raw["n"]
        # Whole-number floats such as 4.0 satisfy the integer schema type.
        requested = int(value.strip()) if isinstance(value, str) else int(value)
        n = settings.clamp_disks(requested)
        if n != requested:
            issues.append(
                make_warning(
                    "disks.clamped",
                    f"n={requested} clamped to [{settings.min_disks}, {settings.max_disks}]",
                    "$.n",
                )
            )

    start = int(raw["start"]) if usable("start") else defaults.start_peg
    end = int(raw["end"]) if usable("end") else defaults.end_peg

    names = defaults.peg_names
    if usable("names"):
        names = _decode_names(raw["names"], issues) or names

    colors = default_disk_colors(n, settings.disk_palette)
    if usable("colors"):
        decoded = _decode_colors(raw["colors"], issues)
        if decoded is not None:
            colors.update(decoded)

    for issue in issues:
        _LOGGER.warning("parameter fallback %s at %s: %s", issue.code, issue.path, issue.msg)

    params = PuzzleParams(n=n, start_peg=start, end_peg=end, peg_names=names, disk_colors=colors)
    return params, make_report(issues)


__all__ = [
    "COLORS_SCHEMA",
    "PARAMS_SCHEMA",
    "PuzzleParams",
    "decode_params",
    "default_disk_colors",
    "default_params",
    "validate_peg",
]
