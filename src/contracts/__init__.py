"""Parameter contracts and canonical serialisation for the Hanoi engine."""

from __future__ import annotations

from .errors import ParamsValidationError, ValidationIssue, ValidationReport
from .jsoncanon import jcs_dump, jcs_sha256
from .params import PuzzleParams, decode_params, default_disk_colors, default_params, validate_peg

__all__ = [
    "ParamsValidationError",
    "PuzzleParams",
    "ValidationIssue",
    "ValidationReport",
    "decode_params",
    "default_disk_colors",
    "default_params",
    "jcs_dump",
    "jcs_sha256",
    "validate_peg",
]
