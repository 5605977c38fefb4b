"""Boundary normalization for diagnostic snapshots."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from .diagnostic_data import DiagnosticData, initial_diagnostic_data


def normalize_diagnostic_data(
    raw: Optional[Mapping[str, Any] | DiagnosticData],
) -> DiagnosticData:
    """Validate a snapshot once, filling every missing or null field with its default.

    Accepts ``None`` (a fresh diagnostic), a mapping in camelCase or snake_case,
    or an already-validated ``DiagnosticData``. Out-of-range values raise
    ``pydantic.ValidationError``.
    """
    if raw is None:
        return initial_diagnostic_data()
    if isinstance(raw, DiagnosticData):
        return raw
    return DiagnosticData.model_validate(raw)


def load_diagnostic_data(file_path: Path) -> DiagnosticData:
    """Load and normalize a snapshot from a JSON file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Diagnostic snapshot not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    return normalize_diagnostic_data(raw)
