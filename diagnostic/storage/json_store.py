"""File-backed store: one camelCase JSON snapshot per client."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from diagnostic.models.diagnostic_data import DiagnosticData
from diagnostic.models.loader import load_diagnostic_data

from .base import DiagnosticStore, SnapshotError

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileDiagnosticStore(DiagnosticStore):
    """Stores each client's snapshot as ``<directory>/<client_id>.json``."""

    def __init__(self, directory: Path | str):
        self._directory = Path(directory)

    def _path_for(self, client_id: str) -> Path:
        if not _SAFE_ID.match(client_id) or client_id in {".", ".."}:
            raise SnapshotError(f"Invalid client id for file storage: {client_id!r}")
        return self._directory / f"{client_id}.json"

    def load(self, client_id: str) -> Optional[DiagnosticData]:
        path = self._path_for(client_id)
        if not path.exists():
            return None
        try:
            return load_diagnostic_data(path)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise SnapshotError(f"Could not read diagnostic snapshot {path}: {e}") from e

    def save(self, client_id: str, data: DiagnosticData) -> None:
        path = self._path_for(client_id)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data.to_snapshot(), f, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            raise SnapshotError(f"Could not write diagnostic snapshot {path}: {e}") from e
        logger.info("Saved diagnostic for client %s to %s", client_id, path)
