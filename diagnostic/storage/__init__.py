from __future__ import annotations

from typing import Optional

from diagnostic.config.settings import Settings
from diagnostic.models.enums import StorageBackend

from .base import DiagnosticStore, SnapshotError
from .json_store import JsonFileDiagnosticStore
from .memory_store import InMemoryDiagnosticStore


def get_store(settings: Optional[Settings] = None) -> DiagnosticStore:
    """Build the store configured in settings."""
    settings = settings or Settings()
    if settings.storage_backend == StorageBackend.JSON:
        return JsonFileDiagnosticStore(settings.storage_dir)
    return InMemoryDiagnosticStore()


__all__ = [
    "DiagnosticStore",
    "InMemoryDiagnosticStore",
    "JsonFileDiagnosticStore",
    "SnapshotError",
    "get_store",
]
