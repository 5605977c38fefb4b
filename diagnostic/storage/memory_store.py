from __future__ import annotations

import logging
from typing import Optional

from diagnostic.models.diagnostic_data import DiagnosticData

from .base import DiagnosticStore

logger = logging.getLogger(__name__)


class InMemoryDiagnosticStore(DiagnosticStore):
    """Process-local store. Snapshots are immutable, so they are kept as-is."""

    def __init__(self) -> None:
        self._snapshots: dict[str, DiagnosticData] = {}

    def load(self, client_id: str) -> Optional[DiagnosticData]:
        return self._snapshots.get(client_id)

    def save(self, client_id: str, data: DiagnosticData) -> None:
        self._snapshots[client_id] = data
        logger.info("Saved diagnostic for client %s (memory)", client_id)
