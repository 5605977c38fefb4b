from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from diagnostic.models.diagnostic_data import DiagnosticData


class SnapshotError(Exception):
    """A stored diagnostic snapshot could not be read or written."""


class DiagnosticStore(ABC):
    """Abstract base for diagnostic snapshot persistence, keyed by client id."""

    @abstractmethod
    def load(self, client_id: str) -> Optional[DiagnosticData]:
        """Return the stored snapshot for a client, or None if there is none."""
        ...

    @abstractmethod
    def save(self, client_id: str, data: DiagnosticData) -> None:
        """Store (replace) the snapshot for a client."""
        ...
