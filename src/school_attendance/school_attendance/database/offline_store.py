from __future__ import annotations

from typing import Sequence

from ..core.exceptions import StoreNotConfiguredError
from .document_store import ChangeListener, DocumentSnapshot, DocumentStore, Unsubscribe, WriteOp


class OfflineDocumentStore(DocumentStore):
    """Stand-in used when no store is configured: reads are empty, writes fail loudly."""

    connected = False

    def list(self, collection: str) -> list[DocumentSnapshot]:
        return []

    def _apply(self, ops: Sequence[WriteOp]) -> None:
        raise StoreNotConfiguredError("Database belum dikonfigurasi. Data tidak akan tersimpan.")

    def subscribe(self, collection: str, on_change: ChangeListener) -> Unsubscribe:
        # Nothing will ever arrive; no snapshot means no auto-seeding either.
        return lambda: None
