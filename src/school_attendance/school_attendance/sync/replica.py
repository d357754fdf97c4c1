from __future__ import annotations

import logging
import time
from functools import partial
from typing import Callable, Optional, Sequence

from ..core import constants as c
from ..core.exceptions import StoreWriteError
from ..database.document_store import DocumentSnapshot, DocumentStore, Unsubscribe
from .latch import SeedLatch
from .seeds import default_documents
from .state import AppState

logger = logging.getLogger(__name__)


class Replica:
    """Keeps AppState in step with the store through one subscription per collection."""

    def __init__(
        self,
        store: DocumentStore,
        state: AppState,
        *,
        latch: Optional[SeedLatch] = None,
        poll_seconds: float = c.DEFAULT_SYNC_POLL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._state = state
        self._latch = latch or SeedLatch()
        self._poll_seconds = float(poll_seconds)
        self._clock = clock
        self._last_poll: Optional[float] = None
        self._unsubscribes: list[Unsubscribe] = []

    @property
    def running(self) -> bool:
        return bool(self._unsubscribes)

    def start(self) -> None:
        if self.running:
            return
        self._state.connected = self._store.connected
        for collection in c.ALL_COLLECTIONS:
            self._unsubscribes.append(self._store.subscribe(collection, partial(self._on_snapshot, collection)))
        self._last_poll = self._clock()
        logger.info("Replica subscribed to %d collections (connected=%s)", len(self._unsubscribes), self._store.connected)

    def stop(self) -> None:
        while self._unsubscribes:
            self._unsubscribes.pop()()
        logger.info("Replica stopped")

    def poll_if_due(self) -> list[str]:
        """Ask the store for changes made elsewhere, at most once per poll interval."""
        if not self.running:
            return []
        now = self._clock()
        if self._last_poll is not None and now - self._last_poll < self._poll_seconds:
            return []
        self._last_poll = now
        return self._store.poll()

    def _on_snapshot(self, collection: str, snapshots: Sequence[DocumentSnapshot]) -> None:
        self._state.load_snapshot(collection, snapshots)
        if self._is_missing_defaults(collection, snapshots):
            self._seed(collection)

    @staticmethod
    def _is_missing_defaults(collection: str, snapshots: Sequence[DocumentSnapshot]) -> bool:
        if collection == c.SETTINGS:
            return all(s.doc_id != c.HEADMASTER_DOC_ID for s in snapshots)
        return not snapshots and bool(default_documents(collection))

    def _seed(self, collection: str) -> None:
        if not self._latch.claim(collection):
            return

        batch = self._store.batch()
        for doc_id, data in default_documents(collection).items():
            batch.set(collection, doc_id, data)
        try:
            batch.commit()
        except StoreWriteError:
            logger.exception("Seeding %s failed", collection)
            self._latch.release(collection)
            return
        logger.info("Seeded %d default documents into %s", len(batch), collection)
