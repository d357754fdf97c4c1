"""Document store abstraction.

Collections hold one JSON document per entity, keyed by doc_id. Writes go
through batches that apply atomically; listeners subscribed to a collection
receive the full snapshot right away and again after every committed change.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from ..core.exceptions import StoreReadError

logger = logging.getLogger(__name__)

SET = "set"
UPDATE = "update"
DELETE = "delete"


@dataclass(frozen=True)
class DocumentSnapshot:
    doc_id: str
    data: dict


@dataclass(frozen=True)
class WriteOp:
    kind: str
    collection: str
    doc_id: str
    data: dict = field(default_factory=dict)
    merge: bool = False


ChangeListener = Callable[[Sequence[DocumentSnapshot]], None]
Unsubscribe = Callable[[], None]


def new_document_id() -> str:
    return uuid.uuid4().hex


class WriteBatch:
    """Collects writes and hands them to the store in one atomic commit."""

    def __init__(self, commit: Callable[[Sequence[WriteOp]], None]):
        self._commit = commit
        self._ops: list[WriteOp] = []
        self._committed = False

    def set(self, collection: str, doc_id: str, data: dict, *, merge: bool = False) -> "WriteBatch":
        self._ops.append(WriteOp(SET, collection, str(doc_id), dict(data), merge))
        return self

    def update(self, collection: str, doc_id: str, fields: dict) -> "WriteBatch":
        """Merge fields into an existing document; the commit fails if it is missing."""
        self._ops.append(WriteOp(UPDATE, collection, str(doc_id), dict(fields)))
        return self

    def delete(self, collection: str, doc_id: str) -> "WriteBatch":
        self._ops.append(WriteOp(DELETE, collection, str(doc_id)))
        return self

    @property
    def ops(self) -> tuple[WriteOp, ...]:
        return tuple(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def commit(self) -> None:
        if self._committed:
            raise RuntimeError("Batch already committed")
        self._committed = True
        self._commit(tuple(self._ops))


class DocumentStore(ABC):
    """Base store: listener bookkeeping plus single writes expressed as batches."""

    connected = True

    def __init__(self) -> None:
        self._listeners: dict[str, list[ChangeListener]] = {}
        self._lock = threading.RLock()

    @abstractmethod
    def list(self, collection: str) -> list[DocumentSnapshot]:
        raise NotImplementedError

    @abstractmethod
    def _apply(self, ops: Sequence[WriteOp]) -> None:
        """Apply all ops atomically or none of them (raise StoreWriteError)."""

        raise NotImplementedError

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        for snap in self.list(collection):
            if snap.doc_id == str(doc_id):
                return snap.data
        return None

    def batch(self) -> WriteBatch:
        return WriteBatch(self._commit)

    def set(self, collection: str, doc_id: str, data: dict, *, merge: bool = False) -> None:
        self.batch().set(collection, doc_id, data, merge=merge).commit()

    def update(self, collection: str, doc_id: str, fields: dict) -> None:
        self.batch().update(collection, doc_id, fields).commit()

    def delete(self, collection: str, doc_id: str) -> None:
        self.batch().delete(collection, doc_id).commit()

    def subscribe(self, collection: str, on_change: ChangeListener) -> Unsubscribe:
        with self._lock:
            self._listeners.setdefault(collection, []).append(on_change)

        on_change(self.list(collection))

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(collection, [])
                if on_change in listeners:
                    listeners.remove(on_change)

        return unsubscribe

    def subscribed_collections(self) -> list[str]:
        with self._lock:
            return sorted(c for c, listeners in self._listeners.items() if listeners)

    def poll(self) -> list[str]:
        """Re-deliver collections changed by other writers. In-process stores have none."""
        return []

    def _commit(self, ops: Sequence[WriteOp]) -> None:
        if not ops:
            return
        self._apply(ops)
        try:
            self._notify({op.collection for op in ops})
        except StoreReadError as exc:
            # Committed already; listeners catch up on the next poll.
            logger.warning("Write committed but reloading listeners failed: %s", exc)

    def _notify(self, collections: Iterable[str]) -> None:
        for collection in sorted(set(collections)):
            with self._lock:
                listeners = list(self._listeners.get(collection, ()))
            if not listeners:
                continue
            snapshot = self.list(collection)
            for listener in listeners:
                listener(snapshot)


def merge_document(current: Optional[dict], op: WriteOp) -> Optional[dict]:
    """Resulting document of a single write, or None when it is deleted."""
    if op.kind == DELETE:
        return None
    if op.kind == SET and not op.merge:
        return dict(op.data)
    merged = dict(current or {})
    merged.update(op.data)
    return merged
