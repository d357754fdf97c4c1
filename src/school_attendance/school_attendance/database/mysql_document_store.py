from __future__ import annotations

import logging
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreReadError, StoreWriteError
from .connection import DatabaseConnection
from .document_store import DELETE, UPDATE, DocumentSnapshot, DocumentStore, WriteOp, merge_document
from .mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json

logger = logging.getLogger(__name__)


class MySQLDocumentStore(DocumentStore):
    """Document store kept in a single `documents` table (one JSON row per document)."""

    def __init__(self, conn_factory: DatabaseConnection):
        super().__init__()
        self._conn_factory = conn_factory
        self._fingerprints: dict[str, tuple] = {}

    def list(self, collection: str) -> list[DocumentSnapshot]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT doc_id, data
                    FROM documents
                    WHERE collection=%s
                    ORDER BY doc_id ASC
                    """,
                    (collection,),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as exc:
            raise StoreReadError("Gagal membaca data dari database. Silakan coba lagi.") from exc
        return [DocumentSnapshot(doc_id=r["doc_id"], data=load_json(r["data"])) for r in rows]

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT data FROM documents WHERE collection=%s AND doc_id=%s",
                    (collection, str(doc_id)),
                )
                row = fetchone(cur)
        except mysql.connector.Error as exc:
            raise StoreReadError("Gagal membaca data dari database. Silakan coba lagi.") from exc
        return load_json(row["data"]) if row else None

    def _apply(self, ops: Sequence[WriteOp]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for op in ops:
                    self._apply_one(cur, op)
        except mysql.connector.Error as exc:
            logger.error("Batch of %d writes failed: %s", len(ops), exc)
            raise StoreWriteError("Gagal menyimpan data ke database. Silakan coba lagi.") from exc

        logger.debug(
            "Committed %d writes to %s",
            len(ops),
            ", ".join(sorted({op.collection for op in ops})),
        )

    def _apply_one(self, cur, op: WriteOp) -> None:
        if op.kind == DELETE:
            cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (op.collection, op.doc_id))
            return

        current = None
        if op.merge or op.kind == UPDATE:
            cur.execute(
                "SELECT data FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                (op.collection, op.doc_id),
            )
            row = fetchone(cur)
            current = load_json(row["data"]) if row else None
            if op.kind == UPDATE and current is None:
                raise StoreWriteError(f"Dokumen {op.collection}/{op.doc_id} tidak ditemukan")

        cur.execute(
            """
            INSERT INTO documents(collection, doc_id, data)
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE data=VALUES(data)
            """,
            (op.collection, op.doc_id, dump_json(merge_document(current, op))),
        )

    def poll(self) -> list[str]:
        """Notify listeners of collections whose (count, last update) changed since the last poll."""
        watched = self.subscribed_collections()
        if not watched:
            return []

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT collection, COUNT(*) AS n, MAX(updated_at) AS changed_at
                    FROM documents
                    GROUP BY collection
                    """
                )
                rows = {r["collection"]: (int(r["n"]), r["changed_at"]) for r in fetchall(cur)}
        except mysql.connector.Error as exc:
            logger.warning("Change poll failed, keeping current replica: %s", exc)
            return []

        changed: list[str] = []
        for collection in watched:
            fingerprint = rows.get(collection, (0, None))
            if self._fingerprints.get(collection) != fingerprint:
                self._fingerprints[collection] = fingerprint
                changed.append(collection)

        try:
            self._notify(changed)
        except StoreReadError as exc:
            for collection in changed:
                self._fingerprints.pop(collection, None)
            logger.warning("Reloading %s failed, retrying on next poll: %s", ", ".join(changed), exc)
            return []
        return changed
