from __future__ import annotations

import asyncio
import json
import re
import sqlite3
import threading
from typing import Any, Mapping, Sequence

from domain.models import StoredDocument
from domain.ports import IdGeneratorPort
from ._datetime import decode_timestamp, encode_timestamp

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DocumentNotFoundError(LookupError):
    pass


class SQLiteDocumentStore:
    """
    SQLite-backed implementation of ``DocumentStorePort``.

    Every collection shares one ``documents`` table; fields are kept as a
    JSON object and equality filters are evaluated with ``json_extract``.
    Blocking calls run in a worker thread and are serialized by a lock.
    """

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS documents (
        collection TEXT NOT NULL,
        id         TEXT NOT NULL,
        fields     TEXT NOT NULL,
        PRIMARY KEY (collection, id)
    );
    """

    def __init__(self, id_generator: IdGeneratorPort, db_path: str = ":memory:") -> None:
        self._ids = id_generator
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(self._SCHEMA_SQL)

    def __enter__(self) -> "SQLiteDocumentStore":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any],
    ) -> Sequence[StoredDocument]:
        return await asyncio.to_thread(self._query, collection, dict(filters))

    async def insert(self, collection: str, fields: Mapping[str, Any]) -> str:
        return await asyncio.to_thread(self._insert, collection, dict(fields))

    async def update_by_key(
        self,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        await asyncio.to_thread(self._update, collection, document_id, dict(fields))

    async def delete_by_key(self, collection: str, document_id: str) -> None:
        await asyncio.to_thread(self._delete, collection, document_id)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # -- blocking helpers ---------------------------------------------------

    def _query(self, collection: str, filters: dict[str, Any]) -> list[StoredDocument]:
        sql = "SELECT id, fields FROM documents WHERE collection = ?"
        params: list[Any] = [collection]
        for name, value in filters.items():
            if not _FIELD_NAME.match(name):
                raise ValueError(f"Unsupported filter field: {name!r}")
            sql += " AND json_extract(fields, ?) = ?"
            params.extend([f"$.{name}", value])
        sql += " ORDER BY rowid"
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [
            StoredDocument(id=str(row[0]), fields=json.loads(row[1], object_hook=decode_timestamp))
            for row in rows
        ]

    def _insert(self, collection: str, fields: dict[str, Any]) -> str:
        payload = json.dumps(fields, default=encode_timestamp, sort_keys=True)
        with self._lock:
            document_id = self._ids.new_document_id()
            self._conn.execute(
                "INSERT INTO documents (collection, id, fields) VALUES (?, ?, ?)",
                (collection, document_id, payload),
            )
            self._conn.commit()
        return document_id

    def _update(self, collection: str, document_id: str, fields: dict[str, Any]) -> None:
        # Merge semantics: fields not named in the update keep their values.
        with self._lock:
            row = self._conn.execute(
                "SELECT fields FROM documents WHERE collection = ? AND id = ?",
                (collection, document_id),
            ).fetchone()
            if row is None:
                raise DocumentNotFoundError(f"{collection}/{document_id} does not exist")
            merged = json.loads(row[0], object_hook=decode_timestamp)
            merged.update(fields)
            self._conn.execute(
                "UPDATE documents SET fields = ? WHERE collection = ? AND id = ?",
                (json.dumps(merged, default=encode_timestamp, sort_keys=True), collection, document_id),
            )
            self._conn.commit()

    def _delete(self, collection: str, document_id: str) -> None:
        with self._lock:
            self._conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, document_id),
            )
            self._conn.commit()
