"""Audit trail of processed documents."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path

from ..models import DocumentSource, format_rfc3339, parse_rfc3339
from .schema import ensure_schema


class DocumentLogDB:
    """Manages the document_source table."""

    def __init__(self, db_path: str | Path = "~/.config/kyushoku/menus.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def record(self, doc: DocumentSource) -> None:
        """Insert or update the row for a DocumentSource."""
        with self._lock:
            conn = self._get_conn()
            conn.execute(
                """INSERT OR REPLACE INTO document_source
                   (id, type, original_name, uploaded_at, processed_at,
                    status, error_message, menus_imported)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    doc.id,
                    doc.type,
                    doc.original_name,
                    _stamp(doc.uploaded_at),
                    _stamp(doc.processed_at) if doc.processed_at else None,
                    doc.status,
                    doc.error_message,
                    doc.menus_imported,
                ),
            )
            conn.commit()

    def get(self, doc_id: str) -> DocumentSource | None:
        with self._lock:
            row = self._get_conn().execute(
                "SELECT * FROM document_source WHERE id = ?", (doc_id,)
            ).fetchone()
        return _row_to_document(row) if row else None

    def get_recent(self, limit: int = 20) -> list[DocumentSource]:
        """Return the most recently uploaded documents, newest first."""
        with self._lock:
            rows = self._get_conn().execute(
                "SELECT * FROM document_source ORDER BY uploaded_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [_row_to_document(r) for r in rows]

    def get_by_status(self, status: str) -> list[DocumentSource]:
        with self._lock:
            rows = self._get_conn().execute(
                "SELECT * FROM document_source WHERE status = ? ORDER BY uploaded_at",
                (status,),
            ).fetchall()
        return [_row_to_document(r) for r in rows]


def _stamp(value: datetime) -> str:
    # Fixed-width UTC so ORDER BY uploaded_at is chronological
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return format_rfc3339(value, timespec="microseconds")


def _row_to_document(row: sqlite3.Row) -> DocumentSource:
    return DocumentSource(
        id=row["id"],
        type=row["type"],
        original_name=row["original_name"],
        uploaded_at=parse_rfc3339(row["uploaded_at"]),
        processed_at=parse_rfc3339(row["processed_at"]) if row["processed_at"] else None,
        status=row["status"],
        error_message=row["error_message"],
        menus_imported=row["menus_imported"],
    )
