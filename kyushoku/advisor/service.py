"""Facade wiring the store, the ingestion pipeline and the suggestion engine."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from .models import DocumentSource, HomeMenuSuggestion, SchoolLunchMenu
from .pipeline import DocumentProcessor
from .store import BaseMenuStore, MenuStore, create_store
from .suggestion import SuggestionEngine

if TYPE_CHECKING:
    from .config import AdvisorConfig
    from .db import DocumentLogDB

logger = logging.getLogger(__name__)


def parse_day(value: str | date) -> date:
    """Accept a date or an ISO-8601 calendar date string (YYYY-MM-DD).

    Raises:
        ValueError: If the string is not a calendar date.
    """
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(
            f"日付の形式が正しくありません: {value!r} (YYYY-MM-DD で指定してください)"
        ) from None


class MenuAdvisorService:
    """Entry point for outer layers (HTTP handlers, the CLI).

    One instance owns one store, shared by every call made through it.
    """

    def __init__(
        self,
        store: BaseMenuStore | None = None,
        document_log: DocumentLogDB | None = None,
    ) -> None:
        self._store = store if store is not None else MenuStore()
        self._document_log = document_log
        self._processor = DocumentProcessor(self._store, document_log=document_log)
        self._engine = SuggestionEngine(self._store)

    @classmethod
    def from_config(cls, config: AdvisorConfig, *, load_seed: bool = True) -> MenuAdvisorService:
        """Build a service from configuration and preload the seed file."""
        document_log = None
        if config.database.enabled:
            from .db import DocumentLogDB

            document_log = DocumentLogDB(config.database.path)

        service = cls(create_store(config), document_log=document_log)
        if load_seed and config.data.seed_path:
            service.load_seed(config.data.seed_path)
        return service

    @property
    def store(self) -> BaseMenuStore:
        return self._store

    def process_document(
        self,
        stream: BinaryIO,
        filename: str,
        kind: str | None = None,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> DocumentSource:
        """Ingest one uploaded document. See DocumentProcessor.process_document."""
        return self._processor.process_document(
            stream, filename, kind, date_from=date_from, date_to=date_to
        )

    def list_menus(self) -> list[SchoolLunchMenu]:
        return self._store.list_all()

    @property
    def document_log(self) -> DocumentLogDB | None:
        return self._document_log

    def list_documents(
        self, status: str | None = None, limit: int = 20
    ) -> list[DocumentSource]:
        """Return processed documents from the audit log, newest first.

        Empty when the database (and so the audit log) is not enabled.
        """
        if self._document_log is None:
            return []
        if status:
            docs = self._document_log.get_by_status(status)
            docs.reverse()
            return docs[:limit]
        return self._document_log.get_recent(limit)

    def suggest(self, day: str | date, meal_type: str) -> HomeMenuSuggestion:
        """Suggest a home meal for an ISO date string or date.

        Raises:
            ValueError: If ``day`` is not a calendar date.
            MenuNotFoundError: If no school lunch is stored for the day.
        """
        return self._engine.suggest(parse_day(day), meal_type)

    def load_seed(self, path: str | Path) -> int:
        """Preload menus from a JSON file; a missing file is only a warning."""
        return self._store.load_seed(path)

    def close(self) -> None:
        self._store.close()
        if self._document_log is not None:
            self._document_log.close()
