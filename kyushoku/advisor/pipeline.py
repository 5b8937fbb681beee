"""Document processing pipeline: detect → extract → parse → store."""

from __future__ import annotations

import logging
import sqlite3
import time
import uuid
from datetime import date
from typing import TYPE_CHECKING, BinaryIO, NoReturn

from .dispatcher import ExtractionDispatcher
from .errors import (
    DocumentIOError,
    DocumentProcessingError,
    FormatNotImplementedError,
    MalformedDataError,
    MenuAdvisorError,
    UnsupportedTypeError,
)
from .extractors import now_utc
from .models import (
    STATUS_COMPLETED,
    STATUS_ERROR,
    STATUS_PENDING,
    STATUS_PROCESSING,
    DocumentSource,
    SchoolLunchMenu,
)
from .parser import MenuParser

if TYPE_CHECKING:
    from .db import DocumentLogDB
    from .store import BaseMenuStore

logger = logging.getLogger(__name__)

STAGE_DETECT = "detect"
STAGE_EXTRACT = "extract"
STAGE_PARSE = "parse"
STAGE_STORE = "store"

_STAGE_MESSAGES = {
    STAGE_DETECT: "文書タイプの判定に失敗しました",
    STAGE_EXTRACT: "データの抽出に失敗しました",
    STAGE_PARSE: "献立データの解析に失敗しました",
    STAGE_STORE: "献立データの保存に失敗しました",
}


def generate_document_id() -> str:
    return f"doc_{time.time_ns()}_{uuid.uuid4().hex[:8]}"


class DocumentProcessor:
    """Process one uploaded document into school lunch menus.

    Runs synchronously. The store is only touched after every record of the
    document parsed successfully, and then all records go in as one batch.
    """

    def __init__(
        self,
        store: BaseMenuStore,
        dispatcher: ExtractionDispatcher | None = None,
        parser: MenuParser | None = None,
        document_log: DocumentLogDB | None = None,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher or ExtractionDispatcher()
        self._parser = parser or MenuParser()
        self._document_log = document_log

    def process_document(
        self,
        stream: BinaryIO,
        filename: str,
        kind: str | None = None,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> DocumentSource:
        """Run one document through the pipeline.

        Args:
            stream: Binary stream with the document contents.
            filename: Original file name, used for kind detection.
            kind: Explicit document kind; detected from ``filename`` if omitted.
            date_from: Keep only menus on or after this day.
            date_to: Keep only menus on or before this day.

        Returns:
            The DocumentSource in ``completed`` status.

        Raises:
            DocumentProcessingError: If any step fails. Its ``document`` is
                left in ``error`` status and the step's error is chained.
        """
        doc = DocumentSource(
            id=generate_document_id(),
            type=kind or "",
            original_name=filename,
            uploaded_at=now_utc(),
            status=STATUS_PENDING,
        )
        logger.info("文書を受け付けました: %s (%s)", filename, doc.id)
        doc.status = STATUS_PROCESSING

        try:
            doc.type = self._dispatcher.resolve_kind(filename, kind)
        except UnsupportedTypeError as e:
            self._fail(doc, STAGE_DETECT, e)

        try:
            extracted = self._dispatcher.extract(doc.type, stream, doc.id)
        except (FormatNotImplementedError, DocumentIOError) as e:
            self._fail(doc, STAGE_EXTRACT, e)

        try:
            menus = self._parser.parse(extracted)
        except (MalformedDataError, FormatNotImplementedError) as e:
            self._fail(doc, STAGE_PARSE, e)

        menus = _filter_by_date(menus, date_from, date_to)
        try:
            self._store.upsert_many(menus)
        except (sqlite3.Error, MenuAdvisorError) as e:
            self._fail(doc, STAGE_STORE, e)

        doc.menus_imported = len(menus)
        doc.processed_at = now_utc()
        doc.status = STATUS_COMPLETED
        self._record(doc)
        logger.info(
            "文書の処理が完了しました: %s (%d 件の献立を登録)",
            doc.id,
            len(menus),
        )
        return doc

    def _fail(self, doc: DocumentSource, stage: str, err: Exception) -> NoReturn:
        message = f"{_STAGE_MESSAGES[stage]}: {err}"
        doc.status = STATUS_ERROR
        doc.error_message = message
        self._record(doc)
        logger.warning("文書の処理に失敗しました: %s (%s)", doc.id, message)
        raise DocumentProcessingError(message, document=doc, stage=stage) from err

    def _record(self, doc: DocumentSource) -> None:
        if self._document_log is not None:
            self._document_log.record(doc)


def _filter_by_date(
    menus: list[SchoolLunchMenu],
    date_from: date | None,
    date_to: date | None,
) -> list[SchoolLunchMenu]:
    if date_from is None and date_to is None:
        return menus
    return [
        m
        for m in menus
        if (date_from is None or m.day >= date_from)
        and (date_to is None or m.day <= date_to)
    ]
