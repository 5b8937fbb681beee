"""Route uploaded documents to the extractor for their kind."""

from __future__ import annotations

import logging
from typing import BinaryIO

from .extractors import (
    DocumentExtractor,
    create_extractor,
    detect_document_kind,
    normalize_kind,
)
from .models import DOCUMENT_KINDS, ExtractedMenuData

logger = logging.getLogger(__name__)


class ExtractionDispatcher:
    """Classify documents and hand them to a per-kind extractor.

    Extractors are created on first use via ``create_extractor``; a real
    implementation can replace a placeholder with ``register``.
    """

    def __init__(self, extractors: dict[str, DocumentExtractor] | None = None) -> None:
        self._extractors: dict[str, DocumentExtractor] = {}
        for kind, extractor in (extractors or {}).items():
            self.register(kind, extractor)

    def register(self, kind: str, extractor: DocumentExtractor) -> None:
        """Use ``extractor`` for every document of ``kind``."""
        self._extractors[normalize_kind(kind)] = extractor

    def resolve_kind(self, filename: str, kind: str | None = None) -> str:
        """Return the declared kind if given, else detect it from the filename.

        Raises:
            UnsupportedTypeError: If neither yields a known kind.
        """
        if kind:
            return normalize_kind(kind)
        return detect_document_kind(filename)

    def extractor_for(self, kind: str) -> DocumentExtractor:
        kind = normalize_kind(kind)
        extractor = self._extractors.get(kind)
        if extractor is None:
            extractor = create_extractor(kind)
            self._extractors[kind] = extractor
        return extractor

    def extract(self, kind: str, stream: BinaryIO, source_id: str) -> ExtractedMenuData:
        """Extract raw menu data from a document of a resolved kind."""
        extractor = self.extractor_for(kind)
        logger.debug("抽出開始: %s (%s)", source_id, type(extractor).__name__)
        return extractor.extract(stream, source_id)

    @property
    def supported_kinds(self) -> tuple[str, ...]:
        return DOCUMENT_KINDS
