"""Extractor for structured JSON menu files."""

from __future__ import annotations

from typing import BinaryIO

from ..models import KIND_JSON, ExtractedMenuData
from . import DocumentExtractor, now_utc, read_stream


class JSONExtractor(DocumentExtractor):
    """Pass JSON documents through as raw text with full confidence."""

    kind = KIND_JSON

    def extract(self, stream: BinaryIO, source_id: str) -> ExtractedMenuData:
        data = read_stream(stream)
        return ExtractedMenuData(
            source_id=source_id,
            raw_text=data.decode("utf-8-sig", errors="replace"),
            extracted_at=now_utc(),
            confidence=1.0,
            metadata={"format": KIND_JSON},
        )
