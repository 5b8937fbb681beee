"""Document extractor base class, kind detection, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import BinaryIO

from ..errors import DocumentIOError, FormatNotImplementedError, UnsupportedTypeError
from ..models import (
    DOCUMENT_KINDS,
    KIND_IMAGE,
    KIND_JSON,
    KIND_PDF_IMAGE,
    KIND_PDF_TEXT,
    ExtractedMenuData,
)

# Extension → document kind. PDFs are not inspected, so scanned PDFs
# only get KIND_PDF_IMAGE when the caller declares it.
_EXTENSION_KINDS: dict[str, str] = {
    ".json": KIND_JSON,
    ".pdf": KIND_PDF_TEXT,
    ".jpg": KIND_IMAGE,
    ".jpeg": KIND_IMAGE,
    ".png": KIND_IMAGE,
    ".bmp": KIND_IMAGE,
    ".gif": KIND_IMAGE,
}


def file_extension(filename: str) -> str:
    """Return the extension of the last path element, including the dot."""
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    idx = name.rfind(".")
    return name[idx:] if idx >= 0 else ""


def detect_document_kind(filename: str) -> str:
    """Determine the document kind from the file extension (case-insensitive).

    Raises:
        UnsupportedTypeError: If the extension is not recognised.
    """
    ext = file_extension(filename).lower()
    kind = _EXTENSION_KINDS.get(ext)
    if kind is None:
        raise UnsupportedTypeError(
            f"対応していないファイル形式です: {ext or '(拡張子なし)'}",
            extension=ext,
        )
    return kind


def normalize_kind(kind: str) -> str:
    """Validate an explicitly declared kind. Accepts ``pdf-text`` style too.

    Raises:
        UnsupportedTypeError: If the kind is not one of DOCUMENT_KINDS.
    """
    normalized = kind.strip().lower().replace("-", "_")
    if normalized not in DOCUMENT_KINDS:
        raise UnsupportedTypeError(
            f"対応していない文書タイプです: {kind!r}  "
            f"({' / '.join(DOCUMENT_KINDS)} から選択してください)",
            kind=kind,
        )
    return normalized


def read_stream(stream: BinaryIO) -> bytes:
    """Read the whole stream.

    Raises:
        DocumentIOError: If the underlying read fails or the stream is closed.
    """
    try:
        data = stream.read()
    except (OSError, ValueError) as e:
        raise DocumentIOError(f"ファイルの読み込みに失敗しました: {e}") from e
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


class DocumentExtractor(ABC):
    """Abstract base for pulling raw menu text out of one kind of document."""

    kind: str = ""

    @abstractmethod
    def extract(self, stream: BinaryIO, source_id: str) -> ExtractedMenuData:
        """Extract raw text from the stream.

        Implementations that cannot handle the document raise
        FormatNotImplementedError with the partial result attached.
        """
        ...


def create_extractor(kind: str) -> DocumentExtractor:
    """Create the extractor for a document kind."""
    match kind:
        case "json":
            from .structured import JSONExtractor

            return JSONExtractor()
        case "pdf_text":
            from .pdf import PDFTextExtractor

            return PDFTextExtractor()
        case "pdf_image":
            from .pdf import PDFImageExtractor

            return PDFImageExtractor()
        case "image":
            from .image import ImageExtractor

            return ImageExtractor()
        case _:
            raise UnsupportedTypeError(
                f"対応していない文書タイプです: {kind!r}",
                kind=kind,
            )


class PlaceholderExtractor(DocumentExtractor):
    """Extractor for a kind with no real implementation yet.

    Builds a diagnostic shell (confidence 0.0, ``status=not_implemented``)
    and raises FormatNotImplementedError carrying it.
    """

    message: str = ""

    def extract(self, stream: BinaryIO, source_id: str) -> ExtractedMenuData:
        partial = ExtractedMenuData(
            source_id=source_id,
            raw_text=self.message,
            extracted_at=now_utc(),
            confidence=0.0,
            metadata={"format": self.kind, "status": "not_implemented"},
        )
        raise FormatNotImplementedError(
            self.message, kind=self.kind, partial=partial
        )
