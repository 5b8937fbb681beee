"""PDF extractors (text layer and scanned pages)."""

from __future__ import annotations

from ..models import KIND_PDF_IMAGE, KIND_PDF_TEXT
from . import PlaceholderExtractor


class PDFTextExtractor(PlaceholderExtractor):
    """Text-layer PDF extraction. Not implemented yet."""

    kind = KIND_PDF_TEXT
    message = "PDFのテキスト抽出はまだ実装されていません"


class PDFImageExtractor(PlaceholderExtractor):
    """OCR for scanned PDFs. Not implemented yet."""

    kind = KIND_PDF_IMAGE
    message = "画像PDFのOCRはまだ実装されていません"
