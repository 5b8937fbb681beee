"""Extractor for photographed menus."""

from __future__ import annotations

from ..models import KIND_IMAGE
from . import PlaceholderExtractor


class ImageExtractor(PlaceholderExtractor):
    """OCR for photos of printed menus. Not implemented yet."""

    kind = KIND_IMAGE
    message = "画像のOCRはまだ実装されていません"
