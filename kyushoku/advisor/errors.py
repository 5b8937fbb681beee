"""Exception types raised by the ingestion pipeline and the suggestion engine."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import DocumentSource, ExtractedMenuData


class MenuAdvisorError(Exception):
    """Base class for all errors raised by this package."""


class UnsupportedTypeError(MenuAdvisorError, ValueError):
    """The file extension or declared document kind is not recognised."""

    def __init__(self, message: str, *, extension: str = "", kind: str = "") -> None:
        super().__init__(message)
        self.extension = extension
        self.kind = kind


class FormatNotImplementedError(MenuAdvisorError, NotImplementedError):
    """Extraction or parsing for this document kind is not implemented yet.

    ``partial`` holds whatever the extractor managed to produce. It is for
    diagnostics only; the error is authoritative.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str = "",
        partial: ExtractedMenuData | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.partial = partial


class MalformedDataError(MenuAdvisorError, ValueError):
    """The menu payload could not be decoded into menu records."""


class MenuNotFoundError(MenuAdvisorError, LookupError):
    """No school lunch menu is stored for the requested day."""

    def __init__(self, day: date) -> None:
        super().__init__(f"{day.isoformat()} の給食メニューが見つかりません")
        self.day = day


class DocumentIOError(MenuAdvisorError, OSError):
    """Reading the uploaded stream or the seed file failed."""


class DocumentProcessingError(MenuAdvisorError):
    """A pipeline step failed for one document.

    The original error is chained as ``__cause__`` (also exposed as
    ``cause``) and ``document`` is the DocumentSource left in error status.
    """

    def __init__(self, message: str, *, document: DocumentSource, stage: str) -> None:
        super().__init__(message)
        self.document = document
        self.stage = stage

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__
