"""SQLite persistence for menus and the document audit trail."""

from .document_log import DocumentLogDB
from .menu_db import MenuDB
from .schema import ensure_schema

__all__ = [
    "DocumentLogDB",
    "MenuDB",
    "ensure_schema",
]
