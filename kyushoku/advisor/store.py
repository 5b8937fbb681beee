"""School lunch menu stores keyed by calendar day."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import DocumentIOError, MenuNotFoundError
from .models import SchoolLunchMenu, calendar_day
from .parser import parse_json_menus

if TYPE_CHECKING:
    from .config import AdvisorConfig

logger = logging.getLogger(__name__)


class BaseMenuStore(ABC):
    """Abstract menu catalog: one record per calendar day, upsert only."""

    @abstractmethod
    def upsert_many(self, menus: Iterable[SchoolLunchMenu]) -> int:
        """Insert or replace each menu by calendar day, as one batch.

        A replaced record keeps its original position.

        Returns:
            Number of records that replaced an existing day.
        """
        ...

    @abstractmethod
    def lookup(self, day: date) -> SchoolLunchMenu:
        """Return the menu for ``day`` (datetimes are truncated).

        Raises:
            MenuNotFoundError: If no menu is stored for that day.
        """
        ...

    @abstractmethod
    def list_all(self) -> list[SchoolLunchMenu]:
        """Return every menu in storage order."""
        ...

    def upsert(self, menu: SchoolLunchMenu) -> bool:
        """Insert or replace one menu. Returns True if it replaced a record."""
        return self.upsert_many([menu]) > 0

    def close(self) -> None:
        pass

    def load_seed(self, path: str | Path) -> int:
        """Bulk-load a JSON array of menus.

        A missing file only logs a warning so startup can continue empty.

        Returns:
            Number of menus loaded.

        Raises:
            DocumentIOError: If the file exists but cannot be read.
            MalformedDataError: If the file is not a valid menu array.
        """
        p = Path(path).expanduser()
        if not p.exists():
            logger.warning("給食データが見つかりません: %s (空の状態で起動します)", p)
            return 0
        try:
            text = p.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise DocumentIOError(f"給食データの読み込みに失敗しました: {e}") from e

        menus = parse_json_menus(text)
        self.upsert_many(menus)
        logger.info("給食データを読み込みました: %d 件 (%s)", len(menus), p)
        return len(menus)


class MenuStore(BaseMenuStore):
    """In-memory store shared by all callers of one process.

    Scans and mutations happen under a single lock so readers never see
    a half-applied batch.
    """

    def __init__(self, menus: Iterable[SchoolLunchMenu] | None = None) -> None:
        self._menus: list[SchoolLunchMenu] = []
        self._lock = threading.Lock()
        if menus is not None:
            self.upsert_many(menus)

    def upsert_many(self, menus: Iterable[SchoolLunchMenu]) -> int:
        batch = list(menus)
        replaced = 0
        with self._lock:
            for menu in batch:
                idx = self._index_of(menu.day)
                if idx is None:
                    self._menus.append(menu)
                else:
                    self._menus[idx] = menu
                    replaced += 1
        return replaced

    def lookup(self, day: date) -> SchoolLunchMenu:
        day = calendar_day(day)
        with self._lock:
            idx = self._index_of(day)
            if idx is None:
                raise MenuNotFoundError(day)
            return self._menus[idx]

    def list_all(self) -> list[SchoolLunchMenu]:
        with self._lock:
            return list(self._menus)

    def __len__(self) -> int:
        with self._lock:
            return len(self._menus)

    def _index_of(self, day: date) -> int | None:
        for i, menu in enumerate(self._menus):
            if menu.day == day:
                return i
        return None


def create_store(config: AdvisorConfig) -> BaseMenuStore:
    """Create the menu store selected by configuration."""
    if config.database.enabled:
        from .db import MenuDB

        logger.info("SQLite の給食データベースを使用します: %s", config.database.path)
        return MenuDB(config.database.path)
    return MenuStore()
