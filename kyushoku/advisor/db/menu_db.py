"""SQLite-backed school lunch menu store."""

from __future__ import annotations

import json
import sqlite3
import threading
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ..errors import MenuNotFoundError
from ..models import SchoolLunchMenu, calendar_day
from ..parser import menu_from_dict
from ..store import BaseMenuStore
from .schema import ensure_schema


class MenuDB(BaseMenuStore):
    """Manages the school_lunch_menu table.

    Same contract as the in-memory MenuStore: rows are keyed by calendar
    day and an upsert keeps the row id, so storage order is preserved.
    """

    def __init__(self, db_path: str | Path = "~/.config/kyushoku/menus.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def upsert_many(self, menus: Iterable[SchoolLunchMenu]) -> int:
        batch = list(menus)
        replaced = 0
        with self._lock:
            conn = self._get_conn()
            with conn:
                for menu in batch:
                    key = menu.day.isoformat()
                    exists = conn.execute(
                        "SELECT 1 FROM school_lunch_menu WHERE menu_date = ?",
                        (key,),
                    ).fetchone()
                    if exists:
                        replaced += 1
                    conn.execute(
                        """INSERT INTO school_lunch_menu (menu_date, main_dish, menu_json)
                           VALUES (?, ?, ?)
                           ON CONFLICT(menu_date) DO UPDATE SET
                               main_dish = excluded.main_dish,
                               menu_json = excluded.menu_json,
                               updated_at = datetime('now', 'localtime')""",
                        (
                            key,
                            menu.main_dish,
                            json.dumps(menu.to_dict(), ensure_ascii=False),
                        ),
                    )
        return replaced

    def lookup(self, day: date) -> SchoolLunchMenu:
        day = calendar_day(day)
        with self._lock:
            row = self._get_conn().execute(
                "SELECT menu_json FROM school_lunch_menu WHERE menu_date = ?",
                (day.isoformat(),),
            ).fetchone()
        if row is None:
            raise MenuNotFoundError(day)
        return menu_from_dict(json.loads(row["menu_json"]))

    def list_all(self) -> list[SchoolLunchMenu]:
        with self._lock:
            rows = self._get_conn().execute(
                "SELECT menu_json FROM school_lunch_menu ORDER BY id"
            ).fetchall()
        return [menu_from_dict(json.loads(r["menu_json"])) for r in rows]

    def __len__(self) -> int:
        with self._lock:
            row = self._get_conn().execute(
                "SELECT COUNT(*) AS n FROM school_lunch_menu"
            ).fetchone()
        return row["n"]
