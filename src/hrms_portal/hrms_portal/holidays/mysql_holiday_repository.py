from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _holiday(r: dict) -> Holiday:
    return Holiday(holiday_id=int(r["holiday_id"]), title=r["title"], holiday_date=r["holiday_date"])


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Holiday]:
        where, params = build_where([("holiday_date>=%s", start), ("holiday_date<=%s", end)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT holiday_id, title, holiday_date FROM holidays WHERE {where} ORDER BY holiday_date",
                tuple(params),
            )
            return [_holiday(r) for r in fetchall(cur)]

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_id, title, holiday_date FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            r = fetchone(cur)
            return _holiday(r) if r else None

    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_id, title, holiday_date FROM holidays WHERE holiday_date=%s", (holiday_date,))
            r = fetchone(cur)
            return _holiday(r) if r else None

    def create(self, *, title: str, holiday_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO holidays(title, holiday_date) VALUES(%s,%s)", (title, holiday_date))
            return int(cur.lastrowid)

    def update(self, holiday_id: int, *, title: str, holiday_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE holidays SET title=%s, holiday_date=%s WHERE holiday_id=%s",
                (title, holiday_date, int(holiday_id)),
            )
            return cur.rowcount > 0

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
