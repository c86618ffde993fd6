from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift, ShiftAssignment
from .repository import ShiftRepository


def _shift(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        break_minutes=int(r.get("break_minutes") or 0),
    )


def _assignment(r: dict) -> ShiftAssignment:
    return ShiftAssignment(
        schedule_id=int(r["schedule_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        shift_id=int(r["shift_id"]),
        note=r.get("note"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, break_minutes
                FROM shifts
                ORDER BY start_time
                """
            )
            return [_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, break_minutes
                FROM shifts
                WHERE shift_id=%s
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            return _shift(r) if r else None

    def get_by_name(self, shift_name: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, break_minutes
                FROM shifts
                WHERE shift_name=%s
                """,
                (shift_name,),
            )
            r = fetchone(cur)
            return _shift(r) if r else None

    def create(self, *, shift_name: str, start_time: time, end_time: time, break_minutes: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO shifts(shift_name, start_time, end_time, break_minutes) VALUES(%s,%s,%s,%s)",
                (shift_name, start_time, end_time, int(break_minutes)),
            )
            return int(cur.lastrowid)

    def get_assignment(self, *, employee_id: int, work_date: date) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, employee_id, work_date, shift_id, note
                FROM shift_schedules
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _assignment(r) if r else None

    def upsert_assignment(self, *, employee_id: int, work_date: date, shift_id: int, note: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_schedules(employee_id, work_date, shift_id, note)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE shift_id=VALUES(shift_id), note=VALUES(note)
                """,
                (int(employee_id), work_date, int(shift_id), note),
            )

            # On update lastrowid can be 0; look the row up instead.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT schedule_id FROM shift_schedules WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

    def list_assignments(self, *, start: date, end: date) -> Sequence[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, employee_id, work_date, shift_id, note
                FROM shift_schedules
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date, employee_id
                """,
                (start, end),
            )
            return [_assignment(r) for r in fetchall(cur)]
