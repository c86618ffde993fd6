from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.attendance_id, a.employee_id, a.work_date, a.punch_in, a.punch_out, a.status, a.worked_minutes, a.note"


def _record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        punch_in=r["punch_in"],
        punch_out=r.get("punch_out"),
        status=AttendanceStatus(r["status"]),
        worked_minutes=int(r.get("worked_minutes") or 0),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.employee_id=%s AND a.work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _record(r) if r else None

    def list_records(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        where, params = build_where(
            [
                ("a.work_date>=%s", start),
                ("a.work_date<=%s", end),
                ("a.employee_id=%s", employee_id),
                ("e.department_id=%s", department_id),
            ]
        )
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_records a
            JOIN employees e ON e.employee_id = a.employee_id
            WHERE {where}
            ORDER BY a.work_date DESC, a.employee_id
        """
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_record(r) for r in fetchall(cur)]

    def create_punch_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, punch_in, status, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, punch_in, status.value, note),
            )
            return int(cur.lastrowid)

    def update_punch_out(
        self,
        *,
        attendance_id: int,
        punch_out: datetime,
        worked_minutes: int,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out=%s, worked_minutes=%s, status=%s, note=%s
                WHERE attendance_id=%s AND punch_out IS NULL
                """,
                (punch_out, int(worked_minutes), status.value, note, int(attendance_id)),
            )
            return cur.rowcount > 0

    def upsert_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        punch_out: Optional[datetime],
        worked_minutes: int,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, punch_in, punch_out, status, worked_minutes, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id),
                    punch_in=VALUES(punch_in),
                    punch_out=VALUES(punch_out),
                    status=VALUES(status),
                    worked_minutes=VALUES(worked_minutes),
                    note=VALUES(note)
                """,
                (int(employee_id), work_date, punch_in, punch_out, status.value, int(worked_minutes), note),
            )
            return int(cur.lastrowid)
