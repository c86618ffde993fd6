from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRequest
from .repository import AttendanceRequestRepository

_COLUMNS = """
    r.request_id, r.employee_id, r.work_date, r.requested_punch_in, r.requested_punch_out, r.reason,
    r.status, r.decided_by, r.decided_at, r.decision_note, r.created_at
"""


def _request(r: dict) -> AttendanceRequest:
    return AttendanceRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        requested_punch_in=normalize_mysql_time(r["requested_punch_in"]),
        requested_punch_out=normalize_mysql_time(r.get("requested_punch_out")),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
        decided_at=r.get("decided_at"),
        decision_note=r.get("decision_note"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRequestRepository(AttendanceRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[AttendanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_requests r WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _request(r) if r else None

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceRequest]:
        where, params = build_where(
            [
                ("r.employee_id=%s", employee_id),
                ("r.status=%s", status.value if status else None),
                ("e.department_id=%s", department_id),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC, r.request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_request(r) for r in fetchall(cur)]

    def find_pending(self, *, employee_id: int, work_date: date) -> Optional[AttendanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_requests r
                WHERE r.employee_id=%s AND r.work_date=%s AND r.status=%s
                LIMIT 1
                """,
                (int(employee_id), work_date, RequestStatus.PENDING.value),
            )
            r = fetchone(cur)
            return _request(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        requested_punch_in: time,
        requested_punch_out: Optional[time],
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_requests(employee_id, work_date, requested_punch_in, requested_punch_out, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    work_date,
                    requested_punch_in,
                    requested_punch_out,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: Optional[int],
        decided_at: datetime,
        note: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_requests
                SET status=%s, decided_by=%s, decided_at=%s, decision_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, note, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
