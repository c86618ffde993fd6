from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveRequest, LeaveType
from .repository import LeaveRepository

_TYPE_COLUMNS = "leave_type_id, name, code, max_days, is_paid, carry_forward"
_REQUEST_COLUMNS = """
    request_id, employee_id, leave_type_id, from_date, to_date, total_days, reason,
    status, decided_by, decided_at, decision_note, created_at
"""


def _leave_type(r: dict) -> LeaveType:
    return LeaveType(
        leave_type_id=int(r["leave_type_id"]),
        name=r["name"],
        code=r["code"],
        max_days=int(r["max_days"]),
        is_paid=bool(r["is_paid"]),
        carry_forward=bool(r["carry_forward"]),
    )


def _leave_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        leave_type_id=int(r["leave_type_id"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        total_days=int(r["total_days"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
        decided_at=r.get("decided_at"),
        decision_note=r.get("decision_note"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_types(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TYPE_COLUMNS} FROM leave_types ORDER BY name")
            return [_leave_type(r) for r in fetchall(cur)]

    def _get_type_where(self, column: str, value) -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TYPE_COLUMNS} FROM leave_types WHERE {column}=%s", (value,))
            r = fetchone(cur)
            return _leave_type(r) if r else None

    def get_type(self, leave_type_id: int) -> Optional[LeaveType]:
        return self._get_type_where("leave_type_id", int(leave_type_id))

    def get_type_by_name(self, name: str) -> Optional[LeaveType]:
        return self._get_type_where("name", name)

    def get_type_by_code(self, code: str) -> Optional[LeaveType]:
        return self._get_type_where("code", code)

    def create_type(self, *, name: str, code: str, max_days: int, is_paid: bool, carry_forward: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO leave_types(name, code, max_days, is_paid, carry_forward) VALUES(%s,%s,%s,%s,%s)",
                (name, code, int(max_days), 1 if is_paid else 0, 1 if carry_forward else 0),
            )
            return int(cur.lastrowid)

    def update_type(self, leave_type: LeaveType) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_types
                SET name=%s, code=%s, max_days=%s, is_paid=%s, carry_forward=%s
                WHERE leave_type_id=%s
                """,
                (
                    leave_type.name,
                    leave_type.code,
                    int(leave_type.max_days),
                    1 if leave_type.is_paid else 0,
                    1 if leave_type.carry_forward else 0,
                    int(leave_type.leave_type_id),
                ),
            )
            return cur.rowcount > 0

    def delete_type(self, leave_type_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_types WHERE leave_type_id=%s", (int(leave_type_id),))
            return cur.rowcount > 0

    def count_type_usage(self, leave_type_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM leave_requests WHERE leave_type_id=%s", (int(leave_type_id),))
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _leave_request(r) if r else None

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        where, params = build_where(
            [
                ("employee_id=%s", employee_id),
                ("status=%s", status.value if status else None),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_leave_request(r) for r in fetchall(cur)]

    def create_request(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type_id, from_date, to_date, total_days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(leave_type_id),
                    from_date,
                    to_date,
                    int(total_days),
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def update_request(
        self,
        request_id: int,
        *,
        leave_type_id: int,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET leave_type_id=%s, from_date=%s, to_date=%s, total_days=%s, reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    int(leave_type_id),
                    from_date,
                    to_date,
                    int(total_days),
                    reason,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete_request(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE request_id=%s AND status=%s",
                (int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def decide_request(
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
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=%s, decision_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, note, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def find_overlapping(
        self,
        *,
        employee_id: int,
        from_date: date,
        to_date: date,
        exclude_request_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        where, params = build_where(
            [
                ("employee_id=%s", int(employee_id)),
                ("status<>%s", RequestStatus.REJECTED.value),
                ("from_date<=%s", to_date),
                ("to_date>=%s", from_date),
                ("request_id<>%s", exclude_request_id),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE {where}", tuple(params))
            return [_leave_request(r) for r in fetchall(cur)]

    def sum_days(self, *, employee_id: int, leave_type_id: int, year: int, status: RequestStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(total_days), 0) AS days
                FROM leave_requests
                WHERE employee_id=%s AND leave_type_id=%s AND YEAR(from_date)=%s AND status=%s
                """,
                (int(employee_id), int(leave_type_id), int(year), status.value),
            )
            r = fetchone(cur)
            return int(r["days"]) if r else 0

    def list_approved_between(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        where, params = build_where(
            [
                ("status=%s", RequestStatus.APPROVED.value),
                ("from_date<=%s", end),
                ("to_date>=%s", start),
                ("employee_id=%s", employee_id),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE {where} ORDER BY from_date",
                tuple(params),
            )
            return [_leave_request(r) for r in fetchall(cur)]
