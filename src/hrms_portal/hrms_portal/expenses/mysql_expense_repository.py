from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ExpenseType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, to_decimal
from .model import Expense, ExpenseTotal
from .repository import ExpenseRepository

_COLUMNS = """
    x.expense_id, x.employee_id, x.expense_type, x.category, x.amount, x.expense_date, x.remarks,
    x.status, x.decided_by, x.decided_at, x.created_at
"""


def _expense(r: dict) -> Expense:
    return Expense(
        expense_id=int(r["expense_id"]),
        employee_id=int(r["employee_id"]),
        expense_type=ExpenseType(r["expense_type"]),
        category=r["category"],
        amount=to_decimal(r["amount"]),
        expense_date=r["expense_date"],
        remarks=r.get("remarks"),
        status=RequestStatus(r["status"]),
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
        decided_at=r.get("decided_at"),
        created_at=r.get("created_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM expenses x WHERE x.expense_id=%s", (int(expense_id),))
            r = fetchone(cur)
            return _expense(r) if r else None

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Expense]:
        where, params = build_where(
            [
                ("x.employee_id=%s", employee_id),
                ("x.status=%s", status.value if status else None),
                ("e.department_id=%s", department_id),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM expenses x
                JOIN employees e ON e.employee_id = x.employee_id
                WHERE {where}
                ORDER BY x.expense_date DESC, x.expense_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_expense(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        expense_type: ExpenseType,
        category: str,
        amount: Decimal,
        expense_date: date,
        remarks: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses(employee_id, expense_type, category, amount, expense_date, remarks, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    expense_type.value,
                    category,
                    amount,
                    expense_date,
                    remarks,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        expense_id: int,
        *,
        expense_type: ExpenseType,
        category: str,
        amount: Decimal,
        expense_date: date,
        remarks: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET expense_type=%s, category=%s, amount=%s, expense_date=%s, remarks=%s
                WHERE expense_id=%s AND status=%s
                """,
                (
                    expense_type.value,
                    category,
                    amount,
                    expense_date,
                    remarks,
                    int(expense_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM expenses WHERE expense_id=%s AND status=%s",
                (int(expense_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def decide(self, *, expense_id: int, status: RequestStatus, decided_by: Optional[int], decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET status=%s, decided_by=%s, decided_at=%s
                WHERE expense_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, int(expense_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def totals_by_status(self, *, employee_id: Optional[int] = None) -> Sequence[ExpenseTotal]:
        where, params = build_where([("employee_id=%s", employee_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS cnt, COALESCE(SUM(amount), 0) AS amount
                FROM expenses
                WHERE {where}
                GROUP BY status
                """,
                tuple(params),
            )
            return [
                ExpenseTotal(status=RequestStatus(r["status"]), count=int(r["cnt"]), amount=to_decimal(r["amount"]))
                for r in fetchall(cur)
            ]
