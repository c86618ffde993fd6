from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, to_decimal
from .model import PayrollDraft, PayrollRecord, PayrollSummary
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, month, gross, deduction, net, working_days, present_days,
    absent_days, paid_leaves, unpaid_leaves, status, created_at
"""


def _payroll(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month"],
        gross=to_decimal(r["gross"]),
        deduction=to_decimal(r["deduction"]),
        net=to_decimal(r["net"]),
        working_days=to_decimal(r["working_days"]),
        present_days=to_decimal(r["present_days"]),
        absent_days=to_decimal(r["absent_days"]),
        paid_leaves=to_decimal(r["paid_leaves"]),
        unpaid_leaves=to_decimal(r["unpaid_leaves"]),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        limit: int = 200,
    ) -> Sequence[PayrollRecord]:
        where, params = build_where(
            [
                ("month=%s", month),
                ("employee_id=%s", employee_id),
                ("status=%s", status.value if status else None),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE {where}
                ORDER BY month DESC, employee_id
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_payroll(r) for r in fetchall(cur)]

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _payroll(r) if r else None

    def count_by_status(self, month: str) -> dict[PayrollStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS cnt FROM payroll_records WHERE month=%s GROUP BY status",
                (month,),
            )
            return {PayrollStatus(r["status"]): int(r["cnt"]) for r in fetchall(cur)}

    def replace_drafts(self, month: str, drafts: Sequence[PayrollDraft]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payroll_records WHERE month=%s AND status=%s",
                (month, PayrollStatus.DRAFT.value),
            )
            for d in drafts:
                res = d.result
                cur.execute(
                    """
                    INSERT INTO payroll_records(
                        employee_id, month, gross, deduction, net, working_days, present_days,
                        absent_days, paid_leaves, unpaid_leaves, status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(d.employee_id),
                        d.month,
                        res.gross,
                        res.deduction,
                        res.net,
                        res.working_days,
                        res.present_days,
                        res.absent_days,
                        res.paid_leaves,
                        res.unpaid_leaves,
                        PayrollStatus.DRAFT.value,
                    ),
                )
            return len(drafts)

    def update_status(self, payroll_id: int, *, current: PayrollStatus, new: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll_records SET status=%s WHERE payroll_id=%s AND status=%s",
                (new.value, int(payroll_id), current.value),
            )
            return cur.rowcount > 0

    def process_month(self, month: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll_records SET status=%s WHERE month=%s AND status=%s",
                (PayrollStatus.PROCESSED.value, month, PayrollStatus.DRAFT.value),
            )
            return int(cur.rowcount)

    def summary(self, month: str) -> PayrollSummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS employee_count,
                       COALESCE(SUM(gross), 0) AS total_gross,
                       COALESCE(SUM(deduction), 0) AS total_deduction,
                       COALESCE(SUM(net), 0) AS total_net
                FROM payroll_records
                WHERE month=%s
                """,
                (month,),
            )
            r = fetchone(cur) or {}
            return PayrollSummary(
                month=month,
                employee_count=int(r.get("employee_count") or 0),
                total_gross=to_decimal(r.get("total_gross")),
                total_deduction=to_decimal(r.get("total_deduction")),
                total_net=to_decimal(r.get("total_net")),
            )

    def latest_month(self) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT MAX(month) AS month FROM payroll_records")
            r = fetchone(cur)
            return r["month"] if r and r.get("month") else None
