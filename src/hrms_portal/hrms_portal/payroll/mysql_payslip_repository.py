from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayslipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, to_decimal
from .model import Payslip
from .repository import PayslipRepository

_COLUMNS = """
    payslip_id, payroll_id, employee_id, month, basic, hra, allowance, deduction, net_salary,
    status, created_at, sent_at
"""


def _payslip(r: dict) -> Payslip:
    return Payslip(
        payslip_id=int(r["payslip_id"]),
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month"],
        basic=to_decimal(r["basic"]),
        hra=to_decimal(r["hra"]),
        allowance=to_decimal(r["allowance"]),
        deduction=to_decimal(r["deduction"]),
        net_salary=to_decimal(r["net_salary"]),
        status=PayslipStatus(r["status"]),
        created_at=r.get("created_at"),
        sent_at=r.get("sent_at"),
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Payslip]:
        where, params = build_where([("month=%s", month), ("employee_id=%s", employee_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                WHERE {where}
                ORDER BY month DESC, employee_id
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_payslip(r) for r in fetchall(cur)]

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payslip_id=%s", (int(payslip_id),))
            r = fetchone(cur)
            return _payslip(r) if r else None

    def get_by_payroll(self, payroll_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _payslip(r) if r else None

    def create(
        self,
        *,
        payroll_id: int,
        employee_id: int,
        month: str,
        basic: Decimal,
        hra: Decimal,
        allowance: Decimal,
        deduction: Decimal,
        net_salary: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(payroll_id, employee_id, month, basic, hra, allowance, deduction, net_salary, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(payroll_id),
                    int(employee_id),
                    month,
                    basic,
                    hra,
                    allowance,
                    deduction,
                    net_salary,
                    PayslipStatus.GENERATED.value,
                ),
            )
            return int(cur.lastrowid)

    def mark_sent(self, payslip_id: int, *, sent_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payslips SET status=%s, sent_at=%s WHERE payslip_id=%s AND status=%s",
                (PayslipStatus.SENT.value, sent_at, int(payslip_id), PayslipStatus.GENERATED.value),
            )
            return cur.rowcount > 0
