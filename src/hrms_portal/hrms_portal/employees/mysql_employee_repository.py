from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, company_id, full_name, email, phone, role,
    department_id, designation_id, shift_id, joining_date, is_active
"""


def _employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        email=r["email"],
        role=Role(r["role"]),
        company_id=r.get("company_id"),
        phone=r.get("phone"),
        department_id=r.get("department_id"),
        designation_id=r.get("designation_id"),
        shift_id=r.get("shift_id"),
        joining_date=r.get("joining_date"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _employee(row) if row else None

    def list(
        self,
        *,
        department_id: Optional[int] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[Employee]:
        where, params = build_where(
            [
                ("department_id=%s", department_id),
                ("role=%s", role.value if role else None),
                ("is_active=%s", None if is_active is None else int(is_active)),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where} ORDER BY full_name", tuple(params))
            return [_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        full_name: str,
        email: str,
        role: Role,
        company_id: Optional[int],
        phone: Optional[str],
        department_id: Optional[int],
        designation_id: Optional[int],
        shift_id: Optional[int],
        joining_date: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    company_id, full_name, email, phone, role,
                    department_id, designation_id, shift_id, joining_date, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    company_id,
                    full_name,
                    email,
                    phone,
                    role.value,
                    department_id,
                    designation_id,
                    shift_id,
                    joining_date,
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET company_id=%s, full_name=%s, email=%s, phone=%s, role=%s,
                    department_id=%s, designation_id=%s, shift_id=%s, joining_date=%s, is_active=%s
                WHERE employee_id=%s
                """,
                (
                    employee.company_id,
                    employee.full_name,
                    employee.email,
                    employee.phone,
                    employee.role.value,
                    employee.department_id,
                    employee.designation_id,
                    employee.shift_id,
                    employee.joining_date,
                    int(employee.is_active),
                    employee.employee_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def count_payroll_records(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM payroll_records WHERE employee_id=%s", (int(employee_id),))
            return int(fetchone(cur)["n"])
