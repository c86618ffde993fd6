from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Branch, Company, Department, Designation
from .repository import OrganizationRepository


def _company(r: dict) -> Company:
    return Company(
        company_id=int(r["company_id"]),
        name=r["name"],
        code=r["code"],
        email=r.get("email"),
        status=RecordStatus(r["status"]),
    )


def _branch(r: dict) -> Branch:
    return Branch(
        branch_id=int(r["branch_id"]),
        company_id=int(r["company_id"]),
        name=r["name"],
        city=r.get("city"),
        status=RecordStatus(r["status"]),
    )


def _department(r: dict) -> Department:
    return Department(
        department_id=int(r["department_id"]),
        company_id=int(r["company_id"]),
        branch_id=r.get("branch_id"),
        name=r["name"],
        head_employee_id=r.get("head_employee_id"),
        status=RecordStatus(r["status"]),
    )


def _designation(r: dict) -> Designation:
    return Designation(
        designation_id=int(r["designation_id"]),
        company_id=int(r["company_id"]),
        department_id=int(r["department_id"]),
        name=r["name"],
        status=RecordStatus(r["status"]),
    )


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Companies --------
    def list_companies(self) -> Sequence[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT company_id, name, code, email, status FROM companies ORDER BY name")
            return [_company(r) for r in fetchall(cur)]

    def get_company(self, company_id: int) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT company_id, name, code, email, status FROM companies WHERE company_id=%s",
                (int(company_id),),
            )
            r = fetchone(cur)
            return _company(r) if r else None

    def get_company_by_code(self, code: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT company_id, name, code, email, status FROM companies WHERE code=%s", (code,))
            r = fetchone(cur)
            return _company(r) if r else None

    def create_company(self, *, name: str, code: str, email: Optional[str], status: RecordStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO companies(name, code, email, status) VALUES(%s,%s,%s,%s)",
                (name, code, email, status.value),
            )
            return int(cur.lastrowid)

    def update_company(self, company_id: int, *, name: str, code: str, email: Optional[str], status: RecordStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE companies SET name=%s, code=%s, email=%s, status=%s WHERE company_id=%s",
                (name, code, email, status.value, int(company_id)),
            )
            return cur.rowcount > 0

    def delete_company(self, company_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM companies WHERE company_id=%s", (int(company_id),))
            return cur.rowcount > 0

    def count_company_children(self, company_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT (SELECT COUNT(*) FROM branches WHERE company_id=%s)
                     + (SELECT COUNT(*) FROM departments WHERE company_id=%s) AS n
                """,
                (int(company_id), int(company_id)),
            )
            return int(fetchone(cur)["n"])

    # -------- Branches --------
    def list_branches(self, *, company_id: Optional[int] = None) -> Sequence[Branch]:
        where, params = build_where([("company_id=%s", company_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT branch_id, company_id, name, city, status FROM branches WHERE {where} ORDER BY name",
                tuple(params),
            )
            return [_branch(r) for r in fetchall(cur)]

    def get_branch(self, branch_id: int) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT branch_id, company_id, name, city, status FROM branches WHERE branch_id=%s",
                (int(branch_id),),
            )
            r = fetchone(cur)
            return _branch(r) if r else None

    def create_branch(self, *, company_id: int, name: str, city: Optional[str], status: RecordStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO branches(company_id, name, city, status) VALUES(%s,%s,%s,%s)",
                (int(company_id), name, city, status.value),
            )
            return int(cur.lastrowid)

    def update_branch(self, branch_id: int, *, company_id: int, name: str, city: Optional[str], status: RecordStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE branches SET company_id=%s, name=%s, city=%s, status=%s WHERE branch_id=%s",
                (int(company_id), name, city, status.value, int(branch_id)),
            )
            return cur.rowcount > 0

    def delete_branch(self, branch_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM branches WHERE branch_id=%s", (int(branch_id),))
            return cur.rowcount > 0

    def count_branch_departments(self, branch_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM departments WHERE branch_id=%s", (int(branch_id),))
            return int(fetchone(cur)["n"])

    # -------- Departments --------
    def list_departments(
        self,
        *,
        company_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Sequence[Department]:
        where, params = build_where([("company_id=%s", company_id), ("branch_id=%s", branch_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT department_id, company_id, branch_id, name, head_employee_id, status
                FROM departments
                WHERE {where}
                ORDER BY name
                """,
                tuple(params),
            )
            return [_department(r) for r in fetchall(cur)]

    def get_department(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department_id, company_id, branch_id, name, head_employee_id, status
                FROM departments
                WHERE department_id=%s
                """,
                (int(department_id),),
            )
            r = fetchone(cur)
            return _department(r) if r else None

    def find_department_by_name(self, *, company_id: int, name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department_id, company_id, branch_id, name, head_employee_id, status
                FROM departments
                WHERE company_id=%s AND name=%s
                """,
                (int(company_id), name),
            )
            r = fetchone(cur)
            return _department(r) if r else None

    def create_department(
        self,
        *,
        company_id: int,
        branch_id: Optional[int],
        name: str,
        head_employee_id: Optional[int],
        status: RecordStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO departments(company_id, branch_id, name, head_employee_id, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(company_id), branch_id, name, head_employee_id, status.value),
            )
            return int(cur.lastrowid)

    def update_department(
        self,
        department_id: int,
        *,
        company_id: int,
        branch_id: Optional[int],
        name: str,
        head_employee_id: Optional[int],
        status: RecordStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE departments
                SET company_id=%s, branch_id=%s, name=%s, head_employee_id=%s, status=%s
                WHERE department_id=%s
                """,
                (int(company_id), branch_id, name, head_employee_id, status.value, int(department_id)),
            )
            return cur.rowcount > 0

    def delete_department(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            return cur.rowcount > 0

    def count_department_usage(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT (SELECT COUNT(*) FROM designations WHERE department_id=%s)
                     + (SELECT COUNT(*) FROM employees WHERE department_id=%s)
                     + (SELECT COUNT(*) FROM job_openings WHERE department_id=%s) AS n
                """,
                (int(department_id), int(department_id), int(department_id)),
            )
            return int(fetchone(cur)["n"])

    # -------- Designations --------
    def list_designations(
        self,
        *,
        company_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> Sequence[Designation]:
        where, params = build_where([("company_id=%s", company_id), ("department_id=%s", department_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT designation_id, company_id, department_id, name, status
                FROM designations
                WHERE {where}
                ORDER BY name
                """,
                tuple(params),
            )
            return [_designation(r) for r in fetchall(cur)]

    def get_designation(self, designation_id: int) -> Optional[Designation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT designation_id, company_id, department_id, name, status
                FROM designations
                WHERE designation_id=%s
                """,
                (int(designation_id),),
            )
            r = fetchone(cur)
            return _designation(r) if r else None

    def find_designation_by_name(self, *, department_id: int, name: str) -> Optional[Designation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT designation_id, company_id, department_id, name, status
                FROM designations
                WHERE department_id=%s AND name=%s
                """,
                (int(department_id), name),
            )
            r = fetchone(cur)
            return _designation(r) if r else None

    def create_designation(self, *, company_id: int, department_id: int, name: str, status: RecordStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO designations(company_id, department_id, name, status) VALUES(%s,%s,%s,%s)",
                (int(company_id), int(department_id), name, status.value),
            )
            return int(cur.lastrowid)

    def update_designation(
        self,
        designation_id: int,
        *,
        company_id: int,
        department_id: int,
        name: str,
        status: RecordStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE designations
                SET company_id=%s, department_id=%s, name=%s, status=%s
                WHERE designation_id=%s
                """,
                (int(company_id), int(department_id), name, status.value, int(designation_id)),
            )
            return cur.rowcount > 0

    def delete_designation(self, designation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM designations WHERE designation_id=%s", (int(designation_id),))
            return cur.rowcount > 0

    def count_designation_employees(self, designation_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE designation_id=%s", (int(designation_id),))
            return int(fetchone(cur)["n"])
