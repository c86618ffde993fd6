from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import SalaryStructure
from .repository import SalaryStructureRepository

_COLUMNS = "structure_id, employee_id, basic, hra, allowance, pf, tax"


def _structure(r: dict) -> SalaryStructure:
    return SalaryStructure(
        structure_id=int(r["structure_id"]),
        employee_id=int(r["employee_id"]),
        basic=to_decimal(r["basic"]),
        hra=to_decimal(r["hra"]),
        allowance=to_decimal(r["allowance"]),
        pf=to_decimal(r["pf"]),
        tax=to_decimal(r["tax"]),
    )


class MySQLSalaryStructureRepository(SalaryStructureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_structures ORDER BY employee_id")
            return [_structure(r) for r in fetchall(cur)]

    def get_by_id(self, structure_id: int) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_structures WHERE structure_id=%s", (int(structure_id),))
            r = fetchone(cur)
            return _structure(r) if r else None

    def get_by_employee(self, employee_id: int) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_structures WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _structure(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        basic: Decimal,
        hra: Decimal,
        allowance: Decimal,
        pf: Decimal,
        tax: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_structures(employee_id, basic, hra, allowance, pf, tax)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), basic, hra, allowance, pf, tax),
            )
            return int(cur.lastrowid)

    def update(self, structure: SalaryStructure) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_structures
                SET basic=%s, hra=%s, allowance=%s, pf=%s, tax=%s
                WHERE structure_id=%s
                """,
                (
                    structure.basic,
                    structure.hra,
                    structure.allowance,
                    structure.pf,
                    structure.tax,
                    int(structure.structure_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, structure_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_structures WHERE structure_id=%s", (int(structure_id),))
            return cur.rowcount > 0
