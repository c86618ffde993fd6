from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list(
        self,
        *,
        department_id: Optional[int] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError

    def count_payroll_records(self, employee_id: int) -> int:
        raise NotImplementedError
