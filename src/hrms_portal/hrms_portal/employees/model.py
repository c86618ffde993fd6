from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee (plain data, no DB access)."""

    employee_id: int
    full_name: str
    email: str
    role: Role
    company_id: Optional[int] = None
    phone: Optional[str] = None
    department_id: Optional[int] = None
    designation_id: Optional[int] = None
    shift_id: Optional[int] = None
    joining_date: Optional[date] = None
    is_active: bool = True
