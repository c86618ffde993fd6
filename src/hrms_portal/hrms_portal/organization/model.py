from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Company:
    """Tenant: every branch, department and designation belongs to a company."""

    company_id: int
    name: str
    code: str
    email: Optional[str]
    status: RecordStatus = RecordStatus.ACTIVE


@dataclass(frozen=True)
class Branch:
    branch_id: int
    company_id: int
    name: str
    city: Optional[str]
    status: RecordStatus = RecordStatus.ACTIVE


@dataclass(frozen=True)
class Department:
    department_id: int
    company_id: int
    branch_id: Optional[int]
    name: str
    head_employee_id: Optional[int]
    status: RecordStatus = RecordStatus.ACTIVE


@dataclass(frozen=True)
class Designation:
    designation_id: int
    company_id: int
    department_id: int
    name: str
    status: RecordStatus = RecordStatus.ACTIVE
