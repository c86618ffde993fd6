from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import Branch, Company, Department, Designation


class OrganizationRepository(Protocol):
    """Persistence for the tenant configuration (companies down to designations)."""

    # Companies
    def list_companies(self) -> Sequence[Company]:
        raise NotImplementedError

    def get_company(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError

    def get_company_by_code(self, code: str) -> Optional[Company]:
        raise NotImplementedError

    def create_company(self, *, name: str, code: str, email: Optional[str], status: RecordStatus) -> int:
        raise NotImplementedError

    def update_company(self, company_id: int, *, name: str, code: str, email: Optional[str], status: RecordStatus) -> bool:
        raise NotImplementedError

    def delete_company(self, company_id: int) -> bool:
        raise NotImplementedError

    def count_company_children(self, company_id: int) -> int:
        """Branches plus departments that still reference the company."""

        raise NotImplementedError

    # Branches
    def list_branches(self, *, company_id: Optional[int] = None) -> Sequence[Branch]:
        raise NotImplementedError

    def get_branch(self, branch_id: int) -> Optional[Branch]:
        raise NotImplementedError

    def create_branch(self, *, company_id: int, name: str, city: Optional[str], status: RecordStatus) -> int:
        raise NotImplementedError

    def update_branch(self, branch_id: int, *, company_id: int, name: str, city: Optional[str], status: RecordStatus) -> bool:
        raise NotImplementedError

    def delete_branch(self, branch_id: int) -> bool:
        raise NotImplementedError

    def count_branch_departments(self, branch_id: int) -> int:
        raise NotImplementedError

    # Departments
    def list_departments(
        self,
        *,
        company_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Sequence[Department]:
        raise NotImplementedError

    def get_department(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def find_department_by_name(self, *, company_id: int, name: str) -> Optional[Department]:
        raise NotImplementedError

    def create_department(
        self,
        *,
        company_id: int,
        branch_id: Optional[int],
        name: str,
        head_employee_id: Optional[int],
        status: RecordStatus,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_department(self, department_id: int) -> bool:
        raise NotImplementedError

    def count_department_usage(self, department_id: int) -> int:
        """Designations plus employees assigned to the department."""

        raise NotImplementedError

    # Designations
    def list_designations(
        self,
        *,
        company_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> Sequence[Designation]:
        raise NotImplementedError

    def get_designation(self, designation_id: int) -> Optional[Designation]:
        raise NotImplementedError

    def find_designation_by_name(self, *, department_id: int, name: str) -> Optional[Designation]:
        raise NotImplementedError

    def create_designation(self, *, company_id: int, department_id: int, name: str, status: RecordStatus) -> int:
        raise NotImplementedError

    def update_designation(
        self,
        designation_id: int,
        *,
        company_id: int,
        department_id: int,
        name: str,
        status: RecordStatus,
    ) -> bool:
        raise NotImplementedError

    def delete_designation(self, designation_id: int) -> bool:
        raise NotImplementedError

    def count_designation_employees(self, designation_id: int) -> int:
        raise NotImplementedError
