from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_id, parse_enum, require_email, require_id, require_non_empty
from ..core.enums import RecordStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Branch, Company, Department, Designation
from .repository import OrganizationRepository

logger = logging.getLogger(__name__)


def _status(data: dict) -> RecordStatus:
    return parse_enum(RecordStatus, data.get("status") or RecordStatus.ACTIVE.value, "Status")


class OrganizationService:
    """Use case: maintain companies, branches, departments and designations.

    Input dictionaries use the API field names (camelCase) sent by the portal forms.
    """

    def __init__(self, organization: OrganizationRepository):
        self._org = organization

    # -------- Companies --------
    def list_companies(self) -> Sequence[Company]:
        return self._org.list_companies()

    def get_company(self, company_id: int) -> Company:
        company = self._org.get_company(int(company_id))
        if not company:
            raise NotFoundError("Company not found")
        return company

    def _company_fields(self, data: dict, *, current_id: Optional[int] = None) -> dict[str, Any]:
        name = require_non_empty(data.get("name"), "Company name")
        code = require_non_empty(data.get("code"), "Company code").upper()
        email = require_email(data.get("email"), "Company email") if data.get("email") else None

        existing = self._org.get_company_by_code(code)
        if existing and existing.company_id != current_id:
            raise ConflictError(f"Company code {code} already exists")
        return {"name": name, "code": code, "email": email, "status": _status(data)}

    def create_company(self, data: dict) -> Company:
        company_id = self._org.create_company(**self._company_fields(data))
        logger.info("Company %s created", company_id)
        return self.get_company(company_id)

    def update_company(self, company_id: int, data: dict) -> Company:
        self.get_company(company_id)
        self._org.update_company(int(company_id), **self._company_fields(data, current_id=int(company_id)))
        return self.get_company(company_id)

    def delete_company(self, company_id: int) -> None:
        self.get_company(company_id)
        if self._org.count_company_children(int(company_id)) > 0:
            raise ConflictError("Company still has branches or departments")
        if not self._org.delete_company(int(company_id)):
            raise NotFoundError("Company not found")

    # -------- Branches --------
    def list_branches(self, *, company_id: Optional[int] = None) -> Sequence[Branch]:
        return self._org.list_branches(company_id=company_id)

    def get_branch(self, branch_id: int) -> Branch:
        branch = self._org.get_branch(int(branch_id))
        if not branch:
            raise NotFoundError("Branch not found")
        return branch

    def _branch_fields(self, data: dict) -> dict[str, Any]:
        company = self.get_company(require_id(data.get("companyId"), "Company"))
        return {
            "company_id": company.company_id,
            "name": require_non_empty(data.get("name"), "Branch name"),
            "city": (data.get("city") or "").strip() or None,
            "status": _status(data),
        }

    def create_branch(self, data: dict) -> Branch:
        branch_id = self._org.create_branch(**self._branch_fields(data))
        return self.get_branch(branch_id)

    def update_branch(self, branch_id: int, data: dict) -> Branch:
        current = self.get_branch(branch_id)
        fields = self._branch_fields(data)
        if fields["company_id"] != current.company_id and self._org.count_branch_departments(current.branch_id) > 0:
            raise ConflictError("Cannot move a branch with departments to another company")
        self._org.update_branch(int(branch_id), **fields)
        return self.get_branch(branch_id)

    def delete_branch(self, branch_id: int) -> None:
        self.get_branch(branch_id)
        if self._org.count_branch_departments(int(branch_id)) > 0:
            raise ConflictError("Branch still has departments")
        if not self._org.delete_branch(int(branch_id)):
            raise NotFoundError("Branch not found")

    # -------- Departments --------
    def list_departments(
        self,
        *,
        company_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Sequence[Department]:
        return self._org.list_departments(company_id=company_id, branch_id=branch_id)

    def get_department(self, department_id: int) -> Department:
        department = self._org.get_department(int(department_id))
        if not department:
            raise NotFoundError("Department not found")
        return department

    def _department_fields(self, data: dict, *, current_id: Optional[int] = None) -> dict[str, Any]:
        company = self.get_company(require_id(data.get("companyId"), "Company"))
        branch_id = optional_id(data.get("branchId"), "Branch")
        if branch_id is not None:
            branch = self.get_branch(branch_id)
            if branch.company_id != company.company_id:
                raise ValidationError("Branch does not belong to the selected company")

        name = require_non_empty(data.get("name"), "Department name")
        existing = self._org.find_department_by_name(company_id=company.company_id, name=name)
        if existing and existing.department_id != current_id:
            raise ConflictError(f"Department {name} already exists in this company")

        return {
            "company_id": company.company_id,
            "branch_id": branch_id,
            "name": name,
            "head_employee_id": optional_id(data.get("headEmployeeId"), "Department head"),
            "status": _status(data),
        }

    def create_department(self, data: dict) -> Department:
        department_id = self._org.create_department(**self._department_fields(data))
        logger.info("Department %s created", department_id)
        return self.get_department(department_id)

    def update_department(self, department_id: int, data: dict) -> Department:
        self.get_department(department_id)
        self._org.update_department(int(department_id), **self._department_fields(data, current_id=int(department_id)))
        return self.get_department(department_id)

    def delete_department(self, department_id: int) -> None:
        self.get_department(department_id)
        if self._org.count_department_usage(int(department_id)) > 0:
            raise ConflictError("Department still has designations or employees")
        if not self._org.delete_department(int(department_id)):
            raise NotFoundError("Department not found")

    # -------- Designations --------
    def list_designations(
        self,
        *,
        company_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> Sequence[Designation]:
        return self._org.list_designations(company_id=company_id, department_id=department_id)

    def get_designation(self, designation_id: int) -> Designation:
        designation = self._org.get_designation(int(designation_id))
        if not designation:
            raise NotFoundError("Designation not found")
        return designation

    def _designation_fields(self, data: dict, *, current_id: Optional[int] = None) -> dict[str, Any]:
        company = self.get_company(require_id(data.get("companyId"), "Company"))
        department = self.get_department(require_id(data.get("departmentId"), "Department"))
        if department.company_id != company.company_id:
            raise ValidationError("Department does not belong to the selected company")

        name = require_non_empty(data.get("name"), "Designation name")
        existing = self._org.find_designation_by_name(department_id=department.department_id, name=name)
        if existing and existing.designation_id != current_id:
            raise ConflictError(f"Designation {name} already exists in this department")

        return {
            "company_id": company.company_id,
            "department_id": department.department_id,
            "name": name,
            "status": _status(data),
        }

    def create_designation(self, data: dict) -> Designation:
        designation_id = self._org.create_designation(**self._designation_fields(data))
        return self.get_designation(designation_id)

    def update_designation(self, designation_id: int, data: dict) -> Designation:
        self.get_designation(designation_id)
        self._org.update_designation(
            int(designation_id),
            **self._designation_fields(data, current_id=int(designation_id)),
        )
        return self.get_designation(designation_id)

    def delete_designation(self, designation_id: int) -> None:
        self.get_designation(designation_id)
        if self._org.count_designation_employees(int(designation_id)) > 0:
            raise ConflictError("Designation is assigned to employees")
        if not self._org.delete_designation(int(designation_id)):
            raise NotFoundError("Designation not found")
