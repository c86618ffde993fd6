from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_id, parse_enum, require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..organization.repository import OrganizationRepository
from ..shifts.repository import ShiftRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

# API field -> Employee attribute
_PATCHABLE = {
    "name": "full_name",
    "email": "email",
    "phone": "phone",
    "role": "role",
    "companyId": "company_id",
    "departmentId": "department_id",
    "designationId": "designation_id",
    "shiftId": "shift_id",
    "joiningDate": "joining_date",
    "isActive": "is_active",
}


class EmployeeService:
    """Use case: manage employee records."""

    def __init__(
        self,
        employees: EmployeeRepository,
        organization: OrganizationRepository,
        shifts: ShiftRepository,
    ):
        self._employees = employees
        self._org = organization
        self._shifts = shifts

    def list_employees(
        self,
        *,
        department_id: Optional[int] = None,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[Employee]:
        role_enum = parse_enum(Role, role, "Role") if role else None
        return self._employees.list(department_id=department_id, role=role_enum, is_active=is_active)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def require_active(self, employee_id: int) -> Employee:
        employee = self.get_employee(employee_id)
        if not employee.is_active:
            raise ValidationError("Employee is inactive")
        return employee

    def _check_references(
        self,
        *,
        company_id: Optional[int],
        department_id: Optional[int],
        designation_id: Optional[int],
        shift_id: Optional[int],
    ) -> None:
        if company_id is not None and not self._org.get_company(company_id):
            raise ValidationError("Company does not exist")

        department = None
        if department_id is not None:
            department = self._org.get_department(department_id)
            if not department:
                raise ValidationError("Department does not exist")
            if company_id is not None and department.company_id != company_id:
                raise ValidationError("Department does not belong to the employee's company")

        if designation_id is not None:
            designation = self._org.get_designation(designation_id)
            if not designation:
                raise ValidationError("Designation does not exist")
            if department is None or designation.department_id != department.department_id:
                raise ValidationError("Designation does not belong to the employee's department")

        if shift_id is not None and not self._shifts.get_by_id(shift_id):
            raise ValidationError("Shift does not exist")

    def create_employee(self, data: dict) -> Employee:
        full_name = require_non_empty(data.get("name"), "Full name")
        email = require_email(data.get("email"))
        if self._employees.get_by_email(email):
            raise ConflictError("An employee with this email already exists")

        role = parse_enum(Role, data.get("role") or Role.EMPLOYEE.value, "Role")
        company_id = optional_id(data.get("companyId"), "Company")
        department_id = optional_id(data.get("departmentId"), "Department")
        designation_id = optional_id(data.get("designationId"), "Designation")
        shift_id = optional_id(data.get("shiftId"), "Shift")
        self._check_references(
            company_id=company_id,
            department_id=department_id,
            designation_id=designation_id,
            shift_id=shift_id,
        )

        employee_id = self._employees.create(
            full_name=full_name,
            email=email,
            role=role,
            company_id=company_id,
            phone=(data.get("phone") or "").strip() or None,
            department_id=department_id,
            designation_id=designation_id,
            shift_id=shift_id,
            joining_date=parse_optional_date(data.get("joiningDate")),
        )
        logger.info("Employee %s created (%s)", employee_id, role.value)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: int, data: dict) -> Employee:
        current = self.get_employee(employee_id)
        changes: dict[str, Any] = {}

        for api_field, attr in _PATCHABLE.items():
            if api_field not in data:
                continue
            value = data[api_field]
            if attr == "full_name":
                value = require_non_empty(value, "Full name")
            elif attr == "email":
                value = require_email(value)
                other = self._employees.get_by_email(value)
                if other and other.employee_id != current.employee_id:
                    raise ConflictError("An employee with this email already exists")
            elif attr == "phone":
                value = (value or "").strip() or None
            elif attr == "role":
                value = parse_enum(Role, value, "Role")
            elif attr in {"company_id", "department_id", "designation_id", "shift_id"}:
                value = optional_id(value, api_field)
            elif attr == "joining_date":
                value = parse_optional_date(value)
            elif attr == "is_active":
                value = bool(value)
            changes[attr] = value

        if not changes:
            raise ValidationError("Nothing to update")

        updated = replace(current, **changes)
        self._check_references(
            company_id=updated.company_id,
            department_id=updated.department_id,
            designation_id=updated.designation_id,
            shift_id=updated.shift_id,
        )
        if not self._employees.update(updated):
            raise NotFoundError("Employee not found")
        return self.get_employee(employee_id)

    def deactivate_employee(self, employee_id: int) -> Employee:
        return self.update_employee(employee_id, {"isActive": False})

    def delete_employee(self, employee_id: int) -> None:
        employee = self.get_employee(employee_id)
        if self._employees.count_payroll_records(employee.employee_id) > 0:
            raise ConflictError("Employee has payroll history; deactivate instead")
        if not self._employees.delete_by_id(employee.employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted", employee_id)
