from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..common.validators import require_id, require_non_negative_amount
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import SalaryStructure
from .repository import SalaryStructureRepository

_COMPONENTS = (("basic", "Basic"), ("hra", "HRA"), ("allowance", "Allowance"), ("pf", "PF"), ("tax", "Tax"))


class SalaryStructureService:
    def __init__(self, salaries: SalaryStructureRepository, employees: EmployeeRepository):
        self._salaries = salaries
        self._employees = employees

    def list_structures(self) -> Sequence[SalaryStructure]:
        return self._salaries.list_all()

    def get_structure(self, structure_id: int) -> SalaryStructure:
        structure = self._salaries.get_by_id(int(structure_id))
        if not structure:
            raise NotFoundError("Salary structure not found")
        return structure

    def get_for_employee(self, employee_id: int) -> SalaryStructure:
        structure = self._salaries.get_by_employee(int(employee_id))
        if not structure:
            raise NotFoundError("No salary structure for this employee")
        return structure

    @staticmethod
    def _amounts(data: dict) -> dict:
        if data.get("basic") in (None, ""):
            raise ValidationError("Basic is required")
        amounts = {}
        for key, label in _COMPONENTS:
            amounts[key] = require_non_negative_amount(data.get(key), label)
        return amounts

    def create_structure(self, data: dict) -> SalaryStructure:
        employee_id = require_id(data.get("employeeId"), "Employee")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        if self._salaries.get_by_employee(employee_id):
            raise ConflictError("Employee already has a salary structure")

        structure_id = self._salaries.create(employee_id=employee_id, **self._amounts(data))
        return self.get_structure(structure_id)

    def update_structure(self, structure_id: int, data: dict) -> SalaryStructure:
        current = self.get_structure(structure_id)
        self._salaries.update(replace(current, **self._amounts(data)))
        return self.get_structure(structure_id)

    def delete_structure(self, structure_id: int) -> None:
        if not self._salaries.delete(int(structure_id)):
            raise NotFoundError("Salary structure not found")
