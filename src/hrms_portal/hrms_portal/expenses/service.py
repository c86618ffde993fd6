from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import parse_enum, require_non_empty, require_positive_amount
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import ExpenseType, RequestStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Expense
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    """Use case: employees file expense claims, finance approves or rejects them."""

    def __init__(self, expenses: ExpenseRepository, employees: EmployeeRepository):
        self._expenses = expenses
        self._employees = employees

    def get_expense(self, expense_id: int) -> Expense:
        expense = self._expenses.get_by_id(int(expense_id))
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    @staticmethod
    def _fields(data: dict, *, today: date) -> dict:
        expense_type = parse_enum(ExpenseType, data.get("expenseType") or ExpenseType.GENERAL.value, "Expense type")
        category = require_non_empty(data.get("category"), "Category")
        amount = require_positive_amount(data.get("amount"), "Amount")
        expense_date = parse_iso_date(data.get("date") or "")
        if expense_date > today:
            raise ValidationError("Expense date cannot be in the future")
        remarks = (data.get("remarks") or "").strip() or None
        return {
            "expense_type": expense_type,
            "category": category,
            "amount": amount,
            "expense_date": expense_date,
            "remarks": remarks,
        }

    def create(self, employee_id: int, data: dict, *, today: date | None = None) -> Expense:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Inactive employees cannot file expenses")

        fields = self._fields(data, today=today or now_local().date())
        expense_id = self._expenses.create(employee_id=employee.employee_id, **fields)
        logger.info("Expense %s filed by employee %s: %s", expense_id, employee.employee_id, fields["amount"])
        return self.get_expense(expense_id)

    def _own_pending(self, employee_id: int, expense_id: int) -> Expense:
        expense = self.get_expense(expense_id)
        if expense.employee_id != int(employee_id):
            raise AuthorizationError("Expense belongs to another employee")
        if expense.status != RequestStatus.PENDING:
            raise ConflictError(f"Expense is already {expense.status.value}")
        return expense

    def update(self, employee_id: int, expense_id: int, data: dict, *, today: date | None = None) -> Expense:
        expense = self._own_pending(employee_id, expense_id)
        fields = self._fields(data, today=today or now_local().date())
        if not self._expenses.update(expense.expense_id, **fields):
            raise ConflictError("Expense was decided before the change could be saved")
        return self.get_expense(expense_id)

    def delete(self, employee_id: int, expense_id: int) -> None:
        expense = self._own_pending(employee_id, expense_id)
        if not self._expenses.delete(expense.expense_id):
            raise ConflictError("Expense was decided before it could be deleted")

    def update_status(self, expense_id: int, data: dict, *, decided_by: Optional[int] = None) -> Expense:
        status = parse_enum(RequestStatus, data.get("status"), "Status")
        if status == RequestStatus.PENDING:
            raise ValidationError("Status must be APPROVED or REJECTED")

        expense = self.get_expense(expense_id)
        if expense.status != RequestStatus.PENDING:
            raise ConflictError(f"Expense is already {expense.status.value}")

        if not self._expenses.decide(
            expense_id=expense.expense_id,
            status=status,
            decided_by=decided_by,
            decided_at=now_local(),
        ):
            raise ConflictError("Expense was already decided")

        logger.info("Expense %s %s by %s", expense.expense_id, status.value, decided_by)
        return self.get_expense(expense_id)

    def my_expenses(self, employee_id: int) -> Sequence[Expense]:
        return self._expenses.list(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)

    def all_expenses(self, *, status: Optional[str] = None, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Expense]:
        wanted = parse_enum(RequestStatus, status, "Status") if status else None
        return self._expenses.list(status=wanted, limit=limit)

    def manager_expenses(
        self,
        *,
        department_id: Optional[int] = None,
        manager_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Expense]:
        if department_id is None and manager_id is not None:
            manager = self._employees.get_by_id(int(manager_id))
            if not manager:
                raise NotFoundError("Employee not found")
            department_id = manager.department_id
        if department_id is None:
            raise ValidationError("Department is required")
        return self._expenses.list(department_id=department_id, limit=limit)

    def totals(self, *, employee_id: Optional[int] = None) -> dict:
        """Count and amount per status; every status is present."""

        found = {t.status: t for t in self._expenses.totals_by_status(employee_id=employee_id)}
        out = {}
        for status in RequestStatus:
            total = found.get(status)
            out[status.value] = {
                "count": total.count if total else 0,
                "amount": total.amount if total else Decimal("0"),
            }
        return out
