from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.hrms_portal.hrms_portal.core.enums import ExpenseType, RequestStatus, Role
from src.hrms_portal.hrms_portal.core.exceptions import AuthorizationError, ConflictError, ValidationError
from src.hrms_portal.hrms_portal.employees.model import Employee
from src.hrms_portal.hrms_portal.expenses.service import ExpenseService
from tests.fakes import InMemoryEmployeeRepo, InMemoryExpenseRepo

TODAY = date(2025, 3, 10)


def _build():
    employees = InMemoryEmployeeRepo(
        [
            Employee(employee_id=1, full_name="Asha Rao", email="asha@acme.test", role=Role.EMPLOYEE, department_id=10),
            Employee(employee_id=2, full_name="Ravi Kumar", email="ravi@acme.test", role=Role.MANAGER, department_id=10),
            Employee(employee_id=3, full_name="Finn Ops", email="finn@acme.test", role=Role.FINANCE, department_id=20),
        ]
    )
    return ExpenseService(InMemoryExpenseRepo(employees), employees)


def _claim(svc, employee_id=1, **overrides):
    data = {"expenseType": "TRAVEL", "category": "Taxi", "amount": "450.50", "date": "2025-03-07", "remarks": "Client visit"}
    data.update(overrides)
    return svc.create(employee_id, data, today=TODAY)


def test_create_expense():
    svc = _build()

    expense = _claim(svc)

    assert expense.expense_type == ExpenseType.TRAVEL
    assert expense.amount == Decimal("450.50")
    assert expense.status == RequestStatus.PENDING


def test_amount_and_date_are_validated():
    svc = _build()

    with pytest.raises(ValidationError):
        _claim(svc, amount="0")
    with pytest.raises(ValidationError):
        _claim(svc, amount="12.345")
    with pytest.raises(ValidationError):
        _claim(svc, amount="abc")
    with pytest.raises(ValidationError):
        _claim(svc, date="2025-03-11")
    with pytest.raises(ValidationError):
        _claim(svc, category="")


def test_only_owner_edits_pending_expense():
    svc = _build()
    expense = _claim(svc)

    with pytest.raises(AuthorizationError):
        svc.update(2, expense.expense_id, {"category": "Meals", "amount": 100, "date": "2025-03-07"}, today=TODAY)

    updated = svc.update(1, expense.expense_id, {"category": "Meals", "amount": 100, "date": "2025-03-07"}, today=TODAY)
    assert updated.category == "Meals"
    assert updated.expense_type == ExpenseType.GENERAL

    svc.update_status(expense.expense_id, {"status": "APPROVED"}, decided_by=3)
    with pytest.raises(ConflictError):
        svc.delete(1, expense.expense_id)


def test_status_is_decided_once():
    svc = _build()
    expense = _claim(svc)

    with pytest.raises(ValidationError):
        svc.update_status(expense.expense_id, {"status": "PENDING"})

    rejected = svc.update_status(expense.expense_id, {"status": "REJECTED"}, decided_by=3)
    assert rejected.status == RequestStatus.REJECTED
    assert rejected.decided_by == 3

    with pytest.raises(ConflictError):
        svc.update_status(expense.expense_id, {"status": "APPROVED"}, decided_by=3)


def test_manager_sees_department_expenses():
    svc = _build()
    _claim(svc, employee_id=1)
    _claim(svc, employee_id=3)

    mine = svc.manager_expenses(manager_id=2)

    assert [e.employee_id for e in mine] == [1]
    with pytest.raises(ValidationError):
        svc.manager_expenses()


def test_totals_cover_every_status():
    svc = _build()
    a = _claim(svc, amount="100")
    _claim(svc, amount="50.25")
    svc.update_status(a.expense_id, {"status": "APPROVED"}, decided_by=3)

    totals = svc.totals()

    assert totals["APPROVED"] == {"count": 1, "amount": Decimal("100")}
    assert totals["PENDING"] == {"count": 1, "amount": Decimal("50.25")}
    assert totals["REJECTED"] == {"count": 0, "amount": Decimal("0")}
