from __future__ import annotations

from datetime import date

import pytest

from src.hrms_portal.hrms_portal.core.enums import RequestStatus, Role
from src.hrms_portal.hrms_portal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.hrms_portal.hrms_portal.employees.model import Employee
from src.hrms_portal.hrms_portal.leave.model import LeaveType
from src.hrms_portal.hrms_portal.leave.service import LeaveService
from tests.fakes import InMemoryEmployeeRepo, InMemoryLeaveRepo

CASUAL = LeaveType(leave_type_id=1, name="Casual Leave", code="CL", max_days=3, is_paid=True)
SICK = LeaveType(leave_type_id=2, name="Sick Leave", code="SL", max_days=10, is_paid=True)


def _build():
    employees = InMemoryEmployeeRepo(
        [
            Employee(employee_id=1, full_name="Asha Rao", email="asha@acme.test", role=Role.EMPLOYEE),
            Employee(employee_id=2, full_name="Ravi Kumar", email="ravi@acme.test", role=Role.MANAGER),
            Employee(employee_id=3, full_name="Gone", email="gone@acme.test", role=Role.EMPLOYEE, is_active=False),
        ]
    )
    leaves = InMemoryLeaveRepo([CASUAL, SICK])
    return LeaveService(leaves, employees), leaves


def _apply(svc, employee_id=1, *, type_id=1, start="2025-03-03", end="2025-03-04", reason="Family function"):
    return svc.apply(employee_id, {"leaveTypeId": type_id, "fromDate": start, "toDate": end, "reason": reason})


def test_apply_counts_inclusive_days():
    svc, _ = _build()

    req = _apply(svc)

    assert req.total_days == 2
    assert req.status == RequestStatus.PENDING
    assert req.from_date == date(2025, 3, 3)


def test_apply_validates_dates_and_reason():
    svc, _ = _build()

    with pytest.raises(ValidationError):
        _apply(svc, start="2025-03-05", end="2025-03-04")
    with pytest.raises(ValidationError):
        _apply(svc, start="2025-12-31", end="2026-01-01")
    with pytest.raises(ValidationError):
        _apply(svc, reason="")
    with pytest.raises(NotFoundError):
        _apply(svc, type_id=99)
    with pytest.raises(ValidationError):
        _apply(svc, employee_id=3)


def test_overlapping_request_is_a_conflict():
    svc, _ = _build()
    _apply(svc, start="2025-03-03", end="2025-03-04")

    with pytest.raises(ConflictError):
        _apply(svc, type_id=2, start="2025-03-04", end="2025-03-06")


def test_rejected_request_does_not_block_new_dates():
    svc, _ = _build()
    req = _apply(svc)
    svc.decide(req.request_id, {"status": "REJECTED"}, decided_by=2)

    again = _apply(svc)

    assert again.request_id != req.request_id


def test_balance_limits_requested_days():
    svc, _ = _build()
    first = _apply(svc, start="2025-03-03", end="2025-03-04")
    svc.decide(first.request_id, {"status": "APPROVED"}, decided_by=2)

    with pytest.raises(ValidationError):
        _apply(svc, start="2025-04-01", end="2025-04-02")

    last = _apply(svc, start="2025-04-01", end="2025-04-01")
    assert last.total_days == 1


def test_approval_rechecks_balance():
    svc, _ = _build()
    a = _apply(svc, start="2025-03-03", end="2025-03-04")
    b = _apply(svc, start="2025-04-01", end="2025-04-02")
    svc.decide(a.request_id, {"status": "APPROVED"}, decided_by=2)

    with pytest.raises(ValidationError):
        svc.decide(b.request_id, {"status": "APPROVED"}, decided_by=2)


def test_decide_only_once_and_records_decider():
    svc, _ = _build()
    req = _apply(svc)

    with pytest.raises(ValidationError):
        svc.decide(req.request_id, {"status": "PENDING"})

    decided = svc.decide(req.request_id, {"status": "APPROVED", "note": "Enjoy"}, decided_by=2)
    assert decided.status == RequestStatus.APPROVED
    assert decided.decided_by == 2
    assert decided.decision_note == "Enjoy"

    with pytest.raises(ConflictError):
        svc.decide(req.request_id, {"status": "REJECTED"}, decided_by=2)


def test_edit_and_delete_only_own_pending_requests():
    svc, leaves = _build()
    req = _apply(svc)

    with pytest.raises(AuthorizationError):
        svc.edit(2, req.request_id, {"leaveTypeId": 1, "fromDate": "2025-03-03", "toDate": "2025-03-03", "reason": "x"})

    edited = svc.edit(1, req.request_id, {"leaveTypeId": 1, "fromDate": "2025-03-03", "toDate": "2025-03-05", "reason": "Longer"})
    assert edited.total_days == 3
    assert edited.reason == "Longer"

    svc.decide(req.request_id, {"status": "APPROVED"}, decided_by=2)
    with pytest.raises(ConflictError):
        svc.delete(1, req.request_id)

    other = _apply(svc, type_id=2, start="2025-05-05", end="2025-05-05")
    svc.delete(1, other.request_id)
    assert leaves.get_request(other.request_id) is None


def test_balance_reports_used_pending_and_remaining():
    svc, _ = _build()
    approved = _apply(svc, start="2025-03-03", end="2025-03-04")
    svc.decide(approved.request_id, {"status": "APPROVED"}, decided_by=2)
    _apply(svc, type_id=2, start="2025-06-02", end="2025-06-04")

    balances = {b.code: b for b in svc.balance(1, year=2025)}

    assert (balances["CL"].used, balances["CL"].pending, balances["CL"].remaining) == (2, 0, 1)
    assert (balances["SL"].used, balances["SL"].pending, balances["SL"].remaining) == (0, 3, 10)


def test_on_leave_lists_approved_requests_for_the_day():
    svc, _ = _build()
    req = _apply(svc, start="2025-03-03", end="2025-03-04")
    _apply(svc, employee_id=2, type_id=2, start="2025-03-04", end="2025-03-04")
    svc.decide(req.request_id, {"status": "APPROVED"}, decided_by=2)

    on_leave = svc.on_leave(date(2025, 3, 4))

    assert [r.employee_id for r in on_leave] == [1]


def test_leave_type_codes_are_unique_and_used_types_stay():
    svc, _ = _build()

    created = svc.create_type({"name": "Loss of Pay", "code": "lop", "maxDays": 30, "isPaid": "false"})
    assert created.code == "LOP"
    assert created.is_paid is False

    with pytest.raises(ConflictError):
        svc.create_type({"name": "Other", "code": "CL", "maxDays": 1})
    with pytest.raises(ValidationError):
        svc.create_type({"name": "Negative", "code": "NG", "maxDays": -1})

    _apply(svc)
    with pytest.raises(ConflictError):
        svc.delete_type(1)
    svc.delete_type(created.leave_type_id)
