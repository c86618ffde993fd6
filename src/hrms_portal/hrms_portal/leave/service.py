from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import inclusive_days, now_local, parse_iso_date
from ..common.validators import parse_enum, require_id, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RequestStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveBalance, LeaveRequest, LeaveType
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class LeaveService:
    """Use case: leave types, applications, decisions and yearly balances."""

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    # Leave types
    def list_types(self) -> Sequence[LeaveType]:
        return self._leaves.list_types()

    def get_type(self, leave_type_id: int) -> LeaveType:
        leave_type = self._leaves.get_type(int(leave_type_id))
        if not leave_type:
            raise NotFoundError("Leave type not found")
        return leave_type

    def _type_fields(self, data: dict, *, current_id: Optional[int] = None) -> dict:
        name = require_non_empty(data.get("name"), "Leave type name")
        code = require_non_empty(data.get("code"), "Leave type code").upper()
        try:
            max_days = int(data.get("maxDays") or 0)
        except (TypeError, ValueError):
            raise ValidationError("Max days must be a whole number")
        if max_days < 0:
            raise ValidationError("Max days cannot be negative")

        same_name = self._leaves.get_type_by_name(name)
        if same_name and same_name.leave_type_id != current_id:
            raise ConflictError(f"Leave type {name} already exists")
        same_code = self._leaves.get_type_by_code(code)
        if same_code and same_code.leave_type_id != current_id:
            raise ConflictError(f"Leave type code {code} already exists")

        return {
            "name": name,
            "code": code,
            "max_days": max_days,
            "is_paid": _as_bool(data.get("isPaid")),
            "carry_forward": _as_bool(data.get("carryForward")),
        }

    def create_type(self, data: dict) -> LeaveType:
        fields = self._type_fields(data)
        return self.get_type(self._leaves.create_type(**fields))

    def update_type(self, leave_type_id: int, data: dict) -> LeaveType:
        current = self.get_type(leave_type_id)
        fields = self._type_fields(data, current_id=current.leave_type_id)
        self._leaves.update_type(replace(current, **fields))
        return self.get_type(leave_type_id)

    def delete_type(self, leave_type_id: int) -> None:
        leave_type = self.get_type(leave_type_id)
        if self._leaves.count_type_usage(leave_type.leave_type_id) > 0:
            raise ConflictError(f"Leave type {leave_type.name} is used by leave requests")
        self._leaves.delete_type(leave_type.leave_type_id)

    # Requests
    def get_request(self, request_id: int) -> LeaveRequest:
        request = self._leaves.get_request(int(request_id))
        if not request:
            raise NotFoundError("Leave request not found")
        return request

    def my_requests(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)

    def all_requests(self, *, status: Optional[str] = None, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        wanted = parse_enum(RequestStatus, status, "Status") if status else None
        return self._leaves.list_requests(status=wanted, limit=limit)

    def _remaining(self, *, employee_id: int, leave_type: LeaveType, year: int) -> int:
        used = self._leaves.sum_days(
            employee_id=employee_id,
            leave_type_id=leave_type.leave_type_id,
            year=year,
            status=RequestStatus.APPROVED,
        )
        return max(leave_type.max_days - used, 0)

    def _validated(
        self,
        employee_id: int,
        data: dict,
        *,
        exclude_request_id: Optional[int] = None,
    ) -> dict:
        leave_type = self.get_type(require_id(data.get("leaveTypeId"), "Leave type"))
        from_date = parse_iso_date(data.get("fromDate") or "")
        to_date = parse_iso_date(data.get("toDate") or "")
        if to_date < from_date:
            raise ValidationError("To date must be on or after from date")
        if from_date.year != to_date.year:
            raise ValidationError("Leave cannot span two calendar years; apply once per year")
        reason = require_non_empty(data.get("reason"), "Reason")

        overlapping = self._leaves.find_overlapping(
            employee_id=employee_id,
            from_date=from_date,
            to_date=to_date,
            exclude_request_id=exclude_request_id,
        )
        if overlapping:
            clash = overlapping[0]
            raise ConflictError(
                f"Overlaps leave request {clash.request_id} ({clash.from_date:%Y-%m-%d} to {clash.to_date:%Y-%m-%d})"
            )

        total_days = inclusive_days(from_date, to_date)
        remaining = self._remaining(employee_id=employee_id, leave_type=leave_type, year=from_date.year)
        if total_days > remaining:
            raise ValidationError(
                f"Insufficient {leave_type.name} balance: requested {total_days}, remaining {remaining}"
            )

        return {
            "leave_type_id": leave_type.leave_type_id,
            "from_date": from_date,
            "to_date": to_date,
            "total_days": total_days,
            "reason": reason,
        }

    def apply(self, employee_id: int, data: dict) -> LeaveRequest:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Inactive employees cannot apply for leave")

        fields = self._validated(employee.employee_id, data)
        request_id = self._leaves.create_request(employee_id=employee.employee_id, **fields)
        logger.info(
            "Leave request %s filed by employee %s for %s days",
            request_id,
            employee.employee_id,
            fields["total_days"],
        )
        return self.get_request(request_id)

    def _own_pending(self, employee_id: int, request_id: int) -> LeaveRequest:
        request = self.get_request(request_id)
        if request.employee_id != int(employee_id):
            raise AuthorizationError("Leave request belongs to another employee")
        if request.status != RequestStatus.PENDING:
            raise ConflictError(f"Leave request is already {request.status.value}")
        return request

    def edit(self, employee_id: int, request_id: int, data: dict) -> LeaveRequest:
        request = self._own_pending(employee_id, request_id)
        fields = self._validated(request.employee_id, data, exclude_request_id=request.request_id)
        if not self._leaves.update_request(request.request_id, **fields):
            raise ConflictError("Leave request was decided before the change could be saved")
        return self.get_request(request_id)

    def delete(self, employee_id: int, request_id: int) -> None:
        request = self._own_pending(employee_id, request_id)
        if not self._leaves.delete_request(request.request_id):
            raise ConflictError("Leave request was decided before it could be deleted")

    def decide(self, request_id: int, data: dict, *, decided_by: Optional[int] = None) -> LeaveRequest:
        status = parse_enum(RequestStatus, data.get("status"), "Status")
        if status == RequestStatus.PENDING:
            raise ValidationError("Status must be APPROVED or REJECTED")

        request = self.get_request(request_id)
        if request.status != RequestStatus.PENDING:
            raise ConflictError(f"Leave request is already {request.status.value}")

        if status == RequestStatus.APPROVED:
            leave_type = self.get_type(request.leave_type_id)
            remaining = self._remaining(
                employee_id=request.employee_id,
                leave_type=leave_type,
                year=request.from_date.year,
            )
            if request.total_days > remaining:
                raise ValidationError(
                    f"Insufficient {leave_type.name} balance: requested {request.total_days}, remaining {remaining}"
                )

        note = (data.get("note") or "").strip() or None
        decided = self._leaves.decide_request(
            request_id=request.request_id,
            status=status,
            decided_by=decided_by,
            decided_at=now_local(),
            note=note,
        )
        if not decided:
            raise ConflictError("Leave request was already decided")

        logger.info("Leave request %s %s by %s", request.request_id, status.value, decided_by)
        return self.get_request(request_id)

    def balance(self, employee_id: int, *, year: Optional[int] = None) -> list[LeaveBalance]:
        year = year or now_local().year
        balances = []
        for leave_type in self._leaves.list_types():
            used = self._leaves.sum_days(
                employee_id=int(employee_id),
                leave_type_id=leave_type.leave_type_id,
                year=year,
                status=RequestStatus.APPROVED,
            )
            pending = self._leaves.sum_days(
                employee_id=int(employee_id),
                leave_type_id=leave_type.leave_type_id,
                year=year,
                status=RequestStatus.PENDING,
            )
            balances.append(
                LeaveBalance(
                    leave_type_id=leave_type.leave_type_id,
                    name=leave_type.name,
                    code=leave_type.code,
                    year=year,
                    max_days=leave_type.max_days,
                    used=used,
                    pending=pending,
                    remaining=max(leave_type.max_days - used, 0),
                )
            )
        return balances

    def on_leave(self, on_date: Optional[date] = None) -> Sequence[LeaveRequest]:
        day = on_date or now_local().date()
        return self._leaves.list_approved_between(start=day, end=day)
