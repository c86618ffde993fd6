from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest, LeaveType


class LeaveRepository(Protocol):
    # Leave types
    def list_types(self) -> Sequence[LeaveType]:
        raise NotImplementedError

    def get_type(self, leave_type_id: int) -> Optional[LeaveType]:
        raise NotImplementedError

    def get_type_by_name(self, name: str) -> Optional[LeaveType]:
        raise NotImplementedError

    def get_type_by_code(self, code: str) -> Optional[LeaveType]:
        raise NotImplementedError

    def create_type(self, *, name: str, code: str, max_days: int, is_paid: bool, carry_forward: bool) -> int:
        raise NotImplementedError

    def update_type(self, leave_type: LeaveType) -> bool:
        raise NotImplementedError

    def delete_type(self, leave_type_id: int) -> bool:
        raise NotImplementedError

    def count_type_usage(self, leave_type_id: int) -> int:
        raise NotImplementedError

    # Leave requests
    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create_request(
        self,
        *,
        employee_id: int,
        leave_type_id: int,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def update_request(
        self,
        request_id: int,
        *,
        leave_type_id: int,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: str,
    ) -> bool:
        """Only touches PENDING rows."""

        raise NotImplementedError

    def delete_request(self, request_id: int) -> bool:
        """Only deletes PENDING rows."""

        raise NotImplementedError

    def decide_request(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: Optional[int],
        decided_at: datetime,
        note: Optional[str],
    ) -> bool:
        """Only decides PENDING rows."""

        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        employee_id: int,
        from_date: date,
        to_date: date,
        exclude_request_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        """Non-rejected requests of the employee intersecting [from_date, to_date]."""

        raise NotImplementedError

    def sum_days(self, *, employee_id: int, leave_type_id: int, year: int, status: RequestStatus) -> int:
        raise NotImplementedError

    def list_approved_between(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError
