from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveType:
    leave_type_id: int
    name: str
    code: str
    max_days: int
    is_paid: bool
    carry_forward: bool = False


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave application covering whole calendar days."""

    request_id: int
    employee_id: int
    leave_type_id: int
    from_date: date
    to_date: date
    total_days: int
    reason: str
    status: RequestStatus
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    decision_note: Optional[str] = None
    created_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.from_date <= day <= self.to_date


@dataclass(frozen=True)
class LeaveBalance:
    """Read-model: yearly usage of one leave type."""

    leave_type_id: int
    name: str
    code: str
    year: int
    max_days: int
    used: int
    pending: int
    remaining: int
