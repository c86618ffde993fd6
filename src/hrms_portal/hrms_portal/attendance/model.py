from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus, RequestStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's punches for one day."""

    attendance_id: int
    employee_id: int
    work_date: date
    punch_in: datetime
    punch_out: Optional[datetime]
    status: AttendanceStatus
    worked_minutes: int = 0
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRequest:
    """Regularization request: asks to set the punches of a past day."""

    request_id: int
    employee_id: int
    work_date: date
    requested_punch_in: time
    requested_punch_out: Optional[time]
    reason: str
    status: RequestStatus
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    decision_note: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CalendarDay:
    """Read-model: derived status of one calendar day."""

    work_date: date
    status: AttendanceStatus
    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    worked_minutes: int = 0
    note: Optional[str] = None
