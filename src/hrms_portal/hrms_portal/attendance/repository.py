from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, RequestStatus
from .model import AttendanceRecord, AttendanceRequest


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_punch_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_punch_out(
        self,
        *,
        attendance_id: int,
        punch_out: datetime,
        worked_minutes: int,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def upsert_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        punch_out: Optional[datetime],
        worked_minutes: int,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        """Create or overwrite the record for (employee, date); returns attendance_id."""

        raise NotImplementedError


class AttendanceRequestRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[AttendanceRequest]:
        raise NotImplementedError

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceRequest]:
        raise NotImplementedError

    def find_pending(self, *, employee_id: int, work_date: date) -> Optional[AttendanceRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        requested_punch_in: time,
        requested_punch_out: Optional[time],
        reason: str,
    ) -> int:
        raise NotImplementedError

    def decide(
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
