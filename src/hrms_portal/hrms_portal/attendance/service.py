from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_dates, now_local, parse_hhmm, parse_iso_date, parse_month
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_WEEKLY_OFF_DAYS
from ..core.enums import AttendanceStatus, RequestStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..holidays.repository import HolidayRepository
from ..leave.repository import LeaveRepository
from ..shifts.service import ShiftService
from .factory import AttendanceStrategyFactory, worked_minutes_between
from .model import AttendanceRecord, AttendanceRequest, CalendarDay
from .repository import AttendanceRepository, AttendanceRequestRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: punches, listings, the monthly calendar and regularization requests."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        requests: AttendanceRequestRepository,
        employees: EmployeeRepository,
        shifts: ShiftService,
        holidays: HolidayRepository,
        leaves: LeaveRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        weekly_off_days: Iterable[int] = DEFAULT_WEEKLY_OFF_DAYS,
    ):
        self._attendance = attendance
        self._requests = requests
        self._employees = employees
        self._shifts = shifts
        self._holidays = holidays
        self._leaves = leaves
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._weekly_off_days = frozenset(int(d) for d in weekly_off_days)

    def _active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Employee is inactive")
        return employee

    def punch_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        employee = self._active_employee(employee_id)

        if self._attendance.get_for_employee_and_date(employee.employee_id, today):
            raise ConflictError("Already punched in today")

        shift = self._shifts.effective_shift(
            employee_id=employee.employee_id,
            work_date=today,
            fallback_shift_id=employee.shift_id,
        )
        strategy = self._factory.for_punch_in(now=now, today=today, shift=shift)
        decision = strategy.decide_punch_in(now=now, today=today, shift=shift)

        self._attendance.create_punch_in(
            employee_id=employee.employee_id,
            work_date=today,
            punch_in=now,
            status=decision.status,
            note=decision.note,
        )
        logger.info("Employee %s punched in at %s", employee.employee_id, now.strftime("%H:%M"))
        return self._attendance.get_for_employee_and_date(employee.employee_id, today)

    def punch_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        employee = self._active_employee(employee_id)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if not record:
            raise ValidationError("No punch in recorded today")
        if record.punch_out is not None:
            raise ConflictError("Already punched out today")
        if now < record.punch_in:
            raise ValidationError("Punch out cannot be earlier than punch in")

        shift = self._shifts.effective_shift(
            employee_id=employee.employee_id,
            work_date=today,
            fallback_shift_id=employee.shift_id,
        )
        worked = worked_minutes_between(record.punch_in, now, shift.break_minutes if shift else 0)
        strategy = self._factory.for_punch_out(worked_minutes=worked)
        decision = strategy.decide_punch_out(worked_minutes=worked, current=record.status)

        updated = self._attendance.update_punch_out(
            attendance_id=record.attendance_id,
            punch_out=now,
            worked_minutes=worked,
            status=decision.status,
            note=decision.note or record.note,
        )
        if not updated:
            raise ConflictError("Already punched out today")

        logger.info("Employee %s punched out after %s min (%s)", employee.employee_id, worked, decision.status.value)
        return self._attendance.get_for_employee_and_date(employee.employee_id, today)

    # Listings
    def my_records(self, employee_id: int, *, month: str) -> Sequence[AttendanceRecord]:
        start, end = parse_month(month)
        return self._attendance.list_records(start=start, end=end, employee_id=int(employee_id))

    def all_records(
        self,
        *,
        month: str,
        department_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        start, end = parse_month(month)
        return self._attendance.list_records(start=start, end=end, department_id=department_id, limit=limit)

    def team_records(
        self,
        *,
        month: str,
        department_id: Optional[int] = None,
        manager_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        """Records of one department; defaults to the acting manager's own department."""

        if department_id is None and manager_id is not None:
            manager = self._employees.get_by_id(int(manager_id))
            if not manager:
                raise NotFoundError("Employee not found")
            department_id = manager.department_id
        if department_id is None:
            raise ValidationError("Department is required")

        start, end = parse_month(month)
        return self._attendance.list_records(start=start, end=end, department_id=department_id, limit=limit)

    def records_between(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_records(start=start, end=end, employee_id=employee_id)

    def calendar(self, employee_id: int, *, month: str, today: date | None = None) -> list[CalendarDay]:
        today = today or now_local().date()
        start, end = parse_month(month)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        records = {
            r.work_date: r
            for r in self._attendance.list_records(start=start, end=end, employee_id=employee.employee_id)
        }
        holidays = {h.holiday_date for h in self._holidays.list_range(start=start, end=end)}
        leaves = self._leaves.list_approved_between(start=start, end=end, employee_id=employee.employee_id)

        days: list[CalendarDay] = []
        for day in iter_dates(start, end):
            record = records.get(day)
            if day.weekday() in self._weekly_off_days:
                days.append(CalendarDay(work_date=day, status=AttendanceStatus.WEEKEND))
            elif day in holidays:
                days.append(CalendarDay(work_date=day, status=AttendanceStatus.HOLIDAY))
            elif record:
                days.append(
                    CalendarDay(
                        work_date=day,
                        status=record.status,
                        punch_in=record.punch_in,
                        punch_out=record.punch_out,
                        worked_minutes=record.worked_minutes,
                        note=record.note,
                    )
                )
            elif any(leave.covers(day) for leave in leaves):
                days.append(CalendarDay(work_date=day, status=AttendanceStatus.LEAVE))
            elif day < today:
                days.append(CalendarDay(work_date=day, status=AttendanceStatus.ABSENT))
        return days

    # Regularization requests
    def get_request(self, request_id: int) -> AttendanceRequest:
        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Attendance request not found")
        return req

    def create_request(self, employee_id: int, data: dict, *, today: date | None = None) -> AttendanceRequest:
        today = today or now_local().date()
        employee = self._active_employee(employee_id)

        work_date = parse_iso_date(data.get("date") or "")
        if work_date > today:
            raise ValidationError("Cannot regularize a future date")

        punch_in = parse_hhmm(data.get("punchIn"))
        if punch_in is None:
            raise ValidationError("Punch in time is required")
        punch_out = parse_hhmm(data.get("punchOut"))
        if punch_out is not None and punch_out <= punch_in:
            raise ValidationError("Punch out must be later than punch in")
        reason = require_non_empty(data.get("reason"), "Reason")

        if self._requests.find_pending(employee_id=employee.employee_id, work_date=work_date):
            raise ConflictError(f"A pending request already exists for {work_date:%Y-%m-%d}")

        request_id = self._requests.create(
            employee_id=employee.employee_id,
            work_date=work_date,
            requested_punch_in=punch_in,
            requested_punch_out=punch_out,
            reason=reason,
        )
        return self.get_request(request_id)

    def my_requests(self, employee_id: int) -> Sequence[AttendanceRequest]:
        return self._requests.list(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)

    def manager_requests(
        self,
        *,
        status: Optional[str] = None,
        department_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[AttendanceRequest]:
        wanted = parse_enum(RequestStatus, status, "Status") if status else None
        return self._requests.list(status=wanted, department_id=department_id, limit=limit)

    def decide_request(self, request_id: int, data: dict, *, decided_by: Optional[int] = None) -> AttendanceRequest:
        status = parse_enum(RequestStatus, data.get("status"), "Status")
        if status == RequestStatus.PENDING:
            raise ValidationError("Status must be APPROVED or REJECTED")

        req = self.get_request(request_id)
        if req.status != RequestStatus.PENDING:
            raise ConflictError(f"Attendance request is already {req.status.value}")

        record = self._regularized_record(req) if status == RequestStatus.APPROVED else None

        decided = self._requests.decide(
            request_id=req.request_id,
            status=status,
            decided_by=decided_by,
            decided_at=now_local(),
            note=(data.get("note") or "").strip() or None,
        )
        if not decided:
            raise ConflictError("Attendance request was already decided")
        if record is not None:
            self._attendance.upsert_record(**record)

        logger.info("Attendance request %s %s by %s", req.request_id, status.value, decided_by)
        return self.get_request(request_id)

    def _regularized_record(self, req: AttendanceRequest) -> dict:
        employee = self._employees.get_by_id(req.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        punch_in = datetime.combine(req.work_date, req.requested_punch_in)
        punch_out = datetime.combine(req.work_date, req.requested_punch_out) if req.requested_punch_out else None

        if punch_out is None:
            worked = 0
            status = AttendanceStatus.PRESENT
        else:
            shift = self._shifts.effective_shift(
                employee_id=employee.employee_id,
                work_date=req.work_date,
                fallback_shift_id=employee.shift_id,
            )
            worked = worked_minutes_between(punch_in, punch_out, shift.break_minutes if shift else 0)
            status = self._factory.for_punch_out(worked_minutes=worked).decide_punch_out(
                worked_minutes=worked,
                current=AttendanceStatus.PRESENT,
            ).status

        return {
            "employee_id": employee.employee_id,
            "work_date": req.work_date,
            "punch_in": punch_in,
            "punch_out": punch_out,
            "worked_minutes": worked,
            "status": status,
            "note": f"Regularized: {req.reason}"[:255],
        }
