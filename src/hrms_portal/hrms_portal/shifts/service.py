from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.validators import require_id, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    """Use case: shift definitions and the weekly roster."""

    def __init__(self, shifts: ShiftRepository, employees: EmployeeRepository):
        self._shifts = shifts
        self._employees = employees

    def list_shifts(self) -> Sequence[Shift]:
        return self._shifts.list_all()

    def get_shift(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def create_shift(self, data: dict) -> Shift:
        name = require_non_empty(data.get("name"), "Shift name")
        start = parse_hhmm(data.get("startTime"))
        end = parse_hhmm(data.get("endTime"))
        if start is None or end is None:
            raise ValidationError("Shift start and end times are required")
        if end <= start:
            raise ValidationError("Shift must end after it starts")

        try:
            break_minutes = int(data.get("breakMinutes") or 0)
        except (TypeError, ValueError):
            raise ValidationError("Break minutes must be a number")
        span = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
        if break_minutes < 0 or break_minutes >= span:
            raise ValidationError("Break minutes must be shorter than the shift")

        if self._shifts.get_by_name(name):
            raise ConflictError(f"Shift {name} already exists")

        shift_id = self._shifts.create(shift_name=name, start_time=start, end_time=end, break_minutes=break_minutes)
        return self.get_shift(shift_id)

    def effective_shift(self, *, employee_id: int, work_date: date, fallback_shift_id: Optional[int]) -> Optional[Shift]:
        """Roster assignment for the date wins over the employee's default shift."""

        assignment = self._shifts.get_assignment(employee_id=int(employee_id), work_date=work_date)
        if assignment:
            return self._shifts.get_by_id(assignment.shift_id)
        if fallback_shift_id:
            return self._shifts.get_by_id(fallback_shift_id)
        return None

    def assign(self, data: dict) -> int:
        employee_id = require_id(data.get("employeeId"), "Employee")
        shift = self.get_shift(require_id(data.get("shiftId"), "Shift"))
        work_date = parse_iso_date(data.get("date") or "")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Cannot roster an inactive employee")

        note = (data.get("note") or "").strip() or None
        schedule_id = self._shifts.upsert_assignment(
            employee_id=employee_id,
            work_date=work_date,
            shift_id=shift.shift_id,
            note=note,
        )
        logger.info("Employee %s rostered on %s for %s", employee_id, shift.shift_name, work_date)
        return schedule_id

    def weekly_roster(self, start: date) -> dict:
        if start.weekday() != 0:
            raise ValidationError("Week must start on a Monday")

        end = start + timedelta(days=6)
        days = [start + timedelta(days=i) for i in range(7)]
        shifts = {s.shift_id: s for s in self._shifts.list_all()}
        assigned = {
            (a.employee_id, a.work_date): a.shift_id
            for a in self._shifts.list_assignments(start=start, end=end)
        }

        rows = []
        for employee in self._employees.list(is_active=True):
            cells = []
            for day in days:
                shift_id = assigned.get((employee.employee_id, day), employee.shift_id)
                shift = shifts.get(shift_id) if shift_id else None
                cells.append(
                    {
                        "date": day,
                        "shiftId": shift.shift_id if shift else None,
                        "shift": shift.label if shift else None,
                        "rostered": (employee.employee_id, day) in assigned,
                    }
                )
            rows.append({"employeeId": employee.employee_id, "name": employee.full_name, "days": cells})

        return {"start": start, "end": end, "employees": rows}
