from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import Shift, ShiftAssignment


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_by_name(self, shift_name: str) -> Optional[Shift]:
        raise NotImplementedError

    def create(self, *, shift_name: str, start_time: time, end_time: time, break_minutes: int) -> int:
        raise NotImplementedError

    # Roster
    def get_assignment(self, *, employee_id: int, work_date: date) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def upsert_assignment(self, *, employee_id: int, work_date: date, shift_id: int, note: Optional[str] = None) -> int:
        """Create or update the assignment for (employee, date); returns schedule_id."""

        raise NotImplementedError

    def list_assignments(self, *, start: date, end: date) -> Sequence[ShiftAssignment]:
        raise NotImplementedError
