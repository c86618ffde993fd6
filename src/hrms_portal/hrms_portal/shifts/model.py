from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    break_minutes: int = 0

    @property
    def label(self) -> str:
        return f"{self.shift_name} ({self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')})"


@dataclass(frozen=True)
class ShiftAssignment:
    """Roster entry: overrides the employee's default shift for one date."""

    schedule_id: int
    employee_id: int
    work_date: date
    shift_id: int
    note: Optional[str] = None
