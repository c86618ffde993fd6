from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late punch in: still present, with the delay noted."""

    def decide_punch_in(self, *, now: datetime, today: date, shift: Optional[Shift]) -> StatusDecision:
        if not shift:
            return StatusDecision(status=AttendanceStatus.PRESENT)
        late_by = int((now - datetime.combine(today, shift.start_time)).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.PRESENT, note=f"Late by {late_by} min")

    def decide_punch_out(self, *, worked_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
