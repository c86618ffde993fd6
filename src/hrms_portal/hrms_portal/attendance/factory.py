from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_HALF_DAY_MINUTES, DEFAULT_LATE_GRACE_MINUTES
from ..shifts.model import Shift
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    half_day_minutes: int = DEFAULT_HALF_DAY_MINUTES

    def for_punch_in(self, *, now: datetime, today: date, shift: Optional[Shift]) -> AttendanceStrategy:
        if not shift:
            return PresentStrategy()

        shift_start = datetime.combine(today, shift.start_time)
        if now <= shift_start + timedelta(minutes=self.grace_minutes):
            return PresentStrategy()
        return LateStrategy()

    def for_punch_out(self, *, worked_minutes: int) -> AttendanceStrategy:
        if worked_minutes < self.half_day_minutes:
            return HalfDayStrategy()
        return PresentStrategy()


def worked_minutes_between(punch_in: datetime, punch_out: datetime, break_minutes: int = 0) -> int:
    minutes = int((punch_out - punch_in).total_seconds() // 60) - int(break_minutes or 0)
    return max(minutes, 0)
