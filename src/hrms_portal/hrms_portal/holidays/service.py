from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_holidays(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        if year is None:
            return self._holidays.list_range()
        return self._holidays.list_range(start=date(year, 1, 1), end=date(year, 12, 31))

    def dates_between(self, start: date, end: date) -> set[date]:
        return {h.holiday_date for h in self._holidays.list_range(start=start, end=end)}

    def get_holiday(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(int(holiday_id))
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def _fields(self, data: dict, *, current_id: Optional[int] = None) -> tuple[str, date]:
        title = require_non_empty(data.get("title"), "Title")
        holiday_date = parse_iso_date(data.get("date") or "")
        clash = self._holidays.get_by_date(holiday_date)
        if clash and clash.holiday_id != current_id:
            raise ConflictError(f"{holiday_date:%Y-%m-%d} is already a holiday ({clash.title})")
        return title, holiday_date

    def create_holiday(self, data: dict) -> Holiday:
        title, holiday_date = self._fields(data)
        return self.get_holiday(self._holidays.create(title=title, holiday_date=holiday_date))

    def update_holiday(self, holiday_id: int, data: dict) -> Holiday:
        self.get_holiday(holiday_id)
        title, holiday_date = self._fields(data, current_id=int(holiday_id))
        self._holidays.update(int(holiday_id), title=title, holiday_date=holiday_date)
        return self.get_holiday(holiday_id)

    def delete_holiday(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Holiday not found")
