from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import current_month, parse_month
from ..common.validators import parse_enum
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_WEEKLY_OFF_DAYS
from ..core.enums import PayrollStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..holidays.repository import HolidayRepository
from ..leave.repository import LeaveRepository
from .calculator.base import PayrollCalculator, PayrollInputs, PayrollResult
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollDraft, PayrollRecord, PayrollSummary
from .repository import PayrollRepository, SalaryStructureRepository

logger = logging.getLogger(__name__)

_NEXT_STATUS = {
    PayrollStatus.DRAFT: PayrollStatus.PROCESSED,
    PayrollStatus.PROCESSED: PayrollStatus.PAID,
}


def _require_month(month: Optional[str]) -> str:
    month = (month or "").strip()
    if not month:
        raise ValidationError("Month is required (YYYY-MM)")
    parse_month(month)
    return month


class PayrollService:
    """Use case: monthly payroll from salary structures, attendance and leave.

    Rows are Draft until the month is run, then Processed, then Paid.
    A month can be regenerated only while all its rows are still Draft.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        salaries: SalaryStructureRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        holidays: HolidayRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        weekly_off_days: Iterable[int] = DEFAULT_WEEKLY_OFF_DAYS,
    ):
        self._payroll = payroll
        self._salaries = salaries
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._holidays = holidays
        self._calculator = calculator or StandardPayrollCalculator()
        self._weekly_off_days = frozenset(int(d) for d in weekly_off_days)

    def calculate(self, employee_id: int, month: str) -> PayrollResult:
        """Compute one employee's figures without storing anything."""

        start, end = parse_month(_require_month(month))
        structure = self._salaries.get_by_employee(int(employee_id))
        if not structure:
            raise NotFoundError("No salary structure for this employee")

        paid_types = frozenset(t.leave_type_id for t in self._leaves.list_types() if t.is_paid)
        holidays = frozenset(h.holiday_date for h in self._holidays.list_range(start=start, end=end))
        return self._calculator.calculate(
            PayrollInputs(
                start=start,
                end=end,
                structure=structure,
                records=self._attendance.list_records(start=start, end=end, employee_id=structure.employee_id),
                leaves=self._leaves.list_approved_between(start=start, end=end, employee_id=structure.employee_id),
                paid_leave_type_ids=paid_types,
                holidays=holidays,
                weekly_off_days=self._weekly_off_days,
            )
        )

    def generate(self, month: Optional[str]) -> dict:
        month = _require_month(month)
        start, end = parse_month(month)
        if month > current_month():
            raise ValidationError("Cannot generate payroll for a future month")

        counts = self._payroll.count_by_status(month)
        if counts.get(PayrollStatus.PROCESSED) or counts.get(PayrollStatus.PAID):
            raise ConflictError(f"Payroll for {month} has already been processed")

        paid_types = frozenset(t.leave_type_id for t in self._leaves.list_types() if t.is_paid)
        holidays = frozenset(h.holiday_date for h in self._holidays.list_range(start=start, end=end))
        records = self._attendance.list_records(start=start, end=end)
        leaves = self._leaves.list_approved_between(start=start, end=end)

        drafts: list[PayrollDraft] = []
        skipped: list[dict] = []
        for employee in self._employees.list(is_active=True):
            if employee.joining_date and employee.joining_date > end:
                skipped.append({"employeeId": employee.employee_id, "name": employee.full_name, "reason": "Joined after month end"})
                continue
            structure = self._salaries.get_by_employee(employee.employee_id)
            if not structure:
                skipped.append({"employeeId": employee.employee_id, "name": employee.full_name, "reason": "No salary structure"})
                continue

            result = self._calculator.calculate(
                PayrollInputs(
                    start=start,
                    end=end,
                    structure=structure,
                    records=[r for r in records if r.employee_id == employee.employee_id],
                    leaves=[l for l in leaves if l.employee_id == employee.employee_id],
                    paid_leave_type_ids=paid_types,
                    holidays=holidays,
                    weekly_off_days=self._weekly_off_days,
                )
            )
            drafts.append(PayrollDraft(employee_id=employee.employee_id, month=month, result=result))

        self._payroll.replace_drafts(month, drafts)
        logger.info("Payroll draft for %s generated: %s rows, %s skipped", month, len(drafts), len(skipped))
        return {
            "month": month,
            "generated": len(drafts),
            "skipped": skipped,
            "records": self._payroll.list(month=month, limit=max(len(drafts), 1)),
        }

    def run(self, month: Optional[str]) -> dict:
        month = _require_month(month)
        counts = self._payroll.count_by_status(month)
        if not counts.get(PayrollStatus.DRAFT):
            raise ConflictError(f"No draft payroll to run for {month}")

        processed = self._payroll.process_month(month)
        logger.info("Payroll for %s processed: %s rows", month, processed)
        return {"month": month, "processed": processed}

    def get(self, payroll_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def list_payroll(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[PayrollRecord]:
        month = (month or "").strip() or None
        if month:
            parse_month(month)
        return self._payroll.list(month=month, employee_id=employee_id, limit=limit)

    def update_status(self, payroll_id: int, data: dict) -> PayrollRecord:
        wanted = parse_enum(PayrollStatus, data.get("status"), "Status")
        record = self.get(payroll_id)
        if _NEXT_STATUS.get(record.status) != wanted:
            raise ConflictError(f"Cannot move payroll from {record.status.value} to {wanted.value}")

        if not self._payroll.update_status(record.payroll_id, current=record.status, new=wanted):
            raise ConflictError("Payroll status changed concurrently")

        logger.info("Payroll %s moved %s -> %s", record.payroll_id, record.status.value, wanted.value)
        return self.get(payroll_id)

    def summary(self, month: Optional[str] = None) -> dict:
        latest = self._payroll.latest_month()
        month = (month or "").strip() or latest
        if not month:
            zero = Decimal("0")
            empty = PayrollSummary(month=None, employee_count=0, total_gross=zero, total_deduction=zero, total_net=zero)
            return {"latestMonth": None, "summary": empty}

        parse_month(month)
        return {"latestMonth": latest, "summary": self._payroll.summary(month)}
