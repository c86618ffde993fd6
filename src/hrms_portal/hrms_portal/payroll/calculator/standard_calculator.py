from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...common.datetime_utils import iter_dates
from ...core.constants import MONEY_PLACES
from ...core.enums import AttendanceStatus
from .base import PayrollCalculator, PayrollInputs, PayrollResult

_ZERO = Decimal("0")
_CENT = Decimal(1).scaleb(-MONEY_PLACES)
_DAY_WEIGHT = {
    AttendanceStatus.PRESENT: Decimal("1"),
    AttendanceStatus.HALF_DAY: Decimal("0.5"),
}


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross pro-rated on absent and unpaid leave days, minus PF and tax, never below 0."""

    def calculate(self, inputs: PayrollInputs) -> PayrollResult:
        working = [
            d
            for d in iter_dates(inputs.start, inputs.end)
            if d.weekday() not in inputs.weekly_off_days and d not in inputs.holidays
        ]
        working_set = set(working)

        recorded = {}
        for r in inputs.records:
            if r.work_date in working_set:
                recorded[r.work_date] = r.status
        present = sum((_DAY_WEIGHT.get(s, _ZERO) for s in recorded.values()), _ZERO)

        paid = _ZERO
        unpaid = _ZERO
        for day in working:
            if day in recorded:
                continue
            leave = next((l for l in inputs.leaves if l.covers(day)), None)
            if leave is None:
                continue
            if leave.leave_type_id in inputs.paid_leave_type_ids:
                paid += 1
            else:
                unpaid += 1

        working_days = Decimal(len(working))
        absent = max(working_days - present - paid - unpaid, _ZERO)

        structure = inputs.structure
        gross = structure.basic + structure.hra + structure.allowance
        per_day = gross / working_days if working_days else _ZERO
        loss_of_pay = per_day * (absent + unpaid)
        deduction = round_money(min(structure.pf + structure.tax + loss_of_pay, gross))
        gross = round_money(gross)

        return PayrollResult(
            gross=gross,
            deduction=deduction,
            net=gross - deduction,
            working_days=working_days,
            present_days=present,
            absent_days=absent,
            paid_leaves=paid,
            unpaid_leaves=unpaid,
            loss_of_pay=round_money(loss_of_pay),
        )
