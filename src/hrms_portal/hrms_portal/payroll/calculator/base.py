from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, FrozenSet, Sequence

from ...attendance.model import AttendanceRecord
from ...core.constants import DEFAULT_WEEKLY_OFF_DAYS
from ...leave.model import LeaveRequest

if TYPE_CHECKING:
    from ..model import SalaryStructure


@dataclass(frozen=True)
class PayrollInputs:
    """Everything one employee's monthly figure depends on."""

    start: date
    end: date
    structure: SalaryStructure
    records: Sequence[AttendanceRecord] = ()
    leaves: Sequence[LeaveRequest] = ()
    paid_leave_type_ids: FrozenSet[int] = frozenset()
    holidays: FrozenSet[date] = frozenset()
    weekly_off_days: FrozenSet[int] = frozenset(DEFAULT_WEEKLY_OFF_DAYS)


@dataclass(frozen=True)
class PayrollResult:
    gross: Decimal
    deduction: Decimal
    net: Decimal
    working_days: Decimal
    present_days: Decimal
    absent_days: Decimal
    paid_leaves: Decimal
    unpaid_leaves: Decimal
    loss_of_pay: Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, inputs: PayrollInputs) -> PayrollResult:
        raise NotImplementedError
