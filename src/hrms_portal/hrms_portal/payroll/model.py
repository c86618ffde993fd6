from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus, PayslipStatus
from .calculator.base import PayrollResult


@dataclass(frozen=True)
class SalaryStructure:
    """Monthly salary components of one employee."""

    structure_id: int
    employee_id: int
    basic: Decimal
    hra: Decimal
    allowance: Decimal
    pf: Decimal
    tax: Decimal

    @property
    def gross(self) -> Decimal:
        return self.basic + self.hra + self.allowance


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    month: str
    gross: Decimal
    deduction: Decimal
    net: Decimal
    working_days: Decimal
    present_days: Decimal
    absent_days: Decimal
    paid_leaves: Decimal
    unpaid_leaves: Decimal
    status: PayrollStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollDraft:
    """A computed row waiting to be stored as Draft."""

    employee_id: int
    month: str
    result: PayrollResult


@dataclass(frozen=True)
class PayrollSummary:
    month: Optional[str]
    employee_count: int
    total_gross: Decimal
    total_deduction: Decimal
    total_net: Decimal


@dataclass(frozen=True)
class Payslip:
    payslip_id: int
    payroll_id: int
    employee_id: int
    month: str
    basic: Decimal
    hra: Decimal
    allowance: Decimal
    deduction: Decimal
    net_salary: Decimal
    status: PayslipStatus
    created_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
