from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollDraft, PayrollRecord, PayrollSummary, Payslip, SalaryStructure


class SalaryStructureRepository(Protocol):
    def list_all(self) -> Sequence[SalaryStructure]:
        raise NotImplementedError

    def get_by_id(self, structure_id: int) -> Optional[SalaryStructure]:
        raise NotImplementedError

    def get_by_employee(self, employee_id: int) -> Optional[SalaryStructure]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        basic: Decimal,
        hra: Decimal,
        allowance: Decimal,
        pf: Decimal,
        tax: Decimal,
    ) -> int:
        raise NotImplementedError

    def update(self, structure: SalaryStructure) -> bool:
        raise NotImplementedError

    def delete(self, structure_id: int) -> bool:
        raise NotImplementedError


class PayrollRepository(Protocol):
    def list(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        limit: int = 200,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def count_by_status(self, month: str) -> dict[PayrollStatus, int]:
        raise NotImplementedError

    def replace_drafts(self, month: str, drafts: Sequence[PayrollDraft]) -> int:
        """Delete the month's Draft rows and insert drafts in one transaction."""

        raise NotImplementedError

    def update_status(self, payroll_id: int, *, current: PayrollStatus, new: PayrollStatus) -> bool:
        raise NotImplementedError

    def process_month(self, month: str) -> int:
        """Move every Draft row of the month to Processed; returns the row count."""

        raise NotImplementedError

    def summary(self, month: str) -> PayrollSummary:
        raise NotImplementedError

    def latest_month(self) -> Optional[str]:
        raise NotImplementedError


class PayslipRepository(Protocol):
    def list(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Payslip]:
        raise NotImplementedError

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def get_by_payroll(self, payroll_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def create(
        self,
        *,
        payroll_id: int,
        employee_id: int,
        month: str,
        basic: Decimal,
        hra: Decimal,
        allowance: Decimal,
        deduction: Decimal,
        net_salary: Decimal,
    ) -> int:
        raise NotImplementedError

    def mark_sent(self, payslip_id: int, *, sent_at: datetime) -> bool:
        """Only Generated payslips move to Sent."""

        raise NotImplementedError
