from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_month
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PayrollStatus, PayslipStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Payslip
from .repository import PayrollRepository, PayslipRepository, SalaryStructureRepository

logger = logging.getLogger(__name__)


class PayslipService:
    def __init__(
        self,
        payslips: PayslipRepository,
        payroll: PayrollRepository,
        salaries: SalaryStructureRepository,
    ):
        self._payslips = payslips
        self._payroll = payroll
        self._salaries = salaries

    def generate_from_payroll(self, month: Optional[str]) -> dict:
        """One payslip per Processed or Paid payroll row; rows that already have one are left alone."""

        month = (month or "").strip()
        if not month:
            raise ValidationError("Month is required (YYYY-MM)")
        parse_month(month)

        rows = [
            r
            for status in (PayrollStatus.PROCESSED, PayrollStatus.PAID)
            for r in self._payroll.list(month=month, status=status, limit=100000)
        ]
        if not rows:
            raise ConflictError(f"No processed payroll for {month}")

        created = 0
        for row in rows:
            if self._payslips.get_by_payroll(row.payroll_id):
                continue
            structure = self._salaries.get_by_employee(row.employee_id)
            if structure:
                basic, hra, allowance = structure.basic, structure.hra, structure.allowance
            else:
                basic, hra, allowance = row.gross, Decimal("0"), Decimal("0")
            self._payslips.create(
                payroll_id=row.payroll_id,
                employee_id=row.employee_id,
                month=row.month,
                basic=basic,
                hra=hra,
                allowance=allowance,
                deduction=row.deduction,
                net_salary=row.net,
            )
            created += 1

        logger.info("Payslips for %s: %s created, %s already present", month, created, len(rows) - created)
        return {
            "month": month,
            "created": created,
            "existing": len(rows) - created,
            "payslips": self._payslips.list(month=month, limit=max(len(rows), 1)),
        }

    def list_payslips(
        self,
        *,
        month: Optional[str] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Payslip]:
        month = (month or "").strip() or None
        if month:
            parse_month(month)
        return self._payslips.list(month=month, employee_id=employee_id, limit=limit)

    def my_payslips(self, employee_id: int) -> Sequence[Payslip]:
        return self._payslips.list(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)

    def get_payslip(self, payslip_id: int) -> Payslip:
        payslip = self._payslips.get_by_id(int(payslip_id))
        if not payslip:
            raise NotFoundError("Payslip not found")
        return payslip

    def send(self, payslip_id: int) -> Payslip:
        payslip = self.get_payslip(payslip_id)
        if payslip.status != PayslipStatus.GENERATED:
            raise ConflictError(f"Payslip is already {payslip.status.value}")
        if not self._payslips.mark_sent(payslip.payslip_id, sent_at=now_local()):
            raise ConflictError("Payslip was already sent")
        logger.info("Payslip %s sent to employee %s", payslip.payslip_id, payslip.employee_id)
        return self.get_payslip(payslip_id)
