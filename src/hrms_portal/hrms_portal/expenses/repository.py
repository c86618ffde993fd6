from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseType, RequestStatus
from .model import Expense, ExpenseTotal


class ExpenseRepository(Protocol):
    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Expense]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        expense_type: ExpenseType,
        category: str,
        amount: Decimal,
        expense_date: date,
        remarks: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        expense_id: int,
        *,
        expense_type: ExpenseType,
        category: str,
        amount: Decimal,
        expense_date: date,
        remarks: Optional[str],
    ) -> bool:
        """Only touches PENDING rows."""

        raise NotImplementedError

    def delete(self, expense_id: int) -> bool:
        """Only deletes PENDING rows."""

        raise NotImplementedError

    def decide(self, *, expense_id: int, status: RequestStatus, decided_by: Optional[int], decided_at: datetime) -> bool:
        """Only decides PENDING rows."""

        raise NotImplementedError

    def totals_by_status(self, *, employee_id: Optional[int] = None) -> Sequence[ExpenseTotal]:
        raise NotImplementedError
