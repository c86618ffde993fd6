from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseType, RequestStatus


@dataclass(frozen=True)
class Expense:
    """Domain entity: a reimbursement claim."""

    expense_id: int
    employee_id: int
    expense_type: ExpenseType
    category: str
    amount: Decimal
    expense_date: date
    remarks: Optional[str]
    status: RequestStatus
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ExpenseTotal:
    status: RequestStatus
    count: int
    amount: Decimal
