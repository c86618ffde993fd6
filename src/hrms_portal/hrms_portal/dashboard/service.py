from __future__ import annotations

from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, JobStatus, RequestStatus
from ..employees.repository import EmployeeRepository
from ..expenses.repository import ExpenseRepository
from ..leave.repository import LeaveRepository
from ..payroll.service import PayrollService
from ..recruitment.repository import RecruitmentRepository


class DashboardService:
    """Read-only counters for the admin landing page."""

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        expenses: ExpenseRepository,
        recruitment: RecruitmentRepository,
        payroll: PayrollService,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._expenses = expenses
        self._recruitment = recruitment
        self._payroll = payroll

    def admin(self, *, today: date | None = None) -> dict:
        today = today or now_local().date()
        records = self._attendance.list_records(start=today, end=today)
        pending_expenses = next(
            (t for t in self._expenses.totals_by_status() if t.status == RequestStatus.PENDING),
            None,
        )
        return {
            "date": today,
            "activeEmployees": len(self._employees.list(is_active=True)),
            "attendanceToday": {
                "present": sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
                "halfDay": sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY),
                "onLeave": len(self._leaves.list_approved_between(start=today, end=today)),
            },
            "pendingLeaveRequests": len(self._leaves.list_requests(status=RequestStatus.PENDING, limit=100000)),
            "pendingExpenses": pending_expenses.count if pending_expenses else 0,
            "openJobOpenings": len(self._recruitment.list_jobs(status=JobStatus.OPEN)),
            "payroll": self._payroll.summary(),
        }
