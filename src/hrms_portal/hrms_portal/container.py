from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_request_repository import MySQLAttendanceRequestRepository
from .attendance.service import AttendanceService
from .certificates.mysql_certificate_repository import MySQLCertificateRepository
from .certificates.service import CertificateService
from .core.constants import DEFAULT_HALF_DAY_MINUTES, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WEEKLY_OFF_DAYS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.service import ExpenseService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.service import LeaveService
from .organization.mysql_organization_repository import MySQLOrganizationRepository
from .organization.service import OrganizationService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.mysql_salary_repository import MySQLSalaryStructureRepository
from .payroll.payslip_service import PayslipService
from .payroll.salary_service import SalaryStructureService
from .payroll.service import PayrollService
from .recruitment.mysql_recruitment_repository import MySQLRecruitmentRepository
from .recruitment.service import RecruitmentService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    """Services the HTTP layer talks to; controllers never see repositories."""

    organization_service: OrganizationService
    employee_service: EmployeeService
    shift_service: ShiftService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryStructureService
    payroll_service: PayrollService
    payslip_service: PayslipService
    expense_service: ExpenseService
    recruitment_service: RecruitmentService
    certificate_service: CertificateService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    weekly_off_days: Iterable[int] = DEFAULT_WEEKLY_OFF_DAYS,
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    half_day_minutes: int = DEFAULT_HALF_DAY_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    weekly_off_days = tuple(weekly_off_days)

    organization_repo = MySQLOrganizationRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    attendance_requests_repo = MySQLAttendanceRequestRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    salary_repo = MySQLSalaryStructureRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    payslip_repo = MySQLPayslipRepository(conn)
    expense_repo = MySQLExpenseRepository(conn)
    recruitment_repo = MySQLRecruitmentRepository(conn)
    certificate_repo = MySQLCertificateRepository(conn)

    shift_service = ShiftService(shifts_repo, employees_repo)
    payroll_service = PayrollService(
        payroll_repo,
        salary_repo,
        employees_repo,
        attendance_repo,
        leave_repo,
        holidays_repo,
        weekly_off_days=weekly_off_days,
    )

    return Container(
        organization_service=OrganizationService(organization_repo),
        employee_service=EmployeeService(employees_repo, organization_repo, shifts_repo),
        shift_service=shift_service,
        holiday_service=HolidayService(holidays_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            attendance_requests_repo,
            employees_repo,
            shift_service,
            holidays_repo,
            leave_repo,
            strategy_factory=AttendanceStrategyFactory(
                grace_minutes=int(late_grace_minutes),
                half_day_minutes=int(half_day_minutes),
            ),
            weekly_off_days=weekly_off_days,
        ),
        leave_service=LeaveService(leave_repo, employees_repo),
        salary_service=SalaryStructureService(salary_repo, employees_repo),
        payroll_service=payroll_service,
        payslip_service=PayslipService(payslip_repo, payroll_repo, salary_repo),
        expense_service=ExpenseService(expense_repo, employees_repo),
        recruitment_service=RecruitmentService(recruitment_repo, organization_repo),
        certificate_service=CertificateService(certificate_repo),
        dashboard_service=DashboardService(
            employees=employees_repo,
            attendance=attendance_repo,
            leaves=leave_repo,
            expenses=expense_repo,
            recruitment=recruitment_repo,
            payroll=payroll_service,
        ),
    )
