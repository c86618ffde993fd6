from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hrms_portal.hrms_portal.attendance.model import AttendanceRecord
from src.hrms_portal.hrms_portal.common.datetime_utils import iter_dates
from src.hrms_portal.hrms_portal.core.enums import AttendanceStatus, PayrollStatus, PayslipStatus, Role
from src.hrms_portal.hrms_portal.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.hrms_portal.hrms_portal.employees.model import Employee
from src.hrms_portal.hrms_portal.holidays.model import Holiday
from src.hrms_portal.hrms_portal.leave.model import LeaveType
from src.hrms_portal.hrms_portal.payroll.model import SalaryStructure
from src.hrms_portal.hrms_portal.payroll.payslip_service import PayslipService
from src.hrms_portal.hrms_portal.payroll.service import PayrollService
from tests.fakes import (
    InMemoryAttendanceRepo,
    InMemoryEmployeeRepo,
    InMemoryHolidayRepo,
    InMemoryLeaveRepo,
    InMemoryPayrollRepo,
    InMemoryPayslipRepo,
    InMemorySalaryRepo,
)

MONTH = "2025-03"


def _employee(employee_id: int, *, joining_date=date(2024, 1, 15), is_active=True) -> Employee:
    return Employee(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        email=f"e{employee_id}@acme.test",
        role=Role.EMPLOYEE,
        joining_date=joining_date,
        is_active=is_active,
    )


def _structure(structure_id: int, employee_id: int) -> SalaryStructure:
    return SalaryStructure(
        structure_id=structure_id,
        employee_id=employee_id,
        basic=Decimal("20000"),
        hra=Decimal("8000"),
        allowance=Decimal("2000"),
        pf=Decimal("1800"),
        tax=Decimal("200"),
    )


class _World:
    def __init__(self):
        self.employees = InMemoryEmployeeRepo(
            [
                _employee(1),
                _employee(2),
                _employee(3, joining_date=date(2025, 4, 10)),
                _employee(4, is_active=False),
            ]
        )
        self.salaries = InMemorySalaryRepo([_structure(1, 1), _structure(3, 3), _structure(4, 4)])
        self.attendance = InMemoryAttendanceRepo(self.employees)
        self.leaves = InMemoryLeaveRepo([LeaveType(leave_type_id=1, name="Casual", code="CL", max_days=12, is_paid=True)])
        self.holidays = InMemoryHolidayRepo([Holiday(holiday_id=1, title="Festival", holiday_date=date(2025, 3, 14))])
        self.payroll = InMemoryPayrollRepo()
        self.payslips = InMemoryPayslipRepo()

        # Employee 1 works every working day of March except the 31st.
        for d in iter_dates(date(2025, 3, 1), date(2025, 3, 28)):
            if d.weekday() == 6 or d == date(2025, 3, 14):
                continue
            self.attendance.upsert_record(
                employee_id=1,
                work_date=d,
                punch_in=datetime.combine(d, datetime.min.time()).replace(hour=9),
                punch_out=datetime.combine(d, datetime.min.time()).replace(hour=18),
                worked_minutes=480,
                status=AttendanceStatus.PRESENT,
            )
        self.attendance.upsert_record(
            employee_id=1,
            work_date=date(2025, 3, 29),
            punch_in=datetime(2025, 3, 29, 9, 0),
            punch_out=datetime(2025, 3, 29, 12, 0),
            worked_minutes=180,
            status=AttendanceStatus.HALF_DAY,
        )

        self.service = PayrollService(
            self.payroll,
            self.salaries,
            self.employees,
            self.attendance,
            self.leaves,
            self.holidays,
            weekly_off_days=(6,),
        )
        self.payslip_service = PayslipService(self.payslips, self.payroll, self.salaries)


def test_calculate_uses_attendance_holidays_and_structure():
    world = _World()

    result = world.service.calculate(1, MONTH)

    # 25 working days; 23.5 worked; 1.5 absent at 1200 per day
    assert result.working_days == Decimal("25")
    assert result.present_days == Decimal("23.5")
    assert result.absent_days == Decimal("1.5")
    assert result.deduction == Decimal("3800.00")
    assert result.net == Decimal("26200.00")


def test_calculate_requires_salary_structure():
    world = _World()

    with pytest.raises(NotFoundError):
        world.service.calculate(2, MONTH)


def test_generate_creates_drafts_and_reports_skipped_employees():
    world = _World()

    out = world.service.generate(MONTH)

    assert out["generated"] == 1
    reasons = {s["employeeId"]: s["reason"] for s in out["skipped"]}
    assert reasons == {2: "No salary structure", 3: "Joined after month end"}
    (row,) = out["records"]
    assert row.employee_id == 1
    assert row.status == PayrollStatus.DRAFT
    assert row.net == Decimal("26200.00")


def test_generate_again_replaces_drafts():
    world = _World()
    world.service.generate(MONTH)

    world.service.generate(MONTH)

    assert len(world.payroll.list(month=MONTH)) == 1


def test_generate_rejects_future_and_malformed_months():
    world = _World()

    with pytest.raises(ValidationError):
        world.service.generate("2999-01")
    with pytest.raises(ValidationError):
        world.service.generate("March")
    with pytest.raises(ValidationError):
        world.service.generate(None)


def test_run_processes_drafts_and_locks_the_month():
    world = _World()
    world.service.generate(MONTH)

    out = world.service.run(MONTH)

    assert out == {"month": MONTH, "processed": 1}
    assert all(r.status == PayrollStatus.PROCESSED for r in world.payroll.list(month=MONTH))
    with pytest.raises(ConflictError):
        world.service.generate(MONTH)
    with pytest.raises(ConflictError):
        world.service.run(MONTH)


def test_status_moves_one_step_at_a_time():
    world = _World()
    (row,) = world.service.generate(MONTH)["records"]

    with pytest.raises(ConflictError):
        world.service.update_status(row.payroll_id, {"status": "Paid"})

    processed = world.service.update_status(row.payroll_id, {"status": "Processed"})
    assert processed.status == PayrollStatus.PROCESSED

    paid = world.service.update_status(row.payroll_id, {"status": "Paid"})
    assert paid.status == PayrollStatus.PAID

    with pytest.raises(ConflictError):
        world.service.update_status(row.payroll_id, {"status": "Draft"})


def test_summary_without_payroll_is_zero():
    world = _World()

    out = world.service.summary()

    assert out["latestMonth"] is None
    assert out["summary"].employee_count == 0
    assert out["summary"].total_net == Decimal("0")


def test_summary_defaults_to_latest_month():
    world = _World()
    world.service.generate(MONTH)

    out = world.service.summary()

    assert out["latestMonth"] == MONTH
    assert out["summary"].employee_count == 1
    assert out["summary"].total_gross == Decimal("30000.00")


def test_payslips_need_processed_payroll():
    world = _World()
    world.service.generate(MONTH)

    with pytest.raises(ConflictError):
        world.payslip_service.generate_from_payroll(MONTH)


def test_payslip_generation_is_idempotent():
    world = _World()
    world.service.generate(MONTH)
    world.service.run(MONTH)

    first = world.payslip_service.generate_from_payroll(MONTH)
    second = world.payslip_service.generate_from_payroll(MONTH)

    assert (first["created"], first["existing"]) == (1, 0)
    assert (second["created"], second["existing"]) == (0, 1)
    (slip,) = second["payslips"]
    assert slip.basic == Decimal("20000")
    assert slip.deduction == Decimal("3800.00")
    assert slip.net_salary == Decimal("26200.00")
    assert slip.status == PayslipStatus.GENERATED


def test_payslip_falls_back_to_gross_without_structure():
    world = _World()
    world.service.generate(MONTH)
    world.service.run(MONTH)
    world.salaries.delete(1)

    (slip,) = world.payslip_service.generate_from_payroll(MONTH)["payslips"]

    assert slip.basic == Decimal("30000.00")
    assert slip.hra == Decimal("0")
    assert slip.allowance == Decimal("0")


def test_payslip_is_sent_once():
    world = _World()
    world.service.generate(MONTH)
    world.service.run(MONTH)
    (slip,) = world.payslip_service.generate_from_payroll(MONTH)["payslips"]

    sent = world.payslip_service.send(slip.payslip_id)

    assert sent.status == PayslipStatus.SENT
    assert sent.sent_at is not None
    with pytest.raises(ConflictError):
        world.payslip_service.send(slip.payslip_id)
    assert [p.payslip_id for p in world.payslip_service.my_payslips(1)] == [slip.payslip_id]
