"""In-memory repositories shared by the service and HTTP tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from src.hrms_portal.hrms_portal.attendance.model import AttendanceRecord, AttendanceRequest
from src.hrms_portal.hrms_portal.certificates.model import (
    Certificate,
    CertificateTemplate,
    Recipient,
    certificate_number,
)
from src.hrms_portal.hrms_portal.core.enums import (
    CandidateStatus,
    PayrollStatus,
    PayslipStatus,
    RecipientStatus,
    RequestStatus,
)
from src.hrms_portal.hrms_portal.employees.model import Employee
from src.hrms_portal.hrms_portal.expenses.model import Expense, ExpenseTotal
from src.hrms_portal.hrms_portal.holidays.model import Holiday
from src.hrms_portal.hrms_portal.leave.model import LeaveRequest, LeaveType
from src.hrms_portal.hrms_portal.organization.model import Branch, Company, Department, Designation
from src.hrms_portal.hrms_portal.payroll.model import PayrollRecord, PayrollSummary, Payslip, SalaryStructure
from src.hrms_portal.hrms_portal.recruitment.model import Candidate, JobOpening
from src.hrms_portal.hrms_portal.shifts.model import Shift, ShiftAssignment

FIXED_NOW = datetime(2025, 3, 1, 9, 0, 0)


class _Ids:
    def __init__(self, start: int = 1):
        self._next = start

    def __call__(self) -> int:
        value = self._next
        self._next += 1
        return value


class InMemoryOrganizationRepo:
    def __init__(self):
        self._id = _Ids()
        self.companies: dict[int, Company] = {}
        self.branches: dict[int, Branch] = {}
        self.departments: dict[int, Department] = {}
        self.designations: dict[int, Designation] = {}
        self.designation_employees: dict[int, int] = {}

    def list_companies(self):
        return list(self.companies.values())

    def get_company(self, company_id):
        return self.companies.get(int(company_id))

    def get_company_by_code(self, code):
        return next((c for c in self.companies.values() if c.code == code), None)

    def create_company(self, *, name, code, email, status):
        cid = self._id()
        self.companies[cid] = Company(company_id=cid, name=name, code=code, email=email, status=status)
        return cid

    def update_company(self, company_id, *, name, code, email, status):
        if company_id not in self.companies:
            return False
        self.companies[company_id] = Company(company_id=company_id, name=name, code=code, email=email, status=status)
        return True

    def delete_company(self, company_id):
        return self.companies.pop(company_id, None) is not None

    def count_company_children(self, company_id):
        return sum(1 for b in self.branches.values() if b.company_id == company_id) + sum(
            1 for d in self.departments.values() if d.company_id == company_id
        )

    def list_branches(self, *, company_id=None):
        return [b for b in self.branches.values() if company_id is None or b.company_id == company_id]

    def get_branch(self, branch_id):
        return self.branches.get(int(branch_id))

    def create_branch(self, *, company_id, name, city, status):
        bid = self._id()
        self.branches[bid] = Branch(branch_id=bid, company_id=company_id, name=name, city=city, status=status)
        return bid

    def update_branch(self, branch_id, *, company_id, name, city, status):
        self.branches[branch_id] = Branch(branch_id=branch_id, company_id=company_id, name=name, city=city, status=status)
        return True

    def delete_branch(self, branch_id):
        return self.branches.pop(branch_id, None) is not None

    def count_branch_departments(self, branch_id):
        return sum(1 for d in self.departments.values() if d.branch_id == branch_id)

    def list_departments(self, *, company_id=None, branch_id=None):
        return [
            d
            for d in self.departments.values()
            if (company_id is None or d.company_id == company_id) and (branch_id is None or d.branch_id == branch_id)
        ]

    def get_department(self, department_id):
        return self.departments.get(int(department_id))

    def find_department_by_name(self, *, company_id, name):
        return next(
            (d for d in self.departments.values() if d.company_id == company_id and d.name.lower() == name.lower()),
            None,
        )

    def create_department(self, *, company_id, branch_id, name, head_employee_id, status):
        did = self._id()
        self.departments[did] = Department(
            department_id=did,
            company_id=company_id,
            branch_id=branch_id,
            name=name,
            head_employee_id=head_employee_id,
            status=status,
        )
        return did

    def update_department(self, department_id, *, company_id, branch_id, name, head_employee_id, status):
        self.departments[department_id] = Department(
            department_id=department_id,
            company_id=company_id,
            branch_id=branch_id,
            name=name,
            head_employee_id=head_employee_id,
            status=status,
        )
        return True

    def delete_department(self, department_id):
        return self.departments.pop(department_id, None) is not None

    def count_department_usage(self, department_id):
        return sum(1 for d in self.designations.values() if d.department_id == department_id)

    def list_designations(self, *, company_id=None, department_id=None):
        return [
            d
            for d in self.designations.values()
            if (company_id is None or d.company_id == company_id)
            and (department_id is None or d.department_id == department_id)
        ]

    def get_designation(self, designation_id):
        return self.designations.get(int(designation_id))

    def find_designation_by_name(self, *, department_id, name):
        return next(
            (d for d in self.designations.values() if d.department_id == department_id and d.name.lower() == name.lower()),
            None,
        )

    def create_designation(self, *, company_id, department_id, name, status):
        did = self._id()
        self.designations[did] = Designation(
            designation_id=did, company_id=company_id, department_id=department_id, name=name, status=status
        )
        return did

    def update_designation(self, designation_id, *, company_id, department_id, name, status):
        self.designations[designation_id] = Designation(
            designation_id=designation_id, company_id=company_id, department_id=department_id, name=name, status=status
        )
        return True

    def delete_designation(self, designation_id):
        return self.designations.pop(designation_id, None) is not None

    def count_designation_employees(self, designation_id):
        return self.designation_employees.get(designation_id, 0)


class InMemoryEmployeeRepo:
    def __init__(self, employees=()):
        self._items: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._id = _Ids(max(self._items, default=0) + 1)
        self.payroll_counts: dict[int, int] = {}

    def get_by_id(self, employee_id):
        return self._items.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self._items.values() if e.email == email), None)

    def list(self, *, department_id=None, role=None, is_active=None):
        return [
            e
            for e in self._items.values()
            if (department_id is None or e.department_id == department_id)
            and (role is None or e.role == role)
            and (is_active is None or e.is_active == is_active)
        ]

    def create(self, *, full_name, email, role, company_id, phone, department_id, designation_id, shift_id, joining_date):
        eid = self._id()
        self._items[eid] = Employee(
            employee_id=eid,
            full_name=full_name,
            email=email,
            role=role,
            company_id=company_id,
            phone=phone,
            department_id=department_id,
            designation_id=designation_id,
            shift_id=shift_id,
            joining_date=joining_date,
        )
        return eid

    def update(self, employee):
        if employee.employee_id not in self._items:
            return False
        self._items[employee.employee_id] = employee
        return True

    def delete_by_id(self, employee_id):
        return self._items.pop(int(employee_id), None) is not None

    def count_payroll_records(self, employee_id):
        return self.payroll_counts.get(int(employee_id), 0)


class InMemoryShiftRepo:
    def __init__(self, shifts=()):
        self._items: dict[int, Shift] = {s.shift_id: s for s in shifts}
        self._id = _Ids(max(self._items, default=0) + 1)
        self._assignments: dict[tuple[int, object], ShiftAssignment] = {}
        self._schedule_id = _Ids()

    def list_all(self):
        return list(self._items.values())

    def get_by_id(self, shift_id):
        return self._items.get(int(shift_id))

    def get_by_name(self, shift_name):
        return next((s for s in self._items.values() if s.shift_name == shift_name), None)

    def create(self, *, shift_name, start_time, end_time, break_minutes):
        sid = self._id()
        self._items[sid] = Shift(
            shift_id=sid, shift_name=shift_name, start_time=start_time, end_time=end_time, break_minutes=break_minutes
        )
        return sid

    def get_assignment(self, *, employee_id, work_date):
        return self._assignments.get((employee_id, work_date))

    def upsert_assignment(self, *, employee_id, work_date, shift_id, note=None):
        current = self._assignments.get((employee_id, work_date))
        schedule_id = current.schedule_id if current else self._schedule_id()
        self._assignments[(employee_id, work_date)] = ShiftAssignment(
            schedule_id=schedule_id, employee_id=employee_id, work_date=work_date, shift_id=shift_id, note=note
        )
        return schedule_id

    def list_assignments(self, *, start, end):
        return [a for a in self._assignments.values() if start <= a.work_date <= end]


class InMemoryHolidayRepo:
    def __init__(self, holidays=()):
        self._items: dict[int, Holiday] = {h.holiday_id: h for h in holidays}
        self._id = _Ids(max(self._items, default=0) + 1)

    def list_range(self, *, start=None, end=None):
        return sorted(
            (
                h
                for h in self._items.values()
                if (start is None or h.holiday_date >= start) and (end is None or h.holiday_date <= end)
            ),
            key=lambda h: h.holiday_date,
        )

    def get_by_id(self, holiday_id):
        return self._items.get(int(holiday_id))

    def get_by_date(self, holiday_date):
        return next((h for h in self._items.values() if h.holiday_date == holiday_date), None)

    def create(self, *, title, holiday_date):
        hid = self._id()
        self._items[hid] = Holiday(holiday_id=hid, title=title, holiday_date=holiday_date)
        return hid

    def update(self, holiday_id, *, title, holiday_date):
        if holiday_id not in self._items:
            return False
        self._items[holiday_id] = Holiday(holiday_id=holiday_id, title=title, holiday_date=holiday_date)
        return True

    def delete(self, holiday_id):
        return self._items.pop(int(holiday_id), None) is not None


class InMemoryLeaveRepo:
    def __init__(self, types=()):
        self.types: dict[int, LeaveType] = {t.leave_type_id: t for t in types}
        self._type_id = _Ids(max(self.types, default=0) + 1)
        self.requests: dict[int, LeaveRequest] = {}
        self._request_id = _Ids()

    def list_types(self):
        return list(self.types.values())

    def get_type(self, leave_type_id):
        return self.types.get(int(leave_type_id))

    def get_type_by_name(self, name):
        return next((t for t in self.types.values() if t.name.lower() == name.lower()), None)

    def get_type_by_code(self, code):
        return next((t for t in self.types.values() if t.code == code), None)

    def create_type(self, *, name, code, max_days, is_paid, carry_forward):
        tid = self._type_id()
        self.types[tid] = LeaveType(
            leave_type_id=tid, name=name, code=code, max_days=max_days, is_paid=is_paid, carry_forward=carry_forward
        )
        return tid

    def update_type(self, leave_type):
        self.types[leave_type.leave_type_id] = leave_type
        return True

    def delete_type(self, leave_type_id):
        return self.types.pop(int(leave_type_id), None) is not None

    def count_type_usage(self, leave_type_id):
        return sum(1 for r in self.requests.values() if r.leave_type_id == leave_type_id)

    def get_request(self, request_id):
        return self.requests.get(int(request_id))

    def list_requests(self, *, employee_id=None, status=None, limit=200):
        rows = [
            r
            for r in self.requests.values()
            if (employee_id is None or r.employee_id == employee_id) and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: r.request_id, reverse=True)[:limit]

    def create_request(self, *, employee_id, leave_type_id, from_date, to_date, total_days, reason):
        rid = self._request_id()
        self.requests[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            from_date=from_date,
            to_date=to_date,
            total_days=total_days,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return rid

    def update_request(self, request_id, *, leave_type_id, from_date, to_date, total_days, reason):
        current = self.requests.get(request_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        self.requests[request_id] = replace(
            current,
            leave_type_id=leave_type_id,
            from_date=from_date,
            to_date=to_date,
            total_days=total_days,
            reason=reason,
        )
        return True

    def delete_request(self, request_id):
        current = self.requests.get(request_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        del self.requests[request_id]
        return True

    def decide_request(self, *, request_id, status, decided_by, decided_at, note):
        current = self.requests.get(request_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        self.requests[request_id] = replace(
            current, status=status, decided_by=decided_by, decided_at=decided_at, decision_note=note
        )
        return True

    def find_overlapping(self, *, employee_id, from_date, to_date, exclude_request_id=None):
        return [
            r
            for r in self.requests.values()
            if r.employee_id == employee_id
            and r.status != RequestStatus.REJECTED
            and r.request_id != exclude_request_id
            and r.from_date <= to_date
            and r.to_date >= from_date
        ]

    def sum_days(self, *, employee_id, leave_type_id, year, status):
        return sum(
            r.total_days
            for r in self.requests.values()
            if r.employee_id == employee_id
            and r.leave_type_id == leave_type_id
            and r.from_date.year == year
            and r.status == status
        )

    def list_approved_between(self, *, start, end, employee_id=None):
        return [
            r
            for r in self.requests.values()
            if r.status == RequestStatus.APPROVED
            and r.from_date <= end
            and r.to_date >= start
            and (employee_id is None or r.employee_id == employee_id)
        ]


class InMemoryAttendanceRepo:
    def __init__(self, employees: InMemoryEmployeeRepo | None = None):
        self._employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self._id = _Ids()

    def get_for_employee_and_date(self, employee_id, work_date):
        return next(
            (r for r in self.records.values() if r.employee_id == employee_id and r.work_date == work_date),
            None,
        )

    def list_records(self, *, start, end, employee_id=None, department_id=None, limit=None):
        rows = []
        for r in self.records.values():
            if not start <= r.work_date <= end:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            if department_id is not None:
                employee = self._employees.get_by_id(r.employee_id) if self._employees else None
                if not employee or employee.department_id != department_id:
                    continue
            rows.append(r)
        rows.sort(key=lambda r: (r.work_date, r.employee_id))
        return rows[:limit] if limit else rows

    def create_punch_in(self, *, employee_id, work_date, punch_in, status, note=None):
        aid = self._id()
        self.records[aid] = AttendanceRecord(
            attendance_id=aid,
            employee_id=employee_id,
            work_date=work_date,
            punch_in=punch_in,
            punch_out=None,
            status=status,
            note=note,
        )
        return aid

    def update_punch_out(self, *, attendance_id, punch_out, worked_minutes, status, note=None):
        current = self.records.get(attendance_id)
        if not current or current.punch_out is not None:
            return False
        self.records[attendance_id] = replace(
            current, punch_out=punch_out, worked_minutes=worked_minutes, status=status, note=note
        )
        return True

    def upsert_record(self, *, employee_id, work_date, punch_in, punch_out, worked_minutes, status, note=None):
        current = self.get_for_employee_and_date(employee_id, work_date)
        aid = current.attendance_id if current else self._id()
        self.records[aid] = AttendanceRecord(
            attendance_id=aid,
            employee_id=employee_id,
            work_date=work_date,
            punch_in=punch_in,
            punch_out=punch_out,
            status=status,
            worked_minutes=worked_minutes,
            note=note,
        )
        return aid


class InMemoryAttendanceRequestRepo:
    def __init__(self):
        self.items: dict[int, AttendanceRequest] = {}
        self._id = _Ids()

    def get_by_id(self, request_id):
        return self.items.get(int(request_id))

    def list(self, *, employee_id=None, status=None, department_id=None, limit=200):
        rows = [
            r
            for r in self.items.values()
            if (employee_id is None or r.employee_id == employee_id) and (status is None or r.status == status)
        ]
        return rows[:limit]

    def find_pending(self, *, employee_id, work_date):
        return next(
            (
                r
                for r in self.items.values()
                if r.employee_id == employee_id and r.work_date == work_date and r.status == RequestStatus.PENDING
            ),
            None,
        )

    def create(self, *, employee_id, work_date, requested_punch_in, requested_punch_out, reason):
        rid = self._id()
        self.items[rid] = AttendanceRequest(
            request_id=rid,
            employee_id=employee_id,
            work_date=work_date,
            requested_punch_in=requested_punch_in,
            requested_punch_out=requested_punch_out,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return rid

    def decide(self, *, request_id, status, decided_by, decided_at, note):
        current = self.items.get(request_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        self.items[request_id] = replace(
            current, status=status, decided_by=decided_by, decided_at=decided_at, decision_note=note
        )
        return True


class InMemorySalaryRepo:
    def __init__(self, structures=()):
        self.items: dict[int, SalaryStructure] = {s.structure_id: s for s in structures}
        self._id = _Ids(max(self.items, default=0) + 1)

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, structure_id):
        return self.items.get(int(structure_id))

    def get_by_employee(self, employee_id):
        return next((s for s in self.items.values() if s.employee_id == employee_id), None)

    def create(self, *, employee_id, basic, hra, allowance, pf, tax):
        sid = self._id()
        self.items[sid] = SalaryStructure(
            structure_id=sid, employee_id=employee_id, basic=basic, hra=hra, allowance=allowance, pf=pf, tax=tax
        )
        return sid

    def update(self, structure):
        self.items[structure.structure_id] = structure
        return True

    def delete(self, structure_id):
        return self.items.pop(int(structure_id), None) is not None


class InMemoryPayrollRepo:
    def __init__(self):
        self.rows: dict[int, PayrollRecord] = {}
        self._id = _Ids()

    def list(self, *, month=None, employee_id=None, status=None, limit=200):
        rows = [
            r
            for r in self.rows.values()
            if (month is None or r.month == month)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]
        return rows[:limit]

    def get_by_id(self, payroll_id):
        return self.rows.get(int(payroll_id))

    def count_by_status(self, month):
        counts: dict[PayrollStatus, int] = {}
        for r in self.rows.values():
            if r.month == month:
                counts[r.status] = counts.get(r.status, 0) + 1
        return counts

    def replace_drafts(self, month, drafts):
        for pid in [pid for pid, r in self.rows.items() if r.month == month and r.status == PayrollStatus.DRAFT]:
            del self.rows[pid]
        for draft in drafts:
            pid = self._id()
            res = draft.result
            self.rows[pid] = PayrollRecord(
                payroll_id=pid,
                employee_id=draft.employee_id,
                month=draft.month,
                gross=res.gross,
                deduction=res.deduction,
                net=res.net,
                working_days=res.working_days,
                present_days=res.present_days,
                absent_days=res.absent_days,
                paid_leaves=res.paid_leaves,
                unpaid_leaves=res.unpaid_leaves,
                status=PayrollStatus.DRAFT,
                created_at=FIXED_NOW,
            )
        return len(drafts)

    def update_status(self, payroll_id, *, current, new):
        row = self.rows.get(payroll_id)
        if not row or row.status != current:
            return False
        self.rows[payroll_id] = replace(row, status=new)
        return True

    def process_month(self, month):
        processed = 0
        for pid, r in list(self.rows.items()):
            if r.month == month and r.status == PayrollStatus.DRAFT:
                self.rows[pid] = replace(r, status=PayrollStatus.PROCESSED)
                processed += 1
        return processed

    def summary(self, month):
        rows = [r for r in self.rows.values() if r.month == month]
        return PayrollSummary(
            month=month,
            employee_count=len(rows),
            total_gross=sum((r.gross for r in rows), Decimal("0")),
            total_deduction=sum((r.deduction for r in rows), Decimal("0")),
            total_net=sum((r.net for r in rows), Decimal("0")),
        )

    def latest_month(self):
        return max((r.month for r in self.rows.values()), default=None)


class InMemoryPayslipRepo:
    def __init__(self):
        self.items: dict[int, Payslip] = {}
        self._id = _Ids()

    def list(self, *, month=None, employee_id=None, limit=200):
        rows = [
            p
            for p in self.items.values()
            if (month is None or p.month == month) and (employee_id is None or p.employee_id == employee_id)
        ]
        return rows[:limit]

    def get_by_id(self, payslip_id):
        return self.items.get(int(payslip_id))

    def get_by_payroll(self, payroll_id):
        return next((p for p in self.items.values() if p.payroll_id == payroll_id), None)

    def create(self, *, payroll_id, employee_id, month, basic, hra, allowance, deduction, net_salary):
        pid = self._id()
        self.items[pid] = Payslip(
            payslip_id=pid,
            payroll_id=payroll_id,
            employee_id=employee_id,
            month=month,
            basic=basic,
            hra=hra,
            allowance=allowance,
            deduction=deduction,
            net_salary=net_salary,
            status=PayslipStatus.GENERATED,
            created_at=FIXED_NOW,
        )
        return pid

    def mark_sent(self, payslip_id, *, sent_at):
        current = self.items.get(payslip_id)
        if not current or current.status != PayslipStatus.GENERATED:
            return False
        self.items[payslip_id] = replace(current, status=PayslipStatus.SENT, sent_at=sent_at)
        return True


class InMemoryExpenseRepo:
    def __init__(self, employees: InMemoryEmployeeRepo | None = None):
        self._employees = employees
        self.items: dict[int, Expense] = {}
        self._id = _Ids()

    def get_by_id(self, expense_id):
        return self.items.get(int(expense_id))

    def list(self, *, employee_id=None, status=None, department_id=None, limit=200):
        rows = []
        for e in self.items.values():
            if employee_id is not None and e.employee_id != employee_id:
                continue
            if status is not None and e.status != status:
                continue
            if department_id is not None:
                owner = self._employees.get_by_id(e.employee_id) if self._employees else None
                if not owner or owner.department_id != department_id:
                    continue
            rows.append(e)
        return rows[:limit]

    def create(self, *, employee_id, expense_type, category, amount, expense_date, remarks):
        eid = self._id()
        self.items[eid] = Expense(
            expense_id=eid,
            employee_id=employee_id,
            expense_type=expense_type,
            category=category,
            amount=amount,
            expense_date=expense_date,
            remarks=remarks,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return eid

    def update(self, expense_id, *, expense_type, category, amount, expense_date, remarks):
        current = self.items.get(expense_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        self.items[expense_id] = replace(
            current,
            expense_type=expense_type,
            category=category,
            amount=amount,
            expense_date=expense_date,
            remarks=remarks,
        )
        return True

    def delete(self, expense_id):
        current = self.items.get(expense_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        del self.items[expense_id]
        return True

    def decide(self, *, expense_id, status, decided_by, decided_at):
        current = self.items.get(expense_id)
        if not current or current.status != RequestStatus.PENDING:
            return False
        self.items[expense_id] = replace(current, status=status, decided_by=decided_by, decided_at=decided_at)
        return True

    def totals_by_status(self, *, employee_id=None):
        totals: dict[RequestStatus, ExpenseTotal] = {}
        for e in self.items.values():
            if employee_id is not None and e.employee_id != employee_id:
                continue
            seen = totals.get(e.status) or ExpenseTotal(status=e.status, count=0, amount=Decimal("0"))
            totals[e.status] = ExpenseTotal(status=e.status, count=seen.count + 1, amount=seen.amount + e.amount)
        return list(totals.values())


class InMemoryRecruitmentRepo:
    def __init__(self):
        self.jobs: dict[int, JobOpening] = {}
        self.candidates: dict[int, Candidate] = {}
        self._job_id = _Ids()
        self._candidate_id = _Ids()

    def list_jobs(self, *, status=None, department_id=None):
        return [
            j
            for j in self.jobs.values()
            if (status is None or j.status == status) and (department_id is None or j.department_id == department_id)
        ]

    def get_job(self, job_id):
        return self.jobs.get(int(job_id))

    def create_job(self, *, job_title, department_id, location, openings, status):
        jid = self._job_id()
        self.jobs[jid] = JobOpening(
            job_id=jid,
            job_title=job_title,
            location=location,
            openings=openings,
            status=status,
            department_id=department_id,
            created_at=FIXED_NOW,
        )
        return jid

    def update_job(self, job):
        self.jobs[job.job_id] = job
        return True

    def delete_job(self, job_id):
        self.candidates = {k: c for k, c in self.candidates.items() if c.job_id != job_id}
        return self.jobs.pop(int(job_id), None) is not None

    def list_candidates(self, *, job_id=None, status=None):
        return [
            c
            for c in self.candidates.values()
            if (job_id is None or c.job_id == job_id) and (status is None or c.status == status)
        ]

    def get_candidate(self, candidate_id):
        return self.candidates.get(int(candidate_id))

    def find_candidate(self, *, job_id, email):
        return next((c for c in self.candidates.values() if c.job_id == job_id and c.email == email), None)

    def create_candidate(self, *, job_id, full_name, email, phone):
        cid = self._candidate_id()
        self.candidates[cid] = Candidate(
            candidate_id=cid,
            job_id=job_id,
            full_name=full_name,
            email=email,
            status=CandidateStatus.APPLIED,
            phone=phone,
            created_at=FIXED_NOW,
        )
        return cid

    def update_candidate_status(self, candidate_id, *, current, new):
        candidate = self.candidates.get(candidate_id)
        if not candidate or candidate.status != current:
            return False
        self.candidates[candidate_id] = replace(candidate, status=new)
        return True

    def delete_candidate(self, candidate_id):
        return self.candidates.pop(int(candidate_id), None) is not None

    def count_candidates_by_status(self):
        counts: dict[tuple[int, CandidateStatus], int] = {}
        for c in self.candidates.values():
            counts[(c.job_id, c.status)] = counts.get((c.job_id, c.status), 0) + 1
        return counts


class InMemoryCertificateRepo:
    def __init__(self, *, schools=(), students=()):
        self.schools = {s.school_id: s for s in schools}
        self.students = {s.student_id: s for s in students}
        self.templates: dict[int, CertificateTemplate] = {}
        self.certificates: dict[int, Certificate] = {}
        self._template_id = _Ids()
        self._certificate_id = _Ids()

    def get_school(self, school_id):
        return self.schools.get(int(school_id))

    def list_students(self, *, school_id=None, grade=None):
        return [
            s
            for s in self.students.values()
            if (school_id is None or s.school_id == school_id) and (grade is None or s.grade == grade)
        ]

    def get_student(self, student_id):
        return self.students.get(int(student_id))

    def list_templates(self, *, active_only=False):
        return [t for t in self.templates.values() if t.is_active or not active_only]

    def get_template(self, template_id):
        return self.templates.get(int(template_id))

    def get_template_by_name(self, name):
        return next((t for t in self.templates.values() if t.name == name), None)

    def create_template(self, *, name, description, template_html, placeholders, is_default):
        tid = self._template_id()
        self.templates[tid] = CertificateTemplate(
            template_id=tid,
            name=name,
            template_html=template_html,
            description=description,
            placeholders=tuple(placeholders),
            is_default=is_default,
        )
        return tid

    def list_certificates(self, *, school_id=None, grade=None, limit=200):
        rows = [
            c
            for c in self.certificates.values()
            if (school_id is None or c.school_id == school_id) and (grade is None or c.grade == grade)
        ]
        return rows[:limit]

    def get_certificate(self, certificate_id):
        return self.certificates.get(int(certificate_id))

    def create_certificate(
        self,
        *,
        title,
        description,
        template_id,
        school_id,
        grade,
        accomplishment,
        issued_date,
        valid_until,
        signature_name,
        signature_designation,
        student_ids,
    ):
        cid = self._certificate_id()
        self.certificates[cid] = Certificate(
            certificate_id=cid,
            title=title,
            template_id=template_id,
            school_id=school_id,
            grade=grade,
            accomplishment=accomplishment,
            issued_date=issued_date,
            signature_name=signature_name,
            signature_designation=signature_designation,
            description=description,
            valid_until=valid_until,
            created_at=FIXED_NOW,
            recipients=tuple(
                Recipient(
                    certificate_id=cid,
                    student_id=sid,
                    certificate_number=certificate_number(issued_date.year, cid, sid),
                    status=RecipientStatus.PENDING,
                )
                for sid in student_ids
            ),
        )
        return cid

    def _replace_recipient(self, certificate_id, student_id, **changes):
        certificate = self.certificates[certificate_id]
        recipients = tuple(
            replace(r, **changes) if r.student_id == student_id else r for r in certificate.recipients
        )
        self.certificates[certificate_id] = replace(certificate, recipients=recipients)

    def mark_generated(self, *, certificate_id, student_id, rendered_html, generated_at):
        certificate = self.certificates.get(certificate_id)
        if not certificate or not certificate.recipient(student_id):
            return False
        self._replace_recipient(
            certificate_id,
            student_id,
            status=RecipientStatus.GENERATED,
            rendered_html=rendered_html,
            generated_at=generated_at,
        )
        return True

    def mark_sent(self, *, certificate_id, student_ids, sent_at):
        certificate = self.certificates[certificate_id]
        sent = 0
        for student_id in student_ids:
            recipient = certificate.recipient(student_id)
            if recipient and recipient.status in (RecipientStatus.GENERATED, RecipientStatus.SENT):
                self._replace_recipient(certificate_id, student_id, status=RecipientStatus.SENT, sent_at=sent_at)
                sent += 1
        return sent

    def list_recipients_for_student(self, student_id, *, statuses):
        wanted = set(statuses)
        return [
            r
            for c in self.certificates.values()
            for r in c.recipients
            if r.student_id == student_id and r.status in wanted
        ]
