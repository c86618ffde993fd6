from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role inside the HRMS."""

    ADMIN = "ADMIN"
    HR = "HR"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"
    FINANCE = "FINANCE"
    AUDITOR = "AUDITOR"
    IT_ADMIN = "IT_ADMIN"


class RecordStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class AttendanceStatus(str, Enum):
    """Day status shown on the attendance calendar.

    Only PRESENT and HALF_DAY are stored; the rest are derived per day.
    """

    PRESENT = "PRESENT"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    LEAVE = "LEAVE"
    HOLIDAY = "HOLIDAY"
    WEEKEND = "WEEKEND"


class RequestStatus(str, Enum):
    """Approval flow status (leave, attendance regularization, expenses)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PayrollStatus(str, Enum):
    DRAFT = "Draft"
    PROCESSED = "Processed"
    PAID = "Paid"


class PayslipStatus(str, Enum):
    GENERATED = "Generated"
    SENT = "Sent"


class ExpenseType(str, Enum):
    GENERAL = "GENERAL"
    TRAVEL = "TRAVEL"


class JobStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class CandidateStatus(str, Enum):
    APPLIED = "Applied"
    SHORTLISTED = "Shortlisted"
    REJECTED = "Rejected"
    HIRED = "Hired"


class RecipientStatus(str, Enum):
    PENDING = "pending"
    GENERATED = "generated"
    SENT = "sent"
