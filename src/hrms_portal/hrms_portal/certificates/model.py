from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import RecipientStatus


def certificate_number(year: int, certificate_id: int, student_id: int) -> str:
    return f"CERT-{year}-{certificate_id:05d}-{student_id:05d}"


@dataclass(frozen=True)
class School:
    school_id: int
    name: str
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class Student:
    student_id: int
    student_code: str
    full_name: str
    school_id: int
    grade: str
    email: Optional[str] = None


@dataclass(frozen=True)
class CertificateTemplate:
    template_id: int
    name: str
    template_html: str
    description: Optional[str] = None
    placeholders: tuple[str, ...] = ()
    is_default: bool = False
    is_active: bool = True


@dataclass(frozen=True)
class Recipient:
    certificate_id: int
    student_id: int
    certificate_number: str
    status: RecipientStatus
    generated_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    rendered_html: Optional[str] = None


@dataclass(frozen=True)
class Certificate:
    """An award issued to a set of students of one school and grade."""

    certificate_id: int
    title: str
    template_id: int
    school_id: int
    grade: str
    accomplishment: str
    issued_date: date
    signature_name: str
    signature_designation: str
    description: Optional[str] = None
    valid_until: Optional[date] = None
    created_at: Optional[datetime] = None
    recipients: tuple[Recipient, ...] = field(default_factory=tuple)

    def recipient(self, student_id: int) -> Optional[Recipient]:
        return next((r for r in self.recipients if r.student_id == student_id), None)
