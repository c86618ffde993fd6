from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import RecipientStatus
from .model import Certificate, CertificateTemplate, Recipient, School, Student


class CertificateRepository(Protocol):
    # Schools and students
    def get_school(self, school_id: int) -> Optional[School]:
        raise NotImplementedError

    def list_students(self, *, school_id: Optional[int] = None, grade: Optional[str] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_student(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    # Templates
    def list_templates(self, *, active_only: bool = False) -> Sequence[CertificateTemplate]:
        raise NotImplementedError

    def get_template(self, template_id: int) -> Optional[CertificateTemplate]:
        raise NotImplementedError

    def get_template_by_name(self, name: str) -> Optional[CertificateTemplate]:
        raise NotImplementedError

    def create_template(
        self,
        *,
        name: str,
        description: Optional[str],
        template_html: str,
        placeholders: Sequence[str],
        is_default: bool,
    ) -> int:
        raise NotImplementedError

    # Certificates
    def list_certificates(
        self,
        *,
        school_id: Optional[int] = None,
        grade: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[Certificate]:
        raise NotImplementedError

    def get_certificate(self, certificate_id: int) -> Optional[Certificate]:
        """Loads the recipients too."""

        raise NotImplementedError

    def create_certificate(
        self,
        *,
        title: str,
        description: Optional[str],
        template_id: int,
        school_id: int,
        grade: str,
        accomplishment: str,
        issued_date: date,
        valid_until: Optional[date],
        signature_name: str,
        signature_designation: str,
        student_ids: Sequence[int],
    ) -> int:
        """Insert the certificate and one pending recipient per student in one transaction."""

        raise NotImplementedError

    def mark_generated(self, *, certificate_id: int, student_id: int, rendered_html: str, generated_at: datetime) -> bool:
        raise NotImplementedError

    def mark_sent(self, *, certificate_id: int, student_ids: Iterable[int], sent_at: datetime) -> int:
        raise NotImplementedError

    def list_recipients_for_student(
        self,
        student_id: int,
        *,
        statuses: Iterable[RecipientStatus],
    ) -> Sequence[Recipient]:
        raise NotImplementedError
