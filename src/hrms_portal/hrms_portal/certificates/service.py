from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from jinja2 import TemplateError

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import require_id, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RecipientStatus
from ..core.exceptions import NotFoundError, ValidationError
from .defaults import DEFAULT_TEMPLATES, STANDARD_PLACEHOLDERS
from .model import Certificate, CertificateTemplate, Recipient, School, Student
from .rendering import CertificateRenderer
from .repository import CertificateRepository

logger = logging.getLogger(__name__)


class CertificateService:
    """Use case: issue certificates to students and render them from templates."""

    def __init__(self, certificates: CertificateRepository, *, renderer: Optional[CertificateRenderer] = None):
        self._certificates = certificates
        self._renderer = renderer or CertificateRenderer()

    # -------- Templates --------
    def list_templates(self) -> Sequence[CertificateTemplate]:
        return self._certificates.list_templates(active_only=True)

    def get_template(self, template_id: int) -> CertificateTemplate:
        template = self._certificates.get_template(int(template_id))
        if not template:
            raise NotFoundError("Certificate template not found")
        return template

    def initialize_templates(self) -> dict:
        created = 0
        for template in DEFAULT_TEMPLATES:
            if self._certificates.get_template_by_name(template["name"]):
                continue
            self._renderer.check(template["template_html"])
            self._certificates.create_template(
                name=template["name"],
                description=template["description"],
                template_html=template["template_html"],
                placeholders=STANDARD_PLACEHOLDERS,
                is_default=template["is_default"],
            )
            created += 1
        logger.info("Certificate templates initialized: %s created", created)
        return {"created": created, "existing": len(DEFAULT_TEMPLATES) - created}

    # -------- Students --------
    def _school(self, school_id: int) -> School:
        school = self._certificates.get_school(int(school_id))
        if not school:
            raise NotFoundError("School not found")
        return school

    def list_students(self, *, school_id: Optional[int], grade: Optional[str]) -> Sequence[Student]:
        if school_id is None:
            raise ValidationError("School is required")
        self._school(school_id)
        grade = (grade or "").strip() or None
        return self._certificates.list_students(school_id=school_id, grade=grade)

    # -------- Certificates --------
    def get_certificate(self, certificate_id: int) -> Certificate:
        certificate = self._certificates.get_certificate(int(certificate_id))
        if not certificate:
            raise NotFoundError("Certificate not found")
        return certificate

    def list_certificates(
        self,
        *,
        school_id: Optional[int] = None,
        grade: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Certificate]:
        grade = (grade or "").strip() or None
        return self._certificates.list_certificates(school_id=school_id, grade=grade, limit=limit)

    def create_certificate(self, data: dict, *, today: date | None = None) -> Certificate:
        title = require_non_empty(data.get("title"), "Title")
        accomplishment = require_non_empty(data.get("accomplishment"), "Accomplishment")
        grade = require_non_empty(data.get("grade"), "Grade")
        signature_name = require_non_empty(data.get("signatureName"), "Signature name")
        signature_designation = require_non_empty(data.get("signatureDesignation"), "Signature designation")

        template = self.get_template(require_id(data.get("templateId"), "Template"))
        if not template.is_active:
            raise ValidationError(f"Template {template.name} is inactive")
        school = self._school(require_id(data.get("schoolId"), "School"))

        issued_date = parse_optional_date(data.get("issuedDate")) or today or now_local().date()
        valid_until = parse_optional_date(data.get("validUntil"))
        if valid_until is not None and valid_until <= issued_date:
            raise ValidationError("Valid until must be after the issued date")

        raw_ids = data.get("studentIds") or []
        if not isinstance(raw_ids, list) or not raw_ids:
            raise ValidationError("Select at least one student")
        student_ids = list(dict.fromkeys(require_id(s, "Student") for s in raw_ids))
        for student_id in student_ids:
            student = self._certificates.get_student(student_id)
            if not student:
                raise NotFoundError(f"Student {student_id} not found")
            if student.school_id != school.school_id or student.grade != grade:
                raise ValidationError(f"Student {student.full_name} is not in grade {grade} of {school.name}")

        certificate_id = self._certificates.create_certificate(
            title=title,
            description=(data.get("description") or "").strip() or None,
            template_id=template.template_id,
            school_id=school.school_id,
            grade=grade,
            accomplishment=accomplishment,
            issued_date=issued_date,
            valid_until=valid_until,
            signature_name=signature_name,
            signature_designation=signature_designation,
            student_ids=student_ids,
        )
        logger.info("Certificate %s created for %s students", certificate_id, len(student_ids))
        return self.get_certificate(certificate_id)

    def _selected(self, certificate: Certificate, data: dict) -> list[Recipient]:
        """Recipients named in studentIds, or all of them when none are named."""

        raw_ids = data.get("studentIds") or []
        if not isinstance(raw_ids, list):
            raise ValidationError("studentIds must be a list")
        if not raw_ids:
            return list(certificate.recipients)

        selected = []
        for raw in raw_ids:
            student_id = require_id(raw, "Student")
            recipient = certificate.recipient(student_id)
            if not recipient:
                raise ValidationError(f"Student {student_id} is not a recipient of this certificate")
            selected.append(recipient)
        return selected

    def _context(self, certificate: Certificate, school: School, student: Student, recipient: Recipient) -> dict:
        return {
            "title": certificate.title,
            "description": certificate.description or "",
            "student_name": student.full_name,
            "student_code": student.student_code,
            "accomplishment": certificate.accomplishment,
            "school_name": school.name,
            "school_city": school.city or "",
            "school_state": school.state or "",
            "grade": certificate.grade,
            "issued_date": certificate.issued_date.strftime("%B %d, %Y"),
            "valid_until": certificate.valid_until.strftime("%B %d, %Y") if certificate.valid_until else "",
            "certificate_number": recipient.certificate_number,
            "signature_name": certificate.signature_name,
            "signature_designation": certificate.signature_designation,
        }

    def _render_each(self, certificate: Certificate, recipients: Sequence[Recipient]):
        """Yield (recipient, student, html, error) per recipient; exactly one of html and error is set."""

        template = self.get_template(certificate.template_id)
        school = self._school(certificate.school_id)
        for recipient in recipients:
            student = self._certificates.get_student(recipient.student_id)
            if not student:
                yield recipient, None, None, f"Student {recipient.student_id} not found"
                continue
            try:
                html = self._renderer.render(
                    template.template_html,
                    self._context(certificate, school, student, recipient),
                )
            except TemplateError as e:
                yield recipient, student, None, f"{student.full_name}: {e}"
                continue
            yield recipient, student, html, None

    def preview(self, certificate_id: int, data: dict) -> dict:
        certificate = self.get_certificate(certificate_id)
        school = self._school(certificate.school_id)

        students = []
        for recipient, student, html, error in self._render_each(certificate, self._selected(certificate, data)):
            entry = {
                "studentId": recipient.student_id,
                "studentName": student.full_name if student else None,
                "certificateNumber": recipient.certificate_number,
                "status": recipient.status,
            }
            if error:
                entry["error"] = error
            else:
                entry["html"] = html
            students.append(entry)

        return {
            "certificate": {
                "title": certificate.title,
                "accomplishment": certificate.accomplishment,
                "grade": certificate.grade,
                "school": school,
            },
            "students": students,
            "totalStudents": len(students),
        }

    def generate(self, certificate_id: int, data: dict) -> dict:
        certificate = self.get_certificate(certificate_id)
        generated_at = now_local()

        generated = 0
        errors: list[str] = []
        results: dict[str, str] = {}
        for recipient, _student, html, error in self._render_each(certificate, self._selected(certificate, data)):
            if error:
                errors.append(error)
                results[str(recipient.student_id)] = "failed"
                continue
            self._certificates.mark_generated(
                certificate_id=certificate.certificate_id,
                student_id=recipient.student_id,
                rendered_html=html,
                generated_at=generated_at,
            )
            generated += 1
            results[str(recipient.student_id)] = RecipientStatus.GENERATED.value

        logger.info(
            "Certificate %s generated for %s students, %s failed",
            certificate.certificate_id,
            generated,
            len(errors),
        )
        return {"generated": generated, "failed": len(errors), "errors": errors, "results": results}

    def resend(self, certificate_id: int, data: dict) -> dict:
        certificate = self.get_certificate(certificate_id)
        if not data.get("studentIds"):
            raise ValidationError("Select at least one student to resend")

        ready = []
        skipped = []
        for recipient in self._selected(certificate, data):
            if recipient.status in (RecipientStatus.GENERATED, RecipientStatus.SENT):
                ready.append(recipient)
            else:
                skipped.append({"studentId": recipient.student_id, "reason": "Certificate not generated yet"})

        resent = self._certificates.mark_sent(
            certificate_id=certificate.certificate_id,
            student_ids=[r.student_id for r in ready],
            sent_at=now_local(),
        )
        logger.info("Certificate %s sent to %s students", certificate.certificate_id, resent)
        students = []
        for r in ready:
            student = self._certificates.get_student(r.student_id)
            students.append(
                {
                    "studentId": r.student_id,
                    "studentName": student.full_name if student else None,
                    "certificateNumber": r.certificate_number,
                }
            )
        return {
            "resentCount": resent,
            "students": students,
            "skipped": skipped,
        }

    def my_certificates(self, student_id: int) -> list[dict]:
        student = self._certificates.get_student(int(student_id))
        if not student:
            raise NotFoundError("Student not found")

        recipients = self._certificates.list_recipients_for_student(
            student.student_id,
            statuses=(RecipientStatus.GENERATED, RecipientStatus.SENT),
        )
        out = []
        for recipient in recipients:
            certificate = self._certificates.get_certificate(recipient.certificate_id)
            if not certificate:
                continue
            out.append(
                {
                    "certificateId": certificate.certificate_id,
                    "title": certificate.title,
                    "accomplishment": certificate.accomplishment,
                    "issuedDate": certificate.issued_date,
                    "validUntil": certificate.valid_until,
                    "certificateNumber": recipient.certificate_number,
                    "status": recipient.status,
                    "html": recipient.rendered_html,
                }
            )
        return out
