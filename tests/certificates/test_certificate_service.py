from __future__ import annotations

from datetime import date

import pytest

from src.hrms_portal.hrms_portal.certificates.defaults import DEFAULT_TEMPLATES, STANDARD_PLACEHOLDERS
from src.hrms_portal.hrms_portal.certificates.model import School, Student, certificate_number
from src.hrms_portal.hrms_portal.certificates.rendering import CertificateRenderer
from src.hrms_portal.hrms_portal.certificates.service import CertificateService
from src.hrms_portal.hrms_portal.core.enums import RecipientStatus
from src.hrms_portal.hrms_portal.core.exceptions import NotFoundError, ValidationError
from tests.fakes import InMemoryCertificateRepo

SCHOOL = School(school_id=1, name="Green Valley High", city="Pune", state="MH")
OTHER_SCHOOL = School(school_id=2, name="Hill Top School")
STUDENTS = [
    Student(student_id=11, student_code="GV-011", full_name="Meera Iyer", school_id=1, grade="8"),
    Student(student_id=12, student_code="GV-012", full_name="Arjun <b>Das</b>", school_id=1, grade="8"),
    Student(student_id=13, student_code="GV-013", full_name="Kabir Shah", school_id=1, grade="9"),
    Student(student_id=21, student_code="HT-021", full_name="Tara Nair", school_id=2, grade="8"),
]


def _build():
    repo = InMemoryCertificateRepo(schools=[SCHOOL, OTHER_SCHOOL], students=STUDENTS)
    svc = CertificateService(repo)
    svc.initialize_templates()
    return svc, repo


def _payload(template_id=1, **overrides):
    data = {
        "title": "Certificate of Merit",
        "accomplishment": "First place in the science fair",
        "grade": "8",
        "signatureName": "R. Menon",
        "signatureDesignation": "Principal",
        "templateId": template_id,
        "schoolId": 1,
        "issuedDate": "2025-03-10",
        "studentIds": [11, 12],
    }
    data.update(overrides)
    return data


def test_certificate_number_format():
    assert certificate_number(2025, 7, 42) == "CERT-2025-00007-00042"


def test_initialize_templates_is_idempotent():
    svc, _ = _build()

    again = svc.initialize_templates()

    assert again == {"created": 0, "existing": len(DEFAULT_TEMPLATES)}
    templates = svc.list_templates()
    assert [t.name for t in templates] == [t["name"] for t in DEFAULT_TEMPLATES]
    assert sum(1 for t in templates if t.is_default) == 1


def test_create_certificate_issues_pending_recipients():
    svc, _ = _build()

    cert = svc.create_certificate(_payload(studentIds=[11, 12, 11]))

    assert [r.student_id for r in cert.recipients] == [11, 12]
    assert all(r.status == RecipientStatus.PENDING for r in cert.recipients)
    assert cert.recipient(11).certificate_number == f"CERT-2025-{cert.certificate_id:05d}-00011"


def test_create_certificate_checks_school_grade_and_dates():
    svc, _ = _build()

    with pytest.raises(ValidationError):
        svc.create_certificate(_payload(studentIds=[13]))
    with pytest.raises(ValidationError):
        svc.create_certificate(_payload(studentIds=[21]))
    with pytest.raises(NotFoundError):
        svc.create_certificate(_payload(studentIds=[99]))
    with pytest.raises(ValidationError):
        svc.create_certificate(_payload(studentIds=[]))
    with pytest.raises(ValidationError):
        svc.create_certificate(_payload(validUntil="2025-03-10"))
    with pytest.raises(NotFoundError):
        svc.create_certificate(_payload(template_id=99))


def test_issued_date_defaults_to_today():
    svc, _ = _build()

    cert = svc.create_certificate(_payload(issuedDate=None), today=date(2025, 6, 1))

    assert cert.issued_date == date(2025, 6, 1)


def test_preview_renders_escaped_html_without_storing():
    svc, repo = _build()
    cert = svc.create_certificate(_payload())

    out = svc.preview(cert.certificate_id, {"studentIds": [12]})

    (entry,) = out["students"]
    assert out["totalStudents"] == 1
    assert "Arjun &lt;b&gt;Das&lt;/b&gt;" in entry["html"]
    assert entry["certificateNumber"] in entry["html"]
    assert repo.get_certificate(cert.certificate_id).recipient(12).status == RecipientStatus.PENDING


def test_generate_marks_recipients_and_reports_failures():
    svc, repo = _build()
    broken_id = repo.create_template(
        name="Broken",
        description=None,
        template_html="<p>{{ student_name }} {{ house_colour }}</p>",
        placeholders=STANDARD_PLACEHOLDERS,
        is_default=False,
    )
    good = svc.create_certificate(_payload())
    broken = svc.create_certificate(_payload(template_id=broken_id))

    ok = svc.generate(good.certificate_id, {})
    failed = svc.generate(broken.certificate_id, {"studentIds": [11]})

    assert ok["generated"] == 2
    assert ok["failed"] == 0
    assert ok["results"] == {"11": "generated", "12": "generated"}
    recipient = repo.get_certificate(good.certificate_id).recipient(11)
    assert recipient.status == RecipientStatus.GENERATED
    assert "Meera Iyer" in recipient.rendered_html

    assert failed["generated"] == 0
    assert failed["failed"] == 1
    assert failed["results"] == {"11": "failed"}
    assert "house_colour" in failed["errors"][0]
    assert repo.get_certificate(broken.certificate_id).recipient(11).status == RecipientStatus.PENDING


def test_generate_rejects_students_outside_the_certificate():
    svc, _ = _build()
    cert = svc.create_certificate(_payload())

    with pytest.raises(ValidationError):
        svc.generate(cert.certificate_id, {"studentIds": [13]})


def test_resend_only_generated_recipients():
    svc, repo = _build()
    cert = svc.create_certificate(_payload())
    svc.generate(cert.certificate_id, {"studentIds": [11]})

    with pytest.raises(ValidationError):
        svc.resend(cert.certificate_id, {})

    out = svc.resend(cert.certificate_id, {"studentIds": [11, 12]})

    assert out["resentCount"] == 1
    assert out["students"] == [
        {"studentId": 11, "studentName": "Meera Iyer", "certificateNumber": cert.recipient(11).certificate_number}
    ]
    assert out["skipped"] == [{"studentId": 12, "reason": "Certificate not generated yet"}]
    assert repo.get_certificate(cert.certificate_id).recipient(11).status == RecipientStatus.SENT


def test_my_certificates_lists_generated_and_sent_only():
    svc, _ = _build()
    first = svc.create_certificate(_payload())
    svc.create_certificate(_payload(title="Sports Day"))
    svc.generate(first.certificate_id, {"studentIds": [11]})

    mine = svc.my_certificates(11)

    assert [c["title"] for c in mine] == ["Certificate of Merit"]
    assert mine[0]["status"] == RecipientStatus.GENERATED
    with pytest.raises(NotFoundError):
        svc.my_certificates(404)


def test_list_students_requires_school():
    svc, _ = _build()

    with pytest.raises(ValidationError):
        svc.list_students(school_id=None, grade="8")
    assert [s.student_id for s in svc.list_students(school_id=1, grade="8")] == [11, 12]


def test_renderer_rejects_broken_syntax():
    with pytest.raises(ValidationError):
        CertificateRenderer().check("{% if %}")
