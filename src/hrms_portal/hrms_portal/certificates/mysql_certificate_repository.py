from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import RecipientStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Certificate, CertificateTemplate, Recipient, School, Student, certificate_number
from .repository import CertificateRepository

_TEMPLATE_COLUMNS = "template_id, name, description, template_html, placeholders, is_default, is_active"
_CERTIFICATE_COLUMNS = """
    certificate_id, title, description, template_id, school_id, grade, accomplishment,
    issued_date, valid_until, signature_name, signature_designation, created_at
"""
_RECIPIENT_COLUMNS = "certificate_id, student_id, certificate_number, status, generated_at, sent_at, rendered_html"


def _student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        student_code=r["student_code"],
        full_name=r["full_name"],
        email=r.get("email"),
        school_id=int(r["school_id"]),
        grade=r["grade"],
    )


def _template(r: dict) -> CertificateTemplate:
    placeholders = tuple(p.strip() for p in (r.get("placeholders") or "").split(",") if p.strip())
    return CertificateTemplate(
        template_id=int(r["template_id"]),
        name=r["name"],
        description=r.get("description"),
        template_html=r["template_html"],
        placeholders=placeholders,
        is_default=bool(r["is_default"]),
        is_active=bool(r["is_active"]),
    )


def _recipient(r: dict) -> Recipient:
    return Recipient(
        certificate_id=int(r["certificate_id"]),
        student_id=int(r["student_id"]),
        certificate_number=r["certificate_number"],
        status=RecipientStatus(r["status"]),
        generated_at=r.get("generated_at"),
        sent_at=r.get("sent_at"),
        rendered_html=r.get("rendered_html"),
    )


def _certificate(r: dict, recipients: Sequence[Recipient] = ()) -> Certificate:
    return Certificate(
        certificate_id=int(r["certificate_id"]),
        title=r["title"],
        description=r.get("description"),
        template_id=int(r["template_id"]),
        school_id=int(r["school_id"]),
        grade=r["grade"],
        accomplishment=r["accomplishment"],
        issued_date=r["issued_date"],
        valid_until=r.get("valid_until"),
        signature_name=r["signature_name"],
        signature_designation=r["signature_designation"],
        created_at=r.get("created_at"),
        recipients=tuple(recipients),
    )


class MySQLCertificateRepository(CertificateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_school(self, school_id: int) -> Optional[School]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT school_id, name, city, state FROM schools WHERE school_id=%s", (int(school_id),))
            r = fetchone(cur)
            if not r:
                return None
            return School(school_id=int(r["school_id"]), name=r["name"], city=r.get("city"), state=r.get("state"))

    def list_students(self, *, school_id: Optional[int] = None, grade: Optional[str] = None) -> Sequence[Student]:
        where, params = build_where([("school_id=%s", school_id), ("grade=%s", grade)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, student_code, full_name, email, school_id, grade
                FROM students
                WHERE {where}
                ORDER BY full_name
                """,
                tuple(params),
            )
            return [_student(r) for r in fetchall(cur)]

    def get_student(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id, student_code, full_name, email, school_id, grade FROM students WHERE student_id=%s",
                (int(student_id),),
            )
            r = fetchone(cur)
            return _student(r) if r else None

    def list_templates(self, *, active_only: bool = False) -> Sequence[CertificateTemplate]:
        where = "is_active=1" if active_only else "1=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TEMPLATE_COLUMNS} FROM certificate_templates WHERE {where} ORDER BY is_default DESC, name"
            )
            return [_template(r) for r in fetchall(cur)]

    def get_template(self, template_id: int) -> Optional[CertificateTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TEMPLATE_COLUMNS} FROM certificate_templates WHERE template_id=%s",
                (int(template_id),),
            )
            r = fetchone(cur)
            return _template(r) if r else None

    def get_template_by_name(self, name: str) -> Optional[CertificateTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEMPLATE_COLUMNS} FROM certificate_templates WHERE name=%s", (name,))
            r = fetchone(cur)
            return _template(r) if r else None

    def create_template(
        self,
        *,
        name: str,
        description: Optional[str],
        template_html: str,
        placeholders: Sequence[str],
        is_default: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO certificate_templates(name, description, template_html, placeholders, is_default, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, description, template_html, ",".join(placeholders), 1 if is_default else 0),
            )
            return int(cur.lastrowid)

    def list_certificates(
        self,
        *,
        school_id: Optional[int] = None,
        grade: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[Certificate]:
        where, params = build_where([("school_id=%s", school_id), ("grade=%s", grade)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_CERTIFICATE_COLUMNS}
                FROM certificates
                WHERE {where}
                ORDER BY issued_date DESC, certificate_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["certificate_id"]) for r in rows]
            marks = ",".join(["%s"] * len(ids))
            cur.execute(
                f"SELECT {_RECIPIENT_COLUMNS} FROM certificate_recipients WHERE certificate_id IN ({marks}) ORDER BY student_id",
                tuple(ids),
            )
            by_certificate: dict[int, list[Recipient]] = {}
            for rr in fetchall(cur):
                rec = _recipient(rr)
                by_certificate.setdefault(rec.certificate_id, []).append(rec)

            return [_certificate(r, by_certificate.get(int(r["certificate_id"]), [])) for r in rows]

    def get_certificate(self, certificate_id: int) -> Optional[Certificate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CERTIFICATE_COLUMNS} FROM certificates WHERE certificate_id=%s", (int(certificate_id),))
            r = fetchone(cur)
            if not r:
                return None
            cur.execute(
                f"SELECT {_RECIPIENT_COLUMNS} FROM certificate_recipients WHERE certificate_id=%s ORDER BY student_id",
                (int(certificate_id),),
            )
            return _certificate(r, [_recipient(rr) for rr in fetchall(cur)])

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO certificates(
                    title, description, template_id, school_id, grade, accomplishment,
                    issued_date, valid_until, signature_name, signature_designation
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    int(template_id),
                    int(school_id),
                    grade,
                    accomplishment,
                    issued_date,
                    valid_until,
                    signature_name,
                    signature_designation,
                ),
            )
            certificate_id = int(cur.lastrowid)
            for student_id in student_ids:
                cur.execute(
                    """
                    INSERT INTO certificate_recipients(certificate_id, student_id, certificate_number, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (
                        certificate_id,
                        int(student_id),
                        certificate_number(issued_date.year, certificate_id, int(student_id)),
                        RecipientStatus.PENDING.value,
                    ),
                )
            return certificate_id

    def mark_generated(self, *, certificate_id: int, student_id: int, rendered_html: str, generated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE certificate_recipients
                SET status=%s, rendered_html=%s, generated_at=%s
                WHERE certificate_id=%s AND student_id=%s
                """,
                (RecipientStatus.GENERATED.value, rendered_html, generated_at, int(certificate_id), int(student_id)),
            )
            return cur.rowcount > 0

    def mark_sent(self, *, certificate_id: int, student_ids: Iterable[int], sent_at: datetime) -> int:
        ids = [int(s) for s in student_ids]
        if not ids:
            return 0
        marks = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE certificate_recipients
                SET status=%s, sent_at=%s
                WHERE certificate_id=%s AND student_id IN ({marks}) AND status IN (%s,%s)
                """,
                tuple(
                    [RecipientStatus.SENT.value, sent_at, int(certificate_id)]
                    + ids
                    + [RecipientStatus.GENERATED.value, RecipientStatus.SENT.value]
                ),
            )
            return int(cur.rowcount)

    def list_recipients_for_student(
        self,
        student_id: int,
        *,
        statuses: Iterable[RecipientStatus],
    ) -> Sequence[Recipient]:
        values = [s.value for s in statuses]
        if not values:
            return []
        marks = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECIPIENT_COLUMNS}
                FROM certificate_recipients
                WHERE student_id=%s AND status IN ({marks})
                ORDER BY generated_at DESC
                """,
                tuple([int(student_id)] + values),
            )
            return [_recipient(r) for r in fetchall(cur)]
