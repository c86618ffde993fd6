from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CandidateStatus, JobStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Candidate, JobOpening
from .repository import RecruitmentRepository

_JOB_COLUMNS = "job_id, job_title, department_id, location, openings, status, created_at"
_CANDIDATE_COLUMNS = "candidate_id, job_id, full_name, email, phone, status, created_at"


def _job(r: dict) -> JobOpening:
    return JobOpening(
        job_id=int(r["job_id"]),
        job_title=r["job_title"],
        department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
        location=r["location"],
        openings=int(r["openings"]),
        status=JobStatus(r["status"]),
        created_at=r.get("created_at"),
    )


def _candidate(r: dict) -> Candidate:
    return Candidate(
        candidate_id=int(r["candidate_id"]),
        job_id=int(r["job_id"]),
        full_name=r["full_name"],
        email=r["email"],
        phone=r.get("phone"),
        status=CandidateStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLRecruitmentRepository(RecruitmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_jobs(self, *, status: Optional[JobStatus] = None, department_id: Optional[int] = None) -> Sequence[JobOpening]:
        where, params = build_where(
            [
                ("status=%s", status.value if status else None),
                ("department_id=%s", department_id),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_JOB_COLUMNS} FROM job_openings WHERE {where} ORDER BY created_at DESC, job_id DESC",
                tuple(params),
            )
            return [_job(r) for r in fetchall(cur)]

    def get_job(self, job_id: int) -> Optional[JobOpening]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_JOB_COLUMNS} FROM job_openings WHERE job_id=%s", (int(job_id),))
            r = fetchone(cur)
            return _job(r) if r else None

    def create_job(
        self,
        *,
        job_title: str,
        department_id: Optional[int],
        location: str,
        openings: int,
        status: JobStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO job_openings(job_title, department_id, location, openings, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (job_title, department_id, location, int(openings), status.value),
            )
            return int(cur.lastrowid)

    def update_job(self, job: JobOpening) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE job_openings
                SET job_title=%s, department_id=%s, location=%s, openings=%s, status=%s
                WHERE job_id=%s
                """,
                (job.job_title, job.department_id, job.location, int(job.openings), job.status.value, int(job.job_id)),
            )
            return cur.rowcount > 0

    def delete_job(self, job_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM job_openings WHERE job_id=%s", (int(job_id),))
            return cur.rowcount > 0

    def list_candidates(
        self,
        *,
        job_id: Optional[int] = None,
        status: Optional[CandidateStatus] = None,
    ) -> Sequence[Candidate]:
        where, params = build_where(
            [
                ("job_id=%s", job_id),
                ("status=%s", status.value if status else None),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CANDIDATE_COLUMNS} FROM candidates WHERE {where} ORDER BY created_at DESC, candidate_id DESC",
                tuple(params),
            )
            return [_candidate(r) for r in fetchall(cur)]

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CANDIDATE_COLUMNS} FROM candidates WHERE candidate_id=%s", (int(candidate_id),))
            r = fetchone(cur)
            return _candidate(r) if r else None

    def find_candidate(self, *, job_id: int, email: str) -> Optional[Candidate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CANDIDATE_COLUMNS} FROM candidates WHERE job_id=%s AND email=%s",
                (int(job_id), email),
            )
            r = fetchone(cur)
            return _candidate(r) if r else None

    def create_candidate(self, *, job_id: int, full_name: str, email: str, phone: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO candidates(job_id, full_name, email, phone, status) VALUES(%s,%s,%s,%s,%s)",
                (int(job_id), full_name, email, phone, CandidateStatus.APPLIED.value),
            )
            return int(cur.lastrowid)

    def update_candidate_status(
        self,
        candidate_id: int,
        *,
        current: CandidateStatus,
        new: CandidateStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE candidates SET status=%s WHERE candidate_id=%s AND status=%s",
                (new.value, int(candidate_id), current.value),
            )
            return cur.rowcount > 0

    def delete_candidate(self, candidate_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM candidates WHERE candidate_id=%s", (int(candidate_id),))
            return cur.rowcount > 0

    def count_candidates_by_status(self) -> dict[tuple[int, CandidateStatus], int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT job_id, status, COUNT(*) AS cnt FROM candidates GROUP BY job_id, status")
            return {(int(r["job_id"]), CandidateStatus(r["status"])): int(r["cnt"]) for r in fetchall(cur)}
