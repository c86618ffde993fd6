from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import optional_id, parse_enum, require_email, require_id, require_non_empty
from ..core.enums import CandidateStatus, JobStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..organization.repository import OrganizationRepository
from .model import Candidate, JobOpening
from .repository import RecruitmentRepository

logger = logging.getLogger(__name__)

_ALLOWED_MOVES = {
    CandidateStatus.APPLIED: {CandidateStatus.SHORTLISTED, CandidateStatus.REJECTED},
    CandidateStatus.SHORTLISTED: {CandidateStatus.HIRED, CandidateStatus.REJECTED},
    CandidateStatus.HIRED: set(),
    CandidateStatus.REJECTED: set(),
}


class RecruitmentService:
    """Use case: job openings, applicants and the hiring pipeline."""

    def __init__(self, recruitment: RecruitmentRepository, organization: OrganizationRepository):
        self._recruitment = recruitment
        self._organization = organization

    # -------- Job openings --------
    def list_jobs(self, *, status: Optional[str] = None, department_id: Optional[int] = None) -> Sequence[JobOpening]:
        wanted = parse_enum(JobStatus, status, "Status") if status else None
        return self._recruitment.list_jobs(status=wanted, department_id=department_id)

    def get_job(self, job_id: int) -> JobOpening:
        job = self._recruitment.get_job(int(job_id))
        if not job:
            raise NotFoundError("Job opening not found")
        return job

    def _job_fields(self, data: dict) -> dict:
        title = require_non_empty(data.get("jobTitle"), "Job title")
        location = require_non_empty(data.get("location"), "Location")
        try:
            raw = data.get("openings")
            openings = 1 if raw in (None, "") else int(raw)
        except (TypeError, ValueError):
            raise ValidationError("Openings must be a whole number")
        if openings < 1:
            raise ValidationError("Openings must be at least 1")

        department_id = optional_id(data.get("departmentId"), "Department")
        if department_id is not None and not self._organization.get_department(department_id):
            raise NotFoundError("Department not found")

        status = parse_enum(JobStatus, data.get("status") or JobStatus.OPEN.value, "Status")
        return {
            "job_title": title,
            "location": location,
            "openings": openings,
            "department_id": department_id,
            "status": status,
        }

    def create_job(self, data: dict) -> JobOpening:
        job_id = self._recruitment.create_job(**self._job_fields(data))
        return self.get_job(job_id)

    def update_job(self, job_id: int, data: dict) -> JobOpening:
        job = self.get_job(job_id)
        fields = self._job_fields(data)
        hired = len(self._recruitment.list_candidates(job_id=job.job_id, status=CandidateStatus.HIRED))
        if fields["openings"] < hired:
            raise ValidationError(f"Openings cannot be fewer than the {hired} already hired")
        if hired and hired >= fields["openings"]:
            fields["status"] = JobStatus.CLOSED
        self._recruitment.update_job(replace(job, **fields))
        return self.get_job(job_id)

    def delete_job(self, job_id: int) -> None:
        job = self.get_job(job_id)
        if self._recruitment.list_candidates(job_id=job.job_id, status=CandidateStatus.HIRED):
            raise ConflictError("Cannot delete a job opening with hired candidates")
        self._recruitment.delete_job(job.job_id)

    # -------- Candidates --------
    def list_candidates(self, *, job_id: Optional[int] = None, status: Optional[str] = None) -> Sequence[Candidate]:
        wanted = parse_enum(CandidateStatus, status, "Status") if status else None
        return self._recruitment.list_candidates(job_id=job_id, status=wanted)

    def get_candidate(self, candidate_id: int) -> Candidate:
        candidate = self._recruitment.get_candidate(int(candidate_id))
        if not candidate:
            raise NotFoundError("Candidate not found")
        return candidate

    def add_candidate(self, data: dict) -> Candidate:
        job = self.get_job(require_id(data.get("jobId"), "Job opening"))
        if job.status == JobStatus.CLOSED:
            raise ConflictError(f"Job opening {job.job_title} is closed")

        full_name = require_non_empty(data.get("fullName"), "Full name")
        email = require_email(data.get("email"))
        phone = (data.get("phone") or "").strip() or None

        if self._recruitment.find_candidate(job_id=job.job_id, email=email):
            raise ConflictError(f"{email} has already applied for {job.job_title}")

        candidate_id = self._recruitment.create_candidate(job_id=job.job_id, full_name=full_name, email=email, phone=phone)
        return self.get_candidate(candidate_id)

    def delete_candidate(self, candidate_id: int) -> None:
        if not self._recruitment.delete_candidate(int(candidate_id)):
            raise NotFoundError("Candidate not found")

    def update_candidate_status(self, candidate_id: int, data: dict) -> Candidate:
        wanted = parse_enum(CandidateStatus, data.get("status"), "Status")
        candidate = self.get_candidate(candidate_id)
        if wanted not in _ALLOWED_MOVES[candidate.status]:
            raise ConflictError(f"Cannot move candidate from {candidate.status.value} to {wanted.value}")

        job = self.get_job(candidate.job_id)
        if wanted == CandidateStatus.HIRED and job.status == JobStatus.CLOSED:
            raise ConflictError(f"Job opening {job.job_title} is closed")
        if wanted == CandidateStatus.HIRED:
            hired = len(self._recruitment.list_candidates(job_id=job.job_id, status=CandidateStatus.HIRED))
            if hired >= job.openings:
                raise ConflictError(f"All {job.openings} positions for {job.job_title} are already filled")

        if not self._recruitment.update_candidate_status(candidate.candidate_id, current=candidate.status, new=wanted):
            raise ConflictError("Candidate status changed concurrently")

        if wanted == CandidateStatus.HIRED:
            logger.info("Candidate %s hired for job %s", candidate.candidate_id, job.job_id)
            hired = len(self._recruitment.list_candidates(job_id=job.job_id, status=CandidateStatus.HIRED))
            if hired >= job.openings:
                self._recruitment.update_job(replace(job, status=JobStatus.CLOSED))
                logger.info("Job %s closed: all %s positions filled", job.job_id, job.openings)

        return self.get_candidate(candidate_id)

    def pipeline(self) -> list[dict]:
        counts = self._recruitment.count_candidates_by_status()
        rows = []
        for job in self._recruitment.list_jobs():
            per_status = {s.value: counts.get((job.job_id, s), 0) for s in CandidateStatus}
            rows.append(
                {
                    "jobId": job.job_id,
                    "jobTitle": job.job_title,
                    "status": job.status,
                    "openings": job.openings,
                    "candidates": per_status,
                    "total": sum(per_status.values()),
                }
            )
        return rows
