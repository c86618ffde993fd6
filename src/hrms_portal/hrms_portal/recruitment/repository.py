from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import CandidateStatus, JobStatus
from .model import Candidate, JobOpening


class RecruitmentRepository(Protocol):
    # Job openings
    def list_jobs(self, *, status: Optional[JobStatus] = None, department_id: Optional[int] = None) -> Sequence[JobOpening]:
        raise NotImplementedError

    def get_job(self, job_id: int) -> Optional[JobOpening]:
        raise NotImplementedError

    def create_job(
        self,
        *,
        job_title: str,
        department_id: Optional[int],
        location: str,
        openings: int,
        status: JobStatus,
    ) -> int:
        raise NotImplementedError

    def update_job(self, job: JobOpening) -> bool:
        raise NotImplementedError

    def delete_job(self, job_id: int) -> bool:
        raise NotImplementedError

    # Candidates
    def list_candidates(
        self,
        *,
        job_id: Optional[int] = None,
        status: Optional[CandidateStatus] = None,
    ) -> Sequence[Candidate]:
        raise NotImplementedError

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        raise NotImplementedError

    def find_candidate(self, *, job_id: int, email: str) -> Optional[Candidate]:
        raise NotImplementedError

    def create_candidate(self, *, job_id: int, full_name: str, email: str, phone: Optional[str]) -> int:
        raise NotImplementedError

    def update_candidate_status(
        self,
        candidate_id: int,
        *,
        current: CandidateStatus,
        new: CandidateStatus,
    ) -> bool:
        raise NotImplementedError

    def delete_candidate(self, candidate_id: int) -> bool:
        raise NotImplementedError

    def count_candidates_by_status(self) -> dict[tuple[int, CandidateStatus], int]:
        """Keyed by (job_id, status)."""

        raise NotImplementedError
