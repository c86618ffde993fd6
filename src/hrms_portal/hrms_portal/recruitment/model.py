from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CandidateStatus, JobStatus


@dataclass(frozen=True)
class JobOpening:
    job_id: int
    job_title: str
    location: str
    openings: int
    status: JobStatus
    department_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Candidate:
    candidate_id: int
    job_id: int
    full_name: str
    email: str
    status: CandidateStatus
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
