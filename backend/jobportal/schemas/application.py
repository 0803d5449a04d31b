from datetime import datetime
from typing import Optional

from pydantic import Field

from jobportal.models.enums import ApplicationStatus
from jobportal.schemas.common import CamelModel, NonBlank


class ApplicationCreate(CamelModel):
    """Schema for submitting an application."""

    job_id: int
    candidate_id: int
    cover_letter: Optional[str] = Field(None, max_length=5000)
    resume_url: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    """Schema for moving an application along the pipeline."""

    status: ApplicationStatus
    review_notes: Optional[str] = None
    interview_notes: Optional[str] = None


class NotesRequest(CamelModel):
    notes: NonBlank


class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    candidate_id: int
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    application_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    review_notes: Optional[str] = None
    interview_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationStats(CamelModel):
    total: int
    applied: int
    reviewing: int
    shortlisted: int
    rejected: int
    accepted: int


class ApplicationCount(CamelModel):
    count: int
