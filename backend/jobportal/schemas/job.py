from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from jobportal.models.enums import EmploymentType
from jobportal.schemas.common import CamelModel, NonBlank

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=2000)]


class JobCreate(CamelModel):
    """Schema for posting a job."""

    title: Title
    description: Description
    company_name: NonBlank
    location: NonBlank
    category: NonBlank
    employment_type: EmploymentType
    salary: Optional[float] = Field(None, ge=0)
    # Defaults to the caller's own recruiter profile
    recruiter_id: Optional[int] = None
    requirements: list[str] = []
    responsibilities: list[str] = []
    deadline: Optional[datetime] = None


class JobUpdate(CamelModel):
    """Partial job update; fields left out keep their stored value."""

    title: Optional[Title] = None
    description: Optional[Description] = None
    company_name: Optional[NonBlank] = None
    location: Optional[NonBlank] = None
    category: Optional[NonBlank] = None
    employment_type: Optional[EmploymentType] = None
    salary: Optional[float] = Field(None, ge=0)
    requirements: Optional[list[str]] = None
    responsibilities: Optional[list[str]] = None
    deadline: Optional[datetime] = None


class JobResponse(CamelModel):
    id: int
    recruiter_id: int
    title: str
    description: str
    company_name: str
    location: Optional[str] = None
    category: Optional[str] = None
    employment_type: Optional[str] = None
    salary: Optional[float] = None
    requirements: list[str] = []
    responsibilities: list[str] = []
    deadline: Optional[datetime] = None
    posted_date: Optional[datetime] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobCount(CamelModel):
    recruiter_id: int
    active_jobs: int
