from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from jobportal.models.enums import CompanySize
from jobportal.schemas.common import CamelModel, NonBlank
from jobportal.schemas.job import JobResponse

CompanyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


class RecruiterProfileIn(CamelModel):
    company_name: CompanyName
    company_size: Optional[CompanySize] = None
    location: NonBlank
    industry: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin_url: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = Field(None, max_length=1000)


class RecruiterCreate(RecruiterProfileIn):
    # Defaults to the calling user when left out
    user_id: Optional[int] = None


class RecruiterResponse(CamelModel):
    id: int
    user_id: int
    company_name: str
    company_size: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin_url: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecruiterStats(CamelModel):
    total_jobs: int
    active_jobs: int
    recent_jobs: list[JobResponse]
