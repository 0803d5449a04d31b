from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints, model_validator

from jobportal.models.enums import ExperienceLevel
from jobportal.schemas.common import CamelModel, NonBlank

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]


class EducationSchema(CamelModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    field: Optional[str] = None
    graduation_date: Optional[date] = None
    gpa: Optional[float] = Field(None, ge=0)


class ExperienceSchema(CamelModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    is_current: bool = False

    @model_validator(mode="after")
    def check_dates(self) -> "ExperienceSchema":
        if self.is_current and self.end_date is not None:
            raise ValueError("End date must be empty for a current position")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class CandidateProfileIn(CamelModel):
    """Profile fields a candidate edits; embedded lists are replaced wholesale."""

    first_name: Name
    last_name: Name
    phone_number: Optional[str] = None
    location: NonBlank
    current_title: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    years_of_experience: int = Field(0, ge=0, le=50)
    skills: list[str] = []
    experience: list[ExperienceSchema] = []
    education: list[EducationSchema] = []
    resume_url: Optional[str] = None
    profile_summary: Optional[str] = Field(None, max_length=1000)
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    expected_salary: Optional[float] = Field(None, ge=0)
    is_available: bool = True


class CandidateCreate(CandidateProfileIn):
    # Defaults to the calling user when left out
    user_id: Optional[int] = None


class CandidateResponse(CamelModel):
    id: int
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    current_title: Optional[str] = None
    experience_level: Optional[str] = None
    years_of_experience: int = 0
    skills: list[str] = []
    experience: list[ExperienceSchema] = []
    education: list[EducationSchema] = []
    resume_url: Optional[str] = None
    profile_summary: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    expected_salary: Optional[float] = None
    is_available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResumeUpdate(CamelModel):
    resume_url: NonBlank


class AvailabilityUpdate(CamelModel):
    is_available: bool


class CandidateStats(CamelModel):
    total_applications: int
    applied_applications: int
    reviewing_applications: int
    shortlisted_applications: int
    rejected_applications: int
    accepted_applications: int
    skills_count: int
    experience_count: int
    education_count: int
