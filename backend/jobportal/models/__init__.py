from jobportal.models.enums import (
    ApplicationStatus,
    CompanySize,
    EmploymentType,
    ExperienceLevel,
    Role,
)
from jobportal.models.user import User
from jobportal.models.candidate import Candidate, CandidateSkill, Education, Experience
from jobportal.models.recruiter import Recruiter
from jobportal.models.job import Job
from jobportal.models.application import JobApplication

__all__ = [
    "ApplicationStatus",
    "CompanySize",
    "EmploymentType",
    "ExperienceLevel",
    "Role",
    "User",
    "Candidate",
    "CandidateSkill",
    "Education",
    "Experience",
    "Recruiter",
    "Job",
    "JobApplication",
]
