from enum import Enum


class Role(str, Enum):
    CANDIDATE = "CANDIDATE"
    RECRUITER = "RECRUITER"
    ADMIN = "ADMIN"


class ExperienceLevel(str, Enum):
    ENTRY = "ENTRY"
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    EXECUTIVE = "EXECUTIVE"


class CompanySize(str, Enum):
    STARTUP = "STARTUP"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    ENTERPRISE = "ENTERPRISE"


class EmploymentType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    REVIEWING = "REVIEWING"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"

    @property
    def stage(self) -> int:
        """Position in the pipeline; REJECTED and ACCEPTED are both final."""
        return _STAGES[self]

    @property
    def is_final(self) -> bool:
        return self in (ApplicationStatus.REJECTED, ApplicationStatus.ACCEPTED)

    def can_move_to(self, target: "ApplicationStatus") -> bool:
        """Statuses only move forward; a final status never changes."""
        if self is target:
            return True
        if self.is_final:
            return False
        return target.stage > self.stage


_STAGES = {
    ApplicationStatus.APPLIED: 0,
    ApplicationStatus.REVIEWING: 1,
    ApplicationStatus.SHORTLISTED: 2,
    ApplicationStatus.REJECTED: 3,
    ApplicationStatus.ACCEPTED: 3,
}
