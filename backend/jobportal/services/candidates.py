"""
Candidate Service.

Job-seeker profiles: one per user, with embedded education and experience
entries that are replaced as a whole on every profile save.
"""

from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.dates import utcnow
from jobportal.core.exceptions import ConflictError, NotFoundError
from jobportal.core.logging import get_logger
from jobportal.models import ApplicationStatus, Candidate, Education, Experience
from jobportal.schemas.candidate import CandidateCreate, CandidateProfileIn
from jobportal.stores import applications as application_store
from jobportal.stores import candidates as candidate_store
from jobportal.stores import users as user_store
from jobportal.stores.base import commit

logger = get_logger("candidates")

PROFILE_EXISTS = "Candidate profile already exists for this user"


def _apply_profile(candidate: Candidate, profile: CandidateProfileIn) -> None:
    candidate.first_name = profile.first_name
    candidate.last_name = profile.last_name
    candidate.phone_number = profile.phone_number
    candidate.location = profile.location
    candidate.current_title = profile.current_title
    candidate.experience_level = profile.experience_level.value if profile.experience_level else None
    candidate.years_of_experience = profile.years_of_experience
    candidate.resume_url = profile.resume_url
    candidate.profile_summary = profile.profile_summary
    candidate.linkedin_url = profile.linkedin_url
    candidate.portfolio_url = profile.portfolio_url
    candidate.expected_salary = profile.expected_salary
    candidate.is_available = profile.is_available

    # Embedded lists are replaced wholesale; orphans are deleted on flush
    candidate.skills = profile.skills
    candidate.education = [
        Education(position=i, **entry.model_dump()) for i, entry in enumerate(profile.education)
    ]
    candidate.experience = [
        Experience(position=i, **entry.model_dump()) for i, entry in enumerate(profile.experience)
    ]


def _require_user(db: Session, user_id: Optional[int]) -> None:
    if user_id is None or user_store.get(db, user_id) is None:
        raise NotFoundError("User not found")


def get_candidate(db: Session, candidate_id: int) -> Candidate:
    candidate = candidate_store.get(db, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")
    return candidate


def get_candidate_by_user_id(db: Session, user_id: int) -> Candidate:
    candidate = candidate_store.get_by_user_id(db, user_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")
    return candidate


def create_candidate_profile(db: Session, request: CandidateCreate) -> Candidate:
    """Create-only path: a second profile for the same user is a Conflict."""
    _require_user(db, request.user_id)
    if candidate_store.exists_by_user_id(db, request.user_id):
        raise ConflictError(PROFILE_EXISTS)

    now = utcnow()
    candidate = Candidate(user_id=request.user_id, created_at=now, updated_at=now)
    _apply_profile(candidate, request)
    candidate_store.add(db, candidate)
    # The unique user_id column catches a concurrent create
    commit(db, PROFILE_EXISTS)
    db.refresh(candidate)

    logger.info(f"Created candidate profile {candidate.id} for user {candidate.user_id}")
    return candidate


def update_candidate_profile(db: Session, candidate_id: int, profile: CandidateProfileIn) -> Candidate:
    """Update-only path: NotFound when the profile does not exist."""
    candidate = get_candidate(db, candidate_id)
    _apply_profile(candidate, profile)
    candidate.updated_at = utcnow()
    db.commit()
    db.refresh(candidate)

    logger.info(f"Updated candidate profile {candidate.id}")
    return candidate


def create_or_update_candidate(db: Session, user_id: int, profile: CandidateProfileIn) -> Candidate:
    """Idempotent upsert keyed by user id."""
    existing = candidate_store.get_by_user_id(db, user_id)
    if existing is not None:
        return update_candidate_profile(db, existing.id, profile)

    request = CandidateCreate(**{**profile.model_dump(), "user_id": user_id})
    return create_candidate_profile(db, request)


def delete_candidate_profile(db: Session, candidate_id: int) -> bool:
    """Delete a profile and its applications; False when it does not exist."""
    candidate = candidate_store.get(db, candidate_id)
    if candidate is None:
        return False

    candidate_store.delete(db, candidate)
    db.commit()

    logger.info(f"Deleted candidate profile {candidate_id}")
    return True


def search_candidates(
    db: Session,
    skills: Optional[list[str]] = None,
    min_experience: Optional[int] = None,
    location: Optional[str] = None,
    experience_level: Optional[str] = None,
) -> list[Candidate]:
    """
    Find candidates matching every supplied criterion.

    - skills: at least one of the listed skills (case-insensitive; "Java,Spring Boot" counts as two)
    - min_experience: years_of_experience >= min_experience
    - location: case-insensitive substring of the candidate's location
    - experience_level: exact level
    """
    skills = [part.strip() for value in (skills or []) for part in value.split(",") if part.strip()]
    return candidate_store.search(
        db,
        skills=skills or None,
        min_experience=min_experience,
        location=location.strip() if location else None,
        experience_level=experience_level,
    )


def get_candidates_by_skill(db: Session, skill: str) -> list[Candidate]:
    return candidate_store.find_by_skills(db, [skill])


def get_candidates_by_experience_level(db: Session, experience_level: str) -> list[Candidate]:
    return candidate_store.find_by_experience_level(db, experience_level)


def get_candidates_by_education_degree(db: Session, degree: str) -> list[Candidate]:
    return candidate_store.find_by_education_degree(db, degree)


def get_candidates_by_current_title(db: Session, title: str) -> list[Candidate]:
    return candidate_store.find_by_current_title(db, title)


def get_candidates_by_experience_range(
    db: Session, min_years: int, max_years: Optional[int] = None
) -> list[Candidate]:
    return candidate_store.find_by_experience_range(db, min_years, max_years)


def get_available_candidates(db: Session) -> list[Candidate]:
    return candidate_store.find_available(db)


def update_resume(db: Session, candidate_id: int, resume_url: str) -> Candidate:
    candidate = get_candidate(db, candidate_id)
    candidate.resume_url = resume_url
    candidate.updated_at = utcnow()
    db.commit()
    db.refresh(candidate)
    return candidate


def update_availability(db: Session, candidate_id: int, is_available: bool) -> Candidate:
    candidate = get_candidate(db, candidate_id)
    candidate.is_available = is_available
    candidate.updated_at = utcnow()
    db.commit()
    db.refresh(candidate)
    return candidate


def get_candidate_stats(db: Session, candidate_id: int) -> dict:
    """Application counts per status plus the size of the profile's lists."""
    candidate = get_candidate(db, candidate_id)

    def count(status: ApplicationStatus) -> int:
        return application_store.count_by_candidate_and_status(db, candidate_id, status.value)

    return {
        "total_applications": application_store.count_by_candidate(db, candidate_id),
        "applied_applications": count(ApplicationStatus.APPLIED),
        "reviewing_applications": count(ApplicationStatus.REVIEWING),
        "shortlisted_applications": count(ApplicationStatus.SHORTLISTED),
        "rejected_applications": count(ApplicationStatus.REJECTED),
        "accepted_applications": count(ApplicationStatus.ACCEPTED),
        "skills_count": len(candidate.skills),
        "experience_count": len(candidate.experience),
        "education_count": len(candidate.education),
    }
