"""
Recruiter Service.

Company-side profiles. A recruiter owns the jobs they post, so removing a
profile removes its jobs and every application to them.
"""

from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.dates import utcnow
from jobportal.core.exceptions import ConflictError, NotFoundError
from jobportal.core.logging import get_logger
from jobportal.models import Recruiter
from jobportal.schemas.recruiter import RecruiterCreate, RecruiterProfileIn
from jobportal.stores import jobs as job_store
from jobportal.stores import recruiters as recruiter_store
from jobportal.stores import users as user_store
from jobportal.stores.base import commit

logger = get_logger("recruiters")

PROFILE_EXISTS = "Recruiter profile already exists for this user"
RECENT_JOBS_LIMIT = 5


def _apply_profile(recruiter: Recruiter, profile: RecruiterProfileIn) -> None:
    recruiter.company_name = profile.company_name
    recruiter.company_size = profile.company_size.value if profile.company_size else None
    recruiter.location = profile.location
    recruiter.industry = profile.industry
    recruiter.department = profile.department
    recruiter.position = profile.position
    recruiter.phone_number = profile.phone_number
    recruiter.linkedin_url = profile.linkedin_url
    recruiter.company_website = profile.company_website
    recruiter.company_description = profile.company_description


def get_recruiter(db: Session, recruiter_id: int) -> Recruiter:
    recruiter = recruiter_store.get(db, recruiter_id)
    if recruiter is None:
        raise NotFoundError("Recruiter not found")
    return recruiter


def get_recruiter_by_user_id(db: Session, user_id: int) -> Recruiter:
    recruiter = recruiter_store.get_by_user_id(db, user_id)
    if recruiter is None:
        raise NotFoundError("Recruiter not found")
    return recruiter


def list_recruiters(db: Session) -> list[Recruiter]:
    return recruiter_store.list_all(db)


def create_recruiter_profile(db: Session, request: RecruiterCreate) -> Recruiter:
    if request.user_id is None or user_store.get(db, request.user_id) is None:
        raise NotFoundError("User not found")
    if recruiter_store.exists_by_user_id(db, request.user_id):
        raise ConflictError(PROFILE_EXISTS)

    now = utcnow()
    # New recruiters start unverified until an admin signs them off
    recruiter = Recruiter(user_id=request.user_id, is_verified=False, created_at=now, updated_at=now)
    _apply_profile(recruiter, request)
    recruiter_store.add(db, recruiter)
    commit(db, PROFILE_EXISTS)
    db.refresh(recruiter)

    logger.info(f"Created recruiter profile {recruiter.id} for user {recruiter.user_id}")
    return recruiter


def update_recruiter_profile(db: Session, recruiter_id: int, profile: RecruiterProfileIn) -> Recruiter:
    recruiter = get_recruiter(db, recruiter_id)
    _apply_profile(recruiter, profile)
    recruiter.updated_at = utcnow()
    db.commit()
    db.refresh(recruiter)

    logger.info(f"Updated recruiter profile {recruiter.id}")
    return recruiter


def create_or_update_recruiter(db: Session, user_id: int, profile: RecruiterProfileIn) -> Recruiter:
    existing = recruiter_store.get_by_user_id(db, user_id)
    if existing is not None:
        return update_recruiter_profile(db, existing.id, profile)

    request = RecruiterCreate(**{**profile.model_dump(), "user_id": user_id})
    return create_recruiter_profile(db, request)


def delete_recruiter_profile(db: Session, recruiter_id: int) -> bool:
    recruiter = recruiter_store.get(db, recruiter_id)
    if recruiter is None:
        return False

    recruiter_store.delete(db, recruiter)
    db.commit()

    logger.info(f"Deleted recruiter profile {recruiter_id} and its jobs")
    return True


def search_recruiters(
    db: Session,
    company_name: Optional[str] = None,
    location: Optional[str] = None,
    industry: Optional[str] = None,
    company_size: Optional[str] = None,
    is_verified: Optional[bool] = None,
) -> list[Recruiter]:
    return recruiter_store.search(
        db,
        company_name=company_name.strip() if company_name else None,
        location=location.strip() if location else None,
        industry=industry.strip() if industry else None,
        company_size=company_size,
        is_verified=is_verified,
    )


def get_recruiters_by_company(db: Session, company_name: str) -> list[Recruiter]:
    return recruiter_store.find_by_company_name(db, company_name)


def get_recruiters_by_company_size(db: Session, company_size: str) -> list[Recruiter]:
    return recruiter_store.find_by_company_size(db, company_size)


def get_verified_recruiters(db: Session) -> list[Recruiter]:
    return recruiter_store.find_by_verified(db, True)


def verify_recruiter(db: Session, recruiter_id: int) -> Recruiter:
    recruiter = get_recruiter(db, recruiter_id)
    recruiter.is_verified = True
    recruiter.updated_at = utcnow()
    db.commit()
    db.refresh(recruiter)

    logger.info(f"Verified recruiter {recruiter.id}")
    return recruiter


def is_verified(db: Session, recruiter_id: int) -> bool:
    return get_recruiter(db, recruiter_id).is_verified


def get_recruiter_stats(db: Session, recruiter_id: int) -> dict:
    get_recruiter(db, recruiter_id)
    return {
        "total_jobs": job_store.count_by_recruiter(db, recruiter_id),
        "active_jobs": job_store.count_by_recruiter_and_active(db, recruiter_id, True),
        "recent_jobs": job_store.find_by_recruiter(db, recruiter_id, limit=RECENT_JOBS_LIMIT),
    }
