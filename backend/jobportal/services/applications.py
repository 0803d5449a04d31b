"""
Application Service.

A candidate applies once per job. Applications then move forward through
APPLIED -> REVIEWING -> SHORTLISTED and end in REJECTED or ACCEPTED.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from jobportal.core.dates import days_ago, utcnow
from jobportal.core.exceptions import BadRequestError, ConflictError, NotFoundError
from jobportal.core.logging import get_logger
from jobportal.models import ApplicationStatus, JobApplication
from jobportal.schemas.application import ApplicationCreate
from jobportal.stores import applications as application_store
from jobportal.stores import candidates as candidate_store
from jobportal.stores import jobs as job_store
from jobportal.stores.base import commit

logger = get_logger("applications")

ALREADY_APPLIED = "You have already applied to this job"


def apply_to_job(db: Session, request: ApplicationCreate) -> JobApplication:
    if candidate_store.get(db, request.candidate_id) is None:
        raise NotFoundError("Candidate not found")

    job = job_store.get(db, request.job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if not job.is_active:
        raise BadRequestError("Job is no longer accepting applications")

    if application_store.get_by_candidate_and_job(db, request.candidate_id, request.job_id):
        logger.warning(f"Candidate {request.candidate_id} already applied to job {request.job_id}")
        raise ConflictError(ALREADY_APPLIED)

    now = utcnow()
    application = JobApplication(
        candidate_id=request.candidate_id,
        job_id=request.job_id,
        status=ApplicationStatus.APPLIED.value,
        cover_letter=request.cover_letter,
        resume_url=request.resume_url,
        application_date=now,
        created_at=now,
        updated_at=now,
    )
    application_store.add(db, application)
    # Two concurrent submissions both pass the check above; the unique
    # (candidate_id, job_id) constraint lets exactly one of them through
    commit(db, ALREADY_APPLIED)
    db.refresh(application)

    logger.info(f"Candidate {application.candidate_id} applied to job {application.job_id}")
    return application


def get_application(db: Session, application_id: int) -> JobApplication:
    application = application_store.get(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


def update_application_status(
    db: Session,
    application_id: int,
    status: ApplicationStatus,
    review_notes: Optional[str] = None,
    interview_notes: Optional[str] = None,
) -> JobApplication:
    application = get_application(db, application_id)
    current = ApplicationStatus(application.status)
    target = ApplicationStatus(status)

    if not current.can_move_to(target):
        logger.warning(f"Rejected status change {current.value} -> {target.value} on application {application_id}")
        raise BadRequestError(f"Cannot change application status from {current.value} to {target.value}")

    now = utcnow()
    application.status = target.value
    if target is not ApplicationStatus.APPLIED:
        application.review_date = now
    if review_notes is not None:
        application.review_notes = review_notes
    if interview_notes is not None:
        application.interview_notes = interview_notes
    application.updated_at = now
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} moved {current.value} -> {target.value}")
    return application


def add_review_notes(db: Session, application_id: int, notes: str) -> JobApplication:
    application = get_application(db, application_id)
    application.review_notes = notes
    application.updated_at = utcnow()
    db.commit()
    db.refresh(application)
    return application


def add_interview_notes(db: Session, application_id: int, notes: str) -> JobApplication:
    application = get_application(db, application_id)
    application.interview_notes = notes
    application.updated_at = utcnow()
    db.commit()
    db.refresh(application)
    return application


def withdraw_application(db: Session, application_id: int) -> bool:
    application = application_store.get(db, application_id)
    if application is None:
        return False

    application_store.delete(db, application)
    db.commit()

    logger.info(f"Application {application_id} withdrawn")
    return True


def get_applications_by_candidate(db: Session, candidate_id: int) -> list[JobApplication]:
    return application_store.find_by_candidate(db, candidate_id)


def get_applications_by_job(db: Session, job_id: int) -> list[JobApplication]:
    return application_store.find_by_job(db, job_id)


def get_applications_by_status(db: Session, status: ApplicationStatus) -> list[JobApplication]:
    return application_store.find_by_status(db, ApplicationStatus(status).value)


def get_applications_by_statuses(db: Session, statuses: Iterable[ApplicationStatus]) -> list[JobApplication]:
    values = sorted({ApplicationStatus(s).value for s in statuses})
    if not values:
        return []
    return application_store.find_by_statuses(db, values)


def get_applications_by_date_range(db: Session, start: datetime, end: datetime) -> list[JobApplication]:
    if start > end:
        raise BadRequestError("Start date must not be after end date")
    return application_store.find_by_date_range(db, start, end)


def get_recent_applications(db: Session, days: int = 7) -> list[JobApplication]:
    if days < 0:
        raise BadRequestError("Days must not be negative")
    return application_store.find_applied_after(db, days_ago(days))


def get_applications_by_candidate_paged(
    db: Session, candidate_id: int, page: int, size: int,
    sort_by: str = "applicationDate", sort_dir: str = "desc",
) -> tuple[list[JobApplication], int]:
    return application_store.page_by_candidate(db, candidate_id, page, size, sort_by, sort_dir)


def get_applications_by_job_paged(
    db: Session, job_id: int, page: int, size: int,
    sort_by: str = "applicationDate", sort_dir: str = "desc",
) -> tuple[list[JobApplication], int]:
    return application_store.page_by_job(db, job_id, page, size, sort_by, sort_dir)


def get_applications_by_status_paged(
    db: Session, status: ApplicationStatus, page: int, size: int,
    sort_by: str = "applicationDate", sort_dir: str = "desc",
) -> tuple[list[JobApplication], int]:
    return application_store.page_by_status(db, ApplicationStatus(status).value, page, size, sort_by, sort_dir)


def count_by_candidate(db: Session, candidate_id: int) -> int:
    return application_store.count_by_candidate(db, candidate_id)


def count_by_job(db: Session, job_id: int) -> int:
    return application_store.count_by_job(db, job_id)


def count_by_job_and_status(db: Session, job_id: int, status: ApplicationStatus) -> int:
    return application_store.count_by_job_and_status(db, job_id, ApplicationStatus(status).value)


def get_application_stats(db: Session, job_id: int) -> dict:
    if job_store.get(db, job_id) is None:
        raise NotFoundError("Job not found")

    stats = {"total": count_by_job(db, job_id)}
    for status in ApplicationStatus:
        stats[status.value.lower()] = count_by_job_and_status(db, job_id, status)
    return stats
