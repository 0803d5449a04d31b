"""
Job Service.

Posting, editing and finding job listings.
"""

from typing import Optional

from sqlalchemy.orm import Session

from jobportal.core.dates import utcnow
from jobportal.core.exceptions import BadRequestError, NotFoundError
from jobportal.core.logging import get_logger
from jobportal.models import Job
from jobportal.schemas.job import JobCreate, JobUpdate
from jobportal.stores import jobs as job_store
from jobportal.stores import recruiters as recruiter_store
from jobportal.stores.jobs import JobFilters

logger = get_logger("jobs")

# Fields that may be explicitly cleared by sending null
NULLABLE_FIELDS = {"salary", "deadline"}


def create_job(db: Session, request: JobCreate, recruiter_id: int) -> Job:
    if recruiter_store.get(db, recruiter_id) is None:
        raise NotFoundError("Recruiter not found")

    now = utcnow()
    job = Job(
        recruiter_id=recruiter_id,
        title=request.title,
        description=request.description,
        company_name=request.company_name,
        location=request.location,
        category=request.category,
        employment_type=request.employment_type.value,
        salary=request.salary,
        requirements=list(request.requirements),
        responsibilities=list(request.responsibilities),
        deadline=request.deadline,
        posted_date=now,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    job_store.add(db, job)
    db.commit()
    db.refresh(job)

    logger.info(f"Recruiter {recruiter_id} posted job {job.id}: {job.title}")
    return job


def get_job(db: Session, job_id: int) -> Job:
    job = job_store.get(db, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job


def list_jobs(
    db: Session,
    filters: JobFilters,
    page: int,
    size: int,
    sort_by: str = "postedDate",
    sort_dir: str = "desc",
) -> tuple[list[Job], int]:
    if (
        filters.min_salary is not None
        and filters.max_salary is not None
        and filters.min_salary > filters.max_salary
    ):
        raise BadRequestError("Minimum salary must not exceed maximum salary")
    return job_store.page(db, filters, page, size, sort_by, sort_dir)


def update_job(db: Session, job_id: int, update: JobUpdate) -> Job:
    """Merge the supplied fields into an existing job."""
    job = get_job(db, job_id)

    changes = update.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        if field == "employment_type":
            value = value.value
        setattr(job, field, value)

    job.updated_at = utcnow()
    db.commit()
    db.refresh(job)

    logger.info(f"Updated job {job.id}: {sorted(changes)}")
    return job


def delete_job(db: Session, job_id: int) -> bool:
    job = job_store.get(db, job_id)
    if job is None:
        return False

    job_store.delete(db, job)
    db.commit()

    logger.info(f"Deleted job {job_id}")
    return True


def toggle_job_active(db: Session, job_id: int) -> Job:
    job = get_job(db, job_id)
    job.is_active = not job.is_active
    job.updated_at = utcnow()
    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} is now {'active' if job.is_active else 'inactive'}")
    return job


def search_jobs(db: Session, keyword: str, page: int, size: int) -> tuple[list[Job], int]:
    keyword = (keyword or "").strip()
    if not keyword:
        raise BadRequestError("Search keyword must not be blank")
    return job_store.search(db, keyword, page, size)


def get_jobs_by_title(db: Session, title: str) -> list[Job]:
    return job_store.find_by_title_containing(db, title)


def get_jobs_by_category(db: Session, category: str) -> list[Job]:
    return job_store.find_by_category(db, category)


def get_jobs_by_location(db: Session, location: str) -> list[Job]:
    return job_store.find_by_location(db, location)


def get_jobs_by_company(db: Session, company_name: str) -> list[Job]:
    return job_store.find_by_company_name_containing(db, company_name)


def get_jobs_by_salary_range(db: Session, min_salary: float, max_salary: float) -> list[Job]:
    if min_salary > max_salary:
        raise BadRequestError("Minimum salary must not exceed maximum salary")
    return job_store.find_by_salary_range(db, min_salary, max_salary)


def get_jobs_by_recruiter(db: Session, recruiter_id: int, limit: Optional[int] = None) -> list[Job]:
    return job_store.find_by_recruiter(db, recruiter_id, limit)


def get_active_jobs(db: Session) -> list[Job]:
    return job_store.find_by_active(db, True)


def count_active_jobs_by_recruiter(db: Session, recruiter_id: int) -> int:
    return job_store.count_by_recruiter_and_active(db, recruiter_id, True)
