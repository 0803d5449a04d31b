from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Query, Session

from jobportal.models import JobApplication
from jobportal.stores.base import order_by, paginate

SORTABLE = {
    "applicationDate": JobApplication.application_date,
    "reviewDate": JobApplication.review_date,
    "createdAt": JobApplication.created_at,
    "updatedAt": JobApplication.updated_at,
    "status": JobApplication.status,
}


def _newest_first(db: Session) -> Query:
    return db.query(JobApplication).order_by(
        JobApplication.application_date.desc(), JobApplication.id.asc()
    )


def _paged(query: Query, page_index: int, size: int, sort_by: str, sort_dir: str):
    query = order_by(query, SORTABLE, sort_by, sort_dir, tiebreak=JobApplication.id)
    return paginate(query, page_index, size)


def get(db: Session, application_id: int) -> Optional[JobApplication]:
    return db.get(JobApplication, application_id)


def get_by_candidate_and_job(db: Session, candidate_id: int, job_id: int) -> Optional[JobApplication]:
    return (
        db.query(JobApplication)
        .filter(JobApplication.candidate_id == candidate_id, JobApplication.job_id == job_id)
        .first()
    )


def find_by_candidate(db: Session, candidate_id: int) -> list[JobApplication]:
    return _newest_first(db).filter(JobApplication.candidate_id == candidate_id).all()


def find_by_job(db: Session, job_id: int) -> list[JobApplication]:
    return _newest_first(db).filter(JobApplication.job_id == job_id).all()


def find_by_status(db: Session, status: str) -> list[JobApplication]:
    return _newest_first(db).filter(JobApplication.status == status).all()


def find_by_statuses(db: Session, statuses: list[str]) -> list[JobApplication]:
    return _newest_first(db).filter(JobApplication.status.in_(statuses)).all()


def find_by_date_range(db: Session, start: datetime, end: datetime) -> list[JobApplication]:
    return (
        _newest_first(db)
        .filter(JobApplication.application_date.between(start, end))
        .all()
    )


def find_applied_after(db: Session, since: datetime) -> list[JobApplication]:
    return _newest_first(db).filter(JobApplication.application_date > since).all()


def page_by_candidate(db: Session, candidate_id: int, page_index: int, size: int,
                      sort_by: str = "applicationDate", sort_dir: str = "desc"):
    query = db.query(JobApplication).filter(JobApplication.candidate_id == candidate_id)
    return _paged(query, page_index, size, sort_by, sort_dir)


def page_by_job(db: Session, job_id: int, page_index: int, size: int,
                sort_by: str = "applicationDate", sort_dir: str = "desc"):
    query = db.query(JobApplication).filter(JobApplication.job_id == job_id)
    return _paged(query, page_index, size, sort_by, sort_dir)


def page_by_status(db: Session, status: str, page_index: int, size: int,
                   sort_by: str = "applicationDate", sort_dir: str = "desc"):
    query = db.query(JobApplication).filter(JobApplication.status == status)
    return _paged(query, page_index, size, sort_by, sort_dir)


def count_by_candidate(db: Session, candidate_id: int) -> int:
    return db.query(JobApplication).filter(JobApplication.candidate_id == candidate_id).count()


def count_by_candidate_and_status(db: Session, candidate_id: int, status: str) -> int:
    return (
        db.query(JobApplication)
        .filter(JobApplication.candidate_id == candidate_id, JobApplication.status == status)
        .count()
    )


def count_by_job(db: Session, job_id: int) -> int:
    return db.query(JobApplication).filter(JobApplication.job_id == job_id).count()


def count_by_job_and_status(db: Session, job_id: int, status: str) -> int:
    return (
        db.query(JobApplication)
        .filter(JobApplication.job_id == job_id, JobApplication.status == status)
        .count()
    )


def add(db: Session, application: JobApplication) -> JobApplication:
    db.add(application)
    return application


def delete(db: Session, application: JobApplication) -> None:
    db.delete(application)
