from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from jobportal.models import Job
from jobportal.stores.base import contains_ci, order_by, paginate

SORTABLE = {
    "postedDate": Job.posted_date,
    "createdAt": Job.created_at,
    "updatedAt": Job.updated_at,
    "title": Job.title,
    "salary": Job.salary,
    "companyName": Job.company_name,
}


@dataclass
class JobFilters:
    category: Optional[str] = None
    location: Optional[str] = None
    company_name: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    recruiter_id: Optional[int] = None
    is_active: Optional[bool] = None


def _newest_first(db: Session) -> Query:
    return db.query(Job).order_by(Job.posted_date.desc(), Job.id.asc())


def get(db: Session, job_id: int) -> Optional[Job]:
    return db.get(Job, job_id)


def page(
    db: Session,
    filters: JobFilters,
    page_index: int,
    size: int,
    sort_by: str = "postedDate",
    sort_dir: str = "desc",
) -> tuple[list[Job], int]:
    query = db.query(Job)
    if filters.category:
        query = query.filter(Job.category == filters.category)
    if filters.location:
        query = query.filter(Job.location == filters.location)
    if filters.company_name:
        query = query.filter(contains_ci(Job.company_name, filters.company_name))
    if filters.min_salary is not None:
        query = query.filter(Job.salary >= filters.min_salary)
    if filters.max_salary is not None:
        query = query.filter(Job.salary <= filters.max_salary)
    if filters.recruiter_id is not None:
        query = query.filter(Job.recruiter_id == filters.recruiter_id)
    if filters.is_active is not None:
        query = query.filter(Job.is_active.is_(filters.is_active))

    query = order_by(query, SORTABLE, sort_by, sort_dir, tiebreak=Job.id)
    return paginate(query, page_index, size)


def search(db: Session, keyword: str, page_index: int, size: int) -> tuple[list[Job], int]:
    """Active jobs whose title, description or company name contains ``keyword``."""
    query = _newest_first(db).filter(
        or_(
            contains_ci(Job.title, keyword),
            contains_ci(Job.description, keyword),
            contains_ci(Job.company_name, keyword),
        ),
        Job.is_active.is_(True),
    )
    return paginate(query, page_index, size)


def find_by_title_containing(db: Session, title: str) -> list[Job]:
    return _newest_first(db).filter(contains_ci(Job.title, title)).all()


def find_by_category(db: Session, category: str) -> list[Job]:
    return _newest_first(db).filter(Job.category == category).all()


def find_by_location(db: Session, location: str) -> list[Job]:
    return _newest_first(db).filter(Job.location == location).all()


def find_by_company_name_containing(db: Session, company_name: str) -> list[Job]:
    return _newest_first(db).filter(contains_ci(Job.company_name, company_name)).all()


def find_by_salary_range(db: Session, min_salary: float, max_salary: float) -> list[Job]:
    """Jobs paying between ``min_salary`` and ``max_salary``, both inclusive."""
    return _newest_first(db).filter(Job.salary.between(min_salary, max_salary)).all()


def find_by_recruiter(db: Session, recruiter_id: int, limit: Optional[int] = None) -> list[Job]:
    query = _newest_first(db).filter(Job.recruiter_id == recruiter_id)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def find_by_active(db: Session, is_active: bool) -> list[Job]:
    return _newest_first(db).filter(Job.is_active.is_(is_active)).all()


def count_by_recruiter(db: Session, recruiter_id: int) -> int:
    return db.query(Job).filter(Job.recruiter_id == recruiter_id).count()


def count_by_recruiter_and_active(db: Session, recruiter_id: int, is_active: bool) -> int:
    return (
        db.query(Job)
        .filter(Job.recruiter_id == recruiter_id, Job.is_active.is_(is_active))
        .count()
    )


def add(db: Session, job: Job) -> Job:
    db.add(job)
    return job


def delete(db: Session, job: Job) -> None:
    db.delete(job)
