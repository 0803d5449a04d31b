from typing import Optional

from sqlalchemy.orm import Query, Session

from jobportal.models import Recruiter
from jobportal.stores.base import contains_ci


def _base(db: Session) -> Query:
    return db.query(Recruiter).order_by(Recruiter.id)


def get(db: Session, recruiter_id: int) -> Optional[Recruiter]:
    return db.get(Recruiter, recruiter_id)


def get_by_user_id(db: Session, user_id: int) -> Optional[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.user_id == user_id).first()


def exists_by_user_id(db: Session, user_id: int) -> bool:
    return db.query(Recruiter.id).filter(Recruiter.user_id == user_id).first() is not None


def list_all(db: Session) -> list[Recruiter]:
    return _base(db).all()


def find_by_company_name(db: Session, company_name: str) -> list[Recruiter]:
    return _base(db).filter(Recruiter.company_name == company_name).all()


def find_by_company_name_containing(db: Session, company_name: str) -> list[Recruiter]:
    return _base(db).filter(contains_ci(Recruiter.company_name, company_name)).all()


def find_by_company_size(db: Session, company_size: str) -> list[Recruiter]:
    return _base(db).filter(Recruiter.company_size == company_size).all()


def find_by_verified(db: Session, is_verified: bool) -> list[Recruiter]:
    return _base(db).filter(Recruiter.is_verified.is_(is_verified)).all()


def find_by_location(db: Session, location: str) -> list[Recruiter]:
    return _base(db).filter(contains_ci(Recruiter.location, location)).all()


def search(
    db: Session,
    company_name: Optional[str] = None,
    location: Optional[str] = None,
    industry: Optional[str] = None,
    company_size: Optional[str] = None,
    is_verified: Optional[bool] = None,
) -> list[Recruiter]:
    query = _base(db)
    if company_name:
        query = query.filter(contains_ci(Recruiter.company_name, company_name))
    if location:
        query = query.filter(contains_ci(Recruiter.location, location))
    if industry:
        query = query.filter(contains_ci(Recruiter.industry, industry))
    if company_size:
        query = query.filter(Recruiter.company_size == company_size)
    if is_verified is not None:
        query = query.filter(Recruiter.is_verified.is_(is_verified))
    return query.all()


def add(db: Session, recruiter: Recruiter) -> Recruiter:
    db.add(recruiter)
    return recruiter


def delete(db: Session, recruiter: Recruiter) -> None:
    db.delete(recruiter)
