from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from jobportal.models import Candidate, CandidateSkill, Education, Experience
from jobportal.stores.base import contains_ci


def _base(db: Session) -> Query:
    return db.query(Candidate).order_by(Candidate.id)


def _has_any_skill(skills: list[str]):
    lowered = [s.strip().lower() for s in skills if s and s.strip()]
    return Candidate.skill_entries.any(func.lower(CandidateSkill.name).in_(lowered))


def get(db: Session, candidate_id: int) -> Optional[Candidate]:
    return db.get(Candidate, candidate_id)


def get_by_user_id(db: Session, user_id: int) -> Optional[Candidate]:
    return db.query(Candidate).filter(Candidate.user_id == user_id).first()


def exists_by_user_id(db: Session, user_id: int) -> bool:
    return db.query(Candidate.id).filter(Candidate.user_id == user_id).first() is not None


def list_all(db: Session) -> list[Candidate]:
    return _base(db).all()


def find_by_skills(db: Session, skills: list[str]) -> list[Candidate]:
    """Candidates holding at least one of ``skills`` (case-insensitive)."""
    return _base(db).filter(_has_any_skill(skills)).all()


def find_by_experience_level(db: Session, experience_level: str) -> list[Candidate]:
    return _base(db).filter(Candidate.experience_level == experience_level).all()


def find_by_location(db: Session, location: str) -> list[Candidate]:
    return _base(db).filter(contains_ci(Candidate.location, location)).all()


def find_by_experience_range(db: Session, min_years: int, max_years: Optional[int] = None) -> list[Candidate]:
    query = _base(db).filter(Candidate.years_of_experience >= min_years)
    if max_years is not None:
        query = query.filter(Candidate.years_of_experience <= max_years)
    return query.all()


def find_by_education_degree(db: Session, degree: str) -> list[Candidate]:
    return _base(db).filter(Candidate.education.any(Education.degree == degree)).all()


def find_by_current_title(db: Session, title: str) -> list[Candidate]:
    """Candidates with any experience entry whose title contains ``title``."""
    return _base(db).filter(Candidate.experience.any(contains_ci(Experience.title, title))).all()


def find_available(db: Session) -> list[Candidate]:
    return _base(db).filter(Candidate.is_available.is_(True)).all()


def search(
    db: Session,
    skills: Optional[list[str]] = None,
    min_experience: Optional[int] = None,
    location: Optional[str] = None,
    experience_level: Optional[str] = None,
) -> list[Candidate]:
    """Every supplied predicate must hold; omitted ones are ignored."""
    query = _base(db)
    if skills:
        query = query.filter(_has_any_skill(skills))
    if min_experience is not None:
        query = query.filter(Candidate.years_of_experience >= min_experience)
    if location:
        query = query.filter(contains_ci(Candidate.location, location))
    if experience_level:
        query = query.filter(Candidate.experience_level == experience_level)
    return query.all()


def add(db: Session, candidate: Candidate) -> Candidate:
    db.add(candidate)
    return candidate


def delete(db: Session, candidate: Candidate) -> None:
    db.delete(candidate)
