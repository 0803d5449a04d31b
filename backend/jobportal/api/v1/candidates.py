"""
Candidate profile endpoints.

Candidates manage their own profile; recruiters browse and search.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.api.deps import Principal, ensure_owner, require_roles
from jobportal.db.session import get_db
from jobportal.models import Candidate, ExperienceLevel, Role
from jobportal.schemas.candidate import (
    AvailabilityUpdate,
    CandidateCreate,
    CandidateProfileIn,
    CandidateResponse,
    CandidateStats,
    ResumeUpdate,
)
from jobportal.schemas.common import ApiResponse
from jobportal.services import candidates as candidate_service

router = APIRouter()

candidate_only = require_roles(Role.CANDIDATE, Role.ADMIN)
recruiter_only = require_roles(Role.RECRUITER, Role.ADMIN)
any_member = require_roles(Role.CANDIDATE, Role.RECRUITER, Role.ADMIN)


def owned_candidate(db: Session, candidate_id: int, principal: Principal) -> Candidate:
    candidate = candidate_service.get_candidate(db, candidate_id)
    ensure_owner(principal, candidate.user_id)
    return candidate


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    request: CandidateCreate,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    """Create the caller's profile. A second profile for the same user is rejected."""
    user_id = request.user_id if request.user_id is not None else principal.id
    ensure_owner(principal, user_id)
    return candidate_service.create_candidate_profile(db, request.model_copy(update={"user_id": user_id}))


@router.get("/user/{user_id}", response_model=CandidateResponse)
async def get_candidate_by_user(
    user_id: int,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    ensure_owner(principal, user_id)
    return candidate_service.get_candidate_by_user_id(db, user_id)


@router.put("/user/{user_id}", response_model=CandidateResponse)
async def save_candidate_for_user(
    user_id: int,
    profile: CandidateProfileIn,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    """Create the profile, or replace it when the user already has one."""
    ensure_owner(principal, user_id)
    return candidate_service.create_or_update_candidate(db, user_id, profile)


@router.get("/search", response_model=list[CandidateResponse])
async def search_candidates(
    skills: Optional[list[str]] = Query(None),
    min_experience: Optional[int] = Query(None, alias="minExperience", ge=0),
    location: Optional[str] = None,
    experience_level: Optional[ExperienceLevel] = Query(None, alias="experienceLevel"),
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    """All supplied criteria must match; ``skills`` matches any one of the listed skills."""
    return candidate_service.search_candidates(
        db,
        skills=skills,
        min_experience=min_experience,
        location=location,
        experience_level=experience_level.value if experience_level else None,
    )


@router.get("/skills/{skill}", response_model=list[CandidateResponse])
async def get_candidates_by_skill(
    skill: str,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidates_by_skill(db, skill)


@router.get("/experience/{level}", response_model=list[CandidateResponse])
async def get_candidates_by_experience_level(
    level: ExperienceLevel,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidates_by_experience_level(db, level.value)


@router.get("/experience-range", response_model=list[CandidateResponse])
async def get_candidates_by_experience_range(
    min_years: int = Query(..., alias="min", ge=0),
    max_years: Optional[int] = Query(None, alias="max", ge=0),
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidates_by_experience_range(db, min_years, max_years)


@router.get("/education/{degree}", response_model=list[CandidateResponse])
async def get_candidates_by_education(
    degree: str,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidates_by_education_degree(db, degree)


@router.get("/title/{title}", response_model=list[CandidateResponse])
async def get_candidates_by_title(
    title: str,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidates_by_current_title(db, title)


@router.get("/available", response_model=list[CandidateResponse])
async def get_available_candidates(
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return candidate_service.get_available_candidates(db)


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: int,
    principal: Principal = Depends(any_member),
    db: Session = Depends(get_db),
):
    candidate = candidate_service.get_candidate(db, candidate_id)
    # Recruiters may view any candidate; candidates only themselves
    if not principal.has_any_role(Role.RECRUITER):
        ensure_owner(principal, candidate.user_id)
    return candidate


@router.put("/{candidate_id}", response_model=CandidateResponse)
async def update_candidate(
    candidate_id: int,
    profile: CandidateProfileIn,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    owned_candidate(db, candidate_id, principal)
    return candidate_service.update_candidate_profile(db, candidate_id, profile)


@router.delete("/{candidate_id}", response_model=ApiResponse)
async def delete_candidate(
    candidate_id: int,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    owned_candidate(db, candidate_id, principal)
    candidate_service.delete_candidate_profile(db, candidate_id)
    return ApiResponse(success=True, message="Candidate profile deleted successfully")


@router.put("/{candidate_id}/resume", response_model=CandidateResponse)
async def update_resume(
    candidate_id: int,
    request: ResumeUpdate,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    owned_candidate(db, candidate_id, principal)
    return candidate_service.update_resume(db, candidate_id, request.resume_url)


@router.put("/{candidate_id}/availability", response_model=CandidateResponse)
async def update_availability(
    candidate_id: int,
    request: AvailabilityUpdate,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    owned_candidate(db, candidate_id, principal)
    return candidate_service.update_availability(db, candidate_id, request.is_available)


@router.get("/{candidate_id}/stats", response_model=CandidateStats)
async def get_candidate_stats(
    candidate_id: int,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    owned_candidate(db, candidate_id, principal)
    return CandidateStats(**candidate_service.get_candidate_stats(db, candidate_id))
