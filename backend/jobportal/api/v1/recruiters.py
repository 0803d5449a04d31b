"""
Recruiter profile endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.api.deps import Principal, ensure_owner, require_roles
from jobportal.db.session import get_db
from jobportal.models import CompanySize, Recruiter, Role
from jobportal.schemas.common import ApiResponse
from jobportal.schemas.job import JobResponse
from jobportal.schemas.recruiter import (
    RecruiterCreate,
    RecruiterProfileIn,
    RecruiterResponse,
    RecruiterStats,
)
from jobportal.services import recruiters as recruiter_service

router = APIRouter()

recruiter_only = require_roles(Role.RECRUITER, Role.ADMIN)
admin_only = require_roles(Role.ADMIN)


def owned_recruiter(db: Session, recruiter_id: int, principal: Principal) -> Recruiter:
    recruiter = recruiter_service.get_recruiter(db, recruiter_id)
    ensure_owner(principal, recruiter.user_id)
    return recruiter


@router.post("", response_model=RecruiterResponse, status_code=status.HTTP_201_CREATED)
async def create_recruiter(
    request: RecruiterCreate,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    user_id = request.user_id if request.user_id is not None else principal.id
    ensure_owner(principal, user_id)
    return recruiter_service.create_recruiter_profile(db, request.model_copy(update={"user_id": user_id}))


@router.get("/user/{user_id}", response_model=RecruiterResponse)
async def get_recruiter_by_user(
    user_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_owner(principal, user_id)
    return recruiter_service.get_recruiter_by_user_id(db, user_id)


@router.put("/user/{user_id}", response_model=RecruiterResponse)
async def save_recruiter_for_user(
    user_id: int,
    profile: RecruiterProfileIn,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_owner(principal, user_id)
    return recruiter_service.create_or_update_recruiter(db, user_id, profile)


@router.get("/search", response_model=list[RecruiterResponse])
async def search_recruiters(
    company_name: Optional[str] = Query(None, alias="companyName"),
    location: Optional[str] = None,
    industry: Optional[str] = None,
    company_size: Optional[CompanySize] = Query(None, alias="companySize"),
    is_verified: Optional[bool] = Query(None, alias="isVerified"),
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.search_recruiters(
        db,
        company_name=company_name,
        location=location,
        industry=industry,
        company_size=company_size.value if company_size else None,
        is_verified=is_verified,
    )


@router.get("/company/{company_name}", response_model=list[RecruiterResponse])
async def get_recruiters_by_company(
    company_name: str,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.get_recruiters_by_company(db, company_name)


@router.get("/size/{company_size}", response_model=list[RecruiterResponse])
async def get_recruiters_by_company_size(
    company_size: CompanySize,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.get_recruiters_by_company_size(db, company_size.value)


@router.get("/verified", response_model=list[RecruiterResponse])
async def get_verified_recruiters(
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.get_verified_recruiters(db)


@router.get("/{recruiter_id}", response_model=RecruiterResponse)
async def get_recruiter(
    recruiter_id: int,
    _: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.get_recruiter(db, recruiter_id)


@router.put("/{recruiter_id}", response_model=RecruiterResponse)
async def update_recruiter(
    recruiter_id: int,
    profile: RecruiterProfileIn,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    owned_recruiter(db, recruiter_id, principal)
    return recruiter_service.update_recruiter_profile(db, recruiter_id, profile)


@router.delete("/{recruiter_id}", response_model=ApiResponse)
async def delete_recruiter(
    recruiter_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    """Delete the profile along with its jobs and their applications."""
    owned_recruiter(db, recruiter_id, principal)
    recruiter_service.delete_recruiter_profile(db, recruiter_id)
    return ApiResponse(success=True, message="Recruiter profile deleted successfully")


@router.put("/{recruiter_id}/verify", response_model=RecruiterResponse)
async def verify_recruiter(
    recruiter_id: int,
    _: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return recruiter_service.verify_recruiter(db, recruiter_id)


@router.get("/{recruiter_id}/stats", response_model=RecruiterStats)
async def get_recruiter_stats(
    recruiter_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    owned_recruiter(db, recruiter_id, principal)
    stats = recruiter_service.get_recruiter_stats(db, recruiter_id)
    return RecruiterStats(
        total_jobs=stats["total_jobs"],
        active_jobs=stats["active_jobs"],
        recent_jobs=[JobResponse.model_validate(job) for job in stats["recent_jobs"]],
    )
