"""
Job application endpoints.

Candidates apply and withdraw; recruiters review the applications to their
own jobs.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.api.deps import PageParams, Principal, ensure_owner, require_roles
from jobportal.db.session import get_db
from jobportal.models import ApplicationStatus, JobApplication, Role
from jobportal.schemas.application import (
    ApplicationCount,
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStats,
    NotesRequest,
    StatusUpdateRequest,
)
from jobportal.schemas.common import ApiResponse, Page
from jobportal.services import applications as application_service
from jobportal.services import candidates as candidate_service
from jobportal.services import jobs as job_service

router = APIRouter()

candidate_only = require_roles(Role.CANDIDATE, Role.ADMIN)
recruiter_only = require_roles(Role.RECRUITER, Role.ADMIN)
any_member = require_roles(Role.CANDIDATE, Role.RECRUITER, Role.ADMIN)


def to_page(applications: list[JobApplication], total: int, page: int, size: int) -> Page[ApplicationResponse]:
    items = [ApplicationResponse.model_validate(a) for a in applications]
    return Page[ApplicationResponse].build(items, total, page, size)


def ensure_job_owner(db: Session, job_id: int, principal: Principal) -> None:
    job = job_service.get_job(db, job_id)
    ensure_owner(principal, job.recruiter.user_id)


def ensure_candidate_owner(db: Session, candidate_id: int, principal: Principal) -> None:
    candidate = candidate_service.get_candidate(db, candidate_id)
    ensure_owner(principal, candidate.user_id)


def reviewable(db: Session, application_id: int, principal: Principal) -> JobApplication:
    """An application the caller may review: one made to a job they posted."""
    application = application_service.get_application(db, application_id)
    ensure_owner(principal, application.job.recruiter.user_id)
    return application


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    request: ApplicationCreate,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    """Apply to an active job. Applying twice to the same job is rejected."""
    ensure_candidate_owner(db, request.candidate_id, principal)
    return application_service.apply_to_job(db, request)


@router.get("/candidate/{candidate_id}", response_model=Page[ApplicationResponse])
async def get_applications_by_candidate(
    candidate_id: int,
    paging: PageParams = Depends(),
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    ensure_candidate_owner(db, candidate_id, principal)
    applications, total = application_service.get_applications_by_candidate_paged(
        db, candidate_id, paging.page, paging.size,
        sort_by=paging.sort_by or "applicationDate",
        sort_dir=paging.sort_dir,
    )
    return to_page(applications, total, paging.page, paging.size)


@router.get("/job/{job_id}", response_model=Page[ApplicationResponse])
async def get_applications_by_job(
    job_id: int,
    paging: PageParams = Depends(),
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_job_owner(db, job_id, principal)
    applications, total = application_service.get_applications_by_job_paged(
        db, job_id, paging.page, paging.size,
        sort_by=paging.sort_by or "applicationDate",
        sort_dir=paging.sort_dir,
    )
    return to_page(applications, total, paging.page, paging.size)


@router.get("/status/{application_status}", response_model=Page[ApplicationResponse])
async def get_applications_by_status(
    application_status: ApplicationStatus,
    paging: PageParams = Depends(),
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    applications, total = application_service.get_applications_by_status_paged(
        db, application_status, paging.page, paging.size,
        sort_by=paging.sort_by or "applicationDate",
        sort_dir=paging.sort_dir,
    )
    return to_page(applications, total, paging.page, paging.size)


@router.get("/statuses", response_model=list[ApplicationResponse])
async def get_applications_by_statuses(
    statuses: list[ApplicationStatus] = Query(..., alias="status"),
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return application_service.get_applications_by_statuses(db, statuses)


@router.get("/date-range", response_model=list[ApplicationResponse])
async def get_applications_by_date_range(
    start: datetime,
    end: datetime,
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return application_service.get_applications_by_date_range(db, start, end)


@router.get("/recent", response_model=list[ApplicationResponse])
async def get_recent_applications(
    days: int = Query(7, ge=0),
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return application_service.get_recent_applications(db, days)


@router.get("/stats/job/{job_id}", response_model=ApplicationStats)
async def get_application_stats(
    job_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_job_owner(db, job_id, principal)
    return ApplicationStats(**application_service.get_application_stats(db, job_id))


@router.get("/count/candidate/{candidate_id}", response_model=ApplicationCount)
async def count_by_candidate(
    candidate_id: int,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    ensure_candidate_owner(db, candidate_id, principal)
    return ApplicationCount(count=application_service.count_by_candidate(db, candidate_id))


@router.get("/count/job/{job_id}", response_model=ApplicationCount)
async def count_by_job(
    job_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_job_owner(db, job_id, principal)
    return ApplicationCount(count=application_service.count_by_job(db, job_id))


@router.get("/count/job/{job_id}/status/{application_status}", response_model=ApplicationCount)
async def count_by_job_and_status(
    job_id: int,
    application_status: ApplicationStatus,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    ensure_job_owner(db, job_id, principal)
    return ApplicationCount(
        count=application_service.count_by_job_and_status(db, job_id, application_status)
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: int,
    principal: Principal = Depends(any_member),
    db: Session = Depends(get_db),
):
    application = application_service.get_application(db, application_id)
    # Visible to the applicant and to the recruiter who posted the job
    if principal.id not in (application.candidate.user_id, application.job.recruiter.user_id):
        ensure_owner(principal, application.candidate.user_id)
    return application


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: int,
    request: StatusUpdateRequest,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    """Move an application forward; REJECTED and ACCEPTED are final."""
    reviewable(db, application_id, principal)
    return application_service.update_application_status(
        db,
        application_id,
        request.status,
        review_notes=request.review_notes,
        interview_notes=request.interview_notes,
    )


@router.put("/{application_id}/review", response_model=ApplicationResponse)
async def add_review_notes(
    application_id: int,
    request: NotesRequest,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    reviewable(db, application_id, principal)
    return application_service.add_review_notes(db, application_id, request.notes)


@router.put("/{application_id}/interview", response_model=ApplicationResponse)
async def add_interview_notes(
    application_id: int,
    request: NotesRequest,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    reviewable(db, application_id, principal)
    return application_service.add_interview_notes(db, application_id, request.notes)


@router.delete("/{application_id}", response_model=ApiResponse)
async def withdraw_application(
    application_id: int,
    principal: Principal = Depends(candidate_only),
    db: Session = Depends(get_db),
):
    application = application_service.get_application(db, application_id)
    ensure_owner(principal, application.candidate.user_id)
    application_service.withdraw_application(db, application_id)
    return ApiResponse(success=True, message="Application withdrawn successfully")
