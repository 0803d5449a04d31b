"""
Job API endpoints.

Listing and lookup are public; posting and editing belong to recruiters.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.api.deps import PageParams, Principal, ensure_owner, require_roles
from jobportal.core.exceptions import NotFoundError
from jobportal.db.session import get_db
from jobportal.models import Job, Role
from jobportal.schemas.common import ApiResponse, Page
from jobportal.schemas.job import JobCount, JobCreate, JobResponse, JobUpdate
from jobportal.services import jobs as job_service
from jobportal.services import recruiters as recruiter_service
from jobportal.stores import recruiters as recruiter_store
from jobportal.stores.jobs import JobFilters

router = APIRouter()

recruiter_only = require_roles(Role.RECRUITER, Role.ADMIN)


def to_page(jobs: list[Job], total: int, page: int, size: int) -> Page[JobResponse]:
    items = [JobResponse.model_validate(job) for job in jobs]
    return Page[JobResponse].build(items, total, page, size)


def owned_job(db: Session, job_id: int, principal: Principal) -> Job:
    job = job_service.get_job(db, job_id)
    ensure_owner(principal, job.recruiter.user_id)
    return job


@router.get("", response_model=Page[JobResponse])
async def list_jobs(
    category: Optional[str] = None,
    location: Optional[str] = None,
    company: Optional[str] = None,
    min_salary: Optional[float] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[float] = Query(None, alias="maxSalary", ge=0),
    recruiter_id: Optional[int] = Query(None, alias="recruiterId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    """
    List jobs, newest first by default.

    Filters combine with AND; ``sortBy`` accepts postedDate, createdAt,
    updatedAt, title, salary or companyName.
    """
    filters = JobFilters(
        category=category,
        location=location,
        company_name=company,
        min_salary=min_salary,
        max_salary=max_salary,
        recruiter_id=recruiter_id,
        is_active=is_active,
    )
    jobs, total = job_service.list_jobs(
        db, filters, paging.page, paging.size,
        sort_by=paging.sort_by or "postedDate",
        sort_dir=paging.sort_dir,
    )
    return to_page(jobs, total, paging.page, paging.size)


@router.get("/search", response_model=Page[JobResponse])
async def search_jobs(
    keyword: str = Query(...),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    """Active jobs whose title, description or company contains the keyword."""
    jobs, total = job_service.search_jobs(db, keyword, paging.page, paging.size)
    return to_page(jobs, total, paging.page, paging.size)


@router.get("/active", response_model=list[JobResponse])
async def get_active_jobs(db: Session = Depends(get_db)):
    return job_service.get_active_jobs(db)


@router.get("/category/{category}", response_model=list[JobResponse])
async def get_jobs_by_category(category: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_category(db, category)


@router.get("/location/{location}", response_model=list[JobResponse])
async def get_jobs_by_location(location: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_location(db, location)


@router.get("/company/{company_name}", response_model=list[JobResponse])
async def get_jobs_by_company(company_name: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_company(db, company_name)


@router.get("/salary", response_model=list[JobResponse])
async def get_jobs_by_salary_range(
    min_salary: float = Query(..., alias="min", ge=0),
    max_salary: float = Query(..., alias="max", ge=0),
    db: Session = Depends(get_db),
):
    return job_service.get_jobs_by_salary_range(db, min_salary, max_salary)


@router.get("/recruiter/{recruiter_id}", response_model=list[JobResponse])
async def get_jobs_by_recruiter(recruiter_id: int, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_recruiter(db, recruiter_id)


@router.get("/recruiter/{recruiter_id}/count", response_model=JobCount)
async def count_active_jobs(recruiter_id: int, db: Session = Depends(get_db)):
    return JobCount(
        recruiter_id=recruiter_id,
        active_jobs=job_service.count_active_jobs_by_recruiter(db, recruiter_id),
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, db: Session = Depends(get_db)):
    return job_service.get_job(db, job_id)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    request: JobCreate,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    """
    Post a job.

    ``recruiterId`` defaults to the caller's own recruiter profile; only an
    admin may post on behalf of another recruiter.
    """
    if request.recruiter_id is not None:
        recruiter = recruiter_service.get_recruiter(db, request.recruiter_id)
        ensure_owner(principal, recruiter.user_id)
    else:
        recruiter = recruiter_store.get_by_user_id(db, principal.id)
        if recruiter is None:
            raise NotFoundError("Recruiter profile not found for the current user")

    return job_service.create_job(db, request, recruiter.id)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    update: JobUpdate,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    owned_job(db, job_id, principal)
    return job_service.update_job(db, job_id, update)


@router.delete("/{job_id}", response_model=ApiResponse)
async def delete_job(
    job_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    owned_job(db, job_id, principal)
    job_service.delete_job(db, job_id)
    return ApiResponse(success=True, message="Job deleted successfully")


@router.patch("/{job_id}/toggle-active", response_model=JobResponse)
async def toggle_job_active(
    job_id: int,
    principal: Principal = Depends(recruiter_only),
    db: Session = Depends(get_db),
):
    owned_job(db, job_id, principal)
    return job_service.toggle_job_active(db, job_id)
