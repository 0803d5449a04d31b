"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from jobportal.api.v1 import applications, auth, candidates, jobs, recruiters, users

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)

api_router.include_router(
    recruiters.router,
    prefix="/recruiters",
    tags=["Recruiters"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)
