"""
Authentication API endpoints.

Handles user registration and login with JWT token generation.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobportal.api.deps import Principal, get_current_principal
from jobportal.core.security import create_access_token, to_authorities
from jobportal.db.session import get_db
from jobportal.schemas.common import ApiResponse
from jobportal.schemas.user import (
    AvailabilityResponse,
    JwtResponse,
    LoginRequest,
    PasswordChangeRequest,
    RegisterRequest,
    UserResponse,
)
from jobportal.services import users as user_service

router = APIRouter()


@router.post("/register", response_model=ApiResponse)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new account.

    Requested roles "admin" and "recruiter" are honoured; anything else,
    or no roles at all, registers a candidate.
    """
    user_service.register_user(db, request)
    return ApiResponse(success=True, message="User registered successfully!")


@router.post("/login", response_model=JwtResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange a username and password for a Bearer token."""
    user = user_service.authenticate(db, request.username, request.password)
    token = create_access_token(subject=user.username, roles=user.roles)

    return JwtResponse(
        token=token,
        id=user.id,
        username=user.username,
        email=user.email,
        roles=to_authorities(user.roles),
    )


@router.get("/me", response_model=UserResponse)
async def read_current_user(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Get the account behind the current token."""
    return user_service.get_user(db, principal.id)


@router.put("/password", response_model=ApiResponse)
async def change_password(
    request: PasswordChangeRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    user_service.change_password(db, principal.id, request.old_password, request.new_password)
    return ApiResponse(success=True, message="Password changed successfully")


@router.get("/check-username", response_model=AvailabilityResponse)
async def check_username(username: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return AvailabilityResponse(
        value=username,
        available=user_service.is_username_available(db, username),
    )


@router.get("/check-email", response_model=AvailabilityResponse)
async def check_email(email: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return AvailabilityResponse(
        value=email,
        available=user_service.is_email_available(db, email),
    )
