"""
User administration endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobportal.api.deps import Principal, ensure_owner, get_current_principal, require_roles
from jobportal.core.exceptions import ForbiddenError, NotFoundError
from jobportal.db.session import get_db
from jobportal.models import Role
from jobportal.schemas.common import ApiResponse
from jobportal.schemas.user import UserResponse, UserUpdate
from jobportal.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    ensure_owner(principal, user_id)
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    update: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Update account fields. Only admins may change roles or the enabled flag.

    Tokens carry the username, so a renamed account has to log in again.
    """
    ensure_owner(principal, user_id)
    if not principal.is_admin and (update.roles is not None or update.enabled is not None):
        raise ForbiddenError("Only administrators can change roles or account status")
    return user_service.update_user(db, user_id, update)


@router.delete("/{user_id}", response_model=ApiResponse)
async def delete_user(
    user_id: int,
    _: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    if not user_service.delete_user(db, user_id):
        raise NotFoundError("User not found")
    return ApiResponse(success=True, message="User deleted successfully")
