"""
Request dependencies: the authenticated caller and role guards.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from jobportal.core.config import settings
from jobportal.core.exceptions import ForbiddenError, UnauthorizedError
from jobportal.core.security import decode_access_token, to_authorities
from jobportal.db.session import get_db
from jobportal.models import Role
from jobportal.stores import users as user_store

# Bearer token scheme; missing headers are reported by get_current_principal
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

AUTH_REQUIRED = "Full authentication is required to access this resource"


@dataclass
class Principal:
    """The authenticated caller of a request."""

    id: int
    username: str
    email: str
    roles: list[str] = field(default_factory=list)

    @property
    def authorities(self) -> list[str]:
        return to_authorities(self.roles)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN.value in self.roles

    def has_any_role(self, *roles: Role) -> bool:
        return any(Role(role).value in self.roles for role in roles)


async def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Resolve the Bearer token into a Principal.

    Raises Unauthorized for a missing, malformed or expired token and for
    tokens whose user no longer exists or has been disabled.
    """
    if not token:
        raise UnauthorizedError(AUTH_REQUIRED)

    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        raise UnauthorizedError("Invalid or expired token")

    user = user_store.get_by_username(db, payload["sub"])
    if user is None or not user.enabled:
        raise UnauthorizedError(AUTH_REQUIRED)

    return Principal(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=list(user.roles or []),
    )


def require_roles(*roles: Role) -> Callable:
    """Dependency factory: the caller must hold at least one of ``roles``."""

    async def guard(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_any_role(*roles):
            raise ForbiddenError("You do not have permission to access this resource")
        return principal

    return guard


def ensure_owner(principal: Principal, owner_user_id: int) -> None:
    """Non-admin callers may only act on records that belong to their own user."""
    if principal.is_admin or principal.id == owner_user_id:
        return
    raise ForbiddenError("You can only access your own resources")


class PageParams:
    """Zero-based ``page`` and bounded ``size`` query parameters."""

    def __init__(
        self,
        page: int = Query(0, ge=0),
        size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_dir: str = Query("desc", alias="sortDir"),
    ):
        self.page = page
        self.size = size
        self.sort_by = sort_by
        self.sort_dir = sort_dir
