"""
User Service.

Account registration, credential checks and account maintenance.
"""

from typing import Iterable

from sqlalchemy.orm import Session

from jobportal.core.dates import utcnow
from jobportal.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from jobportal.core.logging import get_logger
from jobportal.core.security import get_password_hash, verify_password
from jobportal.models import Role, User
from jobportal.schemas.user import RegisterRequest, UserUpdate
from jobportal.stores import users as user_store
from jobportal.stores.base import commit

logger = get_logger("users")

# Requested role names that map to something other than CANDIDATE
ROLE_ALIASES = {
    "admin": Role.ADMIN,
    "recruiter": Role.RECRUITER,
}

USERNAME_TAKEN = "Username is already taken!"
EMAIL_TAKEN = "Email is already in use!"
INVALID_CREDENTIALS = "Invalid username or password"


def resolve_roles(requested: Iterable[str] | None) -> list[str]:
    """
    Turn requested role names into stored roles.

    "admin" and "recruiter" (any case) map to ADMIN and RECRUITER; any other
    name, or no names at all, yields CANDIDATE.
    """
    names = [name for name in (requested or []) if name is not None]
    if not names:
        return [Role.CANDIDATE.value]
    roles = {ROLE_ALIASES.get(name.strip().lower(), Role.CANDIDATE).value for name in names}
    return sorted(roles)


def is_username_available(db: Session, username: str) -> bool:
    return not user_store.exists_by_username(db, username)


def is_email_available(db: Session, email: str) -> bool:
    return not user_store.exists_by_email(db, email)


def register_user(db: Session, request: RegisterRequest) -> User:
    """Create an account; the password is stored as a bcrypt hash."""
    if not is_username_available(db, request.username):
        logger.warning(f"Registration rejected, username taken: {request.username}")
        raise ConflictError(USERNAME_TAKEN)

    if not is_email_available(db, request.email):
        logger.warning(f"Registration rejected, email in use: {request.email}")
        raise ConflictError(EMAIL_TAKEN)

    now = utcnow()
    user = User(
        username=request.username,
        email=request.email.lower(),
        hashed_password=get_password_hash(request.password),
        roles=resolve_roles(request.roles),
        enabled=True,
        created_at=now,
        updated_at=now,
    )
    user_store.add(db, user)
    commit(db, "Username or email is already in use!")
    db.refresh(user)

    logger.info(f"Registered user {user.username} (id={user.id}) with roles {user.roles}")
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user when the credentials match, otherwise raise Unauthorized."""
    user = user_store.get_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login for username: {username}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if not user.enabled:
        logger.warning(f"Login attempt on disabled account: {username}")
        raise UnauthorizedError("Account is disabled")

    return user


def list_users(db: Session) -> list[User]:
    return user_store.list_all(db)


def get_user(db: Session, user_id: int) -> User:
    user = user_store.get(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: Session, username: str) -> User:
    user = user_store.get_by_username(db, username)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User:
    user = user_store.get_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_user(db: Session, user_id: int, update: UserUpdate) -> User:
    """Apply the supplied fields only. The password is changed separately."""
    user = get_user(db, user_id)
    changes = update.model_dump(exclude_unset=True)

    username = changes.get("username")
    new_username = username if username and username != user.username else None
    if new_username and not is_username_available(db, new_username):
        raise ConflictError(USERNAME_TAKEN)

    email = changes.get("email")
    new_email = email.lower() if email and email.lower() != user.email else None
    if new_email and not is_email_available(db, new_email):
        raise ConflictError(EMAIL_TAKEN)

    if new_username:
        user.username = new_username
    if new_email:
        user.email = new_email

    if changes.get("roles"):
        user.roles = sorted({Role(role).value for role in changes["roles"]})

    if changes.get("enabled") is not None:
        user.enabled = changes["enabled"]

    user.updated_at = utcnow()
    commit(db, "Username or email is already in use!")
    db.refresh(user)

    logger.info(f"Updated user {user.id}: {sorted(changes)}")
    return user


def change_password(db: Session, user_id: int, old_password: str, new_password: str) -> User:
    user = get_user(db, user_id)
    if not verify_password(old_password, user.hashed_password):
        raise UnauthorizedError("Invalid old password")

    user.hashed_password = get_password_hash(new_password)
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"Password changed for user {user.id}")
    return user


def delete_user(db: Session, user_id: int) -> bool:
    """
    Delete an account together with its candidate or recruiter profile.

    Returns False when no such user exists.
    """
    user = user_store.get(db, user_id)
    if user is None:
        return False

    user_store.delete(db, user)
    db.commit()

    logger.info(f"Deleted user {user_id}")
    return True
