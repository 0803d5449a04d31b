from typing import Optional

from sqlalchemy.orm import Session

from jobportal.models import User


def get(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def exists_by_username(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def exists_by_email(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email.lower()).first() is not None


def list_all(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def add(db: Session, user: User) -> User:
    db.add(user)
    return user


def delete(db: Session, user: User) -> None:
    db.delete(user)
