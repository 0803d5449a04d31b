from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String
from sqlalchemy.orm import relationship

from jobportal.core.dates import utcnow
from jobportal.db.base import Base


class User(Base):
    """User account for authentication and authorization."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(50), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    # Role names, e.g. ["CANDIDATE"] or ["RECRUITER", "ADMIN"]
    roles = Column(JSON, default=list, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # Relationships (profiles go with the account)
    candidate_profile = relationship(
        "Candidate", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    recruiter_profile = relationship(
        "Recruiter", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def has_role(self, role: str) -> bool:
        return role in (self.roles or [])
