from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from jobportal.core.dates import utcnow
from jobportal.db.base import Base


class Recruiter(Base):
    """Employer-side profile that owns job postings."""

    __tablename__ = "recruiters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )

    company_name = Column(String(100), nullable=False, index=True)
    company_size = Column(String(16), index=True)  # STARTUP .. ENTERPRISE
    location = Column(String(128))
    industry = Column(String(128))
    department = Column(String(128))
    position = Column(String(128))
    phone_number = Column(String(32))
    linkedin_url = Column(String)
    company_website = Column(String)
    company_description = Column(Text)

    # Set by an admin only
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="recruiter_profile")
    jobs = relationship("Job", back_populates="recruiter", cascade="all, delete-orphan")
