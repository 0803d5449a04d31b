from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from jobportal.core.dates import utcnow
from jobportal.db.base import Base


class Job(Base):
    """A job posting owned by a recruiter."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(
        Integer, ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    company_name = Column(String(100), nullable=False, index=True)
    location = Column(String(128), index=True)
    category = Column(String(64), index=True)
    employment_type = Column(String(16))  # FULL_TIME, PART_TIME, CONTRACT, INTERNSHIP
    salary = Column(Float, index=True)

    # Free-text bullet lists, never queried individually
    requirements = Column(JSON, default=list)
    responsibilities = Column(JSON, default=list)

    deadline = Column(DateTime, nullable=True)
    posted_date = Column(DateTime, default=utcnow, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # Relationships
    recruiter = relationship("Recruiter", back_populates="jobs")
    applications = relationship(
        "JobApplication", back_populates="job", cascade="all, delete-orphan"
    )
