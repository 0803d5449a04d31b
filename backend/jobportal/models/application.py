from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from jobportal.core.dates import utcnow
from jobportal.db.base import Base
from jobportal.models.enums import ApplicationStatus


class JobApplication(Base):
    """
    A candidate's application to a job.

    The (candidate_id, job_id) pair is unique at the table level, so two
    concurrent submissions cannot both be stored.
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_application_candidate_job"),
    )

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String(16), default=ApplicationStatus.APPLIED.value, nullable=False, index=True)
    cover_letter = Column(Text)
    resume_url = Column(String)

    application_date = Column(DateTime, default=utcnow, index=True)
    review_date = Column(DateTime, nullable=True)
    review_notes = Column(Text)
    interview_notes = Column(Text)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # Relationships
    candidate = relationship("Candidate", back_populates="applications")
    job = relationship("Job", back_populates="applications")
