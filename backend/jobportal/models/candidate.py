from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from jobportal.core.dates import utcnow
from jobportal.db.base import Base


class Candidate(Base):
    """Job-seeker profile, at most one per user."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )

    first_name = Column(String(50))
    last_name = Column(String(50))
    phone_number = Column(String(32))
    location = Column(String(128), index=True)
    current_title = Column(String(128))  # headline
    profile_summary = Column(Text)
    experience_level = Column(String(16), index=True)  # ENTRY .. EXECUTIVE
    years_of_experience = Column(Integer, default=0, nullable=False)

    resume_url = Column(String)
    linkedin_url = Column(String)
    portfolio_url = Column(String)
    expected_salary = Column(Float)
    is_available = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="candidate_profile")
    skill_entries = relationship(
        "CandidateSkill",
        back_populates="candidate",
        order_by="CandidateSkill.position",
        cascade="all, delete-orphan",
    )
    education = relationship(
        "Education",
        back_populates="candidate",
        order_by="Education.position",
        cascade="all, delete-orphan",
    )
    experience = relationship(
        "Experience",
        back_populates="candidate",
        order_by="Experience.position",
        cascade="all, delete-orphan",
    )
    applications = relationship(
        "JobApplication", back_populates="candidate", cascade="all, delete-orphan"
    )

    @property
    def skills(self) -> list[str]:
        return [entry.name for entry in self.skill_entries]

    @skills.setter
    def skills(self, names: list[str]) -> None:
        # Order is kept for display; duplicates (ignoring case) are dropped
        seen: set[str] = set()
        entries = []
        for name in names or []:
            cleaned = name.strip()
            if not cleaned or cleaned.lower() in seen:
                continue
            seen.add(cleaned.lower())
            entries.append(CandidateSkill(name=cleaned, position=len(entries)))
        self.skill_entries = entries


class CandidateSkill(Base):
    __tablename__ = "candidate_skills"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(64), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)

    candidate = relationship("Candidate", back_populates="skill_entries")


class Education(Base):
    __tablename__ = "educations"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, default=0, nullable=False)

    degree = Column(String(128), index=True)
    institution = Column(String(256))
    field = Column(String(128))
    graduation_date = Column(Date)
    gpa = Column(Float)

    candidate = relationship("Candidate", back_populates="education")


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, default=0, nullable=False)

    title = Column(String(128), index=True)
    company = Column(String(256))
    location = Column(String(128))
    start_date = Column(Date)
    end_date = Column(Date, nullable=True)  # empty while is_current
    description = Column(Text)
    is_current = Column(Boolean, default=False, nullable=False)

    candidate = relationship("Candidate", back_populates="experience")
