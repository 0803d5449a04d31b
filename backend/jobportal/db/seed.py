"""
JobPortal Database Seeder

Creates demo accounts and data:
- an admin, a verified recruiter (Sarah Chen, Acme Corp) and two candidates
- three jobs posted by Acme Corp, one of them closed
- applications from both candidates at different stages

Run with ``python -m jobportal.db.seed`` from the backend directory.
"""

from datetime import date

from sqlalchemy.orm import Session

from jobportal.core.dates import utcnow
from jobportal.core.logging import get_logger, setup_logging
from jobportal.core.security import get_password_hash
from jobportal.db.base import Base
from jobportal.db.session import SessionLocal, engine
from jobportal.models import (
    ApplicationStatus,
    Candidate,
    CompanySize,
    Education,
    EmploymentType,
    Experience,
    ExperienceLevel,
    Job,
    JobApplication,
    Recruiter,
    Role,
    User,
)

logger = get_logger("seed")

SEED_USERS = {
    "admin": ("admin@jobportal.dev", "admin123", [Role.ADMIN.value]),
    "sarah": ("sarah.chen@acme.dev", "recruiter123", [Role.RECRUITER.value]),
    "johndoe": ("john.doe@example.com", "candidate123", [Role.CANDIDATE.value]),
    "janesmith": ("jane.smith@example.com", "candidate123", [Role.CANDIDATE.value]),
}


def _user(username: str) -> User:
    email, password, roles = SEED_USERS[username]
    now = utcnow()
    return User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
        roles=roles,
        enabled=True,
        created_at=now,
        updated_at=now,
    )


def seed_database(db: Session) -> bool:
    """
    Seed the database with demo data.

    Returns False without touching anything when the demo recruiter already
    exists.
    """
    if db.query(User).filter(User.username == "sarah").first():
        logger.info("Database already seeded. Skipping...")
        return False

    now = utcnow()
    users = {username: _user(username) for username in SEED_USERS}
    db.add_all(users.values())
    db.flush()  # Get IDs

    # 1. Recruiter profile
    acme = Recruiter(
        user_id=users["sarah"].id,
        company_name="Acme Corp",
        company_size=CompanySize.MEDIUM.value,
        location="New York, NY",
        industry="Software",
        department="Engineering",
        position="Technical Recruiter",
        company_website="https://acme.example.com",
        company_description="Builds tools for builders.",
        is_verified=True,
        created_at=now,
        updated_at=now,
    )
    db.add(acme)
    db.flush()

    # 2. Candidate profiles
    john = Candidate(
        user_id=users["johndoe"].id,
        first_name="John",
        last_name="Doe",
        location="New York, NY",
        current_title="Backend Engineer",
        experience_level=ExperienceLevel.MID.value,
        years_of_experience=4,
        profile_summary="Backend engineer working mostly in Python and PostgreSQL.",
        expected_salary=110000,
        is_available=True,
        created_at=now,
        updated_at=now,
    )
    john.skills = ["Python", "FastAPI", "PostgreSQL", "Docker"]
    john.education = [
        Education(position=0, degree="B.S.", institution="MIT", field="Computer Science",
                  graduation_date=date(2020, 6, 1), gpa=3.7),
    ]
    john.experience = [
        Experience(position=0, title="Backend Engineer", company="Initech", location="New York, NY",
                   start_date=date(2021, 3, 1), is_current=True),
        Experience(position=1, title="Junior Developer", company="Globex", location="Boston, MA",
                   start_date=date(2020, 7, 1), end_date=date(2021, 2, 28)),
    ]

    jane = Candidate(
        user_id=users["janesmith"].id,
        first_name="Jane",
        last_name="Smith",
        location="San Francisco, CA",
        current_title="Full Stack Developer",
        experience_level=ExperienceLevel.JUNIOR.value,
        years_of_experience=2,
        is_available=True,
        created_at=now,
        updated_at=now,
    )
    jane.skills = ["JavaScript", "Node.js", "AWS"]
    jane.education = [
        Education(position=0, degree="B.S.", institution="Stanford", field="Software Engineering",
                  graduation_date=date(2022, 6, 1)),
    ]
    db.add_all([john, jane])

    # 3. Jobs
    jobs = [
        Job(
            recruiter_id=acme.id,
            title="Senior Python Developer",
            description="Design and run the services behind our hiring platform.",
            company_name=acme.company_name,
            location="New York",
            category="IT",
            employment_type=EmploymentType.FULL_TIME.value,
            salary=100000,
            requirements=["5+ years of Python", "SQL"],
            responsibilities=["Own backend services", "Review code"],
            posted_date=now,
            is_active=True,
        ),
        Job(
            recruiter_id=acme.id,
            title="Frontend Intern",
            description="Help build the candidate-facing web application.",
            company_name=acme.company_name,
            location="Remote",
            category="IT",
            employment_type=EmploymentType.INTERNSHIP.value,
            salary=30000,
            requirements=["JavaScript"],
            responsibilities=["Build UI components"],
            posted_date=now,
            is_active=True,
        ),
        Job(
            recruiter_id=acme.id,
            title="Financial Analyst",
            description="Model revenue and costs for the leadership team.",
            company_name=acme.company_name,
            location="New York",
            category="Finance",
            employment_type=EmploymentType.CONTRACT.value,
            salary=85000,
            posted_date=now,
            is_active=False,
        ),
    ]
    for job in jobs:
        job.created_at = now
        job.updated_at = now
    db.add_all(jobs)
    db.flush()

    # 4. Applications
    db.add_all([
        JobApplication(
            candidate_id=john.id,
            job_id=jobs[0].id,
            status=ApplicationStatus.REVIEWING.value,
            cover_letter="I have run Python services in production for four years.",
            application_date=now,
            review_date=now,
            created_at=now,
            updated_at=now,
        ),
        JobApplication(
            candidate_id=jane.id,
            job_id=jobs[1].id,
            status=ApplicationStatus.APPLIED.value,
            application_date=now,
            created_at=now,
            updated_at=now,
        ),
    ])

    db.commit()
    logger.info(f"Seeded {len(users)} users, 2 candidates, 1 recruiter, {len(jobs)} jobs")
    return True


def main() -> None:
    setup_logging()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if seed_database(db):
            print("Database seeded successfully!")
            print("\nCreated Users:")
            for username, (email, password, roles) in SEED_USERS.items():
                print(f"   - {username} / {password} ({email}) {roles}")
    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
