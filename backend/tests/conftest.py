import os
import sys
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_jobportal.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jobportal-0123456789")
# Lowest work factor bcrypt accepts, keeps the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient

from jobportal.db.base import Base
from jobportal.db.session import SessionLocal, engine
from jobportal.main import app

API = "/api/v1"


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register an account and log it in; returns id, username and auth headers."""

    def _make(username, roles=None, password="secret123", email=None):
        response = client.post(
            f"{API}/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
                "roles": roles or [],
            },
        )
        assert response.status_code == 200, response.text

        login = client.post(f"{API}/auth/login", json={"username": username, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        return {
            "id": body["id"],
            "username": username,
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _make


@pytest.fixture
def candidate_payload():
    return {
        "firstName": "Alice",
        "lastName": "Walker",
        "location": "New York, NY",
        "currentTitle": "Backend Engineer",
        "experienceLevel": "MID",
        "yearsOfExperience": 4,
        "skills": ["Python", "SQL"],
        "education": [
            {"degree": "B.S.", "institution": "MIT", "field": "Computer Science", "graduationDate": "2020-06-01"}
        ],
        "experience": [
            {"title": "Software Engineer", "company": "Initech", "startDate": "2021-01-01", "isCurrent": True}
        ],
    }


@pytest.fixture
def recruiter_payload():
    return {
        "companyName": "Acme Corp",
        "companySize": "MEDIUM",
        "location": "New York, NY",
        "industry": "Software",
    }


@pytest.fixture
def job_payload():
    return {
        "title": "Senior Python Developer",
        "description": "Build and run the services behind the portal.",
        "companyName": "Acme Corp",
        "location": "New York",
        "category": "IT",
        "employmentType": "FULL_TIME",
        "salary": 100000,
        "requirements": ["Python", "SQL"],
        "responsibilities": ["Own backend services"],
    }


@pytest.fixture
def candidate(client, make_user, candidate_payload):
    user = make_user("alice", ["candidate"])
    response = client.post(f"{API}/candidates", json=candidate_payload, headers=user["headers"])
    assert response.status_code == 201, response.text
    return {**user, "profile": response.json()}


@pytest.fixture
def recruiter(client, make_user, recruiter_payload):
    user = make_user("sarah", ["recruiter"])
    response = client.post(f"{API}/recruiters", json=recruiter_payload, headers=user["headers"])
    assert response.status_code == 201, response.text
    return {**user, "profile": response.json()}


@pytest.fixture
def admin(make_user):
    return make_user("root", ["admin"])


@pytest.fixture
def job(client, recruiter, job_payload):
    response = client.post(f"{API}/jobs", json=job_payload, headers=recruiter["headers"])
    assert response.status_code == 201, response.text
    return response.json()
