import pytest

from jobportal.core.dates import days_ago, utcnow
from jobportal.core.exceptions import BadRequestError, ConflictError, NotFoundError
from jobportal.models import ApplicationStatus, JobApplication
from jobportal.schemas.application import ApplicationCreate
from jobportal.schemas.candidate import CandidateCreate
from jobportal.schemas.job import JobCreate
from jobportal.schemas.recruiter import RecruiterCreate
from jobportal.schemas.user import RegisterRequest
from jobportal.services import applications as application_service
from jobportal.services import candidates as candidate_service
from jobportal.services import jobs as job_service
from jobportal.services import recruiters as recruiter_service
from jobportal.services import users as user_service
from jobportal.stores.base import commit

API = "/api/v1"


def register(db, username, roles=None):
    return user_service.register_user(
        db, RegisterRequest(username=username, email=f"{username}@example.com", password="secret123", roles=roles or [])
    )


@pytest.fixture
def posting(db):
    hr = register(db, "hrlead", ["recruiter"])
    recruiter = recruiter_service.create_recruiter_profile(
        db, RecruiterCreate(user_id=hr.id, company_name="Acme Corp", location="New York")
    )
    return job_service.create_job(
        db,
        JobCreate(
            title="Java Developer",
            description="Maintain our Java services and APIs.",
            company_name="Acme Corp",
            location="New York",
            category="IT",
            employment_type="FULL_TIME",
            salary=100000,
        ),
        recruiter.id,
    )


@pytest.fixture
def applicant(db):
    user = register(db, "applicant")
    return candidate_service.create_candidate_profile(
        db, CandidateCreate(user_id=user.id, first_name="Ann", last_name="Lee", location="New York")
    )


def apply(db, candidate, job):
    return application_service.apply_to_job(db, ApplicationCreate(candidate_id=candidate.id, job_id=job.id))


# ============== Service level ==============


def test_apply_creates_applied_application(db, applicant, posting):
    application = apply(db, applicant, posting)

    assert application.status == "APPLIED"
    assert application.application_date is not None
    assert application.review_date is None


def test_applying_twice_conflicts_and_keeps_one(db, applicant, posting):
    apply(db, applicant, posting)

    with pytest.raises(ConflictError) as excinfo:
        apply(db, applicant, posting)

    assert excinfo.value.message == "You have already applied to this job"
    assert application_service.count_by_job(db, posting.id) == 1


def test_unique_constraint_rejects_duplicate_rows(db, applicant, posting):
    now = utcnow()
    db.add(JobApplication(candidate_id=applicant.id, job_id=posting.id, status="APPLIED", application_date=now))
    db.commit()

    db.add(JobApplication(candidate_id=applicant.id, job_id=posting.id, status="APPLIED", application_date=now))
    with pytest.raises(ConflictError):
        commit(db, "duplicate")
    assert application_service.count_by_job(db, posting.id) == 1


def test_apply_to_inactive_job_is_rejected(db, applicant, posting):
    job_service.toggle_job_active(db, posting.id)

    with pytest.raises(BadRequestError):
        apply(db, applicant, posting)


def test_apply_requires_existing_candidate_and_job(db, applicant, posting):
    with pytest.raises(NotFoundError):
        application_service.apply_to_job(db, ApplicationCreate(candidate_id=999, job_id=posting.id))
    with pytest.raises(NotFoundError):
        application_service.apply_to_job(db, ApplicationCreate(candidate_id=applicant.id, job_id=999))


def test_status_moves_forward_and_sets_review_date(db, applicant, posting):
    application = apply(db, applicant, posting)

    reviewed = application_service.update_application_status(
        db, application.id, ApplicationStatus.REVIEWING, review_notes="Strong CV"
    )
    assert reviewed.status == "REVIEWING"
    assert reviewed.review_date is not None
    assert reviewed.review_notes == "Strong CV"

    accepted = application_service.update_application_status(db, application.id, ApplicationStatus.ACCEPTED)
    assert accepted.status == "ACCEPTED"


@pytest.mark.parametrize(
    "path",
    [
        [ApplicationStatus.REVIEWING, ApplicationStatus.APPLIED],
        [ApplicationStatus.SHORTLISTED, ApplicationStatus.REVIEWING],
        [ApplicationStatus.REJECTED, ApplicationStatus.ACCEPTED],
        [ApplicationStatus.ACCEPTED, ApplicationStatus.SHORTLISTED],
    ],
)
def test_backward_or_final_transitions_are_rejected(db, applicant, posting, path):
    application = apply(db, applicant, posting)
    first, second = path
    application_service.update_application_status(db, application.id, first)

    with pytest.raises(BadRequestError):
        application_service.update_application_status(db, application.id, second)

    assert application_service.get_application(db, application.id).status == first.value


def test_status_update_on_missing_application(db):
    with pytest.raises(NotFoundError):
        application_service.update_application_status(db, 404, ApplicationStatus.REVIEWING)


def test_notes_and_withdraw(db, applicant, posting):
    application = apply(db, applicant, posting)

    assert application_service.add_review_notes(db, application.id, "Good fit").review_notes == "Good fit"
    assert application_service.add_interview_notes(db, application.id, "Tuesday").interview_notes == "Tuesday"
    assert application_service.withdraw_application(db, application.id) is True
    assert application_service.withdraw_application(db, application.id) is False


def test_queries_and_stats(db, applicant, posting):
    application = apply(db, applicant, posting)
    application_service.update_application_status(db, application.id, ApplicationStatus.SHORTLISTED)

    assert [a.id for a in application_service.get_applications_by_candidate(db, applicant.id)] == [application.id]
    assert [a.id for a in application_service.get_applications_by_job(db, posting.id)] == [application.id]
    assert [a.id for a in application_service.get_applications_by_status(db, ApplicationStatus.SHORTLISTED)] == [application.id]
    assert application_service.get_applications_by_status(db, ApplicationStatus.APPLIED) == []
    assert len(application_service.get_applications_by_statuses(db, ["APPLIED", "SHORTLISTED"])) == 1
    assert len(application_service.get_recent_applications(db, 7)) == 1
    assert len(application_service.get_applications_by_date_range(db, days_ago(1), utcnow())) == 1

    stats = application_service.get_application_stats(db, posting.id)
    assert stats == {
        "total": 1, "applied": 0, "reviewing": 0, "shortlisted": 1, "rejected": 0, "accepted": 0,
    }
    assert application_service.count_by_job_and_status(db, posting.id, ApplicationStatus.SHORTLISTED) == 1

    candidate_stats = candidate_service.get_candidate_stats(db, applicant.id)
    assert candidate_stats["total_applications"] == 1
    assert candidate_stats["shortlisted_applications"] == 1


def test_deleting_job_removes_its_applications(db, applicant, posting):
    apply(db, applicant, posting)

    job_service.delete_job(db, posting.id)

    assert db.query(JobApplication).count() == 0


def test_deleting_candidate_removes_their_applications(db, applicant, posting):
    apply(db, applicant, posting)

    candidate_service.delete_candidate_profile(db, applicant.id)

    assert db.query(JobApplication).count() == 0


# ============== API level ==============


def test_apply_endpoint_returns_201_then_400_on_duplicate(client, candidate, job):
    payload = {"jobId": job["id"], "candidateId": candidate["profile"]["id"], "coverLetter": "Hello!"}

    first = client.post(f"{API}/applications", json=payload, headers=candidate["headers"])
    second = client.post(f"{API}/applications", json=payload, headers=candidate["headers"])

    assert first.status_code == 201
    assert first.json()["status"] == "APPLIED"
    assert second.status_code == 400
    assert second.json()["message"] == "You have already applied to this job"


def test_review_flow_over_http(client, candidate, recruiter, job):
    created = client.post(
        f"{API}/applications",
        json={"jobId": job["id"], "candidateId": candidate["profile"]["id"]},
        headers=candidate["headers"],
    ).json()
    url = f"{API}/applications/{created['id']}"

    by_job = client.get(f"{API}/applications/job/{job['id']}", headers=recruiter["headers"])
    assert by_job.json()["totalItems"] == 1

    patched = client.patch(f"{url}/status", json={"status": "REVIEWING"}, headers=recruiter["headers"])
    assert patched.status_code == 200
    assert patched.json()["reviewDate"] is not None

    backwards = client.patch(f"{url}/status", json={"status": "APPLIED"}, headers=recruiter["headers"])
    assert backwards.status_code == 400

    notes = client.put(f"{url}/interview", json={"notes": "Call on Monday"}, headers=recruiter["headers"])
    assert notes.json()["interviewNotes"] == "Call on Monday"

    mine = client.get(f"{API}/applications/candidate/{candidate['profile']['id']}", headers=candidate["headers"])
    assert [a["status"] for a in mine.json()["items"]] == ["REVIEWING"]

    stats = client.get(f"{API}/applications/stats/job/{job['id']}", headers=recruiter["headers"])
    assert stats.json()["reviewing"] == 1


def test_candidate_cannot_change_status(client, candidate, job):
    created = client.post(
        f"{API}/applications",
        json={"jobId": job["id"], "candidateId": candidate["profile"]["id"]},
        headers=candidate["headers"],
    ).json()

    response = client.patch(
        f"{API}/applications/{created['id']}/status", json={"status": "ACCEPTED"}, headers=candidate["headers"]
    )

    assert response.status_code == 403


def test_cannot_apply_on_behalf_of_another_candidate(client, candidate, make_user, job):
    other = make_user("mallory", ["candidate"])

    response = client.post(
        f"{API}/applications",
        json={"jobId": job["id"], "candidateId": candidate["profile"]["id"]},
        headers=other["headers"],
    )

    assert response.status_code == 403


def test_withdraw_endpoint(client, candidate, job):
    created = client.post(
        f"{API}/applications",
        json={"jobId": job["id"], "candidateId": candidate["profile"]["id"]},
        headers=candidate["headers"],
    ).json()
    url = f"{API}/applications/{created['id']}"

    assert client.delete(url, headers=candidate["headers"]).json()["success"] is True
    assert client.delete(url, headers=candidate["headers"]).status_code == 404


def test_unknown_status_in_path_is_rejected(client, admin):
    response = client.get(f"{API}/applications/status/PENDING", headers=admin["headers"])

    assert response.status_code == 400
