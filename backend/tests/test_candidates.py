import pytest

from jobportal.core.exceptions import ConflictError, NotFoundError
from jobportal.schemas.candidate import CandidateCreate, CandidateProfileIn
from jobportal.schemas.user import RegisterRequest
from jobportal.services import candidates as candidate_service
from jobportal.services import users as user_service

API = "/api/v1"


def new_user(db, username):
    return user_service.register_user(
        db, RegisterRequest(username=username, email=f"{username}@example.com", password="secret123")
    )


def profile(**overrides):
    fields = {
        "first_name": "Test",
        "last_name": "Person",
        "location": "New York, NY",
        "years_of_experience": 5,
        "skills": ["Java", "Spring Boot"],
    }
    fields.update(overrides)
    return fields


def create(db, username, **overrides):
    user = new_user(db, username)
    return candidate_service.create_candidate_profile(db, CandidateCreate(user_id=user.id, **profile(**overrides)))


# ============== Service level ==============


def test_search_requires_every_predicate(db):
    match = create(db, "match", skills=["java", "Docker"], years_of_experience=4, location="new york city")
    create(db, "junior", skills=["Java"], years_of_experience=1, location="New York")
    create(db, "elsewhere", skills=["Spring Boot"], years_of_experience=6, location="Chicago")
    create(db, "noskill", skills=["Python"], years_of_experience=8, location="New York")

    results = candidate_service.search_candidates(
        db, skills=["Java", "Spring Boot"], min_experience=3, location="New York"
    )

    assert [c.id for c in results] == [match.id]


def test_search_with_no_criteria_returns_everyone(db):
    create(db, "one")
    create(db, "two")

    assert len(candidate_service.search_candidates(db)) == 2


def test_search_splits_comma_separated_skills(db):
    match = create(db, "springer", skills=["Spring Boot"], years_of_experience=5)
    create(db, "pythonic", skills=["Python"], years_of_experience=5)

    results = candidate_service.search_candidates(db, skills=["Java, Spring Boot"])

    assert [c.id for c in results] == [match.id]


def test_second_profile_for_same_user_conflicts(db):
    user = new_user(db, "dupe")
    candidate_service.create_candidate_profile(db, CandidateCreate(user_id=user.id, **profile()))

    with pytest.raises(ConflictError):
        candidate_service.create_candidate_profile(db, CandidateCreate(user_id=user.id, **profile()))


def test_profile_for_unknown_user_is_not_found(db):
    with pytest.raises(NotFoundError):
        candidate_service.create_candidate_profile(db, CandidateCreate(user_id=404, **profile()))


def test_update_missing_profile_is_not_found(db):
    with pytest.raises(NotFoundError):
        candidate_service.update_candidate_profile(db, 404, CandidateProfileIn(**profile()))


def test_upsert_creates_then_replaces(db):
    user = new_user(db, "upsert")

    first = candidate_service.create_or_update_candidate(
        db, user.id, CandidateProfileIn(**profile(skills=["Go", "Rust"]))
    )
    second = candidate_service.create_or_update_candidate(
        db, user.id, CandidateProfileIn(**profile(first_name="Renamed", skills=["Kotlin"]))
    )

    assert second.id == first.id
    assert second.first_name == "Renamed"
    assert second.skills == ["Kotlin"]


def test_embedded_lists_are_replaced_wholesale(db):
    candidate = create(
        db, "lists",
        education=[{"degree": "B.S."}, {"degree": "M.S."}],
        experience=[{"title": "Engineer", "is_current": True}],
    )
    assert len(candidate.education) == 2

    updated = candidate_service.update_candidate_profile(
        db, candidate.id, CandidateProfileIn(**profile(education=[{"degree": "PhD"}]))
    )

    assert [e.degree for e in updated.education] == ["PhD"]
    assert updated.experience == []


def test_duplicate_skills_are_collapsed(db):
    candidate = create(db, "skills", skills=["Python", "python ", "", "SQL"])

    assert candidate.skills == ["Python", "SQL"]


def test_lookups(db):
    alice = create(
        db, "alice",
        experience_level="SENIOR",
        years_of_experience=9,
        education=[{"degree": "M.S."}],
        experience=[{"title": "Staff Engineer", "company": "Initech"}],
    )
    create(db, "bob", experience_level="JUNIOR", years_of_experience=1, is_available=False)

    assert [c.id for c in candidate_service.get_candidates_by_skill(db, "spring boot")] != []
    assert [c.id for c in candidate_service.get_candidates_by_experience_level(db, "SENIOR")] == [alice.id]
    assert [c.id for c in candidate_service.get_candidates_by_education_degree(db, "M.S.")] == [alice.id]
    assert candidate_service.get_candidates_by_education_degree(db, "m.s.") == []
    assert [c.id for c in candidate_service.get_candidates_by_current_title(db, "staff")] == [alice.id]
    assert [c.id for c in candidate_service.get_candidates_by_experience_range(db, 5, 10)] == [alice.id]
    assert [c.id for c in candidate_service.get_available_candidates(db)] == [alice.id]


def test_resume_and_availability_updates(db):
    candidate = create(db, "updates")

    assert candidate_service.update_resume(db, candidate.id, "https://cv.example.com/me.pdf").resume_url.endswith("me.pdf")
    assert candidate_service.update_availability(db, candidate.id, False).is_available is False


def test_delete_profile(db):
    candidate = create(db, "gone")

    assert candidate_service.delete_candidate_profile(db, candidate.id) is True
    assert candidate_service.delete_candidate_profile(db, candidate.id) is False
    with pytest.raises(NotFoundError):
        candidate_service.get_candidate(db, candidate.id)


def test_stats_for_new_profile(db):
    candidate = create(db, "stats", education=[{"degree": "B.S."}])

    stats = candidate_service.get_candidate_stats(db, candidate.id)

    assert stats["total_applications"] == 0
    assert stats["skills_count"] == 2
    assert stats["education_count"] == 1
    assert stats["experience_count"] == 0


# ============== API level ==============


def test_create_profile_returns_camel_case(candidate):
    body = candidate["profile"]

    assert body["userId"] == candidate["id"]
    assert body["firstName"] == "Alice"
    assert body["skills"] == ["Python", "SQL"]
    assert body["experience"][0]["isCurrent"] is True
    assert body["education"][0]["graduationDate"] == "2020-06-01"


def test_duplicate_profile_is_rejected(client, candidate, candidate_payload):
    response = client.post(f"{API}/candidates", json=candidate_payload, headers=candidate["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Candidate profile already exists for this user"


def test_current_position_with_end_date_is_rejected(client, make_user, candidate_payload):
    user = make_user("dana", ["candidate"])
    candidate_payload["experience"] = [
        {"title": "Engineer", "startDate": "2021-01-01", "endDate": "2022-01-01", "isCurrent": True}
    ]

    response = client.post(f"{API}/candidates", json=candidate_payload, headers=user["headers"])

    assert response.status_code == 400
    assert "End date must be empty for a current position" in response.json()["errors"].values()


def test_missing_required_fields(client, make_user):
    user = make_user("dana", ["candidate"])

    response = client.post(f"{API}/candidates", json={"firstName": "D"}, headers=user["headers"])

    assert response.status_code == 400
    assert {"firstName", "lastName", "location"} <= set(response.json()["errors"])


def test_recruiter_cannot_create_candidate_profile(client, make_user, candidate_payload):
    user = make_user("hrlead", ["recruiter"])

    response = client.post(f"{API}/candidates", json=candidate_payload, headers=user["headers"])

    assert response.status_code == 403


def test_get_by_user_and_upsert(client, candidate, candidate_payload):
    url = f"{API}/candidates/user/{candidate['id']}"

    assert client.get(url, headers=candidate["headers"]).json()["id"] == candidate["profile"]["id"]

    candidate_payload["skills"] = ["Go"]
    response = client.put(url, json=candidate_payload, headers=candidate["headers"])
    assert response.status_code == 200
    assert response.json()["id"] == candidate["profile"]["id"]
    assert response.json()["skills"] == ["Go"]


def test_candidate_cannot_read_someone_else(client, candidate, make_user, candidate_payload):
    other = make_user("eve", ["candidate"])
    client.post(f"{API}/candidates", json=candidate_payload, headers=other["headers"])

    response = client.get(f"{API}/candidates/{candidate['profile']['id']}", headers=other["headers"])

    assert response.status_code == 403


def test_recruiter_search_endpoint(client, candidate, recruiter):
    response = client.get(
        f"{API}/candidates/search",
        params={"skills": ["python", "Rust"], "minExperience": 3, "location": "new york"},
        headers=recruiter["headers"],
    )

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == [candidate["profile"]["id"]]


def test_search_endpoint_accepts_comma_separated_skills(client, candidate, recruiter):
    response = client.get(
        f"{API}/candidates/search",
        params={"skills": "Python,Go", "minExperience": 3, "location": "new york"},
        headers=recruiter["headers"],
    )

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == [candidate["profile"]["id"]]


def test_candidate_cannot_search(client, candidate):
    response = client.get(f"{API}/candidates/search", headers=candidate["headers"])

    assert response.status_code == 403


def test_update_profile_endpoints(client, candidate):
    cid = candidate["profile"]["id"]

    resume = client.put(
        f"{API}/candidates/{cid}/resume", json={"resumeUrl": "https://cv.example.com/a.pdf"}, headers=candidate["headers"]
    )
    assert resume.json()["resumeUrl"] == "https://cv.example.com/a.pdf"

    availability = client.put(
        f"{API}/candidates/{cid}/availability", json={"isAvailable": False}, headers=candidate["headers"]
    )
    assert availability.json()["isAvailable"] is False

    stats = client.get(f"{API}/candidates/{cid}/stats", headers=candidate["headers"])
    assert stats.json()["skillsCount"] == 2


def test_delete_profile_endpoint(client, candidate):
    cid = candidate["profile"]["id"]

    assert client.delete(f"{API}/candidates/{cid}", headers=candidate["headers"]).status_code == 200
    assert client.delete(f"{API}/candidates/{cid}", headers=candidate["headers"]).status_code == 404
