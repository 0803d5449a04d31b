import pytest

from jobportal.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from jobportal.models import Candidate, Role, User
from jobportal.schemas.candidate import CandidateCreate
from jobportal.schemas.user import RegisterRequest, UserUpdate
from jobportal.services import candidates as candidate_service
from jobportal.services import users as user_service

API = "/api/v1"


def register(db, username, email=None, roles=None):
    return user_service.register_user(
        db,
        RegisterRequest(
            username=username, email=email or f"{username}@example.com", password="secret123", roles=roles or []
        ),
    )


@pytest.mark.parametrize(
    "requested, expected",
    [
        ([], ["CANDIDATE"]),
        (None, ["CANDIDATE"]),
        (["admin"], ["ADMIN"]),
        (["RECRUITER"], ["RECRUITER"]),
        (["guest"], ["CANDIDATE"]),
        (["admin", "recruiter"], ["ADMIN", "RECRUITER"]),
    ],
)
def test_resolve_roles(requested, expected):
    assert user_service.resolve_roles(requested) == expected


def test_password_is_stored_hashed(db):
    user = register(db, "hashme")

    assert user.hashed_password != "secret123"
    assert user.hashed_password.startswith("$2")


def test_duplicate_username_conflicts_and_first_survives(db):
    first = register(db, "twin", email="one@example.com")

    with pytest.raises(ConflictError):
        register(db, "twin", email="two@example.com")

    assert user_service.get_user_by_username(db, "twin").id == first.id
    assert db.query(User).count() == 1


def test_duplicate_email_conflicts_ignoring_case(db):
    register(db, "first", email="same@example.com")

    with pytest.raises(ConflictError):
        register(db, "second", email="SAME@example.com")


def test_authenticate(db):
    register(db, "login")

    assert user_service.authenticate(db, "login", "secret123").username == "login"
    with pytest.raises(UnauthorizedError):
        user_service.authenticate(db, "login", "bad-password")
    with pytest.raises(UnauthorizedError):
        user_service.authenticate(db, "nobody", "secret123")


def test_disabled_account_cannot_authenticate(db):
    user = register(db, "sleepy")
    user_service.update_user(db, user.id, UserUpdate(enabled=False))

    with pytest.raises(UnauthorizedError):
        user_service.authenticate(db, "sleepy", "secret123")


def test_lookups_raise_not_found(db):
    with pytest.raises(NotFoundError):
        user_service.get_user(db, 1)
    with pytest.raises(NotFoundError):
        user_service.get_user_by_username(db, "ghost")
    with pytest.raises(NotFoundError):
        user_service.get_user_by_email(db, "ghost@example.com")


def test_update_rechecks_uniqueness(db):
    register(db, "taken")
    user = register(db, "mover")

    with pytest.raises(ConflictError):
        user_service.update_user(db, user.id, UserUpdate(username="taken"))

    updated = user_service.update_user(db, user.id, UserUpdate(email="New@Example.com", roles=[Role.RECRUITER]))
    assert updated.username == "mover"
    assert updated.email == "new@example.com"
    assert updated.roles == ["RECRUITER"]


def test_failed_update_leaves_account_untouched(db):
    register(db, "taken", email="taken@example.com")
    user = register(db, "mover")

    with pytest.raises(ConflictError):
        user_service.update_user(db, user.id, UserUpdate(username="renamed", email="taken@example.com"))

    assert user_service.get_user(db, user.id).username == "mover"


def test_delete_user_cascades_to_profile(db):
    user = register(db, "leaver")
    candidate_service.create_candidate_profile(
        db, CandidateCreate(user_id=user.id, first_name="Lee", last_name="Ver", location="Paris")
    )

    assert user_service.delete_user(db, user.id) is True
    assert db.query(Candidate).count() == 0
    assert user_service.delete_user(db, user.id) is False


# ============== API level ==============


def test_list_users_is_admin_only(client, admin, make_user):
    user = make_user("regular")

    assert client.get(f"{API}/users", headers=user["headers"]).status_code == 403

    response = client.get(f"{API}/users", headers=admin["headers"])
    assert response.status_code == 200
    assert {u["username"] for u in response.json()} == {"root", "regular"}


def test_user_can_read_and_edit_self_only(client, make_user):
    me = make_user("myself")
    other = make_user("other")

    assert client.get(f"{API}/users/{me['id']}", headers=me["headers"]).status_code == 200
    assert client.get(f"{API}/users/{other['id']}", headers=me["headers"]).status_code == 403

    response = client.put(f"{API}/users/{me['id']}", json={"email": "me2@example.com"}, headers=me["headers"])
    assert response.status_code == 200
    assert response.json()["email"] == "me2@example.com"


def test_user_cannot_grant_themselves_roles(client, make_user):
    me = make_user("myself")

    response = client.put(f"{API}/users/{me['id']}", json={"roles": ["ADMIN"]}, headers=me["headers"])

    assert response.status_code == 403


def test_admin_deletes_user(client, admin, make_user):
    user = make_user("doomed")

    assert client.delete(f"{API}/users/{user['id']}", headers=admin["headers"]).status_code == 200
    assert client.delete(f"{API}/users/{user['id']}", headers=admin["headers"]).status_code == 404
    # The token outlives the account but no longer authenticates
    assert client.get(f"{API}/auth/me", headers=user["headers"]).status_code == 401


def test_renaming_yourself_requires_a_new_login(client, make_user):
    me = make_user("oldname")

    response = client.put(f"{API}/users/{me['id']}", json={"username": "newname"}, headers=me["headers"])
    assert response.status_code == 200
    assert response.json()["username"] == "newname"

    assert client.get(f"{API}/auth/me", headers=me["headers"]).status_code == 401

    login = client.post(f"{API}/auth/login", json={"username": "newname", "password": "secret123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['token']}"}
    assert client.get(f"{API}/auth/me", headers=headers).json()["username"] == "newname"
