from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from repositories.user_repository import UserRepository

USERS = "/api/v1/users"


def _payload(**overrides) -> dict:
    payload = {
        "username": "integrationuser",
        "email": "integration@example.com",
        "environment": "test",
        "active": True,
    }
    payload.update(overrides)
    return payload


def test_create_user_persists_record(client: TestClient, db_session) -> None:
    response = client.post(USERS, json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["username"] == "integrationuser"
    assert body["email"] == "integration@example.com"
    assert body["environment"] == "test"
    assert body["active"] is True
    assert body["created_at"]

    repo = UserRepository(db_session)
    assert repo.count() == 1
    saved = repo.get_all()[0]
    assert saved.username == "integrationuser"
    assert saved.email == "integration@example.com"


def test_create_user_without_environment_uses_running_environment(client: TestClient) -> None:
    response = client.post(USERS, json={"username": "plain", "email": "plain@example.com"})

    assert response.status_code == 201
    assert response.json()["environment"] == "test"
    assert response.json()["active"] is True


def test_create_user_rejects_invalid_input(client: TestClient, db_session) -> None:
    response = client.post(USERS, json={"username": "", "email": "invalid-email"})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert UserRepository(db_session).count() == 0


def test_create_user_rejects_blank_username(client: TestClient, db_session) -> None:
    response = client.post(USERS, json=_payload(username="   "))

    assert response.status_code == 400
    assert UserRepository(db_session).count() == 0


def test_create_user_requires_username_and_email(client: TestClient) -> None:
    assert client.post(USERS, json={"email": "only@example.com"}).status_code == 400
    assert client.post(USERS, json={"username": "only"}).status_code == 400


def test_create_user_conflicts_on_duplicate(client: TestClient, db_session) -> None:
    assert client.post(USERS, json=_payload()).status_code == 201

    same_username = client.post(USERS, json=_payload(email="other@example.com"))
    same_email = client.post(USERS, json=_payload(username="other"))

    assert same_username.status_code == 409
    assert "username" in same_username.json()["detail"]
    assert same_email.status_code == 409
    assert "email" in same_email.json()["detail"]
    assert UserRepository(db_session).count() == 1


def test_get_user(client: TestClient, user_factory) -> None:
    user = user_factory("integrationuser", "integration@example.com")

    response = client.get(f"{USERS}/{user.id}")

    assert response.status_code == 200
    assert response.json()["id"] == user.id
    assert response.json()["username"] == "integrationuser"
    assert response.json()["email"] == "integration@example.com"


def test_get_unknown_user_returns_404(client: TestClient) -> None:
    assert client.get(f"{USERS}/999").status_code == 404


def test_list_users(client: TestClient, user_factory) -> None:
    user_factory("testuser")
    user_factory("testuser2")

    response = client.get(USERS)

    assert response.status_code == 200
    assert [u["username"] for u in response.json()] == ["testuser", "testuser2"]


def test_update_user_persists_changes(client: TestClient, user_factory, db_session) -> None:
    user = user_factory("integrationuser", "integration@example.com")
    original = client.get(f"{USERS}/{user.id}").json()

    response = client.put(
        f"{USERS}/{user.id}",
        json=_payload(username="updateduser", email="updated@example.com"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "updateduser"
    assert body["email"] == "updated@example.com"
    assert body["created_at"] == original["created_at"]

    db_session.expire_all()
    stored = UserRepository(db_session).get(user.id)
    assert stored.username == "updateduser"
    assert stored.email == "updated@example.com"


def test_partial_update_keeps_other_fields(client: TestClient, user_factory) -> None:
    user = user_factory("keepme", "keepme@example.com", environment="staging")

    response = client.put(f"{USERS}/{user.id}", json={"active": False})

    assert response.status_code == 200
    body = response.json()
    assert body["active"] is False
    assert body["username"] == "keepme"
    assert body["email"] == "keepme@example.com"
    assert body["environment"] == "staging"


def test_update_rejects_empty_body(client: TestClient, user_factory) -> None:
    user = user_factory("nobody")

    response = client.put(f"{USERS}/{user.id}", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "No fields to update"


def test_update_rejects_invalid_email(client: TestClient, user_factory) -> None:
    user = user_factory("mailer")

    assert client.put(f"{USERS}/{user.id}", json={"email": "not-an-email"}).status_code == 400


def test_update_conflicts_on_taken_email(client: TestClient, user_factory) -> None:
    user_factory("first", "first@example.com")
    second = user_factory("second", "second@example.com")

    response = client.put(f"{USERS}/{second.id}", json={"email": "first@example.com"})

    assert response.status_code == 409


def test_update_unknown_user_returns_404(client: TestClient) -> None:
    assert client.put(f"{USERS}/999", json=_payload()).status_code == 404


def test_delete_user(client: TestClient, user_factory, db_session) -> None:
    user = user_factory("integrationuser")
    repo = UserRepository(db_session)
    assert repo.count() == 1

    response = client.delete(f"{USERS}/{user.id}")

    assert response.status_code == 204
    assert response.content == b""
    assert repo.count() == 0
    assert client.get(f"{USERS}/{user.id}").status_code == 404
    assert client.delete(f"{USERS}/{user.id}").status_code == 404


def test_users_by_environment(client: TestClient, user_factory) -> None:
    user_factory("testuser1", environment="test")
    user_factory("produser", environment="prod")

    response = client.get(f"{USERS}/environment/test")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["environment"] == "test"
    assert body[0]["username"] == "testuser1"


def test_users_by_environment_and_status(client: TestClient, user_factory) -> None:
    user_factory("on", environment="dev")
    user_factory("off", environment="dev", active=False)

    response = client.get(f"{USERS}/environment/dev", params={"active": "false"})

    assert [u["username"] for u in response.json()] == ["off"]


def test_active_users(client: TestClient, user_factory) -> None:
    user_factory("on")
    user_factory("off", active=False)

    response = client.get(f"{USERS}/active")

    assert [u["username"] for u in response.json()] == ["on"]


def test_recent_active_users(client: TestClient, user_factory) -> None:
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    for offset in range(3):
        user_factory(f"user{offset}", created_at=start + timedelta(days=offset))

    response = client.get(f"{USERS}/recent", params={"limit": 2})

    assert response.status_code == 200
    assert [u["username"] for u in response.json()] == ["user2", "user1"]
    assert client.get(f"{USERS}/recent", params={"limit": 0}).status_code == 400


def test_activate_and_deactivate(client: TestClient, user_factory) -> None:
    user = user_factory("toggle")

    deactivated = client.put(f"{USERS}/{user.id}/deactivate")
    activated = client.put(f"{USERS}/{user.id}/activate")

    assert deactivated.status_code == 200
    assert deactivated.json()["active"] is False
    assert activated.json()["active"] is True
    assert client.put(f"{USERS}/999/activate").status_code == 404


def test_lookup_by_username_and_email(client: TestClient, user_factory) -> None:
    user = user_factory("finder", "finder@example.com")

    assert client.get(f"{USERS}/by-username/finder").json()["id"] == user.id
    assert client.get(f"{USERS}/by-email/finder@example.com").json()["id"] == user.id
    assert client.get(f"{USERS}/by-username/missing").status_code == 404
    assert client.get(f"{USERS}/by-email/missing@example.com").status_code == 404


def test_statistics(client: TestClient, user_factory) -> None:
    user_factory("a", environment="test")
    user_factory("b", environment="test", active=False)
    user_factory("c", environment="prod")

    response = client.get(f"{USERS}/statistics")

    assert response.status_code == 200
    assert response.json() == {
        "total_users": 3,
        "active_users": 2,
        "users_in_environment": 2,
        "active_users_in_environment": 1,
        "environment": "test",
    }


def test_email_is_stored_as_submitted(client: TestClient) -> None:
    created = client.post(USERS, json={"username": "mixed", "email": "Mixed.Case@Example.COM"})

    assert created.status_code == 201
    assert created.json()["email"] == "Mixed.Case@Example.COM"

    found = client.get(f"{USERS}/by-email/Mixed.Case@Example.COM")
    assert found.status_code == 200
    assert found.json()["id"] == created.json()["id"]

    duplicate = client.post(USERS, json={"username": "mixed2", "email": "Mixed.Case@Example.COM"})
    assert duplicate.status_code == 409
    assert "email" in duplicate.json()["detail"]


def test_update_keeps_submitted_email(client: TestClient, user_factory) -> None:
    user = user_factory("caser")

    response = client.put(f"{USERS}/{user.id}", json={"email": "Caser@Example.ORG"})

    assert response.json()["email"] == "Caser@Example.ORG"
    assert client.get(f"{USERS}/by-email/Caser@Example.ORG").json()["id"] == user.id


@pytest.mark.parametrize("user_id", ["0", "-1", str(2**70)])
def test_out_of_range_user_id_is_rejected(client: TestClient, user_id: str) -> None:
    assert client.get(f"{USERS}/{user_id}").status_code == 400
    assert client.put(f"{USERS}/{user_id}", json={"active": True}).status_code == 400
    assert client.put(f"{USERS}/{user_id}/activate").status_code == 400
    assert client.delete(f"{USERS}/{user_id}").status_code == 400


def test_service_errors_use_shared_error_body(client: TestClient, user_factory) -> None:
    user_factory("taken", "taken@example.com")
    other = user_factory("other", "other@example.com")

    missing = client.put(f"{USERS}/999", json={"active": False})
    conflict = client.put(f"{USERS}/{other.id}", json={"username": "taken"})
    gone = client.delete(f"{USERS}/999")

    assert missing.status_code == 404
    assert missing.json() == {"detail": "User not found: 999"}
    assert conflict.status_code == 409
    assert conflict.json() == {"detail": "User already exists with username: taken"}
    assert gone.json() == {"detail": "User not found: 999"}
