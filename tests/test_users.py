import uuid

import pytest

from models.user import Role


def _new_user(**overrides):
    payload = {
        "full_name": "Test User",
        "email": "testuser@local",
        "role": "Employee",
        "password": "secret-1",
    }
    payload.update(overrides)
    return payload


def test_users_crud_as_admin(client, headers):
    admin = headers[Role.ADMIN]

    res = client.post("/api/users", json=_new_user(), headers=admin)
    assert res.status_code == 201, res.text
    created = res.json()
    assert created["id"]
    assert "password_hash" not in created and "password" not in created
    assert res.headers["Location"].endswith(f"/api/users/{created['id']}")

    listed = client.get("/api/users", headers=admin).json()
    assert [u["id"] for u in listed].count(created["id"]) == 1

    res = client.put(
        f"/api/users/{created['id']}",
        json={"full_name": "Updated", "email": "Updated@Local", "role": "Manage"},
        headers=admin,
    )
    assert res.status_code == 204

    fetched = client.get(f"/api/users/{created['id']}", headers=admin).json()
    assert fetched == {
        "id": created["id"],
        "full_name": "Updated",
        "email": "updated@local",
        "role": "Manage",
    }

    assert client.delete(f"/api/users/{created['id']}", headers=admin).status_code == 204
    assert client.get(f"/api/users/{created['id']}", headers=admin).status_code == 404


def test_created_user_can_log_in(client, headers):
    client.post("/api/users", json=_new_user(email="New.Hire@Local"), headers=headers[Role.ADMIN])
    res = client.post("/api/auth/login", json={"email": "new.hire@local", "password": "secret-1"})
    assert res.status_code == 200


def test_update_without_password_keeps_it(client, headers):
    admin = headers[Role.ADMIN]
    user_id = client.post("/api/users", json=_new_user(), headers=admin).json()["id"]

    client.put(f"/api/users/{user_id}", json={"email": "testuser@local"}, headers=admin)
    res = client.post("/api/auth/login", json={"email": "testuser@local", "password": "secret-1"})
    assert res.status_code == 200

    client.put(
        f"/api/users/{user_id}",
        json={"email": "testuser@local", "password": "secret-2"},
        headers=admin,
    )
    res = client.post("/api/auth/login", json={"email": "testuser@local", "password": "secret-2"})
    assert res.status_code == 200


def test_update_resets_omitted_fields(client, headers):
    admin = headers[Role.ADMIN]
    user_id = client.post(
        "/api/users", json=_new_user(role="Manage"), headers=admin
    ).json()["id"]

    client.put(f"/api/users/{user_id}", json={"email": "testuser@local"}, headers=admin)

    fetched = client.get(f"/api/users/{user_id}", headers=admin).json()
    assert fetched["full_name"] == ""
    assert fetched["role"] == "Employee"


def test_client_supplied_id_is_ignored(client, headers):
    supplied = str(uuid.uuid4())
    res = client.post("/api/users", json=_new_user(id=supplied), headers=headers[Role.ADMIN])
    assert res.status_code == 201
    assert res.json()["id"] != supplied


def test_identities_are_unique(client, headers):
    ids = {
        client.post(
            "/api/users", json=_new_user(email=f"user{i}@local"), headers=headers[Role.ADMIN]
        ).json()["id"]
        for i in range(5)
    }
    assert len(ids) == 5


@pytest.mark.parametrize("role", [Role.MANAGE, Role.EMPLOYEE])
def test_only_admin_writes_users(client, headers, users, role):
    target = users[Role.EMPLOYEE].id
    assert client.post("/api/users", json=_new_user(), headers=headers[role]).status_code == 403
    assert client.put(
        f"/api/users/{target}", json={"email": "x@local"}, headers=headers[role]
    ).status_code == 403
    assert client.delete(f"/api/users/{target}", headers=headers[role]).status_code == 403


@pytest.mark.parametrize("role", list(Role))
def test_every_role_reads_users(client, headers, users, role):
    assert client.get("/api/users", headers=headers[role]).status_code == 200
    target = users[Role.ADMIN].id
    assert client.get(f"/api/users/{target}", headers=headers[role]).status_code == 200


def test_reads_require_identity(client, users):
    assert client.get("/api/users").status_code == 401
    assert client.get(f"/api/users/{users[Role.ADMIN].id}").status_code == 401


def test_duplicate_email_conflicts(client, headers):
    admin = headers[Role.ADMIN]
    res = client.post("/api/users", json=_new_user(email="ADMIN@demo.com"), headers=admin)
    assert res.status_code == 409

    user_id = client.post("/api/users", json=_new_user(), headers=admin).json()["id"]
    res = client.put(f"/api/users/{user_id}", json={"email": "manager@demo.com"}, headers=admin)
    assert res.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        _new_user(role="Owner"),
        _new_user(email=""),
        _new_user(password=""),
        {"full_name": "No email", "password": "x"},
    ],
)
def test_invalid_user_payload(client, headers, payload):
    assert client.post("/api/users", json=payload, headers=headers[Role.ADMIN]).status_code == 400


def test_get_unknown_user_is_not_found(client, headers):
    assert client.get(f"/api/users/{uuid.uuid4()}", headers=headers[Role.ADMIN]).status_code == 404


def test_get_by_id_is_repeatable(client, headers, users):
    url = f"/api/users/{users[Role.MANAGE].id}"
    first = client.get(url, headers=headers[Role.EMPLOYEE]).json()
    second = client.get(url, headers=headers[Role.EMPLOYEE]).json()
    assert first == second


def test_delete_twice_is_not_found(client, headers):
    admin = headers[Role.ADMIN]
    user_id = client.post("/api/users", json=_new_user(), headers=admin).json()["id"]
    assert client.delete(f"/api/users/{user_id}", headers=admin).status_code == 204
    assert client.delete(f"/api/users/{user_id}", headers=admin).status_code == 404


def test_user_referenced_by_task_cannot_be_deleted(client, headers, users):
    employee_id = str(users[Role.EMPLOYEE].id)
    res = client.post(
        "/api/tasks",
        json={"title": "Work", "assigned_to_user_id": employee_id},
        headers=headers[Role.MANAGE],
    )
    assert res.status_code == 201

    res = client.delete(f"/api/users/{employee_id}", headers=headers[Role.ADMIN])
    assert res.status_code == 409
    assert client.get(f"/api/users/{employee_id}", headers=headers[Role.ADMIN]).status_code == 200


def test_token_of_deleted_user_stops_working(client, headers):
    admin = headers[Role.ADMIN]
    user_id = client.post("/api/users", json=_new_user(), headers=admin).json()["id"]
    token = client.post(
        "/api/auth/login", json={"email": "testuser@local", "password": "secret-1"}
    ).json()["token"]

    client.delete(f"/api/users/{user_id}", headers=admin)

    res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_role_change_applies_to_existing_token(client, headers, users):
    manager_id = users[Role.MANAGE].id
    client.put(
        f"/api/users/{manager_id}",
        json={"full_name": "Manager", "email": "manager@demo.com", "role": "Employee"},
        headers=headers[Role.ADMIN],
    )
    res = client.post(
        "/api/tasks",
        json={"title": "Work", "assigned_to_user_id": str(manager_id)},
        headers=headers[Role.MANAGE],
    )
    assert res.status_code == 403
