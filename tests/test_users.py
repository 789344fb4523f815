import sqlite3

import pytest


def stored_hash(client, user_id):
    conn = sqlite3.connect(client.app.state.db.path)
    try:
        return conn.execute("SELECT password_hash FROM users WHERE id = ?", (user_id,)).fetchone()[0]
    finally:
        conn.close()


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


def test_create_user_scenario(client):
    resp = client.post("/api/users", json={"username": "alice", "password": "Secret1!", "role": "staff"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] == 1
    assert data["username"] == "alice"
    assert data["role"] == "staff"
    assert data["created_at"]
    assert set(data) == {"id", "username", "role", "created_at"}

    again = client.post("/api/users", json={"username": "alice", "password": "Other1!", "role": "admin"})
    assert again.status_code == 409
    assert again.json() == {"message": "Username already exists."}


def test_duplicate_does_not_alter_existing_user(client, create_user):
    user = create_user("alice", "Secret1!", "staff")
    original_hash = stored_hash(client, user["id"])

    client.post("/api/users", json={"username": "alice", "password": "Other1!", "role": "admin"})

    assert stored_hash(client, user["id"]) == original_hash
    assert client.get("/api/users").json() == [user]
    assert login(client, "alice", "Secret1!").status_code == 200


def test_usernames_are_case_sensitive(client, create_user):
    create_user("alice")
    create_user("Alice")
    assert len(client.get("/api/users").json()) == 2


def test_password_is_stored_hashed(client, create_user):
    user = create_user("alice", "Secret1!", "staff")
    hashed = stored_hash(client, user["id"])
    assert hashed != "Secret1!"
    assert hashed.startswith("$2b$")


@pytest.mark.parametrize(
    "body",
    [
        {"password": "Secret1!", "role": "staff"},
        {"username": "alice", "role": "staff"},
        {"username": "alice", "password": "Secret1!"},
        {"username": "", "password": "Secret1!", "role": "staff"},
        {},
    ],
)
def test_create_requires_all_fields(client, body):
    resp = client.post("/api/users", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Username, password, and role are required."}
    assert client.get("/api/users").json() == []


def test_list_users_newest_first_without_hash(client, create_user):
    names = ["superadmin", "admin", "alice"]
    for name in names:
        create_user(name)

    resp = client.get("/api/users")
    assert resp.status_code == 200
    users = resp.json()
    assert [u["username"] for u in users] == list(reversed(names))
    for user in users:
        assert "password_hash" not in user
        assert "password" not in user


def test_update_role_without_password_keeps_hash(client, create_user):
    user = create_user("alice", "Secret1!", "staff")
    original_hash = stored_hash(client, user["id"])

    resp = client.put(f"/api/users/{user['id']}", json={"username": "alice", "role": "admin"})
    assert resp.status_code == 200
    assert resp.json() == {**user, "role": "admin"}

    assert stored_hash(client, user["id"]) == original_hash
    assert login(client, "alice", "Secret1!").json()["user"]["role"] == "admin"


def test_update_with_password_rehashes(client, create_user):
    user = create_user("alice", "Secret1!", "staff")

    resp = client.put(
        f"/api/users/{user['id']}",
        json={"username": "alice2", "password": "NewPass1!", "role": "staff"},
    )
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice2"

    assert login(client, "alice2", "Secret1!").status_code == 401
    assert login(client, "alice2", "NewPass1!").status_code == 200


def test_update_keeping_own_username(client, create_user):
    user = create_user("alice", "Secret1!", "staff")
    resp = client.put(f"/api/users/{user['id']}", json={"username": "alice", "role": "staff", "password": ""})
    assert resp.status_code == 200


def test_update_to_taken_username_conflicts(client, create_user):
    create_user("alice")
    bob = create_user("bob")

    resp = client.put(f"/api/users/{bob['id']}", json={"username": "alice", "role": "staff"})
    assert resp.status_code == 409
    assert resp.json() == {"message": "Username already taken by another user."}
    assert [u["username"] for u in client.get("/api/users").json()] == ["bob", "alice"]


def test_update_requires_username_and_role(client, create_user):
    user = create_user("alice")
    resp = client.put(f"/api/users/{user['id']}", json={"username": "alice"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Username and role are required."}


def test_update_unknown_user(client):
    resp = client.put("/api/users/42", json={"username": "ghost", "role": "staff"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "User not found"}


def test_delete_user(client, create_user):
    user = create_user("alice", "Secret1!", "staff")

    resp = client.delete(f"/api/users/{user['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "User deleted successfully"}

    assert client.get("/api/users").json() == []
    assert login(client, "alice", "Secret1!").status_code == 401
    assert client.delete(f"/api/users/{user['id']}").status_code == 404


def test_store_failure_on_create(client):
    client.app.state.db.close()
    resp = client.post("/api/users", json={"username": "alice", "password": "Secret1!", "role": "staff"})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to create user."}
