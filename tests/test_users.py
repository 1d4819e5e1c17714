def test_user_cannot_manage_users(user_client):
    assert user_client.get("/api/users").status_code == 403
    assert user_client.post("/api/users", json={}).status_code == 403


def test_admin_lists_users_without_passwords(admin_client):
    response = admin_client.get("/api/users")
    assert response.status_code == 200
    users = response.get_json()["users"]
    assert [u["username"] for u in users] == ["admin"]
    assert "password" not in users[0]


def test_admin_creates_and_updates_user(admin_client):
    created = admin_client.post("/api/users", json={
        "username": "sgt",
        "email": "sgt@police.gov",
        "password": "sergeant1",
        "firstName": "Sam",
        "lastName": "Grant",
        "role": "admin",
    })
    assert created.status_code == 201
    user_id = created.get_json()["user"]["id"]

    updated = admin_client.put(f"/api/users/{user_id}", json={"department": "Traffic"})
    assert updated.status_code == 200
    assert updated.get_json()["user"]["department"] == "Traffic"

    clash = admin_client.put(f"/api/users/{user_id}", json={"username": "admin"})
    assert clash.status_code == 409


def test_admin_account_cannot_be_deleted(admin_client):
    admin_id = admin_client.get("/api/auth/me").get_json()["user"]["id"]
    response = admin_client.delete(f"/api/users/{admin_id}")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Cannot delete admin account"


def test_delete_user(admin_client, make_user):
    user = make_user("cadet")
    assert admin_client.delete(f"/api/users/{user['_id']}").status_code == 200
    assert admin_client.delete(f"/api/users/{user['_id']}").status_code == 404


def test_admin_account_cannot_be_renamed(admin_client):
    admin_id = admin_client.get("/api/auth/me").get_json()["user"]["id"]

    renamed = admin_client.put(f"/api/users/{admin_id}", json={"username": "admin2"})
    assert renamed.status_code == 400
    assert renamed.get_json()["message"] == "Cannot rename admin account"

    assert admin_client.put(f"/api/users/{admin_id}", json={"username": "admin", "department": "HQ"}).status_code == 200
    assert admin_client.delete(f"/api/users/{admin_id}").status_code == 400
