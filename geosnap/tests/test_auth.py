from uuid import uuid4


def test_register_login_me_happy_path(client):
    name = f"user_{uuid4().hex[:8]}"
    email = f"{name}@example.com"

    r = client.post("/api/auth/register",
                    json={"username": name, "email": email, "password": "secret123"})
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["email"] == email
    assert body["token"]

    r = client.post(
        "/api/auth/login", json={"email": email, "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["token"]

    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    me = r.json()["user"]
    assert me["email"] == email
    assert me["username"] == name
    assert me["created_at"]


def test_register_rejects_short_password(client):
    name = f"user_{uuid4().hex[:8]}"
    r = client.post("/api/auth/register",
                    json={"username": name, "email": f"{name}@example.com", "password": "123"})
    assert r.status_code == 400


def test_register_rejects_duplicate_username_or_email(client, make_user):
    user, _ = make_user()
    r = client.post("/api/auth/register", json={
        "username": user["username"], "email": "other@example.com", "password": "secret123"})
    assert r.status_code == 400
    r = client.post("/api/auth/register", json={
        "username": "someone_else_" + uuid4().hex[:6], "email": user["email"],
        "password": "secret123"})
    assert r.status_code == 400


def test_login_wrong_password(client, make_user):
    user, _ = make_user()
    r = client.post("/api/auth/login",
                    json={"email": user["email"], "password": "nope-nope"})
    assert r.status_code == 401


def test_me_requires_valid_token(client):
    r = client.get("/api/auth/me")
    assert r.status_code in (401, 403)
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_update_profile(client, make_user):
    _, headers = make_user()
    other, _ = make_user()

    r = client.put("/api/auth/me", headers=headers,
                   json={"username": other["username"]})
    assert r.status_code == 400

    new_name = f"renamed_{uuid4().hex[:6]}"
    r = client.put("/api/auth/me", headers=headers,
                   json={"username": new_name, "avatar": "https://img.example/a.png"})
    assert r.status_code == 200
    assert r.json()["user"]["username"] == new_name
    assert r.json()["user"]["avatar"] == "https://img.example/a.png"
