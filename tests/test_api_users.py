from fastapi.testclient import TestClient


def _create(client: TestClient, name: str, email: str, role: str):
    return client.post("/users", json={"name": name, "email": email, "role": role})


def test_create_then_fetch_returns_same_fields(client):
    resp = _create(client, "Ada", "ada@example.com", "ENGINEER")
    assert resp.status_code == 201
    created = resp.json()
    assert created == {"id": 1, "name": "Ada", "email": "ada@example.com", "role": "ENGINEER"}

    fetched = client.get(f"/users/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_list_filters_by_role(client):
    _create(client, "Ada", "ada@example.com", "ENGINEER")
    _create(client, "Grace", "grace@example.com", "ADMIN")
    _create(client, "Linus", "linus@example.com", "ENGINEER")

    all_users = client.get("/users").json()
    assert len(all_users) == 3

    engineers = client.get("/users", params={"role": "ENGINEER"}).json()
    assert [u["name"] for u in engineers] == ["Ada", "Linus"]
    assert all(u["role"] == "ENGINEER" for u in engineers)


def test_unknown_role_filter_is_bad_request(client):
    resp = client.get("/users", params={"role": "CEO"})
    assert resp.status_code == 400
    assert resp.json()["path"] == "/users"


def test_patch_changes_only_supplied_fields(client):
    created = _create(client, "Ada", "ada@example.com", "INTERN").json()

    resp = client.patch(f"/users/{created['id']}", json={"role": "ADMIN"})
    assert resp.status_code == 200
    assert resp.json() == {**created, "role": "ADMIN"}


def test_patch_missing_user_is_not_found(client):
    resp = client.patch("/users/42", json={"name": "Nobody"})
    assert resp.status_code == 404
    body = resp.json()
    assert body["statusCode"] == 404
    assert body["message"] == "User Not Found"
    assert body["path"] == "/users/42"


def test_delete_twice(client):
    created = _create(client, "Ada", "ada@example.com", "ENGINEER").json()

    first = client.delete(f"/users/{created['id']}")
    assert first.status_code == 200
    assert first.json() == {"id": created["id"]}

    second = client.delete(f"/users/{created['id']}")
    assert second.status_code == 404


def test_missing_field_rejected_before_store(client, user_store):
    resp = client.post("/users", json={"name": "Ada", "role": "ENGINEER"})
    assert resp.status_code == 400
    assert any(msg.startswith("email:") for msg in resp.json()["message"])
    assert user_store.find_all() == []


def test_malformed_email_rejected_before_store(client, user_store):
    resp = _create(client, "Ada", "not-an-email", "ENGINEER")
    assert resp.status_code == 400
    assert any(msg.startswith("email:") for msg in resp.json()["message"])
    assert user_store.find_all() == []


def test_non_integer_id_is_bad_request(client):
    resp = client.get("/users/abc")
    assert resp.status_code == 400


def test_users_are_not_rate_limited(client, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "RATE_LIMIT_SHORT_REQUESTS", 1)
    for _ in range(5):
        assert client.get("/users").status_code == 200


def test_malformed_json_body_is_reported_against_body(client):
    resp = client.post(
        "/users",
        content='{"name": "Ada",',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    messages = resp.json()["message"]
    assert len(messages) == 1
    assert messages[0].startswith("body: ")
