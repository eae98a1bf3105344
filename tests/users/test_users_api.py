"""Admin user listing."""


def test_admin_lists_users_with_full_records(client, admin, reader) -> None:
    resp = client.get("/api/users", headers=admin.headers)
    assert resp.status_code == 200
    users = resp.get_json()
    assert {u["id"] for u in users} == {admin.id, reader.id}
    listed = next(u for u in users if u["id"] == reader.id)
    assert listed["email"] == reader.email
    assert listed["role"] == "user"
    assert listed["password"].startswith("pbkdf2:sha256")
    assert listed["createdAt"]


def test_listing_is_not_cached(client, admin) -> None:
    resp = client.get("/api/users", headers=admin.headers)
    assert "no-store" in resp.headers["Cache-Control"]


def test_non_admins_are_forbidden(client, manager, reader) -> None:
    for user in (manager, reader):
        resp = client.get("/api/users", headers=user.headers)
        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Forbidden: Admin access required to perform this action."}


def test_listing_requires_token(client) -> None:
    assert client.get("/api/users").status_code == 401
