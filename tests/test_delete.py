# tests/test_delete.py

"""
Tests for /api/delete-user and /api/delete-society.
"""

from fastapi.testclient import TestClient

from tests.fake_supabase import FakeAPIError, FakeAuthError


# ============================================================
# DELETE USER
# ============================================================
def test_delete_user_removes_identity_profile_and_request(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("res@greenmeadows.in", role="resident", society_id=society["id"])
    store.seed_row("resident_requests", email="res@greenmeadows.in", society_id=society["id"], status="approved")
    store.seed_row("resident_requests", email="other@greenmeadows.in", society_id=society["id"], status="pending")

    response = client.post(
        "/api/delete-user",
        json={"userId": user_id, "email": "res@greenmeadows.in", "role": "resident"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert user_id not in store.users
    assert store.profile(user_id) is None
    assert store.rows("resident_requests", email="res@greenmeadows.in") == []
    assert len(store.rows("resident_requests", email="other@greenmeadows.in")) == 1


def test_delete_watchman_purges_watchman_requests(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("guard@greenmeadows.in", role="watchman", society_id=society["id"])
    store.seed_row("watchman_requests", email="guard@greenmeadows.in", status="approved")
    store.seed_row("resident_requests", email="guard@greenmeadows.in", status="pending")

    client.post(
        "/api/delete-user",
        json={"userId": user_id, "email": "guard@greenmeadows.in", "role": "Watchman"},
        headers=admin_headers,
    )

    assert store.rows("watchman_requests", email="guard@greenmeadows.in") == []
    assert len(store.rows("resident_requests", email="guard@greenmeadows.in")) == 1


def test_delete_user_without_email_skips_requests(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("res@greenmeadows.in", role="resident", society_id=society["id"])

    client.post("/api/delete-user", json={"userId": user_id, "role": "resident"}, headers=admin_headers)

    assert ("resident_requests", "delete") not in store.calls


def test_delete_unknown_user_is_success(client: TestClient, admin_headers):
    response = client.post("/api/delete-user", json={"userId": "does-not-exist"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_delete_user_twice(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("res@greenmeadows.in", role="resident", society_id=society["id"])

    first = client.post("/api/delete-user", json={"userId": user_id}, headers=admin_headers)
    second = client.post("/api/delete-user", json={"userId": user_id}, headers=admin_headers)

    assert first.status_code == 200
    assert second.status_code == 200


def test_delete_user_other_auth_error_aborts(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("res@greenmeadows.in", role="resident", society_id=society["id"])
    store.auth.admin.fail_delete[user_id] = FakeAuthError("User not allowed", 403)

    response = client.post("/api/delete-user", json={"userId": user_id}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "User not allowed"
    assert store.profile(user_id) is not None


def test_delete_user_cleanup_failures_are_ignored(client: TestClient, store, society, admin_headers):
    user_id, _ = store.seed_user("res@greenmeadows.in", role="resident", society_id=society["id"])
    store.failures[("profiles", "delete")] = FakeAPIError("timeout")
    store.failures[("resident_requests", "delete")] = FakeAPIError("timeout")

    response = client.post(
        "/api/delete-user",
        json={"userId": user_id, "email": "res@greenmeadows.in", "role": "resident"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert user_id not in store.users


def test_delete_user_missing_id(client: TestClient, store, admin_headers):
    response = client.post("/api/delete-user", json={"email": "x@y.com"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId"
    assert store.store_calls() == []


def test_delete_user_unknown_role_is_400(client: TestClient, store, admin_headers):
    response = client.post("/api/delete-user", json={"userId": "u", "role": "janitor"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid role"


# ============================================================
# DELETE SOCIETY
# ============================================================
def test_delete_society_removes_members_then_society(client: TestClient, store, admin_headers):
    doomed = store.seed_row("societies", name="Doomed", status="approved")
    kept = store.seed_row("societies", name="Kept", status="approved")
    member_ids = [
        store.seed_user(f"m{i}@greenmeadows.in", role="resident", society_id=doomed["id"])[0]
        for i in range(3)
    ]
    survivor, _ = store.seed_user("s@greenmeadows.in", role="resident", society_id=kept["id"])

    response = client.post("/api/delete-society", json={"societyId": doomed["id"]}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedUsers": 3}
    assert store.rows("profiles", society_id=doomed["id"]) == []
    assert store.rows("societies", id=doomed["id"]) == []
    assert all(m not in store.users for m in member_ids)
    assert survivor in store.users
    assert store.profile(survivor) is not None


def test_delete_society_profiles_go_before_society_row(client: TestClient, store, admin_headers):
    doomed = store.seed_row("societies", name="Doomed", status="approved")
    store.seed_user("m@greenmeadows.in", role="resident", society_id=doomed["id"])

    client.post("/api/delete-society", json={"societyId": doomed["id"]}, headers=admin_headers)

    calls = store.store_calls()
    assert calls.index(("auth", "delete_user")) < calls.index(("societies", "delete"))
    assert calls.index(("profiles", "delete")) < calls.index(("societies", "delete"))


def test_delete_society_skips_failed_member(client: TestClient, store, admin_headers):
    doomed = store.seed_row("societies", name="Doomed", status="approved")
    stuck, _ = store.seed_user("stuck@greenmeadows.in", role="resident", society_id=doomed["id"])
    gone, _ = store.seed_user("gone@greenmeadows.in", role="resident", society_id=doomed["id"])
    store.auth.admin.fail_delete[stuck] = FakeAuthError("upstream timeout", 504)

    response = client.post("/api/delete-society", json={"societyId": doomed["id"]}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["deletedUsers"] == 1
    assert stuck in store.users
    assert gone not in store.users


def test_delete_society_failure_after_members_deleted(client: TestClient, store, admin_headers):
    """Members are already gone even though the request reports failure."""
    doomed = store.seed_row("societies", name="Doomed", status="approved")
    member, _ = store.seed_user("m@greenmeadows.in", role="resident", society_id=doomed["id"])
    store.failures[("societies", "delete")] = FakeAPIError("permission denied for table societies")

    response = client.post("/api/delete-society", json={"societyId": doomed["id"]}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "permission denied for table societies"
    assert member not in store.users
    assert len(store.rows("societies", id=doomed["id"])) == 1


def test_delete_empty_society(client: TestClient, store, admin_headers):
    empty = store.seed_row("societies", name="Empty", status="pending")

    response = client.post("/api/delete-society", json={"societyId": empty["id"]}, headers=admin_headers)

    assert response.json() == {"success": True, "deletedUsers": 0}


def test_delete_society_missing_id(client: TestClient, store, admin_headers):
    response = client.post("/api/delete-society", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Missing societyId"
    assert store.store_calls() == []
