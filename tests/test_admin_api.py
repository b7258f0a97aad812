import json


def test_admin_routes_require_admin(client, headers):
    r = client.get("/api/admin/dashboard", headers=headers)
    assert r.status_code == 403
    assert r.json()["code"] == "FORBIDDEN"


def test_dashboard_stats(client, onboarded_headers, admin_headers):
    for text in ["fix my bug", "another bug"]:
        client.post("/api/chat/messages", json={"message": text}, headers=onboarded_headers)

    stats = client.get("/api/admin/dashboard", headers=admin_headers).json()
    assert stats["users"]["total"] == 2
    assert stats["users"]["new_24h"] == 2
    assert stats["users"]["active_7d"] == 1
    assert stats["messages"] == {"total": 4, "user_messages": 2, "last_24h": 4}
    assert stats["sessions"]["total"] == 2
    assert stats["analytics"]["question_type_distribution"] == {"Code Debugging": 2}
    assert stats["analytics"]["avg_response_time"] >= 0


def test_users_page_and_search(client, onboarded_headers, admin_headers, make_headers):
    client.post("/api/chat/messages", json={"message": "hello"}, headers=onboarded_headers)
    client.get("/api/auth/role", headers=make_headers("user_3", "third@example.com"))

    page = client.get("/api/admin/users", params={"limit": 2}, headers=admin_headers).json()
    assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}
    assert len(page["users"]) == 2

    found = client.get("/api/admin/users", params={"search": "learner"}, headers=admin_headers).json()
    assert [u["id"] for u in found["users"]] == ["user_1"]
    assert found["users"][0]["message_count"] == 2
    assert found["users"][0]["session_count"] == 1


def test_block_and_unblock(client, headers, admin_headers):
    client.get("/api/auth/role", headers=headers)
    r = client.post("/api/admin/users/blocked", json={"user_id": "user_1", "blocked": True}, headers=admin_headers)
    assert r.json() == {"is_blocked": True}

    blocked = client.get("/api/profile", headers=headers)
    assert blocked.status_code == 403
    assert client.get("/api/auth/blocked", headers=headers).json() == {"is_blocked": True}

    client.post("/api/admin/users/blocked", json={"user_id": "user_1", "blocked": False}, headers=admin_headers)
    assert client.get("/api/profile", headers=headers).status_code == 200


def test_cannot_block_admin_or_missing_user(client, admin_headers):
    client.get("/api/auth/role", headers=admin_headers)
    r = client.post("/api/admin/users/blocked", json={"user_id": "admin_1", "blocked": True}, headers=admin_headers)
    assert r.status_code == 403
    r = client.post("/api/admin/users/blocked", json={"user_id": "ghost", "blocked": True}, headers=admin_headers)
    assert r.status_code == 404


def test_export_formats(client, onboarded_headers, admin_headers):
    client.post("/api/chat/messages", json={"message": "export me"}, headers=onboarded_headers)

    exported = client.post("/api/admin/export", json={"format": "json"}, headers=admin_headers).json()
    assert exported["mime_type"] == "application/json"
    assert exported["filename"].endswith(".json")
    data = json.loads(exported["data"])
    learner = next(u for u in data["users"] if u["id"] == "user_1")
    assert learner["stats"]["questions_asked"] == 1
    assert [m["content"] for m in learner["messages"]][0] == "export me"

    markdown = client.post("/api/admin/export", json={"format": "markdown"}, headers=admin_headers).json()
    assert markdown["filename"].endswith(".md")
    assert "## User user_1" in markdown["data"]

    txt = client.post("/api/admin/export", json={"format": "txt"}, headers=admin_headers).json()
    assert txt["mime_type"] == "text/plain"
    assert "user: export me" in txt["data"]

    assert client.post("/api/admin/export", json={"format": "pdf"}, headers=admin_headers).status_code == 422
