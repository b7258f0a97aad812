import pytest


@pytest.fixture
def task(client, headers):
    tasks = client.get("/api/tasks", params={"language": "python", "difficulty": "beginner"}, headers=headers).json()
    assert len(tasks) == 1
    return tasks[0]


def test_list_tasks_with_status(client, headers):
    tasks = client.get("/api/tasks", headers=headers).json()
    assert len(tasks) == 4
    assert {t["status"] for t in tasks} == {"not_started"}
    assert all("solution" not in t for t in tasks)


def test_get_task_and_missing_task(client, headers, task):
    detail = client.get(f"/api/tasks/{task['id']}", headers=headers).json()
    assert detail["title"] == "Reverse a String"
    assert detail["test_cases"]
    assert client.get("/api/tasks/missing", headers=headers).status_code == 404


def test_in_progress_counts_attempts(client, headers, task):
    for _ in range(2):
        r = client.post("/api/tasks/progress", json={"task_id": task["id"], "status": "in_progress"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["attempts"] == 2
    assert r.json()["status"] == "in_progress"
    assert client.get(f"/api/tasks/{task['id']}", headers=headers).json()["status"] == "in_progress"


def test_complete_task_is_counted_once(client, headers, task):
    for _ in range(3):
        r = client.post("/api/tasks/complete", json={"task_id": task["id"]}, headers=headers)
        assert r.status_code == 200
        assert r.json()["status"] == "completed"
        assert r.json()["completed_at"] is not None

    assert client.get("/api/stats/me", headers=headers).json()["tasks_completed"] == 1
    progress = {p["language"]: p for p in client.get("/api/stats/languages", headers=headers).json()}
    assert progress["python"]["tasks_completed"] == 1


def test_completed_task_stays_completed(client, headers, task):
    client.post(
        "/api/tasks/progress",
        json={"task_id": task["id"], "status": "completed", "chat_session_id": "s1"},
        headers=headers,
    )
    r = client.post("/api/tasks/progress", json={"task_id": task["id"], "status": "in_progress"}, headers=headers)
    assert r.json()["status"] == "completed"
    assert r.json()["chat_session_id"] == "s1"
    assert client.get("/api/stats/me", headers=headers).json()["tasks_completed"] == 1


def test_progress_on_missing_task(client, headers):
    r = client.post("/api/tasks/progress", json={"task_id": "missing", "status": "in_progress"}, headers=headers)
    assert r.status_code == 404
