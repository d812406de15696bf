def test_get_day_with_tasks(client, day_id):
    client.post("/api/tasks", json={"dayId": day_id, "content": "first"})
    client.post("/api/tasks", json={"dayId": day_id, "content": "second"})

    r = client.get(f"/api/days/{day_id}")
    assert r.status_code == 200
    day = r.get_json()
    assert day["dayNumber"] == 5
    assert day["date"] == "2024-01-05"
    assert day["isCompleted"] is False
    assert [t["content"] for t in day["tasks"]] == ["first", "second"]


def test_get_missing_day(client):
    r = client.get("/api/days/424242")
    assert r.status_code == 404
    assert r.get_json() == {"message": "Day not found"}


def test_update_day_partial(client, day_id):
    r = client.put(f"/api/days/{day_id}", json={"isCompleted": True, "notes": "good day"})
    assert r.status_code == 200
    day = r.get_json()
    assert day["isCompleted"] is True
    assert day["notes"] == "good day"
    assert day["goal"] == ""
    assert day["dayNumber"] == 5


def test_update_day_ignores_cycle_id(client, year, day_id):
    r = client.put(f"/api/days/{day_id}", json={"cycleId": year[1]["id"], "goal": "focus"})
    assert r.status_code == 200
    assert r.get_json()["cycleId"] == year[0]["id"]
    assert r.get_json()["goal"] == "focus"


def test_update_day_rejects_string_bool(client, day_id):
    r = client.put(f"/api/days/{day_id}", json={"isCompleted": "yes"})
    assert r.status_code == 400
    assert r.get_json()["field"] == "isCompleted"


def test_update_missing_day(client):
    r = client.put("/api/days/424242", json={"goal": "x"})
    assert r.status_code == 404
    assert r.get_json() == {"message": "Day not found"}


def test_create_task_example(client, day_id):
    r = client.post("/api/tasks", json={"dayId": day_id, "content": "Read 10 pages", "isCompleted": False})
    assert r.status_code == 201
    task = r.get_json()
    assert isinstance(task["id"], int)
    assert task["dayId"] == day_id

    r = client.put(f"/api/tasks/{task['id']}", json={"isCompleted": True})
    assert r.status_code == 200
    assert r.get_json()["isCompleted"] is True
    assert r.get_json()["content"] == "Read 10 pages"


def test_create_task_defaults_incomplete(client, day_id):
    r = client.post("/api/tasks", json={"dayId": day_id, "content": "x"})
    assert r.get_json()["isCompleted"] is False


def test_create_task_requires_content(client, day_id):
    r = client.post("/api/tasks", json={"dayId": day_id, "content": ""})
    assert r.status_code == 400
    assert r.get_json()["field"] == "content"

    r = client.post("/api/tasks", json={"dayId": day_id})
    assert r.status_code == 400
    assert r.get_json()["field"] == "content"


def test_create_task_requires_day_id(client):
    r = client.post("/api/tasks", json={"content": "orphan"})
    assert r.status_code == 400
    assert r.get_json()["field"] == "dayId"


def test_create_task_without_body(client):
    r = client.post("/api/tasks")
    assert r.status_code == 400


def test_task_appears_in_cycle(client, year, day_id):
    task = client.post("/api/tasks", json={"dayId": day_id, "content": "Walk"}).get_json()

    cycle = client.get(f"/api/cycles/{year[0]['id']}").get_json()
    owner = next(d for d in cycle["days"] if d["id"] == day_id)
    assert owner["tasks"] == [task]
    others = [d for d in cycle["days"] if d["id"] != day_id]
    assert all(d["tasks"] == [] for d in others)


def test_update_task_cannot_move_day(client, year, day_id):
    task = client.post("/api/tasks", json={"dayId": day_id, "content": "Stay"}).get_json()
    r = client.put(f"/api/tasks/{task['id']}", json={"dayId": day_id + 1})
    assert r.status_code == 200
    assert r.get_json()["dayId"] == day_id


def test_update_task_rejects_null_content(client, day_id):
    task = client.post("/api/tasks", json={"dayId": day_id, "content": "Keep"}).get_json()
    r = client.put(f"/api/tasks/{task['id']}", json={"content": None})
    assert r.status_code == 400
    assert r.get_json()["field"] == "content"


def test_update_missing_task(client):
    r = client.put("/api/tasks/999", json={"isCompleted": True})
    assert r.status_code == 404
    assert r.get_json() == {"message": "Task not found"}


def test_delete_task_is_idempotent(client, day_id):
    task = client.post("/api/tasks", json={"dayId": day_id, "content": "Gone"}).get_json()

    r = client.delete(f"/api/tasks/{task['id']}")
    assert r.status_code == 204
    r = client.delete(f"/api/tasks/{task['id']}")
    assert r.status_code == 204

    assert client.get(f"/api/days/{day_id}").get_json()["tasks"] == []


def test_delete_keeps_sibling_ids(client, day_id):
    ids = [
        client.post("/api/tasks", json={"dayId": day_id, "content": c}).get_json()["id"]
        for c in ("a", "b", "c")
    ]
    client.delete(f"/api/tasks/{ids[1]}")

    tasks = client.get(f"/api/days/{day_id}").get_json()["tasks"]
    assert [t["id"] for t in tasks] == [ids[0], ids[2]]


def test_create_task_rejects_malformed_json(client, day_id):
    r = client.post("/api/tasks", data="{not json", content_type="application/json")
    assert r.status_code == 400
    assert "field" not in r.get_json()
    assert client.get(f"/api/days/{day_id}").get_json()["tasks"] == []


def test_update_task_rejects_malformed_json(client, day_id):
    task = client.post("/api/tasks", json={"dayId": day_id, "content": "Keep"}).get_json()
    r = client.put(f"/api/tasks/{task['id']}", data="{not json", content_type="application/json")
    assert r.status_code == 400

    tasks = client.get(f"/api/days/{day_id}").get_json()["tasks"]
    assert tasks == [task]
