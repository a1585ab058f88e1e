"""API tests for /api/dashboard and /health."""


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
    assert res.headers["X-Content-Type-Options"] == "nosniff"


def test_empty_dashboard(client):
    res = client.get("/api/dashboard")
    assert res.status_code == 200
    data = res.json()
    assert data["total_users"] == 0
    assert data["total_computers"] == 0
    assert data["department_stats"] == []
    assert data["recent_activity"] == []


def test_dashboard_counts(client, org):
    a = client.post("/api/computers", json={"serial": "A-1", "model_id": org["model"]["id"]}).json()
    client.post("/api/computers", json={"serial": "B-1", "model_id": org["model"]["id"]})
    client.post("/api/devices", json={"serial": "MON-1", "model_id": org["model"]["id"]})
    client.post("/api/assignments", json={"item_id": a["id"], "item_type": "Computer", "action": "assign",
                                          "target_type": "Department", "target_id": org["dept"]["id"]})

    data = client.get("/api/dashboard").json()
    assert data["total_users"] == 2
    assert data["total_devices"] == 1
    assert data["total_computers"] == 2
    assert data["assigned_computers"] == 1
    assert data["stored_computers"] == 1
    assert data["department_stats"] == [{"name": "Informática", "computers": 1, "users": 2, "percentage": 50.0}]

    activity = data["recent_activity"]
    assert len(activity) == 1
    assert activity[0]["type"] == "assignment"
    assert activity[0]["user"] == "Informática"
    assert activity[0]["device"] == "Dell Latitude 5420 (Serial: A-1)"


def test_recent_activity_limited(client, org):
    comp = client.post("/api/computers", json={"serial": "A-1", "model_id": org["model"]["id"]}).json()
    for _ in range(4):
        client.post("/api/assignments", json={"item_id": comp["id"], "item_type": "Computer", "action": "assign",
                                              "target_type": "User", "target_id": org["user"]["id"]})
        client.post("/api/assignments", json={"item_id": comp["id"], "item_type": "Computer", "action": "unassign"})

    activity = client.get("/api/dashboard").json()["recent_activity"]
    assert len(activity) == 5
    assert activity[0]["type"] == "return"
