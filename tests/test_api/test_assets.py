"""API tests for /api/assets and the asset CRUD endpoints."""


def _assign(client, item_type, item_id, target_type, target_id):
    return client.post("/api/assignments", json={
        "item_id": item_id, "item_type": item_type, "action": "assign",
        "target_type": target_type, "target_id": target_id,
    })


def test_create_computer(client, org):
    res = client.post("/api/computers", json={
        "serial": "ABC123", "model_id": org["model"]["id"], "hostname": "NB-01", "ram": "16 GB",
    })
    assert res.status_code == 201
    data = res.json()
    assert data["state"] == "InStorage"
    assert data["version"] == 1
    assert data["held_by_user_id"] is None


def test_create_computer_ignores_state(client, org):
    res = client.post("/api/computers", json={
        "serial": "ABC123", "model_id": org["model"]["id"], "state": "Assigned", "held_by_user_id": 1,
    })
    assert res.status_code == 201
    assert res.json()["state"] == "InStorage"
    assert res.json()["held_by_user_id"] is None


def test_duplicate_serial(client, org):
    client.post("/api/computers", json={"serial": "DUP-1", "model_id": org["model"]["id"]})
    res = client.post("/api/computers", json={"serial": "DUP-1", "model_id": org["model"]["id"]})
    assert res.status_code == 409
    assert res.json()["code"] == "duplicate"


def test_unknown_model(client, org):
    res = client.post("/api/devices", json={"serial": "MON-1", "model_id": 999})
    assert res.status_code == 404


def test_update_and_list_devices(client, org):
    dev = client.post("/api/devices", json={"serial": "MON-1", "model_id": org["model"]["id"]}).json()
    res = client.put(f"/api/devices/{dev['id']}", json={"location": "Bodega"})
    assert res.status_code == 200
    assert res.json()["location"] == "Bodega"
    assert res.json()["version"] == 2

    res = client.get("/api/devices?search=MON")
    assert res.json()["total"] == 1


def test_delete_held_asset_rejected(client, org):
    comp = client.post("/api/computers", json={"serial": "ABC123", "model_id": org["model"]["id"]}).json()
    _assign(client, "Computer", comp["id"], "User", org["user"]["id"])
    res = client.delete(f"/api/computers/{comp['id']}")
    assert res.status_code == 409
    assert res.json()["code"] == "entity_in_use"


def test_delete_keeps_history(client, org):
    line = client.post("/api/phone-lines", json={"number": "+56 9 1111 2222", "provider": "Entel"}).json()
    _assign(client, "PhoneLine", line["id"], "User", org["user"]["id"])
    client.post("/api/assignments", json={"item_id": line["id"], "item_type": "PhoneLine", "action": "unassign"})

    assert client.delete(f"/api/phone-lines/{line['id']}").status_code == 204
    assert client.get(f"/api/phone-lines/{line['id']}").status_code == 404
    entries = client.get("/api/assignments").json()["items"]
    assert len(entries) == 2
    assert entries[0]["asset"] is None


def test_list_assets_requires_filter(client):
    res = client.get("/api/assets")
    assert res.status_code == 400
    assert res.json()["code"] == "invalid_filter"


def test_list_assets_by_state(client, org):
    a = client.post("/api/computers", json={"serial": "A-1", "model_id": org["model"]["id"]}).json()
    b = client.post("/api/computers", json={"serial": "B-1", "model_id": org["model"]["id"]}).json()
    _assign(client, "Computer", a["id"], "User", org["user"]["id"])

    assigned = client.get("/api/assets?state=assigned").json()
    assert [x["serial"] for x in assigned] == ["A-1"]
    assert assigned[0]["held_by"] == "Javiera Pérez"
    available = client.get("/api/assets?state=available").json()
    assert [x["asset_id"] for x in available] == [b["id"]]


def test_list_assets_by_model_and_provider(client, org):
    client.post("/api/computers", json={"serial": "A-1", "model_id": org["model"]["id"]})
    client.post("/api/phone-lines", json={"number": "111", "provider": "Entel"})
    client.post("/api/phone-lines", json={"number": "222", "provider": "Movistar"})

    by_model = client.get(f"/api/assets?model_id={org['model']['id']}").json()
    assert [x["serial"] for x in by_model] == ["A-1"]
    by_provider = client.get("/api/assets?provider=Entel").json()
    assert [x["serial"] for x in by_provider] == ["111"]


def test_history_and_holder(client, org):
    comp = client.post("/api/computers", json={"serial": "ABC123", "model_id": org["model"]["id"]}).json()
    res = client.get(f"/api/assets/Computer/{comp['id']}/holder")
    assert res.json()["holder"] is None

    _assign(client, "Computer", comp["id"], "Department", org["dept"]["id"])
    holder = client.get(f"/api/assets/Computer/{comp['id']}/holder").json()["holder"]
    assert holder == {"id": org["dept"]["id"], "type": "Department", "name": "Informática"}

    client.post("/api/assignments", json={"item_id": comp["id"], "item_type": "Computer", "action": "unassign"})
    history = client.get(f"/api/assets/Computer/{comp['id']}/history").json()
    assert [h["action_type"] for h in history] == ["Assignment", "Return"]

    assert client.get("/api/assets/Computer/999/history").status_code == 404


def test_change_state(client, org):
    comp = client.post("/api/computers", json={"serial": "ABC123", "model_id": org["model"]["id"]}).json()
    res = client.put(f"/api/assets/Computer/{comp['id']}/state", json={"state": "UnderRepair"})
    assert res.status_code == 200
    assert res.json()["state"] == "UnderRepair"

    res = _assign(client, "Computer", comp["id"], "User", org["user"]["id"])
    assert res.status_code == 409
    assert res.json()["code"] == "asset_not_assignable"

    res = client.put(f"/api/assets/Computer/{comp['id']}/state", json={"state": "Assigned"})
    assert res.status_code == 409


def test_deleted_asset_id_not_reused(client, org):
    old = client.post("/api/computers", json={"serial": "OLD-1", "model_id": org["model"]["id"]}).json()
    _assign(client, "Computer", old["id"], "User", org["user"]["id"])
    client.post("/api/assignments", json={"item_id": old["id"], "item_type": "Computer", "action": "unassign"})
    assert client.delete(f"/api/computers/{old['id']}").status_code == 204

    new = client.post("/api/computers", json={"serial": "NEW-1", "model_id": org["model"]["id"]}).json()
    assert new["id"] != old["id"]
    assert client.get(f"/api/assets/Computer/{new['id']}/history").json() == []
    assert client.get(f"/api/assets/Computer/{new['id']}/holder").json()["holder"] is None


def test_list_assets_by_camel_case_model_id(client, org):
    client.post("/api/computers", json={"serial": "A-1", "model_id": org["model"]["id"]})
    res = client.get(f"/api/assets?modelId={org['model']['id']}")
    assert res.status_code == 200
    assert [x["serial"] for x in res.json()] == ["A-1"]


def test_phone_line_providers(client):
    for number, provider in (("111", "Movistar"), ("222", "Entel"), ("333", "Movistar")):
        client.post("/api/phone-lines", json={"number": number, "provider": provider})
    res = client.get("/api/phone-lines/providers")
    assert res.status_code == 200
    assert res.json() == ["Entel", "Movistar"]
