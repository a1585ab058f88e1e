"""API tests for brands, models, management areas, departments and users."""


def test_brand_crud(client):
    res = client.post("/api/brands", json={"name": "Lenovo"})
    assert res.status_code == 201
    brand_id = res.json()["id"]
    assert client.post("/api/brands", json={"name": "lenovo"}).status_code == 409
    res = client.put(f"/api/brands/{brand_id}", json={"name": "Lenovo Group"})
    assert res.json()["name"] == "Lenovo Group"
    assert client.get("/api/brands").json()["total"] == 1
    assert client.delete(f"/api/brands/{brand_id}").status_code == 204
    assert client.get(f"/api/brands/{brand_id}").status_code == 404


def test_brand_with_models_cannot_be_deleted(client, org):
    res = client.delete(f"/api/brands/{org['brand']['id']}")
    assert res.status_code == 409
    assert res.json()["code"] == "entity_in_use"


def test_models_filtered_by_brand(client, org):
    hp = client.post("/api/brands", json={"name": "HP"}).json()
    client.post("/api/models", json={"name": "LaserJet M404", "category": "Printer", "brand_id": hp["id"]})
    res = client.get(f"/api/models?brand_id={hp['id']}")
    assert [m["name"] for m in res.json()["items"]] == ["LaserJet M404"]
    assert client.post("/api/models", json={"name": "LaserJet M404", "brand_id": hp["id"]}).status_code == 409


def test_model_in_use_cannot_be_deleted(client, org):
    client.post("/api/computers", json={"serial": "ABC123", "model_id": org["model"]["id"]})
    assert client.delete(f"/api/models/{org['model']['id']}").status_code == 409


def test_management_area_crud(client):
    res = client.post("/api/management-areas", json={"name": "Gerencia Legal"})
    assert res.status_code == 201
    area = res.json()
    assert area["is_general"] is False
    assert client.post("/api/management-areas", json={"name": "Gerencia Legal"}).status_code == 409
    assert client.put(f"/api/management-areas/{area['id']}", json={"manager_id": 999}).status_code == 404
    assert client.delete(f"/api/management-areas/{area['id']}").status_code == 204


def test_area_with_departments_cannot_be_deleted(client, org):
    assert client.delete(f"/api/management-areas/{org['area']['id']}").status_code == 409


def test_department_crud(client, org):
    res = client.post("/api/departments", json={
        "name": "Contabilidad", "cost_center": "CC-120", "management_area_id": org["area"]["id"],
    })
    assert res.status_code == 201
    dept = res.json()
    res = client.get(f"/api/departments?management_area_id={org['area']['id']}")
    assert res.json()["total"] == 2
    assert client.put(f"/api/departments/{dept['id']}", json={"management_area_id": 999}).status_code == 404
    assert client.delete(f"/api/departments/{dept['id']}").status_code == 204


def test_department_with_users_cannot_be_deleted(client, org):
    assert client.delete(f"/api/departments/{org['dept']['id']}").status_code == 409


def test_user_crud(client, org):
    res = client.post("/api/users", json={
        "first_name": "Matías", "last_name": "González", "employee_number": 1006,
        "department_id": org["dept"]["id"],
    })
    assert res.status_code == 201
    user = res.json()
    assert user["full_name"] == "Matías González"
    dup = client.post("/api/users", json={
        "first_name": "X", "last_name": "Y", "employee_number": 1006, "department_id": org["dept"]["id"],
    })
    assert dup.status_code == 409
    res = client.get("/api/users?search=Matías")
    assert res.json()["total"] == 1
    res = client.put(f"/api/users/{user['id']}", json={"position": "Contador"})
    assert res.json()["position"] == "Contador"
    assert client.delete(f"/api/users/{user['id']}").status_code == 204


def test_user_unknown_department(client):
    res = client.post("/api/users", json={"first_name": "A", "last_name": "B", "department_id": 999})
    assert res.status_code == 404


def test_user_holding_assets_cannot_be_deleted(client, org):
    line = client.post("/api/phone-lines", json={"number": "111", "provider": "Entel"}).json()
    client.post("/api/assignments", json={"item_id": line["id"], "item_type": "PhoneLine", "action": "assign",
                                          "target_type": "User", "target_id": org["user"]["id"]})
    res = client.delete(f"/api/users/{org['user']['id']}")
    assert res.status_code == 409


def test_manager_cannot_be_deleted(client, org):
    assert client.delete(f"/api/users/{org['manager']['id']}").status_code == 409


def test_assets_of_targets(client, org):
    comp = client.post("/api/computers", json={"serial": "ABC123", "model_id": org["model"]["id"]}).json()
    line = client.post("/api/phone-lines", json={"number": "111", "provider": "Entel"}).json()
    client.post("/api/assignments", json={"item_id": comp["id"], "item_type": "Computer", "action": "assign",
                                          "target_type": "User", "target_id": org["user"]["id"]})
    client.post("/api/assignments", json={"item_id": line["id"], "item_type": "PhoneLine", "action": "assign",
                                          "target_type": "Department", "target_id": org["dept"]["id"]})

    user_assets = client.get(f"/api/users/{org['user']['id']}/assets").json()
    assert [(a["asset_type"], a["serial"]) for a in user_assets] == [("Computer", "ABC123")]
    dept_assets = client.get(f"/api/departments/{org['dept']['id']}/assets").json()
    assert [(a["asset_type"], a["serial"]) for a in dept_assets] == [("PhoneLine", "111")]
    assert client.get("/api/users/999/assets").status_code == 404
