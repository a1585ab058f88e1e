import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from itrack.main import app
from itrack.database import Base, get_db

TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def client():
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Ensure all connections share same in-memory DB
    )
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    Base.metadata.drop_all(engine)


@pytest.fixture
def org(client):
    """Management area, department, user and model created through the API."""
    area = client.post("/api/management-areas", json={"name": "Gerencia General", "is_general": True}).json()
    dept = client.post(
        "/api/departments", json={"name": "Informática", "management_area_id": area["id"]}
    ).json()
    manager = client.post("/api/users", json={
        "first_name": "Ana", "last_name": "Rojas", "position": "Gerente General", "department_id": dept["id"],
    }).json()
    client.put(f"/api/management-areas/{area['id']}", json={"manager_id": manager["id"]})
    user = client.post("/api/users", json={
        "first_name": "Javiera", "last_name": "Pérez", "position": "Analista", "department_id": dept["id"],
    }).json()
    brand = client.post("/api/brands", json={"name": "Dell"}).json()
    model = client.post("/api/models", json={"name": "Latitude 5420", "brand_id": brand["id"]}).json()
    return {"area": area, "dept": dept, "manager": manager, "user": user, "brand": brand, "model": model}
