import pytest
from types import SimpleNamespace
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from itrack.database import Base
import itrack.models  # noqa: F401, register all models
from itrack.models.organization import ManagementArea, Department
from itrack.models.user import User
from itrack.models.catalog import Brand, AssetModel
from itrack.models.asset import Computer, Device, PhoneLine


TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db():
    engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def org(db):
    """Two management areas with managers, two departments, three users and one model."""
    general = ManagementArea(name="Gerencia General", is_general=True)
    finance = ManagementArea(name="Gerencia de Administracion y Finanzas")
    db.add_all([general, finance])
    db.flush()

    board = Department(name="Directorio", management_area_id=general.id)
    it = Department(name="Informática", cost_center="CC-110", management_area_id=finance.id)
    db.add_all([board, it])
    db.flush()

    ceo = User(first_name="Ana", last_name="Rojas", position="Gerente General", department_id=board.id)
    cfo = User(first_name="Carlos", last_name="Muñoz", position="Gerente de Finanzas", department_id=it.id)
    analyst = User(first_name="Javiera", last_name="Pérez", position="Analista", department_id=it.id)
    db.add_all([ceo, cfo, analyst])
    db.flush()
    general.manager_id = ceo.id
    finance.manager_id = cfo.id

    brand = Brand(name="Dell")
    db.add(brand)
    db.flush()
    model = AssetModel(name="Latitude 5420", category="Laptop", brand_id=brand.id)
    db.add(model)
    db.commit()

    return SimpleNamespace(
        general=general, finance=finance, board=board, it=it,
        ceo=ceo, cfo=cfo, analyst=analyst, brand=brand, model=model,
    )


@pytest.fixture
def computer(db, org):
    c = Computer(serial="ABC123", model_id=org.model.id, hostname="NB-01")
    db.add(c)
    db.commit()
    return c


@pytest.fixture
def device(db, org):
    d = Device(serial="MON-001", model_id=org.model.id)
    db.add(d)
    db.commit()
    return d


@pytest.fixture
def phone_line(db):
    line = PhoneLine(number="+56 9 1111 2222", provider="Entel")
    db.add(line)
    db.commit()
    return line
