"""Seed script: fills a development database with sample data."""
import os
import sys

# Ensure we're in the project root
sys.path.insert(0, os.path.dirname(__file__))

from datetime import date
from sqlalchemy import select
from itrack.database import Base, engine, SessionLocal
import itrack.models  # noqa: F401, register all models
from itrack.models.organization import ManagementArea, Department
from itrack.models.user import User
from itrack.models.catalog import Brand, AssetModel
from itrack.models.asset import AssetType, Computer, Device, PhoneLine
from itrack.models.assignment import TargetType
from itrack.schemas.assignment import DeliveryInfo
from itrack.services.refs import AssetRef, TargetRef
from itrack.services import transition_service

MANAGEMENT_AREAS = [
    ("Gerencia General", True),
    ("Gerencia Forestal e Institucional", False),
    ("Gerencia Operaciones Industriales y Sum.", False),
    ("Gcia. de Personas,Cultura y Comunicación", False),
    ("Gerencia de Administracion y Finanzas", False),
    ("Gerencia SMS y PCP", False),
    ("Gerencia de Ventas Nacionales y Mercadeo", False),
    ("Gerencia Legal", False),
]

# (name, cost center, management area)
DEPARTMENTS = [
    ("Informática", "CC-110", "Gerencia de Administracion y Finanzas"),
    ("Contabilidad", "CC-120", "Gerencia de Administracion y Finanzas"),
    ("Recursos Humanos", "CC-210", "Gcia. de Personas,Cultura y Comunicación"),
    ("Ventas", "CC-310", "Gerencia de Ventas Nacionales y Mercadeo"),
    ("Directorio", "CC-001", "Gerencia General"),
]

# (first, last, employee no., position, department, manages area)
USERS = [
    ("Ana", "Rojas", 1001, "Gerente General", "Directorio", "Gerencia General"),
    ("Carlos", "Muñoz", 1002, "Gerente de Administración", "Contabilidad", "Gerencia de Administracion y Finanzas"),
    ("Valentina", "Soto", 1003, "Gerente de Personas", "Recursos Humanos", "Gcia. de Personas,Cultura y Comunicación"),
    ("Diego", "Fuentes", 1004, "Gerente Comercial", "Ventas", "Gerencia de Ventas Nacionales y Mercadeo"),
    ("Javiera", "Pérez", 1005, "Analista de Sistemas", "Informática", None),
    ("Matías", "González", 1006, "Contador", "Contabilidad", None),
    ("Camila", "Reyes", 1007, "Ejecutiva de Ventas", "Ventas", None),
]

# brand -> [(model, category)]
CATALOG = {
    "Dell": [("Latitude 5420", "Laptop"), ("OptiPlex 7090", "Desktop"), ("P2422H", "Monitor")],
    "Lenovo": [("ThinkPad T14", "Laptop")],
    "HP": [("LaserJet Pro M404", "Printer")],
}

COMPUTERS = [
    ("ABC123", "Dell", "Latitude 5420", "NB-INF-01", "Intel Core i5-1145G7", "16 GB", "512 GB SSD", "Windows 11 Pro"),
    ("DL-5420-002", "Dell", "Latitude 5420", "NB-CON-01", "Intel Core i5-1145G7", "16 GB", "512 GB SSD", "Windows 11 Pro"),
    ("LN-T14-001", "Lenovo", "ThinkPad T14", "NB-VEN-01", "AMD Ryzen 5 PRO", "16 GB", "256 GB SSD", "Windows 10 Pro"),
    ("DL-7090-001", "Dell", "OptiPlex 7090", "PC-RRHH-01", "Intel Core i7-10700", "32 GB", "1 TB SSD", "Windows 11 Pro"),
]

DEVICES = [
    ("MON-P24-001", "Dell", "P2422H", "INV-0101"),
    ("MON-P24-002", "Dell", "P2422H", "INV-0102"),
    ("PRN-HP-001", "HP", "LaserJet Pro M404", "INV-0201"),
]

PHONE_LINES = [
    ("+56 9 1111 2222", "Entel", "Plan Empresa 30GB"),
    ("+56 9 3333 4444", "Movistar", "Plan Empresa 15GB"),
    ("+56 9 5555 6666", "Entel", "Plan Empresa 30GB"),
]


def _get_or_create(db, model, lookup: dict, **values):
    obj = db.scalar(select(model).filter_by(**lookup))
    if obj is None:
        obj = model(**lookup, **values)
        db.add(obj)
        db.flush()
    return obj


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        areas = {
            name: _get_or_create(db, ManagementArea, {"name": name}, is_general=is_general)
            for name, is_general in MANAGEMENT_AREAS
        }
        departments = {
            name: _get_or_create(db, Department, {"name": name}, cost_center=cc, management_area_id=areas[area].id)
            for name, cc, area in DEPARTMENTS
        }
        users = {}
        for first, last, number, position, dept, manages in USERS:
            user = _get_or_create(
                db, User, {"employee_number": number},
                first_name=first, last_name=last, position=position,
                email=f"{first.lower()}.{number}@example.com",
                department_id=departments[dept].id,
            )
            users[number] = user
            if manages:
                areas[manages].manager_id = user.id
        db.commit()

        models = {}
        for brand_name, entries in CATALOG.items():
            brand = _get_or_create(db, Brand, {"name": brand_name})
            for model_name, category in entries:
                models[(brand_name, model_name)] = _get_or_create(
                    db, AssetModel, {"brand_id": brand.id, "name": model_name}, category=category
                )

        for serial, brand, model, hostname, cpu, ram, storage, os_name in COMPUTERS:
            _get_or_create(
                db, Computer, {"serial": serial},
                model_id=models[(brand, model)].id, hostname=hostname, processor=cpu,
                ram=ram, storage=storage, operating_system=os_name, purchase_date=date(2023, 3, 1),
            )
        for serial, brand, model, tag in DEVICES:
            _get_or_create(db, Device, {"serial": serial}, model_id=models[(brand, model)].id, asset_tag=tag)
        for number, provider, plan in PHONE_LINES:
            _get_or_create(db, PhoneLine, {"number": number}, provider=provider, plan=plan)
        db.commit()

        # A few assignments, keyed so reruns do not duplicate them
        computer = db.scalar(select(Computer).filter_by(serial="DL-5420-002"))
        monitor = db.scalar(select(Device).filter_by(serial="MON-P24-001"))
        line = db.scalar(select(PhoneLine).filter_by(number="+56 9 1111 2222"))
        transition_service.assign(
            db, AssetRef(AssetType.computer, computer.id), TargetRef(TargetType.user, users[1006].id),
            notes="Initial delivery",
            delivery=DeliveryInfo(reason="New hire", locality="Concepción", charger_model="Dell 65W"),
            idempotency_key="seed-computer-1",
        )
        transition_service.assign(
            db, AssetRef(AssetType.device, monitor.id), TargetRef(TargetType.department, departments["Informática"].id),
            idempotency_key="seed-device-1",
        )
        transition_service.assign(
            db, AssetRef(AssetType.phone_line, line.id), TargetRef(TargetType.user, users[1007].id),
            idempotency_key="seed-line-1",
        )
        print("Seed complete.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
