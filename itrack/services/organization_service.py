from sqlalchemy.orm import Session
from sqlalchemy import select
from itrack.errors import NotFound, DuplicateEntity, EntityInUse
from itrack.models.assignment import TargetType
from itrack.models.organization import ManagementArea, Department
from itrack.models.user import User
from itrack.schemas.organization import (
    ManagementAreaCreate, ManagementAreaUpdate, DepartmentCreate, DepartmentUpdate,
)
from itrack.schemas.pagination import Page
from itrack.services.pagination import paginate
from itrack.services.refs import TargetRef
from itrack.services.resolver import assets_held_by


def get_management_areas(db: Session, page: int = 1, size: int = 50) -> Page:
    return paginate(db, select(ManagementArea).order_by(ManagementArea.name), page=page, size=size)


def get_management_area(db: Session, area_id: int) -> ManagementArea:
    area = db.get(ManagementArea, area_id)
    if not area:
        raise NotFound("Management area not found")
    return area


def _check_area(db: Session, name: str | None, manager_id: int | None, area_id: int | None = None) -> None:
    if name:
        existing = db.scalar(select(ManagementArea).where(ManagementArea.name == name))
        if existing and existing.id != area_id:
            raise DuplicateEntity("Management area name already exists")
    if manager_id is not None and not db.get(User, manager_id):
        raise NotFound("Manager not found")


def create_management_area(db: Session, data: ManagementAreaCreate) -> ManagementArea:
    _check_area(db, data.name, data.manager_id)
    area = ManagementArea(**data.model_dump())
    db.add(area)
    db.commit()
    db.refresh(area)
    return area


def update_management_area(db: Session, area_id: int, data: ManagementAreaUpdate) -> ManagementArea:
    area = get_management_area(db, area_id)
    update_data = data.model_dump(exclude_unset=True)
    _check_area(db, update_data.get("name"), update_data.get("manager_id"), area_id)
    for field, value in update_data.items():
        setattr(area, field, value)
    db.commit()
    db.refresh(area)
    return area


def delete_management_area(db: Session, area_id: int) -> None:
    area = get_management_area(db, area_id)
    if area.departments:
        raise EntityInUse("Management area still has departments")
    db.delete(area)
    db.commit()


def get_departments(db: Session, page: int = 1, size: int = 50, management_area_id: int | None = None) -> Page:
    query = select(Department)
    if management_area_id is not None:
        query = query.where(Department.management_area_id == management_area_id)
    return paginate(db, query.order_by(Department.name), page=page, size=size)


def get_department(db: Session, dept_id: int) -> Department:
    dept = db.get(Department, dept_id)
    if not dept:
        raise NotFound("Department not found")
    return dept


def _ensure_unique_department(db: Session, name: str, dept_id: int | None = None) -> None:
    existing = db.scalar(select(Department).where(Department.name == name))
    if existing and existing.id != dept_id:
        raise DuplicateEntity("Department name already exists")


def create_department(db: Session, data: DepartmentCreate) -> Department:
    get_management_area(db, data.management_area_id)
    _ensure_unique_department(db, data.name)
    dept = Department(**data.model_dump())
    db.add(dept)
    db.commit()
    db.refresh(dept)
    return dept


def update_department(db: Session, dept_id: int, data: DepartmentUpdate) -> Department:
    dept = get_department(db, dept_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("management_area_id") is not None:
        get_management_area(db, update_data["management_area_id"])
    if update_data.get("name"):
        _ensure_unique_department(db, update_data["name"], dept_id)
    for field, value in update_data.items():
        setattr(dept, field, value)
    db.commit()
    db.refresh(dept)
    return dept


def delete_department(db: Session, dept_id: int) -> None:
    dept = get_department(db, dept_id)
    if dept.users:
        raise EntityInUse("Department still has users")
    if assets_held_by(db, TargetRef(TargetType.department, dept_id)):
        raise EntityInUse("Department still holds assets")
    db.delete(dept)
    db.commit()


def get_department_assets(db: Session, dept_id: int):
    get_department(db, dept_id)
    return assets_held_by(db, TargetRef(TargetType.department, dept_id))
