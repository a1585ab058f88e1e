from sqlalchemy.orm import Session
from sqlalchemy import select, or_
from itrack.errors import NotFound, DuplicateEntity, EntityInUse
from itrack.models.assignment import TargetType
from itrack.models.organization import Department, ManagementArea
from itrack.models.user import User
from itrack.schemas.user import UserCreate, UserUpdate
from itrack.schemas.pagination import Page
from itrack.services.pagination import paginate
from itrack.services.refs import TargetRef
from itrack.services.resolver import assets_held_by


def get_users(
    db: Session, page: int = 1, size: int = 50, search: str = "", department_id: int | None = None
) -> Page:
    query = select(User)
    if search:
        query = query.where(
            or_(
                User.first_name.ilike(f"%{search}%"),
                User.last_name.ilike(f"%{search}%"),
                User.email.ilike(f"%{search}%"),
            )
        )
    if department_id is not None:
        query = query.where(User.department_id == department_id)
    return paginate(db, query.order_by(User.last_name, User.first_name), page=page, size=size)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def _check_user(db: Session, employee_number: int | None, department_id: int | None, user_id: int | None = None):
    if employee_number is not None:
        existing = db.scalar(select(User).where(User.employee_number == employee_number))
        if existing and existing.id != user_id:
            raise DuplicateEntity("Employee number already exists")
    if department_id is not None and not db.get(Department, department_id):
        raise NotFound("Department not found")


def create_user(db: Session, data: UserCreate) -> User:
    _check_user(db, data.employee_number, data.department_id)
    user = User(**data.model_dump())
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    update_data = data.model_dump(exclude_unset=True)
    _check_user(db, update_data.get("employee_number"), update_data.get("department_id"), user_id)
    for field, value in update_data.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    if assets_held_by(db, TargetRef(TargetType.user, user_id)):
        raise EntityInUse("User still holds assets")
    if db.scalar(select(ManagementArea).where(ManagementArea.manager_id == user_id).limit(1)):
        raise EntityInUse("User manages a management area")
    db.delete(user)
    db.commit()


def get_user_assets(db: Session, user_id: int):
    get_user(db, user_id)
    return assets_held_by(db, TargetRef(TargetType.user, user_id))
