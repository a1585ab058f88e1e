from sqlalchemy import select
from sqlalchemy.orm import Session
from itrack.models.assignment import TargetType
from itrack.models.organization import Department, ManagementArea
from itrack.models.user import User
from itrack.services.refs import TargetRef, get_target

_MANAGER_POSITIONS = ("gerente", "manager")


def is_manager(user: User) -> bool:
    position = (user.position or "").lower()
    return any(word in position for word in _MANAGER_POSITIONS)


def general_manager(db: Session) -> User | None:
    area = db.scalar(
        select(ManagementArea)
        .where(ManagementArea.is_general == True, ManagementArea.manager_id.is_not(None))
        .order_by(ManagementArea.id)
        .limit(1)
    )
    return area.manager if area else None


def default_manager(db: Session, target: TargetRef) -> User | None:
    """Manager who signs a delivery to ``target``.

    Department: manager of its management area. User: manager of the user's
    management area, except that managers themselves report to the general
    manager.
    """
    entity = get_target(db, target)
    if target.target_type == TargetType.department:
        department: Department = entity
    else:
        if is_manager(entity):
            general = general_manager(db)
            if general is not None:
                return general
        department = entity.department

    area = department.management_area if department else None
    return area.manager if area else None
