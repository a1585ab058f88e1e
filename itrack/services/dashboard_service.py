from sqlalchemy import select, func
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.models.asset import AssetState, Computer, Device
from itrack.models.assignment import AssignmentRecord, ActionType, TargetType
from itrack.models.organization import Department
from itrack.models.user import User
from itrack.schemas.dashboard import DashboardResponse, DepartmentStat, ActivityEntry
from itrack.services.refs import ASSET_MODELS, TargetRef, find_target, asset_label, target_label


def get_dashboard(db: Session, recent_limit: int | None = None) -> DashboardResponse:
    total_users = db.scalar(select(func.count()).select_from(User))
    total_devices = db.scalar(select(func.count()).select_from(Device))
    total_computers = db.scalar(select(func.count()).select_from(Computer))
    assigned_computers = db.scalar(
        select(func.count()).select_from(Computer).where(Computer.state == AssetState.assigned)
    )
    stored_computers = db.scalar(
        select(func.count()).select_from(Computer).where(Computer.state == AssetState.in_storage)
    )

    return DashboardResponse(
        total_users=total_users,
        total_devices=total_devices,
        total_computers=total_computers,
        assigned_computers=assigned_computers,
        stored_computers=stored_computers,
        department_stats=_department_stats(db, total_computers),
        recent_activity=_recent_activity(db, recent_limit or settings.RECENT_ACTIVITY_LIMIT),
    )


def _department_stats(db: Session, total_computers: int) -> list[DepartmentStat]:
    computers = dict(db.execute(
        select(Computer.held_by_department_id, func.count())
        .where(Computer.held_by_department_id.is_not(None))
        .group_by(Computer.held_by_department_id)
    ).all())
    users = dict(db.execute(
        select(User.department_id, func.count()).group_by(User.department_id)
    ).all())

    stats = []
    for dept in db.scalars(select(Department).order_by(Department.name)).all():
        count = computers.get(dept.id, 0)
        stats.append(DepartmentStat(
            name=dept.name,
            computers=count,
            users=users.get(dept.id, 0),
            percentage=round(count / total_computers * 100, 1) if total_computers else 0.0,
        ))
    return stats


def _recent_activity(db: Session, limit: int) -> list[ActivityEntry]:
    records = db.scalars(
        select(AssignmentRecord)
        .order_by(AssignmentRecord.recorded_at.desc(), AssignmentRecord.id.desc())
        .limit(limit)
    ).all()

    activity = []
    for r in records:
        asset = db.get(ASSET_MODELS[r.asset_type], r.asset_id)
        target = find_target(db, TargetRef(TargetType(r.target_type), r.target_id))
        activity.append(ActivityEntry(
            id=r.id,
            action=r.action_type.value,
            device=asset_label(r.asset_type, asset) if asset else "N/A",
            user=target_label(TargetType(r.target_type), target) if target else "System",
            time=r.recorded_at,
            type="assignment" if r.action_type == ActionType.assignment else "return",
        ))
    return activity
