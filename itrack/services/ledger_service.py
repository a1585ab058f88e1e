"""Read side of the assignment ledger."""
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from itrack.errors import NotFound
from itrack.models.asset import AssetType
from itrack.models.assignment import AssignmentRecord, TargetType
from itrack.schemas.asset import TargetBrief
from itrack.schemas.assignment import AssignmentEntry, AssetBrief
from itrack.schemas.pagination import Page
from itrack.services.pagination import paginate
from itrack.services.refs import (
    AssetRef, TargetRef, ASSET_MODELS, get_asset, find_target,
    asset_serial, asset_description, target_label,
)

# Newest first; on equal timestamps the higher id wins.
_NEWEST_FIRST = (AssignmentRecord.recorded_at.desc(), AssignmentRecord.id.desc())


def get_record(db: Session, record_id: int) -> AssignmentRecord:
    record = db.get(AssignmentRecord, record_id)
    if not record:
        raise NotFound("Assignment record not found")
    return record


def get_records(db: Session, page: int = 1, size: int = 50) -> Page:
    page_ = paginate(db, select(AssignmentRecord).order_by(*_NEWEST_FIRST), page=page, size=size)
    page_.items = [describe_record(db, r) for r in page_.items]
    return page_


def get_asset_history(db: Session, ref: AssetRef) -> list[AssignmentRecord]:
    get_asset(db, ref)
    return db.scalars(
        select(AssignmentRecord)
        .where(AssignmentRecord.asset_type == ref.asset_type, AssignmentRecord.asset_id == ref.asset_id)
        .order_by(AssignmentRecord.recorded_at, AssignmentRecord.id)
    ).all()


def latest_record(db: Session, ref: AssetRef) -> AssignmentRecord | None:
    return db.scalar(
        select(AssignmentRecord)
        .where(AssignmentRecord.asset_type == ref.asset_type, AssignmentRecord.asset_id == ref.asset_id)
        .order_by(*_NEWEST_FIRST)
        .limit(1)
    )


def latest_records(
    db: Session, asset_type: AssetType, asset_ids: list[int] | None = None
) -> dict[int, AssignmentRecord]:
    """Latest ledger record per asset of one kind, keyed by asset id."""
    ranked = select(
        AssignmentRecord.id,
        func.row_number()
        .over(partition_by=AssignmentRecord.asset_id, order_by=_NEWEST_FIRST)
        .label("rn"),
    ).where(AssignmentRecord.asset_type == asset_type)
    if asset_ids is not None:
        if not asset_ids:
            return {}
        ranked = ranked.where(AssignmentRecord.asset_id.in_(asset_ids))
    ranked = ranked.subquery()

    rows = db.scalars(
        select(AssignmentRecord)
        .join(ranked, AssignmentRecord.id == ranked.c.id)
        .where(ranked.c.rn == 1)
    ).all()
    return {r.asset_id: r for r in rows}


def describe_record(db: Session, record: AssignmentRecord) -> AssignmentEntry:
    entry = AssignmentEntry.model_validate(record)

    asset = db.get(ASSET_MODELS[record.asset_type], record.asset_id)
    if asset is not None:
        entry.asset = AssetBrief(
            id=asset.id,
            type=record.asset_type,
            serial=asset_serial(record.asset_type, asset),
            description=asset_description(record.asset_type, asset),
        )

    target = find_target(db, TargetRef(record.target_type, record.target_id))
    if target is not None:
        entry.target = TargetBrief(
            id=target.id,
            type=record.target_type,
            name=target_label(TargetType(record.target_type), target),
        )
    return entry
