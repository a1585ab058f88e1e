"""Assign / return transitions.

The only code that writes ``AssignmentRecord`` rows and the ``state``,
holder and ``version`` columns of assets. Each call updates the asset row
and appends one ledger record in a single commit; any failure rolls both back.
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from itrack.errors import (
    NotFound, Conflict, AssetAlreadyAssigned, AssetNotAssigned, AssetNotAssignable,
    ConcurrentModification, TransactionFailure,
)
from itrack.models.asset import AssetType, AssetState
from itrack.models.assignment import AssignmentRecord, ActionType, TargetType
from itrack.models.user import User
from itrack.schemas.assignment import DeliveryInfo
from itrack.services.manager_service import default_manager
from itrack.services.refs import AssetRef, TargetRef, POINTER_KINDS, get_asset, get_target
from itrack.services.resolver import current_holder

logger = logging.getLogger(__name__)

# States that may be set outside the assign/return cycle
OUT_OF_BAND_STATES = {AssetState.in_storage, AssetState.under_repair, AssetState.decommissioned}


def assign(
    db: Session,
    ref: AssetRef,
    target: TargetRef,
    notes: str | None = None,
    delivery: DeliveryInfo | None = None,
    expected_version: int | None = None,
    idempotency_key: str | None = None,
) -> AssignmentRecord:
    replayed = _replayed(db, idempotency_key, ref, ActionType.assignment, target)
    if replayed is not None:
        return replayed

    asset = get_asset(db, ref, lock=True)
    get_target(db, target)
    _check_version(ref, asset, expected_version)

    holder = current_holder(db, ref, asset)
    if holder is not None:
        logger.warning("ASSIGNMENT: rejected %s -> %s, already held by %s", ref, target, holder)
        raise AssetAlreadyAssigned(f"{ref} is already assigned to {holder}; return it first")
    if asset.state != AssetState.in_storage:
        logger.warning("ASSIGNMENT: rejected %s -> %s, state %s", ref, target, asset.state.value)
        raise AssetNotAssignable(f"{ref} is {asset.state.value} and cannot be assigned")

    delivery = delivery or DeliveryInfo()
    manager = _resolve_manager(db, target, delivery.manager_id)
    is_computer = ref.asset_type == AssetType.computer

    if ref.asset_type in POINTER_KINDS:
        asset.held_by_user_id = target.target_id if target.target_type == TargetType.user else None
        asset.held_by_department_id = target.target_id if target.target_type == TargetType.department else None
    asset.state = AssetState.assigned

    record = AssignmentRecord(
        asset_type=ref.asset_type,
        asset_id=ref.asset_id,
        action_type=ActionType.assignment,
        target_type=target.target_type,
        target_id=target.target_id,
        notes=notes,
        manager_id=manager.id if manager else None,
        manager_name=manager.full_name if manager else None,
        reason=delivery.reason,
        locality=delivery.locality,
        charger_model=delivery.charger_model if is_computer else None,
        charger_serial=delivery.charger_serial if is_computer else None,
        idempotency_key=idempotency_key,
    )
    db.add(record)
    if not _commit(db, ref, idempotency_key):
        return _replayed(db, idempotency_key, ref, ActionType.assignment, target)
    db.refresh(record)
    logger.info("ASSIGNMENT: %s assigned to %s (record %s)", ref, target, record.id)
    return record


def unassign(
    db: Session,
    ref: AssetRef,
    notes: str | None = None,
    expected_version: int | None = None,
    idempotency_key: str | None = None,
) -> AssignmentRecord:
    replayed = _replayed(db, idempotency_key, ref, ActionType.return_)
    if replayed is not None:
        return replayed

    asset = get_asset(db, ref, lock=True)
    _check_version(ref, asset, expected_version)

    holder = current_holder(db, ref, asset)
    if holder is None:
        logger.warning("ASSIGNMENT: rejected return of %s, not assigned", ref)
        raise AssetNotAssigned(f"{ref} has no active assignment to return")

    if ref.asset_type in POINTER_KINDS:
        asset.held_by_user_id = None
        asset.held_by_department_id = None
    asset.state = AssetState.in_storage

    record = AssignmentRecord(
        asset_type=ref.asset_type,
        asset_id=ref.asset_id,
        action_type=ActionType.return_,
        target_type=holder.target_type,
        target_id=holder.target_id,
        notes=notes or f"Return from {holder.target_type.value}",
        idempotency_key=idempotency_key,
    )
    db.add(record)
    if not _commit(db, ref, idempotency_key):
        return _replayed(db, idempotency_key, ref, ActionType.return_)
    db.refresh(record)
    logger.info("ASSIGNMENT: %s returned from %s (record %s)", ref, holder, record.id)
    return record


def set_state(db: Session, ref: AssetRef, state: AssetState, expected_version: int | None = None):
    """Move an unheld asset between storage, repair and decommissioned."""
    if state not in OUT_OF_BAND_STATES:
        raise Conflict("Use an assignment to mark an asset as assigned")
    asset = get_asset(db, ref, lock=True)
    _check_version(ref, asset, expected_version)
    if current_holder(db, ref, asset) is not None:
        raise Conflict(f"{ref} is assigned; return it before changing its state")
    if asset.state != state:
        asset.state = state
        _commit(db, ref)
        db.refresh(asset)
        logger.info("STATE: %s set to %s", ref, state.value)
    return asset


def _check_version(ref: AssetRef, asset, expected_version: int | None) -> None:
    if expected_version is not None and asset.version != expected_version:
        raise ConcurrentModification(
            f"{ref} is at version {asset.version}, expected {expected_version}"
        )


def _resolve_manager(db: Session, target: TargetRef, manager_id: int | None) -> User | None:
    if manager_id is not None:
        manager = db.get(User, manager_id)
        if not manager:
            raise NotFound(f"Manager {manager_id} not found")
        return manager
    return default_manager(db, target)


def _replayed(
    db: Session, key: str | None, ref: AssetRef, action: ActionType, target: TargetRef | None = None
) -> AssignmentRecord | None:
    """Record already written under ``key``; None when the key is new.

    ``target`` is None for returns, whose target is the previous holder.
    """
    if not key:
        return None
    existing = db.scalar(select(AssignmentRecord).where(AssignmentRecord.idempotency_key == key))
    if existing is None:
        return None
    same = (existing.asset_type, existing.asset_id, existing.action_type) == (ref.asset_type, ref.asset_id, action)
    if target is not None:
        same = same and (existing.target_type, existing.target_id) == (target.target_type, target.target_id)
    if not same:
        raise Conflict("Idempotency key already used for a different operation")
    logger.info("ASSIGNMENT: replayed idempotency key %s (record %s)", key, existing.id)
    return existing


def _key_taken(db: Session, key: str | None) -> bool:
    if not key:
        return False
    return db.scalar(select(AssignmentRecord.id).where(AssignmentRecord.idempotency_key == key)) is not None


def _commit(db: Session, ref: AssetRef, idempotency_key: str | None = None) -> bool:
    """Commit the transition. False when a concurrent request committed the same idempotency key first."""
    try:
        db.commit()
    except (StaleDataError, IntegrityError) as exc:
        db.rollback()
        if _key_taken(db, idempotency_key):
            logger.info("ASSIGNMENT: idempotency key %s committed concurrently for %s", idempotency_key, ref)
            return False
        if isinstance(exc, StaleDataError):
            logger.warning("ASSIGNMENT: concurrent modification of %s", ref)
            raise ConcurrentModification()
        logger.exception("ASSIGNMENT: commit failed for %s", ref)
        raise TransactionFailure() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("ASSIGNMENT: commit failed for %s", ref)
        raise TransactionFailure() from exc
    return True
