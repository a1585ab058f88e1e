"""Current holder and availability of assets.

Two strategies answer "who holds this asset":

* ``PointerStrategy`` reads the denormalized holder columns. Used for kinds
  that have them (computers, devices) and lets availability be filtered in SQL.
* ``LedgerStrategy`` looks at the latest ledger record per asset. Used for
  phone lines, which carry no holder columns.

``AVAILABILITY_STRATEGIES`` maps every asset kind to its strategy.
"""
from dataclasses import dataclass
from sqlalchemy import select, Select
from sqlalchemy.orm import Session

from itrack.errors import InvalidFilter
from itrack.models.asset import AssetType, PhoneLine
from itrack.models.assignment import ActionType, TargetType
from itrack.schemas.asset import AssetSummary
from itrack.services import ledger_service
from itrack.services.refs import (
    AssetRef, TargetRef, ASSET_MODELS, POINTER_KINDS,
    pointer_holder, find_target, asset_label, asset_serial, target_label,
)

STATE_ASSIGNED = "assigned"
STATE_AVAILABLE = "available"

_KIND_ORDER = (AssetType.computer, AssetType.device, AssetType.phone_line)


class PointerStrategy:
    def narrow(self, query: Select, model, held: bool) -> Select:
        if held:
            return query.where(
                (model.held_by_user_id.is_not(None)) | (model.held_by_department_id.is_not(None))
            )
        return query.where(model.held_by_user_id.is_(None), model.held_by_department_id.is_(None))

    def holders(self, db: Session, asset_type: AssetType, assets: list) -> dict[int, TargetRef | None]:
        return {a.id: pointer_holder(a) for a in assets}

    def held_by(self, db: Session, asset_type: AssetType, target: TargetRef) -> list:
        model = ASSET_MODELS[asset_type]
        column = model.held_by_user_id if target.target_type == TargetType.user else model.held_by_department_id
        return db.scalars(select(model).where(column == target.target_id).order_by(model.id)).all()


class LedgerStrategy:
    def narrow(self, query: Select, model, held: bool) -> Select:
        return query

    def holders(self, db: Session, asset_type: AssetType, assets: list) -> dict[int, TargetRef | None]:
        latest = ledger_service.latest_records(db, asset_type, [a.id for a in assets])
        result = {}
        for asset in assets:
            record = latest.get(asset.id)
            if record is not None and record.action_type == ActionType.assignment:
                result[asset.id] = TargetRef(TargetType(record.target_type), record.target_id)
            else:
                result[asset.id] = None
        return result

    def held_by(self, db: Session, asset_type: AssetType, target: TargetRef) -> list:
        latest = ledger_service.latest_records(db, asset_type)
        ids = [
            asset_id for asset_id, r in latest.items()
            if r.action_type == ActionType.assignment
            and r.target_type == target.target_type
            and r.target_id == target.target_id
        ]
        if not ids:
            return []
        model = ASSET_MODELS[asset_type]
        return db.scalars(select(model).where(model.id.in_(ids)).order_by(model.id)).all()


AVAILABILITY_STRATEGIES = {
    AssetType.computer: PointerStrategy(),
    AssetType.device: PointerStrategy(),
    AssetType.phone_line: LedgerStrategy(),
}


@dataclass
class AssetFilter:
    state: str | None = None  # "assigned" | "available"
    model_id: int | None = None
    provider: str | None = None
    asset_type: AssetType | None = None

    def validate(self) -> None:
        if self.state is None and self.model_id is None and not self.provider:
            raise InvalidFilter()
        if self.state is not None and self.state not in (STATE_ASSIGNED, STATE_AVAILABLE):
            raise InvalidFilter(f"Unknown state filter: {self.state}")

    def kinds(self) -> list[AssetType]:
        kinds = set(_KIND_ORDER)
        if self.model_id is not None:
            kinds &= POINTER_KINDS
        if self.provider:
            kinds &= {AssetType.phone_line}
        if self.asset_type is not None:
            kinds &= {AssetType(self.asset_type)}
        return [k for k in _KIND_ORDER if k in kinds]


def current_holder(db: Session, ref: AssetRef, asset=None) -> TargetRef | None:
    """Holder of one asset according to its kind's strategy; None when unheld."""
    if asset is None:
        asset = db.get(ASSET_MODELS[ref.asset_type], ref.asset_id)
        if asset is None:
            return None
    return AVAILABILITY_STRATEGIES[ref.asset_type].holders(db, ref.asset_type, [asset])[asset.id]


def list_assets(db: Session, filters: AssetFilter) -> list[AssetSummary]:
    """Entry point of GET /api/assets. Without a state filter, lists available assets."""
    filters.validate()
    if filters.state == STATE_ASSIGNED:
        return list_assigned(db, filters)
    return list_available(db, filters)


def list_available(db: Session, filters: AssetFilter) -> list[AssetSummary]:
    filters.validate()
    return _classify(db, filters, held=False)


def list_assigned(db: Session, filters: AssetFilter) -> list[AssetSummary]:
    filters.validate()
    return _classify(db, filters, held=True)


def assets_held_by(db: Session, target: TargetRef) -> list[AssetSummary]:
    summaries = []
    for kind in _KIND_ORDER:
        assets = AVAILABILITY_STRATEGIES[kind].held_by(db, kind, target)
        summaries.extend(_summarize(db, kind, assets, {a.id: target for a in assets}))
    return summaries


def _candidates(filters: AssetFilter, kind: AssetType) -> Select:
    model = ASSET_MODELS[kind]
    query = select(model)
    if filters.model_id is not None:
        query = query.where(model.model_id == filters.model_id)
    if filters.provider and kind == AssetType.phone_line:
        query = query.where(PhoneLine.provider == filters.provider)
    return query.order_by(model.id)


def _classify(db: Session, filters: AssetFilter, held: bool) -> list[AssetSummary]:
    summaries = []
    for kind in filters.kinds():
        strategy = AVAILABILITY_STRATEGIES[kind]
        query = strategy.narrow(_candidates(filters, kind), ASSET_MODELS[kind], held)
        assets = db.scalars(query).all()
        holders = strategy.holders(db, kind, assets)
        selected = [a for a in assets if (holders[a.id] is not None) == held]
        summaries.extend(_summarize(db, kind, selected, holders))
    return summaries


def _summarize(db: Session, kind: AssetType, assets: list, holders: dict) -> list[AssetSummary]:
    summaries = []
    for asset in assets:
        holder = holders.get(asset.id)
        held_by = None
        if holder is not None:
            target = find_target(db, holder)
            held_by = target_label(holder.target_type, target) if target else "Unknown target"
        summaries.append(AssetSummary(
            asset_id=asset.id,
            asset_type=kind,
            label=asset_label(kind, asset),
            serial=asset_serial(kind, asset),
            state=asset.state,
            held_by=held_by,
            holder_type=holder.target_type if holder else None,
            holder_id=holder.target_id if holder else None,
        ))
    return summaries


def summarize(db: Session, ref: AssetRef, asset) -> AssetSummary:
    return _summarize(db, ref.asset_type, [asset], {asset.id: current_holder(db, ref, asset)})[0]
