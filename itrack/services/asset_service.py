"""CRUD for computers, devices and phone lines.

State, holder columns and version are never written here; see
transition_service.
"""
from sqlalchemy.orm import Session
from sqlalchemy import select
from pydantic import BaseModel
from itrack.errors import NotFound, DuplicateEntity, EntityInUse
from itrack.models.asset import AssetType, AssetState, PhoneLine
from itrack.models.catalog import AssetModel
from itrack.schemas.pagination import Page
from itrack.services.pagination import paginate
from itrack.services.refs import AssetRef, ASSET_MODELS, get_asset
from itrack.services.resolver import current_holder

# Column holding the unique serial / number per kind
_UNIQUE_FIELD = {
    AssetType.computer: "serial",
    AssetType.device: "serial",
    AssetType.phone_line: "number",
}


def get_assets(
    db: Session,
    asset_type: AssetType,
    page: int = 1,
    size: int = 50,
    search: str = "",
    state: AssetState | None = None,
    model_id: int | None = None,
) -> Page:
    model = ASSET_MODELS[asset_type]
    query = select(model)
    unique_col = getattr(model, _UNIQUE_FIELD[asset_type])
    if search:
        if asset_type == AssetType.phone_line:
            query = query.where(unique_col.ilike(f"%{search}%") | PhoneLine.provider.ilike(f"%{search}%"))
        else:
            query = query.where(unique_col.ilike(f"%{search}%"))
    if state is not None:
        query = query.where(model.state == state)
    if model_id is not None and asset_type != AssetType.phone_line:
        query = query.where(model.model_id == model_id)
    return paginate(db, query.order_by(model.id), page=page, size=size)


def get_providers(db: Session) -> list[str]:
    return list(db.scalars(select(PhoneLine.provider).distinct().order_by(PhoneLine.provider)).all())


def get_one(db: Session, asset_type: AssetType, asset_id: int):
    return get_asset(db, AssetRef(asset_type, asset_id))


def _check(db: Session, asset_type: AssetType, values: dict, asset_id: int | None = None) -> None:
    model = ASSET_MODELS[asset_type]
    field = _UNIQUE_FIELD[asset_type]
    if values.get(field):
        existing = db.scalar(select(model).where(getattr(model, field) == values[field]))
        if existing and existing.id != asset_id:
            raise DuplicateEntity(f"{field.capitalize()} {values[field]} already exists")
    if values.get("model_id") is not None and not db.get(AssetModel, values["model_id"]):
        raise NotFound("Model not found")


def create_asset(db: Session, asset_type: AssetType, data: BaseModel):
    values = data.model_dump()
    _check(db, asset_type, values)
    asset = ASSET_MODELS[asset_type](**values, state=AssetState.in_storage)
    db.add(asset)
    db.commit()
    db.refresh(asset)
    return asset


def update_asset(db: Session, asset_type: AssetType, asset_id: int, data: BaseModel):
    asset = get_one(db, asset_type, asset_id)
    update_data = data.model_dump(exclude_unset=True)
    _check(db, asset_type, update_data, asset_id)
    for field, value in update_data.items():
        setattr(asset, field, value)
    db.commit()
    db.refresh(asset)
    return asset


def delete_asset(db: Session, asset_type: AssetType, asset_id: int) -> None:
    """Remove an unheld asset. Its ledger history stays."""
    ref = AssetRef(asset_type, asset_id)
    asset = get_asset(db, ref)
    if current_holder(db, ref, asset) is not None:
        raise EntityInUse("Asset is assigned; return it before deleting")
    db.delete(asset)
    db.commit()
