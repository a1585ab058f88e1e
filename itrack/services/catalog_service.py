from sqlalchemy.orm import Session
from sqlalchemy import select, func
from itrack.errors import NotFound, DuplicateEntity, EntityInUse
from itrack.models.asset import Computer, Device
from itrack.models.catalog import Brand, AssetModel
from itrack.schemas.catalog import BrandCreate, BrandUpdate, AssetModelCreate, AssetModelUpdate
from itrack.schemas.pagination import Page
from itrack.services.pagination import paginate


def get_brands(db: Session, page: int = 1, size: int = 50) -> Page:
    return paginate(db, select(Brand).order_by(Brand.name), page=page, size=size)


def get_brand(db: Session, brand_id: int) -> Brand:
    brand = db.get(Brand, brand_id)
    if not brand:
        raise NotFound("Brand not found")
    return brand


def _ensure_unique_brand(db: Session, name: str, brand_id: int | None = None) -> None:
    existing = db.scalar(select(Brand).where(func.lower(Brand.name) == name.lower()))
    if existing and existing.id != brand_id:
        raise DuplicateEntity("Brand name already exists")


def create_brand(db: Session, data: BrandCreate) -> Brand:
    _ensure_unique_brand(db, data.name)
    brand = Brand(**data.model_dump())
    db.add(brand)
    db.commit()
    db.refresh(brand)
    return brand


def update_brand(db: Session, brand_id: int, data: BrandUpdate) -> Brand:
    brand = get_brand(db, brand_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name"):
        _ensure_unique_brand(db, update_data["name"], brand_id)
    for field, value in update_data.items():
        setattr(brand, field, value)
    db.commit()
    db.refresh(brand)
    return brand


def delete_brand(db: Session, brand_id: int) -> None:
    brand = get_brand(db, brand_id)
    if brand.models:
        raise EntityInUse("Brand still has models")
    db.delete(brand)
    db.commit()


def get_models(db: Session, page: int = 1, size: int = 50, brand_id: int | None = None) -> Page:
    query = select(AssetModel)
    if brand_id is not None:
        query = query.where(AssetModel.brand_id == brand_id)
    return paginate(db, query.order_by(AssetModel.name), page=page, size=size)


def get_model(db: Session, model_id: int) -> AssetModel:
    model = db.get(AssetModel, model_id)
    if not model:
        raise NotFound("Model not found")
    return model


def _ensure_unique_model(db: Session, brand_id: int, name: str, model_id: int | None = None) -> None:
    existing = db.scalar(
        select(AssetModel).where(AssetModel.brand_id == brand_id, AssetModel.name == name)
    )
    if existing and existing.id != model_id:
        raise DuplicateEntity("Model already exists for this brand")


def create_model(db: Session, data: AssetModelCreate) -> AssetModel:
    get_brand(db, data.brand_id)
    _ensure_unique_model(db, data.brand_id, data.name)
    model = AssetModel(**data.model_dump())
    db.add(model)
    db.commit()
    db.refresh(model)
    return model


def update_model(db: Session, model_id: int, data: AssetModelUpdate) -> AssetModel:
    model = get_model(db, model_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("brand_id") is not None:
        get_brand(db, update_data["brand_id"])
    _ensure_unique_model(
        db,
        update_data.get("brand_id") or model.brand_id,
        update_data.get("name") or model.name,
        model_id,
    )
    for field, value in update_data.items():
        setattr(model, field, value)
    db.commit()
    db.refresh(model)
    return model


def delete_model(db: Session, model_id: int) -> None:
    model = get_model(db, model_id)
    in_use = db.scalar(select(func.count()).select_from(Computer).where(Computer.model_id == model_id))
    in_use += db.scalar(select(func.count()).select_from(Device).where(Device.model_id == model_id))
    if in_use:
        raise EntityInUse("Model is used by assets")
    db.delete(model)
    db.commit()
