from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.schemas.catalog import AssetModelCreate, AssetModelUpdate, AssetModelResponse
from itrack.schemas.pagination import Page
import itrack.services.catalog_service as svc

router = APIRouter(prefix="/api/models", tags=["models"])


@router.get("", response_model=Page[AssetModelResponse])
def list_models(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    brand_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_models(db, page=page, size=size, brand_id=brand_id)


@router.post("", response_model=AssetModelResponse, status_code=201)
def create_model(data: AssetModelCreate, db: Session = Depends(get_db)):
    return svc.create_model(db, data)


@router.get("/{model_id}", response_model=AssetModelResponse)
def get_model(model_id: int, db: Session = Depends(get_db)):
    return svc.get_model(db, model_id)


@router.put("/{model_id}", response_model=AssetModelResponse)
def update_model(model_id: int, data: AssetModelUpdate, db: Session = Depends(get_db)):
    return svc.update_model(db, model_id, data)


@router.delete("/{model_id}", status_code=204)
def delete_model(model_id: int, db: Session = Depends(get_db)):
    svc.delete_model(db, model_id)
