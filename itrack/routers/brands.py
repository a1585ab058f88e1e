from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.schemas.catalog import BrandCreate, BrandUpdate, BrandResponse
from itrack.schemas.pagination import Page
import itrack.services.catalog_service as svc

router = APIRouter(prefix="/api/brands", tags=["brands"])


@router.get("", response_model=Page[BrandResponse])
def list_brands(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return svc.get_brands(db, page=page, size=size)


@router.post("", response_model=BrandResponse, status_code=201)
def create_brand(data: BrandCreate, db: Session = Depends(get_db)):
    return svc.create_brand(db, data)


@router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: int, db: Session = Depends(get_db)):
    return svc.get_brand(db, brand_id)


@router.put("/{brand_id}", response_model=BrandResponse)
def update_brand(brand_id: int, data: BrandUpdate, db: Session = Depends(get_db)):
    return svc.update_brand(db, brand_id, data)


@router.delete("/{brand_id}", status_code=204)
def delete_brand(brand_id: int, db: Session = Depends(get_db)):
    svc.delete_brand(db, brand_id)
