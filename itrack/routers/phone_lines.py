from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.models.asset import AssetType, AssetState
from itrack.schemas.asset import PhoneLineCreate, PhoneLineUpdate, PhoneLineResponse
from itrack.schemas.pagination import Page
import itrack.services.asset_service as svc

router = APIRouter(prefix="/api/phone-lines", tags=["phone-lines"])


@router.get("", response_model=Page[PhoneLineResponse])
def list_phone_lines(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    search: str = Query(""),
    state: AssetState | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_assets(db, AssetType.phone_line, page=page, size=size, search=search, state=state)


@router.get("/providers", response_model=list[str])
def list_providers(db: Session = Depends(get_db)):
    return svc.get_providers(db)


@router.post("", response_model=PhoneLineResponse, status_code=201)
def create_phone_line(data: PhoneLineCreate, db: Session = Depends(get_db)):
    return svc.create_asset(db, AssetType.phone_line, data)


@router.get("/{phone_line_id}", response_model=PhoneLineResponse)
def get_phone_line(phone_line_id: int, db: Session = Depends(get_db)):
    return svc.get_one(db, AssetType.phone_line, phone_line_id)


@router.put("/{phone_line_id}", response_model=PhoneLineResponse)
def update_phone_line(phone_line_id: int, data: PhoneLineUpdate, db: Session = Depends(get_db)):
    return svc.update_asset(db, AssetType.phone_line, phone_line_id, data)


@router.delete("/{phone_line_id}", status_code=204)
def delete_phone_line(phone_line_id: int, db: Session = Depends(get_db)):
    svc.delete_asset(db, AssetType.phone_line, phone_line_id)
