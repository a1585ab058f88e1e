from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.models.asset import AssetType, AssetState
from itrack.schemas.asset import DeviceCreate, DeviceUpdate, DeviceResponse
from itrack.schemas.pagination import Page
import itrack.services.asset_service as svc

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.get("", response_model=Page[DeviceResponse])
def list_devices(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    search: str = Query(""),
    state: AssetState | None = Query(None),
    model_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_assets(db, AssetType.device, page=page, size=size, search=search, state=state, model_id=model_id)


@router.post("", response_model=DeviceResponse, status_code=201)
def create_device(data: DeviceCreate, db: Session = Depends(get_db)):
    return svc.create_asset(db, AssetType.device, data)


@router.get("/{device_id}", response_model=DeviceResponse)
def get_device(device_id: int, db: Session = Depends(get_db)):
    return svc.get_one(db, AssetType.device, device_id)


@router.put("/{device_id}", response_model=DeviceResponse)
def update_device(device_id: int, data: DeviceUpdate, db: Session = Depends(get_db)):
    return svc.update_asset(db, AssetType.device, device_id, data)


@router.delete("/{device_id}", status_code=204)
def delete_device(device_id: int, db: Session = Depends(get_db)):
    svc.delete_asset(db, AssetType.device, device_id)
