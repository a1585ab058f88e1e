from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.models.asset import AssetType, AssetState
from itrack.schemas.asset import ComputerCreate, ComputerUpdate, ComputerResponse
from itrack.schemas.pagination import Page
import itrack.services.asset_service as svc

router = APIRouter(prefix="/api/computers", tags=["computers"])


@router.get("", response_model=Page[ComputerResponse])
def list_computers(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    search: str = Query(""),
    state: AssetState | None = Query(None),
    model_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_assets(db, AssetType.computer, page=page, size=size, search=search, state=state, model_id=model_id)


@router.post("", response_model=ComputerResponse, status_code=201)
def create_computer(data: ComputerCreate, db: Session = Depends(get_db)):
    return svc.create_asset(db, AssetType.computer, data)


@router.get("/{computer_id}", response_model=ComputerResponse)
def get_computer(computer_id: int, db: Session = Depends(get_db)):
    return svc.get_one(db, AssetType.computer, computer_id)


@router.put("/{computer_id}", response_model=ComputerResponse)
def update_computer(computer_id: int, data: ComputerUpdate, db: Session = Depends(get_db)):
    return svc.update_asset(db, AssetType.computer, computer_id, data)


@router.delete("/{computer_id}", status_code=204)
def delete_computer(computer_id: int, db: Session = Depends(get_db)):
    svc.delete_asset(db, AssetType.computer, computer_id)
