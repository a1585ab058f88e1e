from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.schemas.organization import ManagementAreaCreate, ManagementAreaUpdate, ManagementAreaResponse
from itrack.schemas.pagination import Page
import itrack.services.organization_service as svc

router = APIRouter(prefix="/api/management-areas", tags=["management-areas"])


@router.get("", response_model=Page[ManagementAreaResponse])
def list_management_areas(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return svc.get_management_areas(db, page=page, size=size)


@router.post("", response_model=ManagementAreaResponse, status_code=201)
def create_management_area(data: ManagementAreaCreate, db: Session = Depends(get_db)):
    return svc.create_management_area(db, data)


@router.get("/{area_id}", response_model=ManagementAreaResponse)
def get_management_area(area_id: int, db: Session = Depends(get_db)):
    return svc.get_management_area(db, area_id)


@router.put("/{area_id}", response_model=ManagementAreaResponse)
def update_management_area(area_id: int, data: ManagementAreaUpdate, db: Session = Depends(get_db)):
    return svc.update_management_area(db, area_id, data)


@router.delete("/{area_id}", status_code=204)
def delete_management_area(area_id: int, db: Session = Depends(get_db)):
    svc.delete_management_area(db, area_id)
