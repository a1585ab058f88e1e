from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.schemas.organization import DepartmentCreate, DepartmentUpdate, DepartmentResponse
from itrack.schemas.asset import AssetSummary
from itrack.schemas.pagination import Page
import itrack.services.organization_service as svc

router = APIRouter(prefix="/api/departments", tags=["departments"])


@router.get("", response_model=Page[DepartmentResponse])
def list_departments(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    management_area_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_departments(db, page=page, size=size, management_area_id=management_area_id)


@router.post("", response_model=DepartmentResponse, status_code=201)
def create_department(data: DepartmentCreate, db: Session = Depends(get_db)):
    return svc.create_department(db, data)


@router.get("/{dept_id}", response_model=DepartmentResponse)
def get_department(dept_id: int, db: Session = Depends(get_db)):
    return svc.get_department(db, dept_id)


@router.put("/{dept_id}", response_model=DepartmentResponse)
def update_department(dept_id: int, data: DepartmentUpdate, db: Session = Depends(get_db)):
    return svc.update_department(db, dept_id, data)


@router.delete("/{dept_id}", status_code=204)
def delete_department(dept_id: int, db: Session = Depends(get_db)):
    svc.delete_department(db, dept_id)


@router.get("/{dept_id}/assets", response_model=list[AssetSummary])
def department_assets(dept_id: int, db: Session = Depends(get_db)):
    return svc.get_department_assets(db, dept_id)
