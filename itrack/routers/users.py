from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.schemas.user import UserCreate, UserUpdate, UserResponse
from itrack.schemas.asset import AssetSummary
from itrack.schemas.pagination import Page
import itrack.services.user_service as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=Page[UserResponse])
def list_users(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    search: str = Query(""),
    department_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return svc.get_users(db, page=page, size=size, search=search, department_id=department_id)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return svc.create_user(db, data)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return svc.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    return svc.update_user(db, user_id, data)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    svc.delete_user(db, user_id)


@router.get("/{user_id}/assets", response_model=list[AssetSummary])
def user_assets(user_id: int, db: Session = Depends(get_db)):
    return svc.get_user_assets(db, user_id)
