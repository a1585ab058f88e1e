from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from itrack.database import get_db
from itrack.schemas.dashboard import DashboardResponse
import itrack.services.dashboard_service as svc

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    return svc.get_dashboard(db)
