from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session
from itrack.database import get_db
import itrack.services.export_service as svc

router = APIRouter(prefix="/api", tags=["export"])


@router.get("/export/excel")
def export_excel(db: Session = Depends(get_db)):
    xlsx_bytes = svc.export_assets_excel(db)
    return Response(
        content=xlsx_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=inventory.xlsx"},
    )
