from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from itrack.config import settings
from itrack.database import get_db
from itrack.models.assignment import TargetType
from itrack.schemas.assignment import (
    AssignmentRequest, AssignmentAction, AssignmentResult, AssignmentRecordResponse, AssignmentEntry,
    DefaultManagerResponse, ManagerBrief,
)
from itrack.schemas.pagination import Page
from itrack.services.refs import AssetRef, make_target
import itrack.services.transition_service as svc
import itrack.services.ledger_service as ledger_svc
import itrack.services.manager_service as manager_svc
import itrack.services.export_service as export_svc

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.post("", response_model=AssignmentResult)
def record_assignment(data: AssignmentRequest, db: Session = Depends(get_db)):
    ref = AssetRef(data.item_type, data.item_id)
    if data.action == AssignmentAction.assign:
        target = make_target(data.target_type, data.target_id)
        record = svc.assign(
            db, ref, target,
            notes=data.notes,
            delivery=data.delivery(),
            expected_version=data.expected_version,
            idempotency_key=data.idempotency_key,
        )
        message = "Asset assigned successfully"
    else:
        record = svc.unassign(
            db, ref,
            notes=data.notes,
            expected_version=data.expected_version,
            idempotency_key=data.idempotency_key,
        )
        message = "Asset returned successfully"
    return AssignmentResult(
        success=True, message=message, record=AssignmentRecordResponse.model_validate(record)
    )


@router.get("", response_model=Page[AssignmentEntry])
def list_assignments(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return ledger_svc.get_records(db, page=page, size=size)


@router.get("/default-manager", response_model=DefaultManagerResponse)
def default_manager(
    target_type: TargetType | None = Query(None),
    target_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    manager = manager_svc.default_manager(db, make_target(target_type, target_id))
    if manager is None:
        return DefaultManagerResponse(manager=None)
    return DefaultManagerResponse(manager=ManagerBrief(id=manager.id, name=manager.full_name))


@router.get("/{record_id}", response_model=AssignmentEntry)
def get_assignment(record_id: int, db: Session = Depends(get_db)):
    return ledger_svc.describe_record(db, ledger_svc.get_record(db, record_id))


@router.get("/{record_id}/delivery-note")
def delivery_note_excel(record_id: int, db: Session = Depends(get_db)):
    xlsx_bytes = export_svc.export_delivery_note_excel(db, record_id)
    return Response(
        content=xlsx_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=delivery-note-{record_id}.xlsx"},
    )


@router.get("/{record_id}/delivery-note/pdf")
def delivery_note_pdf(record_id: int, db: Session = Depends(get_db)):
    pdf_bytes = export_svc.export_delivery_note_pdf(db, record_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=delivery-note-{record_id}.pdf"},
    )
