from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from itrack.database import get_db
from itrack.models.asset import AssetType
from itrack.schemas.asset import AssetSummary, HolderResponse, StateChangeRequest, TargetBrief
from itrack.schemas.assignment import AssignmentRecordResponse
from itrack.services.refs import AssetRef, get_asset, find_target, target_label
import itrack.services.resolver as svc
import itrack.services.ledger_service as ledger_svc
import itrack.services.transition_service as transition_svc

router = APIRouter(prefix="/api/assets", tags=["assets"])


@router.get("", response_model=list[AssetSummary])
def list_assets(
    state: str | None = Query(None),
    model_id: int | None = Query(None),
    model_id_camel: int | None = Query(None, alias="modelId"),  # camelCase name accepted as well
    provider: str | None = Query(None),
    asset_type: AssetType | None = Query(None),
    db: Session = Depends(get_db),
):
    if model_id is None:
        model_id = model_id_camel
    filters = svc.AssetFilter(state=state, model_id=model_id, provider=provider, asset_type=asset_type)
    return svc.list_assets(db, filters)


@router.get("/{asset_type}/{asset_id}/history", response_model=list[AssignmentRecordResponse])
def asset_history(asset_type: AssetType, asset_id: int, db: Session = Depends(get_db)):
    return ledger_svc.get_asset_history(db, AssetRef(asset_type, asset_id))


@router.get("/{asset_type}/{asset_id}/holder", response_model=HolderResponse)
def asset_holder(asset_type: AssetType, asset_id: int, db: Session = Depends(get_db)):
    ref = AssetRef(asset_type, asset_id)
    asset = get_asset(db, ref)
    holder = svc.current_holder(db, ref, asset)
    brief = None
    if holder is not None:
        target = find_target(db, holder)
        brief = TargetBrief(
            id=holder.target_id,
            type=holder.target_type,
            name=target_label(holder.target_type, target) if target else "Unknown target",
        )
    return HolderResponse(asset_type=asset_type, asset_id=asset_id, holder=brief)


@router.put("/{asset_type}/{asset_id}/state", response_model=AssetSummary)
def change_state(asset_type: AssetType, asset_id: int, data: StateChangeRequest, db: Session = Depends(get_db)):
    ref = AssetRef(asset_type, asset_id)
    asset = transition_svc.set_state(db, ref, data.state, expected_version=data.expected_version)
    return svc.summarize(db, ref, asset)
