import enum
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field
from itrack.models.asset import AssetType
from itrack.models.assignment import ActionType, TargetType
from itrack.schemas.asset import TargetBrief


class AssignmentAction(str, enum.Enum):
    assign = "assign"
    unassign = "unassign"


class DeliveryInfo(BaseModel):
    manager_id: int | None = None
    reason: str | None = Field(None, max_length=500)
    locality: str | None = Field(None, max_length=255)
    charger_model: str | None = Field(None, max_length=128)  # computers only
    charger_serial: str | None = Field(None, max_length=128)


class AssignmentRequest(DeliveryInfo):
    # camelCase names are accepted as well
    item_id: int = Field(..., validation_alias=AliasChoices("item_id", "itemId"))
    item_type: AssetType = Field(..., validation_alias=AliasChoices("item_type", "itemType"))
    action: AssignmentAction
    target_type: TargetType | None = Field(None, validation_alias=AliasChoices("target_type", "targetType"))
    target_id: int | None = Field(None, validation_alias=AliasChoices("target_id", "targetId"))
    notes: str | None = Field(None, max_length=1000)
    expected_version: int | None = None
    idempotency_key: str | None = Field(None, min_length=1, max_length=64)

    def delivery(self) -> DeliveryInfo:
        return DeliveryInfo(**self.model_dump(include=set(DeliveryInfo.model_fields)))


class AssignmentRecordResponse(BaseModel):
    id: int
    asset_type: AssetType
    asset_id: int
    action_type: ActionType
    target_type: TargetType
    target_id: int
    recorded_at: datetime
    notes: str | None
    manager_id: int | None
    manager_name: str | None
    reason: str | None
    locality: str | None
    charger_model: str | None
    charger_serial: str | None

    model_config = {"from_attributes": True}


class AssetBrief(BaseModel):
    id: int
    type: AssetType
    serial: str
    description: str


class AssignmentEntry(AssignmentRecordResponse):
    """Ledger row with its asset and target described; either is None once deleted."""

    asset: AssetBrief | None = None
    target: TargetBrief | None = None


class AssignmentResult(BaseModel):
    success: bool = True
    message: str
    record: AssignmentRecordResponse


class ManagerBrief(BaseModel):
    id: int
    name: str


class DefaultManagerResponse(BaseModel):
    manager: ManagerBrief | None
