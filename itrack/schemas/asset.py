from datetime import datetime, date
from pydantic import BaseModel, Field
from itrack.models.asset import AssetType, AssetState
from itrack.models.assignment import TargetType


# Holder pointers, state and version are written by the transition service
# only, so none of the create/update schemas accept them.

class ComputerBase(BaseModel):
    model_config = {"protected_namespaces": ()}

    serial: str = Field(..., min_length=1, max_length=128)
    model_id: int
    hostname: str | None = None
    processor: str | None = None
    ram: str | None = None
    storage: str | None = None
    operating_system: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    warranty_until: date | None = None
    notes: str | None = None


class ComputerCreate(ComputerBase):
    pass


class ComputerUpdate(BaseModel):
    model_config = {"protected_namespaces": ()}

    serial: str | None = Field(None, min_length=1, max_length=128)
    model_id: int | None = None
    hostname: str | None = None
    processor: str | None = None
    ram: str | None = None
    storage: str | None = None
    operating_system: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    warranty_until: date | None = None
    notes: str | None = None


class ComputerResponse(ComputerBase):
    id: int
    state: AssetState
    held_by_user_id: int | None
    held_by_department_id: int | None
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeviceBase(BaseModel):
    model_config = {"protected_namespaces": ()}

    serial: str = Field(..., min_length=1, max_length=128)
    model_id: int
    asset_tag: str | None = None
    mac_address: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    notes: str | None = None


class DeviceCreate(DeviceBase):
    pass


class DeviceUpdate(BaseModel):
    model_config = {"protected_namespaces": ()}

    serial: str | None = Field(None, min_length=1, max_length=128)
    model_id: int | None = None
    asset_tag: str | None = None
    mac_address: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    notes: str | None = None


class DeviceResponse(DeviceBase):
    id: int
    state: AssetState
    held_by_user_id: int | None
    held_by_department_id: int | None
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PhoneLineBase(BaseModel):
    number: str = Field(..., min_length=1, max_length=32)
    provider: str = Field(..., min_length=1, max_length=128)
    imei: str | None = Field(None, max_length=32)
    plan: str | None = None
    notes: str | None = None


class PhoneLineCreate(PhoneLineBase):
    pass


class PhoneLineUpdate(BaseModel):
    number: str | None = Field(None, min_length=1, max_length=32)
    provider: str | None = Field(None, min_length=1, max_length=128)
    imei: str | None = None
    plan: str | None = None
    notes: str | None = None


class PhoneLineResponse(PhoneLineBase):
    id: int
    state: AssetState
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssetSummary(BaseModel):
    """One row of the availability / assignment listing."""

    asset_id: int
    asset_type: AssetType
    label: str
    serial: str
    state: AssetState
    held_by: str | None = None
    holder_type: TargetType | None = None
    holder_id: int | None = None


class TargetBrief(BaseModel):
    id: int
    type: TargetType
    name: str


class HolderResponse(BaseModel):
    asset_type: AssetType
    asset_id: int
    holder: TargetBrief | None


class StateChangeRequest(BaseModel):
    state: AssetState
    expected_version: int | None = None
