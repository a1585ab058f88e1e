from datetime import datetime
from pydantic import BaseModel, Field


class ManagementAreaBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    is_general: bool = False
    manager_id: int | None = None


class ManagementAreaCreate(ManagementAreaBase):
    pass


class ManagementAreaUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    is_general: bool | None = None
    manager_id: int | None = None


class ManagementAreaResponse(ManagementAreaBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class DepartmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    cost_center: str | None = Field(None, max_length=64)
    management_area_id: int


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    cost_center: str | None = None
    management_area_id: int | None = None


class DepartmentResponse(DepartmentBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
