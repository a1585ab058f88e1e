from datetime import datetime
from pydantic import BaseModel, Field


class UserBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field(..., min_length=1, max_length=128)
    employee_number: int | None = None
    email: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    extension: str | None = Field(None, max_length=32)
    department_id: int


class UserCreate(UserBase):
    pass


class UserUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=128)
    last_name: str | None = Field(None, min_length=1, max_length=128)
    employee_number: int | None = None
    email: str | None = None
    position: str | None = None
    extension: str | None = None
    department_id: int | None = None


class UserResponse(UserBase):
    id: int
    full_name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
