from datetime import datetime
from pydantic import BaseModel, Field


class BrandCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)


class BrandUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=128)


class BrandResponse(BrandCreate):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class AssetModelBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=64)
    brand_id: int


class AssetModelCreate(AssetModelBase):
    pass


class AssetModelUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = None
    brand_id: int | None = None


class AssetModelResponse(AssetModelBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}
