from itrack.schemas.organization import (
    ManagementAreaCreate, ManagementAreaUpdate, ManagementAreaResponse,
    DepartmentCreate, DepartmentUpdate, DepartmentResponse,
)
from itrack.schemas.user import UserCreate, UserUpdate, UserResponse
from itrack.schemas.catalog import (
    BrandCreate, BrandUpdate, BrandResponse, AssetModelCreate, AssetModelUpdate, AssetModelResponse,
)
from itrack.schemas.asset import (
    ComputerCreate, ComputerUpdate, ComputerResponse,
    DeviceCreate, DeviceUpdate, DeviceResponse,
    PhoneLineCreate, PhoneLineUpdate, PhoneLineResponse,
    AssetSummary, HolderResponse, StateChangeRequest,
)
from itrack.schemas.assignment import (
    AssignmentRequest, AssignmentRecordResponse, AssignmentEntry, AssignmentResult, DeliveryInfo,
)
from itrack.schemas.dashboard import DashboardResponse
from itrack.schemas.pagination import Page

__all__ = [
    "ManagementAreaCreate", "ManagementAreaUpdate", "ManagementAreaResponse",
    "DepartmentCreate", "DepartmentUpdate", "DepartmentResponse",
    "UserCreate", "UserUpdate", "UserResponse",
    "BrandCreate", "BrandUpdate", "BrandResponse",
    "AssetModelCreate", "AssetModelUpdate", "AssetModelResponse",
    "ComputerCreate", "ComputerUpdate", "ComputerResponse",
    "DeviceCreate", "DeviceUpdate", "DeviceResponse",
    "PhoneLineCreate", "PhoneLineUpdate", "PhoneLineResponse",
    "AssetSummary", "HolderResponse", "StateChangeRequest",
    "AssignmentRequest", "AssignmentRecordResponse", "AssignmentEntry", "AssignmentResult", "DeliveryInfo",
    "DashboardResponse",
    "Page",
]
