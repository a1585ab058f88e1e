from itrack.models.organization import ManagementArea, Department
from itrack.models.user import User
from itrack.models.catalog import Brand, AssetModel
from itrack.models.asset import AssetType, AssetState, Computer, Device, PhoneLine
from itrack.models.assignment import ActionType, TargetType, AssignmentRecord, LedgerImmutableError

__all__ = [
    "ManagementArea", "Department", "User", "Brand", "AssetModel",
    "AssetType", "AssetState", "Computer", "Device", "PhoneLine",
    "ActionType", "TargetType", "AssignmentRecord", "LedgerImmutableError",
]
