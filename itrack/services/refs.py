"""Tagged references to assets and targets, with one lookup per variant."""
from dataclasses import dataclass
from sqlalchemy.orm import Session
from itrack.errors import NotFound, InvalidTarget
from itrack.models.asset import AssetType, Computer, Device, PhoneLine
from itrack.models.assignment import TargetType
from itrack.models.organization import Department
from itrack.models.user import User

ASSET_MODELS = {
    AssetType.computer: Computer,
    AssetType.device: Device,
    AssetType.phone_line: PhoneLine,
}

TARGET_MODELS = {
    TargetType.user: User,
    TargetType.department: Department,
}

# Asset kinds with denormalized held_by_user_id / held_by_department_id columns
POINTER_KINDS = frozenset({AssetType.computer, AssetType.device})

_ASSET_NAMES = {
    AssetType.computer: "Computer",
    AssetType.device: "Device",
    AssetType.phone_line: "Phone line",
}


@dataclass(frozen=True)
class AssetRef:
    asset_type: AssetType
    asset_id: int

    def __str__(self) -> str:
        return f"{self.asset_type.value}#{self.asset_id}"


@dataclass(frozen=True)
class TargetRef:
    target_type: TargetType
    target_id: int

    def __str__(self) -> str:
        return f"{self.target_type.value}#{self.target_id}"


def asset_ref(asset) -> AssetRef:
    for asset_type, model in ASSET_MODELS.items():
        if isinstance(asset, model):
            return AssetRef(asset_type, asset.id)
    raise TypeError(f"Not an asset: {asset!r}")


def make_target(target_type: TargetType | None, target_id: int | None) -> TargetRef:
    if target_type is None or target_id is None:
        raise InvalidTarget()
    if target_type not in TARGET_MODELS:
        raise InvalidTarget(f"Unknown target type: {target_type}")
    return TargetRef(TargetType(target_type), target_id)


def get_asset(db: Session, ref: AssetRef, lock: bool = False):
    """Load an asset; ``lock`` re-reads the row FOR UPDATE."""
    model = ASSET_MODELS[ref.asset_type]
    if lock:
        asset = db.get(model, ref.asset_id, with_for_update=True, populate_existing=True)
    else:
        asset = db.get(model, ref.asset_id)
    if not asset:
        raise NotFound(f"{_ASSET_NAMES[ref.asset_type]} {ref.asset_id} not found")
    return asset


def get_target(db: Session, ref: TargetRef):
    target = db.get(TARGET_MODELS[ref.target_type], ref.target_id)
    if not target:
        raise NotFound(f"{ref.target_type.value} {ref.target_id} not found")
    return target


def find_target(db: Session, ref: TargetRef):
    return db.get(TARGET_MODELS[ref.target_type], ref.target_id)


def pointer_holder(asset) -> TargetRef | None:
    if asset.held_by_user_id is not None:
        return TargetRef(TargetType.user, asset.held_by_user_id)
    if asset.held_by_department_id is not None:
        return TargetRef(TargetType.department, asset.held_by_department_id)
    return None


def asset_serial(asset_type: AssetType, asset) -> str:
    if asset_type == AssetType.phone_line:
        return asset.number
    return asset.serial


def asset_description(asset_type: AssetType, asset) -> str:
    if asset_type == AssetType.phone_line:
        return f"{asset.provider} - {asset.number}"
    model = asset.model
    brand = model.brand.name if model and model.brand else "Unknown brand"
    name = model.name if model else "Unknown model"
    return f"{brand} {name}"


def asset_label(asset_type: AssetType, asset) -> str:
    if asset_type == AssetType.phone_line:
        return f"Line {asset.provider} ({asset.number})"
    return f"{asset_description(asset_type, asset)} (Serial: {asset.serial})"


def target_label(target_type: TargetType, target) -> str:
    if target_type == TargetType.user:
        return target.full_name
    return target.name
