import enum
from datetime import datetime, timezone
from sqlalchemy import Integer, String, DateTime, Index, Enum as SAEnum, event
from sqlalchemy.orm import Mapped, mapped_column
from itrack.database import Base
from itrack.models.asset import AssetType


class ActionType(str, enum.Enum):
    assignment = "Assignment"
    return_ = "Return"


class TargetType(str, enum.Enum):
    user = "User"
    department = "Department"


class LedgerImmutableError(RuntimeError):
    pass


class AssignmentRecord(Base):
    """Append-only table: no UPDATE, no DELETE.

    For a Return the target is the holder the asset was returned from.
    """

    __tablename__ = "assignment_records"

    __table_args__ = (
        Index("ix_assignment_records_asset", "asset_type", "asset_id", "recorded_at"),
        Index("ix_assignment_records_target", "target_type", "target_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    asset_type: Mapped[AssetType] = mapped_column(
        SAEnum(AssetType, name="assettype", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    asset_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action_type: Mapped[ActionType] = mapped_column(
        SAEnum(ActionType, name="actiontype", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    target_type: Mapped[TargetType] = mapped_column(
        SAEnum(TargetType, name="targettype", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Delivery metadata, a snapshot taken when the record is written.
    # No foreign keys: the ledger outlives deleted assets, targets and managers.
    manager_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    manager_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    locality: Mapped[str | None] = mapped_column(String(255), nullable=True)
    charger_model: Mapped[str | None] = mapped_column(String(128), nullable=True)
    charger_serial: Mapped[str | None] = mapped_column(String(128), nullable=True)

    idempotency_key: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)


@event.listens_for(AssignmentRecord, "before_update")
def _prevent_update(mapper, connection, target):
    raise LedgerImmutableError(f"Assignment record {target.id} is immutable")


@event.listens_for(AssignmentRecord, "before_delete")
def _prevent_delete(mapper, connection, target):
    raise LedgerImmutableError(f"Assignment record {target.id} cannot be deleted")
