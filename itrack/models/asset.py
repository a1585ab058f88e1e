import enum
from datetime import datetime, timezone, date
from sqlalchemy import String, Integer, DateTime, Date, ForeignKey, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from itrack.database import Base


class AssetType(str, enum.Enum):
    computer = "Computer"
    device = "Device"
    phone_line = "PhoneLine"


class AssetState(str, enum.Enum):
    in_storage = "InStorage"
    assigned = "Assigned"
    under_repair = "UnderRepair"
    decommissioned = "Decommissioned"


def _state_column():
    return mapped_column(
        SAEnum(AssetState, name="assetstate", values_callable=lambda e: [x.value for x in e]),
        default=AssetState.in_storage,
        nullable=False,
        index=True,
    )


class Computer(Base):
    """Computer with denormalized holder pointers.

    ``held_by_user_id`` and ``held_by_department_id`` are written only by the
    transition service, in the same transaction as the ledger record.
    """

    __tablename__ = "computers"

    __table_args__ = (
        CheckConstraint(
            "held_by_user_id IS NULL OR held_by_department_id IS NULL",
            name="ck_computers_single_holder",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    serial: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    model_id: Mapped[int] = mapped_column(ForeignKey("asset_models.id"), nullable=False, index=True)
    hostname: Mapped[str | None] = mapped_column(String(128), nullable=True)
    processor: Mapped[str | None] = mapped_column(String(128), nullable=True)
    ram: Mapped[str | None] = mapped_column(String(64), nullable=True)
    storage: Mapped[str | None] = mapped_column(String(64), nullable=True)
    operating_system: Mapped[str | None] = mapped_column(String(128), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_until: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    state: Mapped[AssetState] = _state_column()
    held_by_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True, index=True)
    held_by_department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id"), nullable=True, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    model: Mapped["AssetModel"] = relationship(back_populates="computers")
    held_by_user: Mapped["User | None"] = relationship(back_populates="computers")
    held_by_department: Mapped["Department | None"] = relationship(back_populates="computers")

    __mapper_args__ = {"version_id_col": version}


class Device(Base):
    """Peripheral (monitor, printer, phone, ...) with denormalized holder pointers."""

    __tablename__ = "devices"

    __table_args__ = (
        CheckConstraint(
            "held_by_user_id IS NULL OR held_by_department_id IS NULL",
            name="ck_devices_single_holder",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    serial: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    model_id: Mapped[int] = mapped_column(ForeignKey("asset_models.id"), nullable=False, index=True)
    asset_tag: Mapped[str | None] = mapped_column(String(64), nullable=True)
    mac_address: Mapped[str | None] = mapped_column(String(32), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    state: Mapped[AssetState] = _state_column()
    held_by_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True, index=True)
    held_by_department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id"), nullable=True, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    model: Mapped["AssetModel"] = relationship(back_populates="devices")
    held_by_user: Mapped["User | None"] = relationship(back_populates="devices")
    held_by_department: Mapped["Department | None"] = relationship(back_populates="devices")

    __mapper_args__ = {"version_id_col": version}


class PhoneLine(Base):
    """Phone line. No holder pointers: the holder comes from the ledger."""

    __tablename__ = "phone_lines"
    # Ids are never reused; ledger rows keep pointing at deleted assets
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    number: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    provider: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    imei: Mapped[str | None] = mapped_column(String(32), nullable=True)
    plan: Mapped[str | None] = mapped_column(String(128), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    state: Mapped[AssetState] = _state_column()
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __mapper_args__ = {"version_id_col": version}
