from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from itrack.database import Base


class ManagementArea(Base):
    """Top-level organizational unit (gerencia)."""

    __tablename__ = "management_areas"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    is_general: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # users -> departments -> management_areas -> users is a cycle
    manager_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", use_alter=True, name="fk_management_areas_manager_id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    manager: Mapped["User | None"] = relationship(foreign_keys=[manager_id])
    departments: Mapped[list["Department"]] = relationship(back_populates="management_area")


class Department(Base):
    __tablename__ = "departments"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    cost_center: Mapped[str | None] = mapped_column(String(64), nullable=True)
    management_area_id: Mapped[int] = mapped_column(
        ForeignKey("management_areas.id"), nullable=False, index=True
    )
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

    management_area: Mapped["ManagementArea"] = relationship(back_populates="departments")
    users: Mapped[list["User"]] = relationship(back_populates="department")
    computers: Mapped[list["Computer"]] = relationship(back_populates="held_by_department")
    devices: Mapped[list["Device"]] = relationship(back_populates="held_by_department")
