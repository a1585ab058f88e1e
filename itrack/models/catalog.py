from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from itrack.database import Base


class Brand(Base):
    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    models: Mapped[list["AssetModel"]] = relationship(back_populates="brand")


class AssetModel(Base):
    """Hardware model of a brand, e.g. Latitude 5420 (Laptop)."""

    __tablename__ = "asset_models"

    __table_args__ = (
        UniqueConstraint("brand_id", "name", name="uq_brand_model_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)  # Laptop, Monitor, Printer...
    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    brand: Mapped["Brand"] = relationship(back_populates="models")
    computers: Mapped[list["Computer"]] = relationship(back_populates="model")
    devices: Mapped[list["Device"]] = relationship(back_populates="model")
