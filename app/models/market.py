"""MarketPrice ORM model: append-only log of submitted crop prices.

A price change is a new row; rows are never mutated.  Reads order by
``date`` descending with ``id`` descending as the tiebreaker, so the
composite (crop, date) index serves both the per-crop and the grouped views.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.auth.models import User
from app.models.base import AppendOnlyMixin, Base
from app.models.enums import CropEnum, PriceQualityEnum


class MarketPrice(Base, AppendOnlyMixin):
    """One price observation for a crop at a market and quality tier."""

    __tablename__ = "market_prices"
    __table_args__ = (
        Index("ix_market_prices_crop_date", "crop", "date"),
    )

    crop: Mapped[CropEnum] = mapped_column(
        Enum(
            CropEnum,
            name="crop_type",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    price_per_kg: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(
        String(32), nullable=False, default="KES/kg", server_default="KES/kg"
    )
    market: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="Kisii County",
        server_default="Kisii County",
    )
    quality: Mapped[PriceQualityEnum] = mapped_column(
        Enum(
            PriceQualityEnum,
            name="price_quality",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
        default=PriceQualityEnum.standard,
        server_default=PriceQualityEnum.standard.value,
    )
    updated_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────────
    updated_by: Mapped[User | None] = relationship(lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<MarketPrice id={self.id} crop={self.crop} "
            f"quality={self.quality} price={self.price_per_kg}>"
        )
