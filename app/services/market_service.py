"""Market price submission, removal and query service."""

from __future__ import annotations

import math
import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import get_settings
from app.errors import NotFoundError, ValidationError
from app.models.enums import CropEnum, PriceQualityEnum
from app.models.market import MarketPrice
from app.services import price_aggregator
from app.services.price_aggregator import DEFAULT_HISTORY_LIMIT, DEFAULT_LATEST_LIMIT

logger = structlog.get_logger("akilima.market")

MARKET_NAME_MAX_LENGTH = 255


class MarketService:
	"""Service over the append-only ``market_prices`` log."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.settings = get_settings()

	async def get_grouped_prices(self) -> dict[str, list[MarketPrice]]:
		records = await self._find()
		return price_aggregator.group_latest_by_quality_per_crop(records)

	async def get_crop_prices(self, crop: str, limit: int = DEFAULT_LATEST_LIMIT) -> list[MarketPrice]:
		records = await self._find(crop=crop, limit=limit)
		return price_aggregator.latest_for_crop(records, crop, limit)

	async def get_price_history(self, crop: str, limit: int | None = DEFAULT_HISTORY_LIMIT) -> list[MarketPrice]:
		if not limit or limit < 1:
			limit = DEFAULT_HISTORY_LIMIT
		records = await self._find(crop=crop, limit=limit)
		return price_aggregator.history(records, crop, limit)

	async def submit_price(
		self,
		*,
		crop: Any,
		price_per_kg: Any,
		submitter_id: uuid.UUID | None,
		quality: Any = None,
		market: Any = None,
	) -> MarketPrice:
		crop_value = self._validate_crop(crop)
		price_value = self._validate_price(price_per_kg)
		quality_value = self._validate_quality(quality)
		market_value = self._validate_market(market) or self.settings.region_name

		price = MarketPrice(
			crop=crop_value,
			price_per_kg=price_value,
			unit=self.settings.default_price_unit,
			market=market_value,
			quality=quality_value,
			updated_by_id=submitter_id,
			date=datetime.now(UTC),
		)
		self.db.add(price)
		await self.db.flush()
		await self.db.refresh(price, attribute_names=["updated_by"])
		logger.info(
			"market_price_submitted",
			price_id=price.id,
			crop=crop_value.value,
			quality=quality_value.value,
			price_per_kg=price_value,
			submitter_id=str(submitter_id) if submitter_id else None,
		)
		return price

	async def delete_price(self, price_id: int) -> None:
		price = await self.db.get(MarketPrice, price_id)
		if price is None:
			raise NotFoundError(f"Price {price_id} not found")
		await self.db.delete(price)
		await self.db.flush()
		logger.info("market_price_deleted", price_id=price_id, crop=str(price.crop))

	async def _find(self, crop: str | None = None, limit: int | None = None) -> list[MarketPrice]:
		stmt = (
			select(MarketPrice)
			.options(selectinload(MarketPrice.updated_by))
			.order_by(MarketPrice.date.desc(), MarketPrice.id.desc())
		)
		if crop is not None:
			try:
				crop_key = CropEnum(crop.strip().lower())
			except ValueError:
				return []
			stmt = stmt.where(MarketPrice.crop == crop_key)
		if limit is not None:
			stmt = stmt.limit(limit)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	@staticmethod
	def _validate_crop(crop: Any) -> CropEnum:
		if crop is None or (isinstance(crop, str) and not crop.strip()):
			raise ValidationError("Please provide crop and price")
		if not isinstance(crop, str):
			raise ValidationError("crop must be a string")
		normalized = crop.strip().lower()
		try:
			return CropEnum(normalized)
		except ValueError as exc:
			allowed = ", ".join(member.value for member in CropEnum)
			raise ValidationError(f"Unsupported crop {crop!r}; expected one of: {allowed}") from exc

	@staticmethod
	def _validate_price(price_per_kg: Any) -> float:
		if price_per_kg is None or isinstance(price_per_kg, bool):
			raise ValidationError("Please provide crop and price")
		try:
			value = float(price_per_kg)
		except (TypeError, ValueError) as exc:
			raise ValidationError("price_per_kg must be a number") from exc
		if not math.isfinite(value) or value <= 0:
			raise ValidationError("price_per_kg must be a positive number")
		return value

	@staticmethod
	def _validate_quality(quality: Any) -> PriceQualityEnum:
		if quality is None or (isinstance(quality, str) and not quality.strip()):
			return PriceQualityEnum.standard
		if not isinstance(quality, str):
			raise ValidationError("quality must be a string")
		try:
			return PriceQualityEnum(quality.strip().lower())
		except ValueError as exc:
			allowed = ", ".join(member.value for member in PriceQualityEnum)
			raise ValidationError(f"Unsupported quality {quality!r}; expected one of: {allowed}") from exc

	@staticmethod
	def _validate_market(market: Any) -> str | None:
		if market is None:
			return None
		if not isinstance(market, str):
			raise ValidationError("market must be a string")
		value = market.strip()
		if len(value) > MARKET_NAME_MAX_LENGTH:
			raise ValidationError(f"market must be at most {MARKET_NAME_MAX_LENGTH} characters")
		return value or None
