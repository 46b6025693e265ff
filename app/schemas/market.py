"""Pydantic request/response schemas for market prices."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import CropEnum, PriceQualityEnum, UserRoleEnum


class MarketPriceCreate(BaseModel):
	# Accepts any JSON value; MarketService.submit_price owns every field check
	# and reports failures as 400.
	crop: Any = None
	price_per_kg: Any = None
	quality: Any = None
	market: Any = None


class SubmitterRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	role: UserRoleEnum


class MarketPriceRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	crop: CropEnum
	price_per_kg: float
	unit: str
	market: str
	quality: PriceQualityEnum
	updated_by: SubmitterRead | None = None
	date: datetime


class CropPricesRead(BaseModel):
	crop: str
	count: int
	items: list[MarketPriceRead] = Field(default_factory=list)


class GroupedPricesRead(BaseModel):
	prices: dict[str, list[MarketPriceRead]] = Field(default_factory=dict)


class DeletePriceResponse(BaseModel):
	id: int
	message: str = "Price deleted successfully"
