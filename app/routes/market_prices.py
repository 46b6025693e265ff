"""Market price routes — grouped view, per-crop latest and history, submit, delete."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user, require_role
from app.auth.models import User
from app.database import get_db
from app.models.enums import UserRoleEnum
from app.schemas.market import (
	CropPricesRead,
	DeletePriceResponse,
	GroupedPricesRead,
	MarketPriceCreate,
	MarketPriceRead,
)
from app.services.market_service import MarketService
from app.services.price_aggregator import DEFAULT_HISTORY_LIMIT

router = APIRouter(prefix="/market-prices", tags=["market-prices"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected market price failure",
	)


def _to_price_read(price: Any) -> MarketPriceRead:
	return MarketPriceRead.model_validate(price, from_attributes=True)


@router.get("", response_model=GroupedPricesRead)
async def list_grouped_prices(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> GroupedPricesRead:
	service = MarketService(db)
	try:
		grouped = await service.get_grouped_prices()
	except Exception as exc:
		raise _map_error(exc) from exc
	return GroupedPricesRead(
		prices={str(crop): [_to_price_read(price) for price in prices] for crop, prices in grouped.items()}
	)


@router.post("", response_model=MarketPriceRead, status_code=status.HTTP_201_CREATED)
async def submit_price(
	payload: MarketPriceCreate,
	db: AsyncSession = Depends(get_db),
	current_user: User = Depends(require_role(UserRoleEnum.extension_officer, UserRoleEnum.buyer)),
) -> MarketPriceRead:
	service = MarketService(db)
	try:
		price = await service.submit_price(
			crop=payload.crop,
			price_per_kg=payload.price_per_kg,
			quality=payload.quality,
			market=payload.market,
			submitter_id=current_user.id,
		)
	except Exception as exc:
		raise _map_error(exc) from exc
	return _to_price_read(price)


@router.get("/{crop}", response_model=CropPricesRead)
async def get_crop_prices(
	crop: str,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> CropPricesRead:
	service = MarketService(db)
	try:
		prices = await service.get_crop_prices(crop)
	except Exception as exc:
		raise _map_error(exc) from exc
	return CropPricesRead(crop=crop.lower(), count=len(prices), items=[_to_price_read(p) for p in prices])


@router.get("/{crop}/history", response_model=CropPricesRead)
async def get_price_history(
	crop: str,
	limit: int = Query(default=DEFAULT_HISTORY_LIMIT, le=365),
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> CropPricesRead:
	service = MarketService(db)
	try:
		prices = await service.get_price_history(crop, limit=limit)
	except Exception as exc:
		raise _map_error(exc) from exc
	return CropPricesRead(crop=crop.lower(), count=len(prices), items=[_to_price_read(p) for p in prices])


@router.delete("/{price_id}", response_model=DeletePriceResponse)
async def delete_price(
	price_id: int,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_role(UserRoleEnum.extension_officer)),
) -> DeletePriceResponse:
	service = MarketService(db)
	try:
		await service.delete_price(price_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return DeletePriceResponse(id=price_id)
