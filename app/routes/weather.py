"""Weather report and weather-derived advisory routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.models import User
from app.errors import UpstreamUnavailableError
from app.schemas.weather import WeatherAdvisoryResponse, WeatherReport
from app.services.weather_service import WeatherService

router = APIRouter(prefix="/weather", tags=["weather"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, UpstreamUnavailableError):
		return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Failed to generate weather advisory",
	)


def get_weather_service() -> WeatherService:
	return WeatherService()


@router.get("", response_model=WeatherReport)
async def get_weather(
	service: WeatherService = Depends(get_weather_service),
	_user: User = Depends(get_current_user),
) -> WeatherReport:
	try:
		return await service.get_weather_report()
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/advisory", response_model=WeatherAdvisoryResponse)
async def get_weather_advisory(
	service: WeatherService = Depends(get_weather_service),
	_user: User = Depends(get_current_user),
) -> WeatherAdvisoryResponse:
	try:
		return await service.get_weather_advisory()
	except Exception as exc:
		raise _map_error(exc) from exc
