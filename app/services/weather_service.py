"""OpenWeatherMap client and weather-derived advisory service for the service region."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

import httpx

from app.config import Settings, get_settings
from app.errors import UpstreamUnavailableError
from app.schemas.weather import (
	Coordinates,
	CurrentConditions,
	DailyForecast,
	RegionLocation,
	TemperatureRange,
	WeatherAdvisoryResponse,
	WeatherObservation,
	WeatherReport,
)
from app.services.weather_rules import evaluate_weather

_logger = logging.getLogger("akilima.weather")

# The 5-day forecast endpoint returns 3-hour slots; every 8th slot is one day.
FORECAST_SLOTS_PER_DAY = 8
FORECAST_MAX_DAYS = 5


def _round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def _finite(value: Any) -> float:
	number = float(value)
	if not math.isfinite(number):
		raise ValueError(f"non-finite reading {value!r}")
	return number


class WeatherClient:
	"""Thin async wrapper over the provider's current-weather and forecast endpoints."""

	def __init__(
		self,
		settings: Settings | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.settings = settings or get_settings()
		self.transport = transport

	async def fetch_current(self) -> dict[str, Any]:
		return await self._get("weather")

	async def fetch_forecast(self) -> dict[str, Any]:
		return await self._get("forecast")

	async def _get(self, endpoint: str) -> dict[str, Any]:
		if not self.settings.openweather_api_key:
			raise UpstreamUnavailableError("Weather API key not configured")

		params = {
			"lat": self.settings.region_lat,
			"lon": self.settings.region_lon,
			"units": "metric",
			"appid": self.settings.openweather_api_key,
		}
		url = f"{self.settings.openweather_base_url.rstrip('/')}/{endpoint}"
		try:
			async with httpx.AsyncClient(
				timeout=self.settings.openweather_timeout_seconds,
				transport=self.transport,
			) as client:
				response = await client.get(url, params=params)
				response.raise_for_status()
				payload = response.json()
		except (httpx.HTTPError, ValueError) as exc:
			_logger.warning("weather provider request failed", extra={"endpoint": endpoint, "error": str(exc)})
			raise UpstreamUnavailableError(f"Failed to fetch weather data: {exc}") from exc

		if not isinstance(payload, dict):
			raise UpstreamUnavailableError("Weather provider returned an unexpected payload")
		return payload


class WeatherService:
	def __init__(self, client: WeatherClient | None = None, settings: Settings | None = None):
		self.settings = settings or get_settings()
		self.client = client or WeatherClient(self.settings)

	async def get_current_observation(self) -> WeatherObservation:
		payload = await self.client.fetch_current()
		return self.observation_from_payload(payload)

	async def get_weather_advisory(self) -> WeatherAdvisoryResponse:
		observation = await self.get_current_observation()
		return WeatherAdvisoryResponse(
			temperature=_round_half_up(observation.temperature),
			humidity=observation.humidity,
			rainfall=observation.rainfall_last_hour,
			advisories=evaluate_weather(observation),
		)

	async def get_weather_report(self) -> WeatherReport:
		current_payload, forecast_payload = await asyncio.gather(
			self.client.fetch_current(),
			self.client.fetch_forecast(),
		)
		return WeatherReport(
			current=self.current_from_payload(current_payload),
			forecast=self.daily_forecast_from_payload(forecast_payload),
			location=RegionLocation(
				name=self.settings.region_name,
				country=self.settings.region_country,
				coordinates=Coordinates(lat=self.settings.region_lat, lon=self.settings.region_lon),
			),
		)

	@staticmethod
	def observation_from_payload(payload: dict[str, Any]) -> WeatherObservation:
		try:
			main = payload["main"]
			rain = payload.get("rain") or {}
			return WeatherObservation(
				temperature=_finite(main["temp"]),
				humidity=_finite(main["humidity"]),
				rainfall_last_hour=_finite(rain.get("1h", 0) or 0),
			)
		except (KeyError, TypeError, ValueError, AttributeError) as exc:
			raise UpstreamUnavailableError("Weather provider returned a malformed observation") from exc

	@staticmethod
	def current_from_payload(payload: dict[str, Any]) -> CurrentConditions:
		try:
			main = payload["main"]
			summary = payload["weather"][0]
			return CurrentConditions(
				temp=_round_half_up(_finite(main["temp"])),
				feels_like=_round_half_up(_finite(main["feels_like"])),
				humidity=main["humidity"],
				pressure=main["pressure"],
				wind_speed=payload["wind"]["speed"],
				weather=summary["main"],
				description=summary["description"],
				icon=summary["icon"],
				sunrise=payload["sys"]["sunrise"],
				sunset=payload["sys"]["sunset"],
			)
		except (KeyError, IndexError, TypeError, ValueError) as exc:
			raise UpstreamUnavailableError("Weather provider returned malformed current conditions") from exc

	@staticmethod
	def daily_forecast_from_payload(payload: dict[str, Any]) -> list[DailyForecast]:
		try:
			slots = payload["list"]
			days: list[DailyForecast] = []
			for slot in slots[::FORECAST_SLOTS_PER_DAY][:FORECAST_MAX_DAYS]:
				summary = slot["weather"][0]
				rain = slot.get("rain") or {}
				days.append(
					DailyForecast(
						date=str(slot["dt_txt"]).split(" ")[0],
						temp=TemperatureRange(
							min=_round_half_up(_finite(slot["main"]["temp_min"])),
							max=_round_half_up(_finite(slot["main"]["temp_max"])),
						),
						weather=summary["main"],
						description=summary["description"],
						icon=summary["icon"],
						humidity=slot["main"]["humidity"],
						wind_speed=slot["wind"]["speed"],
						rainfall=_finite(rain.get("3h", 0) or 0),
					)
				)
			return days
		except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
			raise UpstreamUnavailableError("Weather provider returned a malformed forecast") from exc
