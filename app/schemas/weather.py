"""Pydantic schemas for weather reports and weather-derived advisories."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AdvisoryTag(StrEnum):
	warning = "warning"
	caution = "caution"
	info = "info"
	success = "success"


class WeatherObservation(BaseModel):
	"""Current conditions for the service region, consumed once per advisory request."""

	model_config = ConfigDict(frozen=True)

	temperature: float
	humidity: float
	rainfall_last_hour: float = 0.0


class WeatherAdvisory(BaseModel):
	model_config = ConfigDict(frozen=True)

	tag: AdvisoryTag
	message: str


class WeatherAdvisoryResponse(BaseModel):
	temperature: int
	humidity: float
	rainfall: float
	advisories: list[WeatherAdvisory] = Field(default_factory=list)


class CurrentConditions(BaseModel):
	temp: int
	feels_like: int
	humidity: float
	pressure: float
	wind_speed: float
	weather: str
	description: str
	icon: str
	sunrise: int
	sunset: int


class TemperatureRange(BaseModel):
	min: int
	max: int


class DailyForecast(BaseModel):
	date: str
	temp: TemperatureRange
	weather: str
	description: str
	icon: str
	humidity: float
	wind_speed: float
	rainfall: float = 0.0


class Coordinates(BaseModel):
	lat: float
	lon: float


class RegionLocation(BaseModel):
	name: str
	country: str
	coordinates: Coordinates


class WeatherReport(BaseModel):
	current: CurrentConditions
	forecast: list[DailyForecast] = Field(default_factory=list)
	location: RegionLocation
