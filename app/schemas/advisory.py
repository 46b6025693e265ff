"""Pydantic schemas for crop advisories."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ClimateRequirements(BaseModel):
	model_config = ConfigDict(frozen=True)

	temperature: str
	rainfall: str
	altitude: str
	soil: str


class PlantingGuide(BaseModel):
	model_config = ConfigDict(frozen=True)

	season: str
	spacing: str
	preparation: str


class HarvestingGuide(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	time: str
	method: str
	yield_: str = Field(alias="yield")


class CropAdvisory(BaseModel):
	"""Static growing guidance for one crop, keyed by its lowercase id."""

	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	scientific_name: str
	overview: str
	climate: ClimateRequirements
	planting: PlantingGuide
	care: tuple[str, ...]
	pests: tuple[str, ...]
	harvesting: HarvestingGuide
	market: str


class AdvisoryListRead(BaseModel):
	count: int
	items: list[CropAdvisory] = Field(default_factory=list)


class MyAdvisoriesRead(BaseModel):
	count: int
	message: str | None = None
	items: list[CropAdvisory] = Field(default_factory=list)
