"""Crop advisory catalog: fixed Kisii County reference data with read-only lookup."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache

from app.errors import NotFoundError
from app.schemas.advisory import (
	ClimateRequirements,
	CropAdvisory,
	HarvestingGuide,
	PlantingGuide,
)

NO_CROPS_SELECTED_MESSAGE = "No crops selected. Please update your profile."

CROP_ADVISORIES: tuple[CropAdvisory, ...] = (
	CropAdvisory(
		id="tea",
		name="Tea",
		scientific_name="Camellia sinensis",
		overview=(
			"Tea is one of the most important cash crops in Kisii County, thriving in "
			"the high-altitude areas with adequate rainfall."
		),
		climate=ClimateRequirements(
			temperature="18-25°C",
			rainfall="1200-1400mm annually",
			altitude="1500-2100m above sea level",
			soil="Deep, well-drained acidic soils (pH 4.5-5.5)",
		),
		planting=PlantingGuide(
			season="Plant during rainy seasons (March-May or September-November)",
			spacing="1.2m x 0.6m for optimal yield",
			preparation="Clear land, mark planting holes, add manure or compost",
		),
		care=(
			"Weed regularly, especially during first 3 years",
			"Prune annually to maintain bush height at 0.6-1m",
			"Apply fertilizer (NPK 25:5:5) at 150kg per acre twice yearly",
			"Mulch around plants to retain moisture",
		),
		pests=(
			"Tea mosquito bug - spray with approved pesticides",
			"Thrips - use neem-based solutions",
			"Root diseases - ensure good drainage",
		),
		harvesting=HarvestingGuide(
			time="Begin plucking 3-4 years after planting",
			method="Pluck two leaves and a bud every 7-10 days",
			yield_="1500-2500 kg green leaf per acre annually",
		),
		market="Sell through KTDA tea factories or cooperative societies",
	),
	CropAdvisory(
		id="coffee",
		name="Coffee",
		scientific_name="Coffea arabica",
		overview=(
			"Coffee is a premium cash crop in Kisii County, known for producing "
			"high-quality Arabica beans with good market demand."
		),
		climate=ClimateRequirements(
			temperature="15-24°C",
			rainfall="1000-1800mm annually",
			altitude="1400-2100m above sea level",
			soil="Well-drained volcanic soils, rich in organic matter (pH 5.5-6.5)",
		),
		planting=PlantingGuide(
			season="Plant at onset of long rains (March-April)",
			spacing="2.75m x 2.75m (standard) or 2m x 2m (high density)",
			preparation="Dig holes 60cm x 60cm x 60cm, fill with topsoil mixed with manure",
		),
		care=(
			"Mulch heavily around coffee trees",
			"Apply NPK fertilizer: 150g per tree for young plants, 300g for mature trees",
			"Prune after harvesting to maintain tree shape",
			"Control weeds through manual weeding or mulching",
		),
		pests=(
			"Coffee Berry Disease (CBD) - spray with copper-based fungicides",
			"Coffee Leaf Rust - use systemic fungicides",
			"Antestia bugs - use approved insecticides",
		),
		harvesting=HarvestingGuide(
			time="Main harvest: October-December; Fly crop: May-July",
			method="Handpick only ripe red cherries",
			yield_="5-15 kg of clean coffee per tree annually",
		),
		market="Sell through cooperative societies or directly at coffee mills",
	),
	CropAdvisory(
		id="bananas",
		name="Bananas",
		scientific_name="Musa species",
		overview=(
			"Bananas are a vital food and income crop in Kisii County, serving both "
			"subsistence and commercial purposes."
		),
		climate=ClimateRequirements(
			temperature="20-30°C",
			rainfall="1000-2000mm annually, evenly distributed",
			altitude="Up to 2000m above sea level",
			soil="Deep, fertile, well-drained loamy soils (pH 6-7)",
		),
		planting=PlantingGuide(
			season="Plant at onset of rains",
			spacing="3m x 3m for cooking bananas; 2m x 2m for sweet bananas",
			preparation="Dig holes 60cm deep, add manure and topsoil mixture",
		),
		care=(
			"Mulch heavily with banana leaves and crop residues",
			"Apply manure or compost: 10-20kg per mat every 6 months",
			"Remove dead leaves and suckers regularly",
			"Prop bunches with poles to prevent breaking",
		),
		pests=(
			"Panama disease - use disease-free suckers, practice crop rotation",
			"Banana weevils - use clean planting material, apply wood ash",
			"Nematodes - use certified planting material",
		),
		harvesting=HarvestingGuide(
			time="9-12 months after planting",
			method="Harvest when fingers are full and rounded",
			yield_="30-50kg per bunch, multiple harvests per year",
		),
		market="Local markets, urban centers, or through farmer cooperatives",
	),
	CropAdvisory(
		id="avocados",
		name="Avocados",
		scientific_name="Persea americana",
		overview=(
			"Avocados are an increasingly important export crop in Kisii County with "
			"growing international demand."
		),
		climate=ClimateRequirements(
			temperature="15-30°C",
			rainfall="1000-1600mm annually",
			altitude="1200-2400m above sea level",
			soil="Well-drained soils, rich in organic matter (pH 5.5-7)",
		),
		planting=PlantingGuide(
			season="Plant during rainy seasons",
			spacing="8m x 8m to 10m x 10m",
			preparation="Dig holes 60cm x 60cm x 60cm, add 2-3 debes of manure",
		),
		care=(
			"Mulch around trees to conserve moisture",
			"Apply manure: 50kg per tree annually",
			"Prune to maintain manageable height and shape",
			"Water during dry spells, especially young trees",
		),
		pests=(
			"Anthracnose - spray with copper fungicides",
			"Avocado thrips - use neem oil or approved insecticides",
			"Root rot - ensure good drainage",
		),
		harvesting=HarvestingGuide(
			time="Trees begin bearing after 3-5 years",
			method="Pick when fruit reaches mature size, allow to ripen off tree",
			yield_="50-200kg per tree depending on variety and age",
		),
		market="Export markets (Europe), local supermarkets, or cooperative societies",
	),
)


class AdvisoryCatalog:
	"""Read-only lookup over a fixed sequence of crop advisories."""

	def __init__(self, entries: Iterable[CropAdvisory]):
		self._entries: tuple[CropAdvisory, ...] = tuple(entries)
		self._by_id: dict[str, CropAdvisory] = {entry.id.lower(): entry for entry in self._entries}

	@staticmethod
	def normalize_id(crop_id: str) -> str:
		return crop_id.strip().lower()

	def list_all(self) -> list[CropAdvisory]:
		return list(self._entries)

	def get_by_id(self, crop_id: str) -> CropAdvisory:
		advisory = self._by_id.get(self.normalize_id(crop_id))
		if advisory is None:
			raise NotFoundError(f"Advisory not found for crop {crop_id!r}")
		return advisory

	def get_for_crop_list(self, crop_ids: Sequence[str]) -> tuple[list[CropAdvisory], str | None]:
		"""Resolve a caller's crop selection, dropping ids that are not in the catalog.

		Unlike ``get_by_id`` an unknown id is not an error here.  An empty
		selection returns no entries and a prompt to update the profile.
		"""
		if not crop_ids:
			return [], NO_CROPS_SELECTED_MESSAGE
		resolved = [self._by_id.get(self.normalize_id(crop_id)) for crop_id in crop_ids]
		return [advisory for advisory in resolved if advisory is not None and advisory.name], None

	def __contains__(self, crop_id: object) -> bool:
		return isinstance(crop_id, str) and self.normalize_id(crop_id) in self._by_id

	def __len__(self) -> int:
		return len(self._entries)


@lru_cache
def get_advisory_catalog() -> AdvisoryCatalog:
	"""Process-wide catalog built once from the static table (FastAPI dependency)."""
	return AdvisoryCatalog(CROP_ADVISORIES)
