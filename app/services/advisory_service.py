"""Advisory facade: composes the injected catalog with a caller's crop selection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.schemas.advisory import AdvisoryListRead, CropAdvisory, MyAdvisoriesRead
from app.services.advisory_catalog import AdvisoryCatalog


class AdvisoryService:
	def __init__(self, catalog: AdvisoryCatalog):
		self.catalog = catalog

	def get_all_advisories(self) -> AdvisoryListRead:
		items = self.catalog.list_all()
		return AdvisoryListRead(count=len(items), items=items)

	def get_advisory(self, crop_id: str) -> CropAdvisory:
		return self.catalog.get_by_id(crop_id)

	def get_advisories_for_crops(self, crop_ids: Sequence[str]) -> MyAdvisoriesRead:
		items, message = self.catalog.get_for_crop_list(crop_ids)
		return MyAdvisoriesRead(count=len(items), message=message, items=items)

	def get_advisories_for_user(self, user: Any) -> MyAdvisoriesRead:
		return self.get_advisories_for_crops(list(getattr(user, "crops", None) or []))
