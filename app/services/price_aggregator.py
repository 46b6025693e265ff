"""Pure views over newest-first market price record sequences.

Nothing here touches the database; callers hand in an already-fetched
snapshot.  Records only need ``crop``, ``quality`` and ``date`` attributes,
so ORM rows, schemas and test doubles are all accepted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Protocol, TypeVar

from app.errors import NotFoundError

DEFAULT_LATEST_LIMIT = 10
DEFAULT_HISTORY_LIMIT = 30


class PriceRecord(Protocol):
	crop: str
	quality: str
	date: datetime


R = TypeVar("R", bound=PriceRecord)


def group_latest_by_quality_per_crop(records: Iterable[R]) -> dict[str, list[R]]:
	"""Keep the first record seen per (crop, quality) while scanning newest-first.

	The result maps each crop to its most recent price per quality tier, in
	the order the tiers were first encountered.  Older records for a tier
	already seen are skipped, never merged or averaged.
	"""
	grouped: dict[str, list[R]] = {}
	seen: set[tuple[str, str]] = set()
	for record in records:
		crop = str(record.crop)
		key = (crop, str(record.quality))
		bucket = grouped.setdefault(crop, [])
		if key in seen:
			continue
		seen.add(key)
		bucket.append(record)
	return grouped


def _newest_first_for_crop(records: Iterable[R], crop: str, limit: int) -> list[R]:
	target = crop.strip().lower()
	matching = [record for record in records if str(record.crop).lower() == target]
	# sorted() is stable, so records sharing a timestamp keep their input order
	matching = sorted(matching, key=lambda record: record.date, reverse=True)
	return matching[: max(limit, 0)]


def latest_for_crop(records: Sequence[R], crop: str, limit: int = DEFAULT_LATEST_LIMIT) -> list[R]:
	latest = _newest_first_for_crop(records, crop, limit)
	if not latest:
		raise NotFoundError(f"No prices found for {crop}")
	return latest


def history(records: Sequence[R], crop: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[R]:
	# An unknown crop and a crop with no submissions both give an empty list.
	return _newest_first_for_crop(records, crop, limit)
