"""Domain error taxonomy shared by services and mapped to HTTP at the route edge.

Each error subclasses the builtin the route layer already maps, so a plain
``LookupError`` / ``ValueError`` raised anywhere in a service keeps working.
"""

from __future__ import annotations


class NotFoundError(LookupError):
	"""Lookup target does not exist (crop id, price record id, empty latest-prices query)."""


class ValidationError(ValueError):
	"""Missing or invalid required submission fields."""


class UpstreamUnavailableError(RuntimeError):
	"""The weather-data provider failed or is not configured."""
