"""PostgreSQL-backed enum types for all ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.
"""

from enum import StrEnum

# ── Market enums ────────────────────────────────────────────────────────────


class CropEnum(StrEnum):
    """Closed set of crops covered by advisories and market prices."""

    tea = "tea"
    coffee = "coffee"
    bananas = "bananas"
    avocados = "avocados"


class PriceQualityEnum(StrEnum):
    """Grading tier of a market price record."""

    premium = "premium"
    standard = "standard"
    low = "low"


# ── Auth enums ──────────────────────────────────────────────────────────────


class UserRoleEnum(StrEnum):
    """User authorization roles for RBAC."""

    farmer = "farmer"
    extension_officer = "extension_officer"
    buyer = "buyer"
