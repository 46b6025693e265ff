"""Shared ORM base, mixins and enum types.

Mapped classes live in their own modules (``app.models.market``,
``app.auth.models``) and are not re-exported here: ``app.auth.models``
imports this package, so pulling it back in from here would be circular.
Alembic ``env.py`` imports both modules to register their tables.
"""

from app.models.base import (
    AppendOnlyMixin,
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)
from app.models.enums import CropEnum, PriceQualityEnum, UserRoleEnum

__all__ = [
    "AppendOnlyMixin",
    "Base",
    "CropEnum",
    "PriceQualityEnum",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "UserRoleEnum",
]
