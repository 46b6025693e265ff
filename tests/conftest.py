"""Shared pytest fixtures — async test client, fake DB session, fake Redis, auth stubs."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.auth.dependencies import get_current_user
from app.auth.jwt import create_access_token
from app.database import get_db
from app.main import app
from app.models.enums import UserRoleEnum


class FakeAsyncSession:
	def __init__(self) -> None:
		self.add = MagicMock()
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.flush = AsyncMock()
		self.refresh = AsyncMock()
		self.delete = AsyncMock()
		self.get = AsyncMock(return_value=None)
		self.execute = AsyncMock()


class FakeScalarResult:
	def __init__(self, rows: list[Any]) -> None:
		self._rows = rows

	def all(self) -> list[Any]:
		return list(self._rows)


class FakeResult:
	"""Mimics the slice of ``sqlalchemy.engine.Result`` the services use."""

	def __init__(self, rows: list[Any]) -> None:
		self._rows = rows

	def scalars(self) -> FakeScalarResult:
		return FakeScalarResult(self._rows)

	def scalar_one_or_none(self) -> Any:
		return self._rows[0] if self._rows else None


class FakeRedis:
	def __init__(self) -> None:
		self._counter: dict[str, int] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)
		self.ping = AsyncMock(return_value=True)

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value


def make_user(
	role: UserRoleEnum = UserRoleEnum.extension_officer,
	crops: list[str] | None = None,
	is_active: bool = True,
) -> SimpleNamespace:
	return SimpleNamespace(
		id=uuid.uuid4(),
		name="Test Officer",
		email="officer@test.local",
		role=role,
		crops=list(crops or []),
		is_active=is_active,
	)


def make_price(
	price_id: int,
	crop: str = "tea",
	price_per_kg: float = 100.0,
	quality: str = "standard",
	date: datetime | None = None,
	market: str = "Kisii County",
) -> SimpleNamespace:
	return SimpleNamespace(
		id=price_id,
		crop=crop,
		price_per_kg=price_per_kg,
		unit="KES/kg",
		market=market,
		quality=quality,
		updated_by=None,
		date=date or datetime(2026, 1, 1, tzinfo=UTC),
	)


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides and service tests."""
	return FakeAsyncSession()


@pytest.fixture
def fake_redis() -> FakeRedis:
	"""Fake Redis client with atomic-counter behavior for rate limiting."""
	return FakeRedis()


@pytest.fixture
def current_user() -> SimpleNamespace:
	return make_user(crops=["tea", "coffee"])


@asynccontextmanager
async def _noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
	yield


@pytest.fixture
async def client(
	fake_db_session: FakeAsyncSession,
	current_user: SimpleNamespace,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled, DB and current user mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	async def override_current_user() -> Any:
		return current_user

	app.dependency_overrides[get_db] = override_get_db
	app.dependency_overrides[get_current_user] = override_current_user
	original_lifespan = app.router.lifespan_context
	app.router.lifespan_context = _noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with DB override only (real auth dependencies active)."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	original_lifespan = app.router.lifespan_context
	app.router.lifespan_context = _noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()


@pytest.fixture
def auth_user_id() -> uuid.UUID:
	return uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def access_token(auth_user_id: uuid.UUID) -> str:
	return create_access_token(str(auth_user_id), expires_minutes=30)
