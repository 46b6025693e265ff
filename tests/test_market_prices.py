from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from httpx import AsyncClient

from conftest import make_price, make_user

from app.auth.dependencies import get_current_user
from app.errors import NotFoundError, ValidationError
from app.main import app
from app.models.enums import UserRoleEnum
from app.services.market_service import MarketService

T0 = datetime(2026, 6, 1, tzinfo=UTC)


@pytest.mark.asyncio
async def test_grouped_prices_endpoint(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	submitter = SimpleNamespace(id=uuid4(), name="Buyer One", role=UserRoleEnum.buyer)
	newest = make_price(3, "tea", 100.0, "standard", T0 + timedelta(days=2))
	newest.updated_by = submitter

	async def fake_grouped(self: MarketService) -> dict[str, list[object]]:
		return {"tea": [newest, make_price(2, "tea", 110.0, "premium", T0)]}

	monkeypatch.setattr(MarketService, "get_grouped_prices", fake_grouped)

	response = await client.get("/api/v1/market-prices")

	assert response.status_code == 200
	body = response.json()
	assert [item["quality"] for item in body["prices"]["tea"]] == ["standard", "premium"]
	assert body["prices"]["tea"][0]["updated_by"]["name"] == "Buyer One"
	assert body["prices"]["tea"][1]["updated_by"] is None


@pytest.mark.asyncio
async def test_crop_prices_not_found_maps_to_404(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_latest(self: MarketService, crop: str, limit: int = 10) -> list[object]:
		raise NotFoundError(f"No prices found for {crop}")

	monkeypatch.setattr(MarketService, "get_crop_prices", fake_latest)

	response = await client.get("/api/v1/market-prices/tea")

	assert response.status_code == 404
	assert "No prices found" in response.json()["detail"]


@pytest.mark.asyncio
async def test_price_history_endpoint_passes_limit(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	seen: dict[str, object] = {}

	async def fake_history(self: MarketService, crop: str, limit: int = 30) -> list[object]:
		seen["crop"] = crop
		seen["limit"] = limit
		return [make_price(1, "coffee", 300.0, "low", T0)]

	monkeypatch.setattr(MarketService, "get_price_history", fake_history)

	response = await client.get("/api/v1/market-prices/Coffee/history?limit=5")

	assert response.status_code == 200
	body = response.json()
	assert body["crop"] == "coffee"
	assert body["count"] == 1
	assert seen == {"crop": "Coffee", "limit": 5}


@pytest.mark.asyncio
async def test_price_history_empty_is_ok(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_history(self: MarketService, crop: str, limit: int = 30) -> list[object]:
		return []

	monkeypatch.setattr(MarketService, "get_price_history", fake_history)

	response = await client.get("/api/v1/market-prices/maize/history")

	assert response.status_code == 200
	assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_submit_price_endpoint(
	client: AsyncClient,
	monkeypatch: pytest.MonkeyPatch,
	current_user: SimpleNamespace,
) -> None:
	captured: dict[str, object] = {}

	async def fake_submit(self: MarketService, **kwargs: object) -> object:
		captured.update(kwargs)
		return make_price(7, "tea", 50.0, "standard", T0)

	monkeypatch.setattr(MarketService, "submit_price", fake_submit)

	response = await client.post("/api/v1/market-prices", json={"crop": "tea", "price_per_kg": 50})

	assert response.status_code == 201
	body = response.json()
	assert body["id"] == 7
	assert body["quality"] == "standard"
	assert body["market"] == "Kisii County"
	assert captured["submitter_id"] == current_user.id
	assert captured["quality"] is None


@pytest.mark.asyncio
async def test_submit_price_validation_maps_to_400(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_submit(self: MarketService, **kwargs: object) -> object:
		raise ValidationError("Please provide crop and price")

	monkeypatch.setattr(MarketService, "submit_price", fake_submit)

	response = await client.post("/api/v1/market-prices", json={"crop": "", "price_per_kg": 50})

	assert response.status_code == 400
	assert response.json()["detail"] == "Please provide crop and price"


@pytest.mark.asyncio
async def test_submit_negative_price_rejected_by_service(client: AsyncClient) -> None:
	response = await client.post("/api/v1/market-prices", json={"crop": "tea", "price_per_kg": -5})
	assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_price_forbidden_for_farmer(client: AsyncClient) -> None:
	async def _farmer() -> object:
		return make_user(role=UserRoleEnum.farmer)

	app.dependency_overrides[get_current_user] = _farmer

	response = await client.post("/api/v1/market-prices", json={"crop": "tea", "price_per_kg": 50})

	assert response.status_code == 403
	assert response.json()["detail"]["error"] == "forbidden"


@pytest.mark.asyncio
async def test_delete_price_endpoint(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	deleted: list[int] = []

	async def fake_delete(self: MarketService, price_id: int) -> None:
		deleted.append(price_id)

	monkeypatch.setattr(MarketService, "delete_price", fake_delete)

	response = await client.delete("/api/v1/market-prices/42")

	assert response.status_code == 200
	assert response.json() == {"id": 42, "message": "Price deleted successfully"}
	assert deleted == [42]


@pytest.mark.asyncio
async def test_delete_missing_price_maps_to_404(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_delete(self: MarketService, price_id: int) -> None:
		raise NotFoundError("Price not found")

	monkeypatch.setattr(MarketService, "delete_price", fake_delete)

	response = await client.delete("/api/v1/market-prices/404")

	assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_price_forbidden_for_buyer(client: AsyncClient) -> None:
	async def _buyer() -> object:
		return make_user(role=UserRoleEnum.buyer)

	app.dependency_overrides[get_current_user] = _buyer

	response = await client.delete("/api/v1/market-prices/1")

	assert response.status_code == 403


@pytest.mark.asyncio
async def test_market_openapi_contract(client: AsyncClient) -> None:
	response = await client.get("/openapi.json")
	assert response.status_code == 200
	paths = response.json()["paths"]
	assert "/api/v1/market-prices" in paths
	assert "/api/v1/market-prices/{crop}/history" in paths
	assert "delete" in paths["/api/v1/market-prices/{price_id}"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"payload",
	[
		{"crop": "tea", "price_per_kg": "abc"},
		{"crop": 5, "price_per_kg": 50},
		{"crop": "tea", "price_per_kg": [1]},
		{"crop": "tea", "price_per_kg": True},
		{"crop": ["tea"], "price_per_kg": 50},
		{"crop": "tea", "price_per_kg": 50, "quality": 3},
		{"crop": "tea", "price_per_kg": 50, "market": {"name": "Keroka"}},
		{"price_per_kg": 50},
	],
)
async def test_submit_wrong_typed_fields_return_400(client: AsyncClient, payload: dict[str, object]) -> None:
	response = await client.post("/api/v1/market-prices", json=payload)

	assert response.status_code == 400
	assert isinstance(response.json()["detail"], str)
