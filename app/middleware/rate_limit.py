"""Redis-backed rate limiting for market price writes."""

from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth.dependencies import extract_caller_key
from app.config import get_settings

LIMITED_PATH_PREFIX = "/api/v1/market-prices"
LIMITED_METHODS = frozenset({"POST", "DELETE"})

logger = structlog.get_logger("akilima.ratelimit")


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Per-caller write quota backed by Redis atomic counters."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if not self._is_limited(request.method, request.url.path):
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		quota = get_settings().rate_limit_writes_per_minute
		caller = extract_caller_key(request)
		minute_bucket = datetime.now(UTC).strftime("%Y%m%d%H%M")
		key = f"ratelimit:market-prices:{caller}:{minute_bucket}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, 65)

		if current > quota:
			logger.warning("market_price_write_throttled", quota=quota, count=current)
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": "Price submission quota exceeded",
						"quota": quota,
					}
				},
			)

		return await call_next(request)

	@staticmethod
	def _is_limited(method: str, path: str) -> bool:
		return method.upper() in LIMITED_METHODS and path.startswith(LIMITED_PATH_PREFIX)
