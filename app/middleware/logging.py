"""structlog setup and per-request log context (request id, caller, route)."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth.dependencies import extract_caller_key
from app.config import LogFormat, Settings, get_settings

REQUEST_ID_HEADER = "x-request-id"

# Polled by the orchestrator; logged at debug.
HEALTH_CHECK_PATHS = frozenset({"/health", "/health/ready"})

_configured = False


def _renderer(log_format: LogFormat) -> Any:
	if log_format == LogFormat.json:
		return structlog.processors.JSONRenderer()
	return structlog.dev.ConsoleRenderer()


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Route structlog events and stdlib ``akilima.*`` loggers to stdout at the configured level."""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(
		level=log_level,
		format="%(message)s" if settings.log_format == LogFormat.json else logging.BASIC_FORMAT,
	)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			_renderer(settings.log_format),
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind request id, caller and route into the log context for everything the request logs.

	Service events such as ``market_price_submitted`` pick these up through
	``merge_contextvars``, so they do not pass them explicitly.
	"""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			caller=extract_caller_key(request),
			method=request.method,
			path=request.url.path,
		)

		logger = structlog.get_logger("akilima.request")
		start = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception:
			logger.exception("http_request_failed", duration_ms=_elapsed_ms(start))
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		log = logger.debug if request.url.path in HEALTH_CHECK_PATHS else logger.info
		log("http_request", status_code=response.status_code, duration_ms=_elapsed_ms(start))
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)
