"""Authentication dependencies: get_current_user, require_role, caller identity."""

from __future__ import annotations

import uuid
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import AuthError, decode_access_token, token_subject_or_none
from app.auth.models import User
from app.database import get_db
from app.models.enums import UserRoleEnum

bearer_scheme = HTTPBearer(auto_error=False)


def _raise_auth(exc: AuthError) -> HTTPException:
	return HTTPException(
		status_code=exc.status_code,
		detail={"error": exc.code, "message": exc.detail},
	)


def extract_caller_key(request: Request) -> str:
	"""Stable per-caller key: the token subject when valid, else the client address."""
	auth_header = request.headers.get("authorization", "")
	if auth_header.lower().startswith("bearer "):
		subject = token_subject_or_none(auth_header[7:].strip())
		if subject is not None:
			return f"user:{subject}"
	host = request.client.host if request.client is not None else "unknown"
	return f"ip:{host}"


async def _resolve_user_from_token(
	db: AsyncSession,
	credentials: HTTPAuthorizationCredentials | None,
) -> User:
	if credentials is None or credentials.scheme.lower() != "bearer":
		raise _raise_auth(AuthError(code="auth_required", detail="Bearer token is required"))

	try:
		payload = decode_access_token(credentials.credentials)
	except AuthError as exc:
		raise _raise_auth(exc) from exc
	try:
		user_id = uuid.UUID(str(payload["sub"]))
	except (ValueError, KeyError) as exc:
		raise _raise_auth(AuthError(code="token_invalid", detail="Token subject is invalid")) from exc

	row = await db.execute(select(User).where(User.id == user_id))
	user = row.scalar_one_or_none()
	if user is None or not user.is_active:
		raise _raise_auth(AuthError(code="user_invalid", detail="User is not active"))
	return user


async def get_current_user(
	request: Request,
	db: AsyncSession = Depends(get_db),
) -> User:
	credentials = await bearer_scheme(request)
	return await _resolve_user_from_token(db, credentials)


def require_role(*allowed: UserRoleEnum) -> Callable[[User], User]:
	allowed_set = set(allowed)

	async def dependency(current_user: User = Depends(get_current_user)) -> User:
		if current_user.role not in allowed_set:
			raise HTTPException(
				status_code=status.HTTP_403_FORBIDDEN,
				detail={"error": "forbidden", "message": "Insufficient role"},
			)
		return current_user

	return dependency
