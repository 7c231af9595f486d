"""
FastAPI dependencies for authentication.

Each endpoint states its auth requirement in its own signature:

  • ``require_auth_user`` — no valid Bearer token, no handler call (401)
  • ``optional_auth_user`` — ``None`` when the token is absent or invalid

Both go through ``authenticate``; they only differ in how a failure is
mapped.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService, get_token_service
from database.session import get_db_session
from utils.errors import AppError, UnauthorizedError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthUser:
    """Identity of the caller for the lifetime of one request."""

    user_id: uuid.UUID
    username: str


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def authenticate(authorization: Optional[str], token_service: TokenService) -> AuthUser:
    """
    Resolve an ``Authorization`` header value to an ``AuthUser``.

    Raises ``UnauthorizedError`` for a missing header, a scheme other than
    ``Bearer``, or a token that fails verification.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise UnauthorizedError()
    token = authorization[len(_BEARER_PREFIX):]
    try:
        claims = token_service.verify(token)
    except AppError as exc:
        logger.debug("Rejected bearer token: %s", exc.message)
        raise UnauthorizedError() from exc
    return AuthUser(user_id=claims.sub, username=claims.username)


async def require_auth_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    token_service: TokenService = Depends(get_token_service),
) -> AuthUser:
    return authenticate(authorization, token_service)


async def optional_auth_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    token_service: TokenService = Depends(get_token_service),
) -> Optional[AuthUser]:
    try:
        return authenticate(authorization, token_service)
    except UnauthorizedError:
        return None
