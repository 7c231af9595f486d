"""
JWT token creation and verification.

Tokens are HS256-signed JWTs carrying the account id (``sub``), the
username, and ``iat`` / ``exp`` timestamps.  The signing secret is handed
to ``TokenService`` once at construction; nothing here reads the
environment per call.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt as pyjwt
from pydantic import BaseModel, ConfigDict

from config.settings import config
from utils.errors import InvalidTokenError, JwtError

logger = logging.getLogger(__name__)


class Claims(BaseModel):
    """Decoded token payload."""

    model_config = ConfigDict(frozen=True)

    sub: uuid.UUID
    username: str
    iat: int
    exp: int

    @classmethod
    def new(cls, user_id: uuid.UUID, username: str, validity: timedelta) -> "Claims":
        now = datetime.now(timezone.utc)
        return cls(
            sub=user_id,
            username=username,
            iat=int(now.timestamp()),
            exp=int((now + validity).timestamp()),
        )


class TokenService:
    """Issues and verifies signed, time-bounded identity tokens."""

    def __init__(self, secret: str, expiration_days: int, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm
        self.default_validity = timedelta(days=expiration_days)

    def issue(
        self,
        user_id: uuid.UUID,
        username: str,
        validity: Optional[timedelta] = None,
    ) -> str:
        if validity is None:
            validity = self.default_validity
        claims = Claims.new(user_id, username, validity)
        payload = claims.model_dump()
        payload["sub"] = str(claims.sub)
        try:
            return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (pyjwt.PyJWTError, TypeError, ValueError) as exc:
            raise JwtError(f"failed to generate token: {exc}") from exc

    def verify(self, token: str) -> Claims:
        """
        Decode ``token`` and return its claims.

        Raises ``InvalidTokenError`` on a bad signature, a malformed token,
        missing claims or an expired token. A token stays valid through the
        whole second named by ``exp``; it expires once ``exp < now``.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                leeway=0,
                options={"verify_exp": False, "require": ["sub", "exp", "iat"]},
            )
            claims = Claims(**payload)
        except pyjwt.PyJWTError as exc:
            raise InvalidTokenError(f"failed to verify token: {exc}") from exc
        except (TypeError, ValueError) as exc:
            # claims present but of the wrong shape
            raise InvalidTokenError(f"failed to verify token: {exc}") from exc

        if claims.exp < int(time.time()):
            raise InvalidTokenError("failed to verify token: token has expired")
        return claims


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Process-wide ``TokenService`` built from settings (FastAPI dependency)."""
    return TokenService(
        secret=config.jwt_secret,
        expiration_days=config.jwt_expiration_days,
        algorithm=config.jwt_algorithm,
    )
