"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor (``config.bcrypt_rounds``).
"""

from __future__ import annotations

import logging
from typing import Optional

import bcrypt

from config.settings import config
from utils.errors import InternalError

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt; the salt is embedded in the result."""
    try:
        salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()
    except (ValueError, TypeError) as exc:
        raise InternalError(detail=f"password hashing failed: {exc}") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        logger.debug("Stored password hash is not a valid bcrypt digest")
        return False
