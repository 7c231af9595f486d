"""
Account service — registration, login, and the current-account lookup.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService
from auth.password import hash_password, verify_password
from database import users
from database.models import User
from utils.errors import NotFoundError, UnauthorizedError, UniqueViolationError, ValidationError
from utils.schemas import CreateUserRequest, LoginRequest, LoginResponse, UserResponse

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "Username or email already exists"


async def register(session: AsyncSession, payload: CreateUserRequest) -> UserResponse:
    """Create an account; username and email must both be unused."""
    if await users.exists_by_username_or_email(session, payload.username, payload.email):
        raise ValidationError(DUPLICATE_ACCOUNT_MESSAGE)

    password_hash = await run_in_threadpool(hash_password, payload.password)
    now = datetime.now(timezone.utc)
    user = User(
        id=uuid.uuid4(),
        username=payload.username,
        email=payload.email,
        password_hash=password_hash,
        created_at=now,
        updated_at=now,
    )
    try:
        user = await users.create(session, user)
    except UniqueViolationError as exc:
        # lost a race with a concurrent registration
        raise ValidationError(DUPLICATE_ACCOUNT_MESSAGE) from exc

    logger.info("Registered user %s (%s)", user.username, user.id)
    return UserResponse.model_validate(user)


async def login(
    session: AsyncSession,
    payload: LoginRequest,
    token_service: TokenService,
) -> LoginResponse:
    """
    Check credentials and issue a token.

    An unknown username and a wrong password raise the same
    ``UnauthorizedError``.
    """
    user = await users.find_by_username(session, payload.username)
    if user is None or not await run_in_threadpool(
        verify_password, payload.password, user.password_hash
    ):
        raise UnauthorizedError()

    token = token_service.issue(user.id, user.username)
    logger.info("Login: %s (%s)", user.username, user.id)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


async def get_current_user(session: AsyncSession, user_id: uuid.UUID) -> UserResponse:
    user = await users.find_by_id(session, user_id)
    if user is None:
        raise NotFoundError()
    return UserResponse.model_validate(user)
