"""
User service — paged listing, lookup, and self-service update / delete.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from database import users
from utils.errors import NotFoundError, UniqueViolationError, ValidationError
from utils.pagination import PagedResult, PageInfo, Pagination
from utils.schemas import UpdateUserRequest, UserResponse

logger = logging.getLogger(__name__)


async def list_users(session: AsyncSession, pagination: Pagination) -> PagedResult:
    rows, total = await users.find_all_with_pagination(
        session, pagination.offset(), pagination.limit()
    )
    return PagedResult(
        list=[UserResponse.model_validate(u) for u in rows],
        pagination=PageInfo.build(pagination, total),
    )


async def get_user_by_id(session: AsyncSession, user_id: uuid.UUID) -> UserResponse:
    user = await users.find_by_id(session, user_id)
    if user is None:
        raise NotFoundError()
    return UserResponse.model_validate(user)


async def update_user(
    session: AsyncSession,
    user_id: uuid.UUID,
    payload: UpdateUserRequest,
) -> UserResponse:
    user = await users.find_by_id(session, user_id)
    if user is None:
        raise NotFoundError()

    if payload.username is not None:
        user.username = payload.username
    if payload.email is not None:
        user.email = payload.email
    user.updated_at = datetime.now(timezone.utc)

    try:
        user = await users.update(session, user)
    except UniqueViolationError as exc:
        raise ValidationError("Username or email already exists") from exc

    logger.info("Updated user %s", user_id)
    return UserResponse.model_validate(user)


async def delete_user(session: AsyncSession, user_id: uuid.UUID) -> None:
    await users.delete(session, user_id)
    logger.info("Deleted user %s", user_id)
