"""
Account store — queries against the ``users`` table.
"""

from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.helpers import count_rows, translate_db_errors
from database.models import User
from utils.errors import NotFoundError


async def find_by_id(session: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
    with translate_db_errors("users.find_by_id"):
        return await session.get(User, user_id)


async def find_by_username(session: AsyncSession, username: str) -> Optional[User]:
    with translate_db_errors("users.find_by_username"):
        result = await session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


async def exists_by_username_or_email(
    session: AsyncSession, username: str, email: str
) -> bool:
    """Single combined query: is either the username or the email taken?"""
    with translate_db_errors("users.exists_by_username_or_email"):
        stmt = select(User.id).where(or_(User.username == username, User.email == email))
        return await count_rows(session, stmt) > 0


async def create(session: AsyncSession, user: User) -> User:
    with translate_db_errors("users.create"):
        session.add(user)
        await session.flush()
    return user


async def update(session: AsyncSession, user: User) -> User:
    """Flush pending attribute changes on an already-loaded ``user``."""
    with translate_db_errors("users.update"):
        await session.flush()
        await session.refresh(user)
    return user


async def delete(session: AsyncSession, user_id: uuid.UUID) -> None:
    with translate_db_errors("users.delete"):
        result = await session.execute(sa_delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        raise NotFoundError()


async def find_all_with_pagination(
    session: AsyncSession, offset: int, limit: int
) -> Tuple[List[User], int]:
    """Newest accounts first, plus the unpaged total."""
    with translate_db_errors("users.find_all_with_pagination"):
        stmt = select(User)
        total = await count_rows(session, stmt)
        result = await session.execute(
            stmt.order_by(User.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total
