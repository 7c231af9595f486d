"""
Article store — queries against the ``articles`` table.
"""

from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.helpers import count_rows, translate_db_errors
from database.models import Article
from utils.errors import NotFoundError


async def find_by_id(session: AsyncSession, article_id: uuid.UUID) -> Optional[Article]:
    with translate_db_errors("articles.find_by_id"):
        return await session.get(Article, article_id)


async def create(session: AsyncSession, article: Article) -> Article:
    with translate_db_errors("articles.create"):
        session.add(article)
        await session.flush()
    return article


async def update(session: AsyncSession, article: Article) -> Article:
    with translate_db_errors("articles.update"):
        await session.flush()
        await session.refresh(article)
    return article


async def delete(session: AsyncSession, article_id: uuid.UUID) -> None:
    with translate_db_errors("articles.delete"):
        result = await session.execute(sa_delete(Article).where(Article.id == article_id))
    if result.rowcount == 0:
        raise NotFoundError()


async def find_all_with_pagination(
    session: AsyncSession,
    user_id: Optional[uuid.UUID],
    offset: int,
    limit: int,
) -> Tuple[List[Article], int]:
    """
    Newest articles first, plus the unpaged total.

    Without a ``user_id`` only public articles are visible; with one, the
    user's own articles are returned alongside every public article.
    """
    stmt = select(Article)
    if user_id is None:
        stmt = stmt.where(Article.is_public.is_(True))
    else:
        stmt = stmt.where(or_(Article.user_id == user_id, Article.is_public.is_(True)))

    with translate_db_errors("articles.find_all_with_pagination"):
        total = await count_rows(session, stmt)
        result = await session.execute(
            stmt.order_by(Article.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total
