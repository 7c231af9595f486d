"""
Article service — paged listing with visibility rules, and owner-only CRUD.

Visibility: anonymous callers see public articles only; an authenticated
caller additionally sees their own private articles.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database import articles
from database.models import Article
from utils.errors import ForbiddenError, NotFoundError
from utils.pagination import PagedResult, PageInfo, Pagination
from utils.schemas import ArticleResponse, CreateArticleRequest

logger = logging.getLogger(__name__)


def _visible_to(article: Article, user_id: Optional[uuid.UUID]) -> bool:
    return bool(article.is_public) or (user_id is not None and article.user_id == user_id)


async def list_articles(
    session: AsyncSession,
    pagination: Pagination,
    user_id: Optional[uuid.UUID],
) -> PagedResult:
    rows, total = await articles.find_all_with_pagination(
        session, user_id, pagination.offset(), pagination.limit()
    )
    return PagedResult(
        list=[ArticleResponse.model_validate(a) for a in rows],
        pagination=PageInfo.build(pagination, total),
    )


async def get_article_by_id(
    session: AsyncSession,
    article_id: uuid.UUID,
    user_id: Optional[uuid.UUID] = None,
) -> ArticleResponse:
    article = await articles.find_by_id(session, article_id)
    if article is None or not _visible_to(article, user_id):
        raise NotFoundError()
    return ArticleResponse.model_validate(article)


async def create_article(
    session: AsyncSession,
    user_id: uuid.UUID,
    payload: CreateArticleRequest,
) -> ArticleResponse:
    article = Article(
        id=uuid.uuid4(),
        title=payload.title,
        content=payload.content,
        user_id=user_id,
        is_public=bool(payload.is_public),
        created_at=datetime.now(timezone.utc),
    )
    article = await articles.create(session, article)
    logger.info("Article %s created by %s", article.id, user_id)
    return ArticleResponse.model_validate(article)


async def _load_owned(
    session: AsyncSession, article_id: uuid.UUID, user_id: uuid.UUID
) -> Article:
    article = await articles.find_by_id(session, article_id)
    if article is None:
        raise NotFoundError()
    if article.user_id != user_id:
        raise ForbiddenError()
    return article


async def update_article(
    session: AsyncSession,
    article_id: uuid.UUID,
    user_id: uuid.UUID,
    payload: CreateArticleRequest,
) -> ArticleResponse:
    article = await _load_owned(session, article_id, user_id)
    article.title = payload.title
    article.content = payload.content
    if payload.is_public is not None:
        article.is_public = payload.is_public

    article = await articles.update(session, article)
    return ArticleResponse.model_validate(article)


async def delete_article(
    session: AsyncSession, article_id: uuid.UUID, user_id: uuid.UUID
) -> None:
    await _load_owned(session, article_id, user_id)
    await articles.delete(session, article_id)
    logger.info("Article %s deleted by %s", article_id, user_id)
