"""
Article routes.

Route prefix: /api/articles

  GET    /               paged list, visibility depends on caller  (optional Bearer)
  GET    /simple         list only, failures folded into code 500  (optional Bearer)
  GET    /{id}           single article                            (optional Bearer)
  GET    /{id}/simple    single article, failures folded           (optional Bearer)
  POST   /               create                                    (Bearer)
  PUT    /{id}           update own article                        (Bearer, owner only)
  DELETE /{id}           delete own article                        (Bearer, owner only)
"""

from __future__ import annotations

import logging
import uuid
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import AuthUser, db_session, optional_auth_user, require_auth_user
from services import article_service
from utils.errors import AppError
from utils.pagination import Pagination
from utils.response import ApiResponse
from utils.schemas import CreateArticleRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["articles"])


def _caller_id(auth_user: Optional[AuthUser]) -> Optional[uuid.UUID]:
    return auth_user.user_id if auth_user else None


@router.get("")
async def list_articles(
    pagination: Annotated[Pagination, Query()],
    auth_user: Optional[AuthUser] = Depends(optional_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    result = await article_service.list_articles(session, pagination, _caller_id(auth_user))
    return ApiResponse.success(result).to_response()


@router.get("/simple")
async def list_articles_simple(
    pagination: Annotated[Pagination, Query()],
    auth_user: Optional[AuthUser] = Depends(optional_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    try:
        result = await article_service.list_articles(session, pagination, _caller_id(auth_user))
    except AppError as exc:
        logger.warning("list_articles_simple failed: %s", exc)
        return ApiResponse.from_result(exc=exc).to_response()
    return ApiResponse.from_result(result.list).to_response()


@router.get("/{article_id}")
async def get_article(
    article_id: uuid.UUID,
    auth_user: Optional[AuthUser] = Depends(optional_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    article = await article_service.get_article_by_id(session, article_id, _caller_id(auth_user))
    return ApiResponse.success(article).to_response()


@router.get("/{article_id}/simple")
async def get_article_simple(
    article_id: uuid.UUID,
    auth_user: Optional[AuthUser] = Depends(optional_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    try:
        article = await article_service.get_article_by_id(
            session, article_id, _caller_id(auth_user)
        )
    except AppError as exc:
        logger.warning("get_article_simple(%s) failed: %s", article_id, exc)
        return ApiResponse.from_result(exc=exc).to_response()
    return ApiResponse.from_result(article).to_response()


@router.post("")
async def create_article(
    req: CreateArticleRequest,
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    article = await article_service.create_article(session, auth_user.user_id, req)
    return ApiResponse.success(article, "Article created").to_response()


@router.put("/{article_id}")
async def update_article(
    article_id: uuid.UUID,
    req: CreateArticleRequest,
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    article = await article_service.update_article(session, article_id, auth_user.user_id, req)
    return ApiResponse.success(article, "Article updated").to_response()


@router.delete("/{article_id}")
async def delete_article(
    article_id: uuid.UUID,
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    await article_service.delete_article(session, article_id, auth_user.user_id)
    return ApiResponse.success(message="Article deleted").to_response()
