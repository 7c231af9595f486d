"""
User routes.

Route prefix: /api/users

  GET    /         paged list          (public)
  GET    /{id}     single account      (public)
  PUT    /{id}     update own account  (Bearer, self only)
  DELETE /{id}     delete own account  (Bearer, self only)
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import AuthUser, db_session, require_auth_user
from services import user_service
from utils.errors import ForbiddenError
from utils.pagination import Pagination
from utils.response import ApiResponse
from utils.schemas import UpdateUserRequest

router = APIRouter(tags=["users"])


@router.get("")
async def list_users(
    pagination: Annotated[Pagination, Query()],
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    result = await user_service.list_users(session, pagination)
    return ApiResponse.success(result).to_response()


@router.get("/{user_id}")
async def get_user(
    user_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user = await user_service.get_user_by_id(session, user_id)
    return ApiResponse.success(user).to_response()


@router.put("/{user_id}")
async def update_user(
    user_id: uuid.UUID,
    req: UpdateUserRequest,
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    if auth_user.user_id != user_id:
        raise ForbiddenError()
    user = await user_service.update_user(session, user_id, req)
    return ApiResponse.success(user, "Update successful").to_response()


@router.delete("/{user_id}")
async def delete_user(
    user_id: uuid.UUID,
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    if auth_user.user_id != user_id:
        raise ForbiddenError()
    await user_service.delete_user(session, user_id)
    return ApiResponse.success(message="User deleted").to_response()
