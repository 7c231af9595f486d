"""
Auth API routes — register, login, current account.

Route prefix: /api/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import AuthUser, db_session, require_auth_user
from auth.jwt import TokenService, get_token_service
from services import auth_service
from utils.response import ApiResponse
from utils.schemas import CreateUserRequest, LoginRequest

router = APIRouter(tags=["auth"])


@router.post("/register")
async def register(
    req: CreateUserRequest,
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    """Register a new account."""
    user = await auth_service.register(session, req)
    return ApiResponse.success(user, "Registration successful").to_response()


@router.post("/login")
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    token_service: TokenService = Depends(get_token_service),
) -> JSONResponse:
    """Login with username + password."""
    result = await auth_service.login(session, req, token_service)
    return ApiResponse.success(result, "Login successful").to_response()


@router.get("/me")
async def me(
    auth_user: AuthUser = Depends(require_auth_user),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    """Return the account behind the Bearer token."""
    user = await auth_service.get_current_user(session, auth_user.user_id)
    return ApiResponse.success(user).to_response()
