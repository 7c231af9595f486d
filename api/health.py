"""
Health-check routes (no prefix, no auth).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from database.helpers import translate_db_errors
from utils.response import ApiResponse

router = APIRouter(tags=["health"])


@router.get("/")
@router.get("/health")
async def health_check() -> JSONResponse:
    return ApiResponse.success({"status": "ok", "message": "Service is running"}).to_response()


@router.get("/health/detailed")
async def health_check_detailed(
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    """Same as ``/health`` but also round-trips ``SELECT 1`` to the database."""
    with translate_db_errors("health.select_one"):
        await session.execute(text("SELECT 1"))
    return ApiResponse.success({"status": "ok", "database": "connected"}).to_response()
