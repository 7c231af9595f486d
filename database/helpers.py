"""
Database helper functions shared by the repositories.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from utils.errors import DatabaseError, UniqueViolationError

logger = logging.getLogger(__name__)


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Re-raise driver / ORM failures as ``DatabaseError``."""
    try:
        yield
    except IntegrityError as exc:
        logger.warning("%s violated a constraint: %s", operation, exc.orig)
        raise UniqueViolationError(detail=f"{operation}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise DatabaseError(detail=f"{operation}: {exc}") from exc


async def count_rows(session: AsyncSession, stmt: Select) -> int:
    """``SELECT count(*)`` over an arbitrary (unpaged, unordered) select."""
    result = await session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    )
    return int(result.scalar_one())
