"""
Users & articles REST API — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI

from api.articles import router as articles_router
from api.health import router as health_router
from api.middleware import register_exception_handlers, register_middleware
from api.users import router as users_router
from auth.routes import router as auth_router
from config.settings import config
from database.session import init_models

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncpg", "httpx", "httpcore"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Users & Articles API",
        version="0.1.0",
        description="CRUD REST API with JWT authentication.",
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(users_router, prefix="/api/users")
    app.include_router(articles_router, prefix="/api/articles")

    @app.on_event("startup")
    async def on_startup():
        if config.auto_create_tables:
            logger.info("Creating missing tables…")
            await init_models()
        logger.info("Application ready on http://%s:%d", config.host, config.port)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
