"""
QR Vault backend, application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.middleware import register_middleware
from api.responses import register_exception_handlers
from api.routes import router as health_router
from auth.routes import router as auth_router
from auth.tokens import TokenCodec
from config.settings import Settings, config
from database.session import Database
from qr.renderer import QRRenderer
from qr.routes import router as qr_router

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("asyncio", "PIL", "multipart", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or config
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Testing database connection…")
        await database.ping()
        if settings.create_tables_on_startup:
            await database.create_all()
            logger.info("Tables ensured (users, qr_codes)")
        logger.info("API ready on http://%s:%s/api (%s)", settings.host, settings.port, settings.environment)
        yield
        await database.dispose()

    app = FastAPI(
        title="QR Vault Backend",
        version="1.0.0",
        description="User authentication and QR code generation.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.tokens = TokenCodec.from_settings(settings)
    app.state.qr_renderer = QRRenderer.from_settings(settings)

    register_exception_handlers(app)
    register_middleware(app)

    # CORS: no-Origin clients (curl, mobile) and any localhost port.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(qr_router, prefix="/api/qr")
    app.include_router(health_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Backend is running"

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
