"""
FastAPI application for the account service.

``create_app`` wires logging, the database lifecycle and the ``ApiError``
handler. Nothing is built at import time. Run it with::

    uvicorn --factory accounts.app:create_app
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from accounts.core.config import get_settings
from accounts.core.errors import ApiError
from accounts.core.logging_config import setup_logging
from accounts.db.session import Database
from accounts.routers import users as users_router
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.error_code.value)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


def create_app(database: Database | None = None, *, create_schema: bool | None = None) -> FastAPI:
    """Build the application.

    The database is connected on startup and disposed on shutdown. Schema
    creation at startup is on by default outside production.
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    db = database or Database(settings=settings)
    if create_schema is None:
        create_schema = settings.app_env != "prod"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.connect()
        if create_schema:
            await db.create_all()
        app.state.database = db
        app.state.user_service = UserService(db, settings)
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(title="Accounts API", lifespan=lifespan)
    app.add_exception_handler(ApiError, api_error_handler)
    app.include_router(users_router.router)
    return app

