"""Main module of the FastAPI application.

This module sets up the FastAPI application, the middleware that logs incoming
requests and unhandled exceptions, and the handlers that map domain errors to
HTTP responses.
"""

import os
import subprocess
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from familytree.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    familytree_exception_handler,
    log_requests,
    not_found_exception_handler,
    permission_exception_handler,
    validation_exception_handler,
)
from familytree.api.router import TrailingSlashRouter
from familytree.api.v1.api import api_router
from familytree.core.config import settings
from familytree.core.exceptions import (
    FamilyTreeException,
    NotFoundException,
    PermissionException,
)
from familytree.core.logging import logger
from familytree.db.init_db import create_tables
from familytree.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Initializes the DI container and brings the schema up to date.
    """
    from familytree.core import container as container_mod
    from familytree.core.container import initialize_container

    logger.info("Initializing dependency injection container...")
    initialize_container(settings)
    logger.info("Container initialized successfully")

    if settings.RUN_ALEMBIC_MIGRATIONS:
        logger.info("Running alembic migrations...")
        env = os.environ.copy()
        backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        env["PYTHONPATH"] = backend_dir
        subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            check=True,
            cwd=backend_dir,
            env=env,
        )
    elif settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(async_engine)

    yield

    container_mod.container.health.shutting_down = True
    await async_engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/openapi.json",
    lifespan=lifespan,
    router=TrailingSlashRouter(),
    redirect_slashes=False,
)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)

# Order matters: the last registered middleware is the outermost one
app.middleware("http")(add_request_id)
app.middleware("http")(log_requests)
app.middleware("http")(exception_logging_middleware)

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ValidationError)(validation_exception_handler)
app.exception_handler(PermissionException)(permission_exception_handler)
app.exception_handler(NotFoundException)(not_found_exception_handler)
app.exception_handler(FamilyTreeException)(familytree_exception_handler)

# Session cookies need credentialed CORS, so origins are listed explicitly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
