"""Middleware for the FastAPI application.

This module contains middleware that process requests and responses, and the
exception handlers that turn domain errors into HTTP responses.
"""

import time
import traceback
import uuid

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from familytree.core.config import settings
from familytree.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    FamilyTreeException,
    NotFoundException,
    PermissionException,
    unpack_validation_error,
)
from familytree.core.logging import logger


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Middleware to generate and add a request ID to the request for tracing.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    request.state.request_id = str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.with_context(request_id=getattr(request.state, "request_id", None)).info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Middleware to log unhandled exceptions.

    The caller only ever sees a generic message. The stack trace is added to
    the body when ``DEBUG`` is on.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    try:
        response = await call_next(request)
        return response
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

        response_content = {"detail": "Internal Server Error"}
        if settings.DEBUG:
            response_content["trace"] = traceback.format_exc()

        return JSONResponse(status_code=500, content=response_content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """Exception handler for validation errors that occur during request processing.

    Malformed input is a client error like any other, so it maps to 400 rather
    than FastAPI's default 422.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (RequestValidationError | ValidationError): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 400 Bad Request response. ``errors`` holds one entry per
            failing field, keyed by its location in the request.

    Example of JSON output:
        {
            "detail": "Invalid request",
            "errors": [
                {"body.email": "value is not a valid email address"},
                {"body.password": "String should have at least 8 characters"}
            ]
        }

    """
    error_messages = unpack_validation_error(exc)
    logger.warning(f"Validation error on {request.method} {request.url.path}: {error_messages}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": error_messages["errors"]},
    )


async def permission_exception_handler(request: Request, exc: PermissionException) -> JSONResponse:
    """Exception handler for PermissionException.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (PermissionException): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 403 Forbidden status response that details the error message.

    """
    return JSONResponse(status_code=403, content={"detail": str(exc)})


async def not_found_exception_handler(request: Request, exc: NotFoundException) -> JSONResponse:
    """Exception handler for NotFoundException.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (NotFoundException): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 404 Not Found status response that details the error message.

    """
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def familytree_exception_handler(
    request: Request, exc: FamilyTreeException
) -> JSONResponse:
    """Generic exception handler for all FamilyTreeException types.

    Maps exception types to HTTP status codes by base class, so any domain
    exception inheriting from BadRequestError, ConflictError, etc. is mapped
    without registering it here.

    Note: NotFoundException and PermissionException have dedicated handlers
    registered before this one, so their subclasses won't reach here.
    """
    status_map = {
        BadRequestError: 400,
        AuthenticationError: 401,
        PermissionException: 403,
        NotFoundException: 404,
        ConflictError: 409,
    }

    for exc_type, code in status_map.items():
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=code, content={"detail": str(exc)})

    logger.error(f"Unmapped {exc.__class__.__name__}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
