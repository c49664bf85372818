"""API middleware for the catalog service.

Provides:
- Request ID correlation and per-request access logging
- API key authentication for write requests
- A last-resort handler turning unhandled exceptions into the error envelope
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_api.domain.exceptions import CatalogInternalError
from catalog_api.infrastructure.config import settings

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and log one line when it finishes.

    The ID comes from ``X-Request-ID`` when the client sends one. It is
    stored on ``request.state`` (error bodies echo it), bound into the
    structlog context for the duration of the request together with the
    method and path, and returned in the response header.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.warning(
                    "Request failed",
                    duration_ms=_elapsed_ms(started),
                )
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                admin=getattr(request.state, "is_admin", False),
                duration_ms=_elapsed_ms(started),
            )

        response.headers[self.HEADER_NAME] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


# ============================================================================
# API Key Authentication Middleware
# ============================================================================


# Methods that never require authentication
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def _unauthorized(error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error_code": error_code,
            "message": message,
            "details": [],
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Middleware for API key authentication.

    Reads are public. Writes need ``Authorization: Bearer <api_key>``;
    the admin key is accepted too and marks the request as admin.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate API key for write requests.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 401 error.
        """
        request.state.authenticated = False
        request.state.is_admin = False

        if request.method in SAFE_METHODS:
            return await call_next(request)

        path = request.url.path
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            logger.warning("Missing authorization header", path=path, method=request.method)
            return _unauthorized("UNAUTHORIZED", "Missing Authorization header")

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid authorization format", path=path, method=request.method)
            return _unauthorized(
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <api_key>'",
            )

        api_key = parts[1]

        if api_key == settings.admin_api_key:
            request.state.is_admin = True
        elif api_key != settings.api_key:
            logger.warning("Invalid API key", path=path, method=request.method)
            return _unauthorized("INVALID_API_KEY", "Invalid API key")

        request.state.authenticated = True

        return await call_next(request)




# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escaped the app's handlers into a 500 envelope.

    The body uses the code and message of ``CatalogInternalError``; the
    cause only goes to the log.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unhandled exception", error_type=type(e).__name__)

            error = CatalogInternalError()
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": error.error_code,
                    "message": error.message,
                    "details": [],
                    "request_id": getattr(request.state, "request_id", None),
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Starlette runs the last added middleware first, so the resulting order
    for an incoming request is: request ID, API key, error handler, routes.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(ApiKeyMiddleware)
    app.add_middleware(RequestIdMiddleware)
