"""Error handlers and custom middleware for API request/response processing."""

from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.errors import HearingApiError, InternalError, ValidationError
from ..utils.logging_config import get_logger, log_exception
from .schemas import format_validation_errors

logger = get_logger('api')


def error_response(exc: HearingApiError) -> JSONResponse:
    """Render a taxonomy error as the JSON error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def hearing_api_error_handler(request: Request, exc: HearingApiError) -> JSONResponse:
    if exc.status_code >= 500:
        log_exception('api', exc, {"path": request.url.path})
    return error_response(exc)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {len(errors)} validation error(s)")
    return error_response(ValidationError(errors=errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework-level errors (unknown route, wrong method) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HearingApiError, hearing_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Middleware to convert unexpected exceptions into a generic 500 response."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            log_exception('api', exc, {"method": request.method, "path": request.url.path})
            return error_response(InternalError())


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce request size limits."""

    def __init__(self, app: ASGIApp, max_request_bytes: int = 64 * 1024):
        super().__init__(app)
        self.max_request_bytes = max_request_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                length = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"success": False, "message": "Invalid Content-Length header"},
                )

            if length > self.max_request_bytes:
                logger.warning(
                    f"Rejected {request.method} {request.url.path}: "
                    f"{length} bytes exceeds limit of {self.max_request_bytes}"
                )
                return JSONResponse(
                    status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                    content={
                        "success": False,
                        "message": f"Request size {length} bytes exceeds limit of {self.max_request_bytes} bytes",
                    },
                )

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    def __init__(self, app: ASGIApp, include_hsts: bool = False):
        super().__init__(app)
        self.include_hsts = include_hsts

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # X-Frame-Options: Prevent clickjacking attacks
        response.headers["X-Frame-Options"] = "DENY"

        # X-Content-Type-Options: Prevent MIME-type confusion attacks
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Swagger UI at /docs loads its assets from a CDN
        if not request.url.path.startswith(("/docs", "/redoc")):
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"
            )

        # Strict-Transport-Security: Only add in HTTPS production environments
        if self.include_hsts and request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=()"
        )
        response.headers["Cache-Control"] = "no-store"

        return response
