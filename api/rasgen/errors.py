"""Badge API exceptions and the FastAPI handlers that turn them into responses.

Client mistakes answer 400, upstream status codes are forwarded as-is,
unreachable upstreams and missing server secrets answer 500. Error bodies are
plain text except where a handler is told to answer JSON.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from rasgen.models.error import ErrorDetail

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


class BadgeError(Exception):
    """Base class for failures that map onto an HTTP answer."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameterError(BadgeError):
    status_code = 400

    def __init__(self, *names: str, as_json: bool = False) -> None:
        self.names = names
        self.as_json = as_json
        if len(names) == 1:
            message = f"Missing required parameter: {names[0]}"
        else:
            joined = " and ".join(names)
            message = f"Missing required parameters: {joined} are required"
        super().__init__(message)


class InvalidParameterError(BadgeError):
    status_code = 400

    def __init__(self, name: str, allowed: tuple[str, ...] | list[str]) -> None:
        self.name = name
        self.allowed = tuple(allowed)
        super().__init__(f"Invalid {name} parameter. Must be one of: {', '.join(self.allowed)}")


class BadgeValidationError(BadgeError):
    """Raised by the renderer for badge options it cannot draw."""

    status_code = 400


class ConfigurationError(BadgeError):
    """A server-side secret the endpoint needs is not configured."""

    status_code = 500


class UpstreamError(BadgeError):
    def __init__(self, service: str, url: str, message: str) -> None:
        self.service = service
        self.url = url
        super().__init__(message)


class UpstreamStatusError(UpstreamError):
    """The upstream answered, but not with 2xx."""

    def __init__(self, service: str, status_code: int, url: str, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(service, url, f"{service} API error: {status_code}")


class UpstreamFetchError(UpstreamError):
    """The upstream could not be reached, timed out, or sent an unreadable body."""

    status_code = 500

    def __init__(self, service: str, url: str, reason: str = "", subject: str | None = None) -> None:
        self.reason = reason
        super().__init__(service, url, f"Failed to fetch {subject or service + ' data'}")


async def handle_missing_parameter(request: Request, exc: MissingParameterError) -> Response:
    if exc.as_json:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(detail=exc.message).model_dump(),
        )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def handle_invalid_parameter(request: Request, exc: InvalidParameterError) -> Response:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def handle_badge_validation(request: Request, exc: BadgeValidationError) -> Response:
    logger.warning("badge_validation_failed path=%s reason=%s", request.url.path, exc.message)
    return PlainTextResponse(
        f"Invalid badge options: {exc.message}",
        status_code=exc.status_code,
        headers=NO_STORE,
    )


async def handle_configuration(request: Request, exc: ConfigurationError) -> Response:
    logger.error("server_configuration_error path=%s reason=%s", request.url.path, exc.message)
    return PlainTextResponse("Server configuration error", status_code=exc.status_code)


async def handle_upstream_status(request: Request, exc: UpstreamStatusError) -> Response:
    logger.warning(
        "upstream_status_error service=%s status=%s url=%s body=%s",
        exc.service,
        exc.status_code,
        exc.url,
        (exc.body or "")[:200],
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=NO_STORE)


async def handle_upstream_fetch(request: Request, exc: UpstreamFetchError) -> Response:
    logger.warning(
        "upstream_fetch_failed service=%s url=%s reason=%s", exc.service, exc.url, exc.reason
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=NO_STORE)


async def handle_unexpected(request: Request, exc: Exception) -> Response:
    logger.exception("unhandled_error path=%s", request.url.path, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500, headers=NO_STORE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MissingParameterError, handle_missing_parameter)
    app.add_exception_handler(InvalidParameterError, handle_invalid_parameter)
    app.add_exception_handler(BadgeValidationError, handle_badge_validation)
    app.add_exception_handler(ConfigurationError, handle_configuration)
    app.add_exception_handler(UpstreamStatusError, handle_upstream_status)
    app.add_exception_handler(UpstreamFetchError, handle_upstream_fetch)
    app.add_exception_handler(Exception, handle_unexpected)
