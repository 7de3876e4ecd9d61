"""Exception handlers — render every failure as the response envelope.

Status mapping:
    CustomerValidationError, DuplicateEntityError, bad request body → 400
    EntityNotFoundError                                           → 404
    StoreError and anything unexpected                            → 500

Store messages are passed through unchanged; this is an internal
administrative API.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import (
    CustomerValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def _validation_error(_: Request, exc: CustomerValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def _duplicate_error(_: Request, exc: DuplicateEntityError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _not_found_error(_: Request, exc: EntityNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # No body at all reads the same as a body with every field left out
    if any(e.get("type") == "missing" and tuple(e.get("loc", ())) == ("body",) for e in errors):
        return error_response(status.HTTP_400_BAD_REQUEST, CustomerValidationError().message)
    detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
    return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request body: {detail}")


async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to ``app``."""
    app.add_exception_handler(CustomerValidationError, _validation_error)
    app.add_exception_handler(DuplicateEntityError, _duplicate_error)
    app.add_exception_handler(EntityNotFoundError, _not_found_error)
    app.add_exception_handler(StoreError, _store_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
