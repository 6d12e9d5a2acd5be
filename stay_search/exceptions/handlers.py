import logging

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import DataStoreError, InternalError, SearchError, SearchValidationError

logger = logging.getLogger(__name__)


def _error_response(exc: SearchError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    if isinstance(exc, SearchValidationError):
        logger.info("Validation failed on %s (field=%s): %s", request.url.path, exc.field, exc.message)
    elif exc.status_code >= 500:
        logger.error("Internal error on %s: %s", request.url.path, exc.message)
    else:
        logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return _error_response(exc)


async def data_store_error_handler(request: Request, exc: DataStoreError) -> JSONResponse:
    logger.error(
        "Data store error on %s: %s (status=%s)", request.url.path, exc.message, exc.status_code
    )
    return _error_response(InternalError())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return _error_response(InternalError())


async def http_client_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.error("Data API unreachable on %s: %s: %s", request.url.path, type(exc).__name__, exc)
    return _error_response(InternalError())
