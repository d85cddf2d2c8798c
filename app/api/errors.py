"""Exception handlers producing the ``{success: false, error, details?}`` envelope."""

from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from afrisight.errors import AfriSightError, UpstreamError
from afrisight.utils.logger import LoggerManager
from app.api.models import ErrorResponse

logger = LoggerManager.get_logger("api.errors")


def error_body(message: str, details: Optional[str] = None) -> dict:
    return ErrorResponse(error=message, details=details).model_dump(exclude_none=True)


@contextmanager
def upstream_failure(message: str) -> Iterator[None]:
    """Re-raise collaborator failures under an endpoint-specific message.

    The upstream error text is kept as ``details``.
    """
    try:
        yield
    except UpstreamError as e:
        raise UpstreamError(message, details=e.details or e.message, original_error=e) from e


async def afrisight_error_handler(request: Request, exc: AfriSightError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"extra_data": {"details": exc.details}},
        )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=error_body("Invalid request", details))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AfriSightError, afrisight_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
