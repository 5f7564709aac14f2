"""
Domain errors and their translation to HTTP responses.

Repositories raise ``UniquenessError`` and ``NotFoundError``; services
translate storage failures into the domain taxonomy below.  Routes do
not catch any of them: ``register_exception_handlers`` installs one
handler per error type that maps it to a status code.

========================  ======  ====================
Error                     Status  Body
========================  ======  ====================
``DuplicateNameError``    400     empty
``ValidationError``       400     ``{"detail": ...}``
``NotFoundError``         404     ``{"detail": ...}``
malformed request body    400     ``{"detail": [...]}``
========================  ======  ====================
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class SubwayError(Exception):
    """Base class for errors raised by the line and station services."""


class NotFoundError(SubwayError):
    """A referenced line or station id does not exist."""


class DuplicateNameError(SubwayError):
    """The requested name is already used by another record."""


class ValidationError(SubwayError):
    """The request is well formed but describes an invalid state."""


class UniquenessError(Exception):
    """Raised by repositories when a UNIQUE constraint rejects a write."""


async def duplicate_name_handler(request: Request, exc: DuplicateNameError) -> Response:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("%s %s not found: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("%s %s invalid: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and path parameters as 400 instead of 422."""
    logger.warning("%s %s malformed request", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error‑to‑status translation on ``app``."""
    app.add_exception_handler(DuplicateNameError, duplicate_name_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
