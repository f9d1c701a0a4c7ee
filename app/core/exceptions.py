# app/core/exceptions.py
import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.services.coordinates import CoordinateError, InvalidFormat, OutOfRange

logger = logging.getLogger(__name__)


def coordinate_error_body(exc: CoordinateError) -> dict:
    body = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, OutOfRange):
        body["axis"] = exc.axis.value
        body["bound"] = list(exc.bound)
    elif isinstance(exc, InvalidFormat) and exc.axis is not None:
        body["axis"] = exc.axis.value
    return body


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=HTTP_422_UNPROCESSABLE_ENTITY,
                        content={"detail": jsonable_encoder(exc.errors())})


async def coordinate_exception_handler(request: Request, exc: CoordinateError):
    logger.debug("Rejected coordinates on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content=coordinate_error_body(exc))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s", request.url.path)
    return JSONResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "Internal Server Error"})
