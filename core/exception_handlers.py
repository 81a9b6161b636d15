"""
Exception handlers mapping errors to plain-text HTTP responses
"""

from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from core.exceptions import FilerError
from core.logger import logger


def status_text(status_code: int) -> str:
    """Return the standard reason phrase for status_code"""
    return HTTPStatus(status_code).phrase


def _filer_exception_handler(request: Request, exc: FilerError) -> PlainTextResponse:
    """Answer with the error's status code and its reason phrase"""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(status_text(exc.status_code), status_code=exc.status_code)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Malformed form fields or query parameters are bad input"""
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return PlainTextResponse(
        status_text(status.HTTP_400_BAD_REQUEST),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FilerError, _filer_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
