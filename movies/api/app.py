##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Construction of the Movies FastAPI application.

`create_app` wires a store into the application and registers the handlers
that map store errors to HTTP responses:

    RecordNotFoundError                 -> 404
    DuplicateKeyError                   -> 409
    invalid id or request body          -> 400
    DeadlineExceededError               -> 504
    anything else                       -> 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movies import __version__
from movies.api.routes import router
from movies.api.schemas import ErrorResponse
from movies.backends.store_base import MoviesStore
from movies.config.configfile import DEFAULT_REQUEST_TIMEOUT
from movies.exceptions import DeadlineExceededError, DuplicateKeyError, OperationCancelledError, RecordNotFoundError


LOG = logging.getLogger(__name__)


def error_response(status_code: int, status_text: str, error: Exception = None) -> JSONResponse:
    """
    Build an error response.

    Args:
        status_code: The HTTP status code.
        status_text: A short, user-level description of the status.
        error: The exception behind the response, if its text should be shown to the caller.

    Returns:
        A JSON response with an `ErrorResponse` body.
    """
    body = ErrorResponse(status=status_text, error=None if error is None else str(error))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Resource not found.")


async def handle_duplicate_key(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    return error_response(status.HTTP_409_CONFLICT, "Duplicate key.", exc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    LOG.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Bad request.")


async def handle_cancelled(request: Request, exc: OperationCancelledError) -> JSONResponse:
    if isinstance(exc, DeadlineExceededError):
        LOG.warning(f"{request.method} {request.url.path} ran past its deadline.")
        return error_response(status.HTTP_504_GATEWAY_TIMEOUT, "Deadline exceeded.")
    LOG.warning(f"{request.method} {request.url.path} was cancelled.")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    LOG.exception(f"Unexpected error handling {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


def create_app(store: MoviesStore, request_timeout: float = DEFAULT_REQUEST_TIMEOUT) -> FastAPI:
    """
    Create the Movies API application.

    The caller owns the store: the application never closes it.

    Args:
        store: The store every request is served from.
        request_timeout: Seconds each request may spend in the store. None means unbounded.

    Returns:
        The FastAPI application.
    """
    app = FastAPI(title="Movies API", version=__version__)
    app.state.store = store
    app.state.request_timeout = request_timeout

    app.include_router(router)

    app.add_exception_handler(RecordNotFoundError, handle_not_found)
    app.add_exception_handler(DuplicateKeyError, handle_duplicate_key)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(OperationCancelledError, handle_cancelled)
    app.add_exception_handler(Exception, handle_unexpected)

    LOG.debug(f"Created Movies API backed by {store.__class__.__name__}.")
    return app
