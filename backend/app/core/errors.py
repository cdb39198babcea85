from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TripPlannerError(Exception):
    """Base class for errors raised by the planning pipeline."""


class ConfigurationError(TripPlannerError):
    """A required setting (usually an API key) is missing."""


class UpstreamServiceError(TripPlannerError):
    def __init__(self, service: str, status_code: int) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} failed with status {status_code}")


class DestinationNotFoundError(TripPlannerError):
    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(
            f'Could not find coordinates for "{destination}". Try a bigger city name.'
        )


class TripNotFoundError(TripPlannerError):
    def __init__(self, trip_id: str) -> None:
        self.trip_id = trip_id
        super().__init__(f"Trip {trip_id} not found")


def flatten_validation_errors(errors: list[dict[str, Any]]) -> dict[str, Any]:
    """Group pydantic errors into form-level and per-field messages.

    Location prefixes such as ``body`` or ``query`` are dropped so that
    ``("body", "budget")`` is reported under ``budget``. Errors that point at
    the whole body land in ``formErrors``.
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        message = str(error.get("msg", "Invalid value"))
        if not loc:
            form_errors.append(message)
            continue
        field_errors.setdefault(".".join(loc), []).append(message)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid input",
            "details": flatten_validation_errors(list(exc.errors())),
        },
    )


async def _destination_not_found_handler(
    request: Request, exc: DestinationNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "Destination not found", "message": str(exc)},
    )


async def _trip_not_found_handler(request: Request, exc: TripNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Trip not found"})


def server_error_response(exc: BaseException) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Server error", "message": str(exc) or "Unknown error"},
    )


async def _server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return server_error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(DestinationNotFoundError, _destination_not_found_handler)
    app.add_exception_handler(TripNotFoundError, _trip_not_found_handler)
    # Upstream, configuration and database errors all end up here.
    app.add_exception_handler(Exception, _server_error_handler)
