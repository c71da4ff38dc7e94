"""Request failures raised by the route layer.

Each error carries the HTTP status it maps to; the handlers installed by
``register_error_handlers`` render them as ``{"message": ..., "errors": [...]}``.
"""

import logging
from typing import Any, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class JobNexusError(Exception):
    status_code = 500

    def __init__(self, message: str, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class Unauthorized(JobNexusError):
    status_code = 401


class Forbidden(JobNexusError):
    status_code = 403


class NotFound(JobNexusError):
    status_code = 404


class ValidationFailed(JobNexusError):
    status_code = 400

    @classmethod
    def from_pydantic(cls, message: str, exc: ValidationError) -> "ValidationFailed":
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return cls(message, errors=errors)


class Conflict(JobNexusError):
    status_code = 400


ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_payload(schema: type[ModelT], payload: Optional[dict[str, Any]], message: str) -> ModelT:
    """Validate a raw JSON body, turning pydantic errors into ``ValidationFailed``."""
    try:
        return schema.model_validate(payload or {})
    except ValidationError as exc:
        raise ValidationFailed.from_pydantic(message, exc) from exc


def _render(status_code: int, message: str, errors: Optional[list[Any]] = None) -> JSONResponse:
    body: dict[str, Any] = {"message": message}
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(JobNexusError)
    async def handle_jobnexus_error(request: Request, exc: JobNexusError):
        return _render(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return _render(400, "Invalid request", errors)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _render(500, "Internal server error")
