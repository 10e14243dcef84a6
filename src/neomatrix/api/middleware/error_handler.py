"""
Exception handlers for the editor API

Every failure leaves as an ErrorResponse body:
    RequestValidationError -> 422, code VALIDATION_ERROR (+ per-field list)
    DomainError            -> its own status_code and code
    anything else          -> 500, code INTERNAL_SERVER_ERROR
"""

import json
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from neomatrix.api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from neomatrix.models.errors import DomainError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


def _json(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=json.loads(body.model_dump_json()))


def _request_id() -> str:
    return str(uuid.uuid4())


def _field_errors(exc: RequestValidationError) -> list:
    fields = []
    for error in exc.errors():
        loc = error["loc"]
        # drop the leading "body" / "path" / "query"
        fields.append({
            "field": ".".join(str(part) for part in loc[1:]) or str(loc[0]),
            "message": error["msg"],
            "type": error["type"],
        })
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the three handlers to `app`"""

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        request_id = _request_id()
        fields = _field_errors(exc)
        log.warn(f"Rejected request body ({request_id})", path=request.url.path, errors=len(fields))

        return _json(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ValidationErrorResponse(
                error=ErrorDetail(
                    code="VALIDATION_ERROR",
                    message="Request validation failed",
                    details={"error_count": len(fields)}
                ),
                validation_errors=fields,
                request_id=request_id
            )
        )

    @app.exception_handler(DomainError)
    async def on_domain_error(request: Request, exc: DomainError):
        request_id = _request_id()
        log.warn(f"{exc.code}: {exc.message}", path=request.url.path, request_id=request_id)

        return _json(
            exc.status_code,
            ErrorResponse(
                error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
                request_id=request_id
            )
        )

    @app.exception_handler(Exception)
    async def on_unexpected_error(request: Request, exc: Exception):
        request_id = _request_id()
        log.error(
            f"Unhandled {type(exc).__name__} ({request_id}): {exc}",
            path=request.url.path
        )

        return _json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error=ErrorDetail(
                    code="INTERNAL_SERVER_ERROR",
                    message="Unexpected error while handling the request",
                    details={"request_id": request_id}
                ),
                request_id=request_id
            )
        )
