"""
Error handling for the API

Every failure leaves the API in the ErrorResponse envelope:
- 422 VALIDATION_ERROR for request bodies pydantic rejects
- DomainError subclasses with their own code and status (409 ANIMATION_NOT_ALLOWED)
- 500 INTERNAL_ERROR for anything unexpected
"""

import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorDetail, ErrorResponse, FieldError, ValidationErrorResponse
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Error the API reports with its own code and HTTP status"""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code


class AnimationNotAllowedError(DomainError):
    """Glitch animation requested while the face is in ambient mode"""

    def __init__(self, mode: str):
        super().__init__(
            code="ANIMATION_NOT_ALLOWED",
            message=f"Animations are disabled in {mode} mode",
            details={"mode": mode},
            status_code=status.HTTP_409_CONFLICT
        )


def _field_errors(exc: RequestValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        # loc starts with "body"/"query"; the rest is the field path
        path = [str(part) for part in error.get("loc", ())[1:]]
        errors.append(FieldError(field=".".join(path), message=error["msg"], type=error["type"]))
    return errors


def _respond(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        field_errors = _field_errors(exc)
        log.warn("Request validation failed", path=request.url.path,
                 fields=", ".join(e.field for e in field_errors), request_id=request_id)

        return _respond(422, ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(field_errors)},
            ),
            validation_errors=field_errors,
            request_id=request_id,
        ))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        request_id = str(uuid.uuid4())
        log.warn(f"{exc.code}: {exc.message}", path=request.url.path, request_id=request_id)

        return _respond(exc.status_code, ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
            request_id=request_id,
        ))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())
        log.error("Unhandled error", path=request.url.path, request_id=request_id, exception=exc)

        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"request_id": request_id},
            ),
            request_id=request_id,
        ))
