"""Application error taxonomy and the boundary classifier used by every route."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ErrorKind(Enum):
    VALIDATION = ("VALIDATION_ERROR", 400)
    NOT_FOUND = ("NOT_FOUND", 404)
    UNAUTHORIZED = ("UNAUTHORIZED", 401)
    FORBIDDEN = ("FORBIDDEN", 403)
    CONFLICT = ("CONFLICT", 409)
    DATABASE = ("DATABASE_ERROR", 500)
    EXTERNAL_SERVICE = ("EXTERNAL_SERVICE_ERROR", 502)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def status_code(self) -> int:
        return self.value[1]


class AppError(Exception):
    """Base error carrying a kind, a human message and optional details."""

    def __init__(self, kind: ErrorKind, message: str, details: Any = None):
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorKind.VALIDATION, message, details)


class NotFoundError(AppError):
    def __init__(self, resource: str, id: Optional[str] = None):
        message = f"{resource} with id {id} not found" if id else f"{resource} not found"
        super().__init__(ErrorKind.NOT_FOUND, message)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(ErrorKind.UNAUTHORIZED, message)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(ErrorKind.FORBIDDEN, message)


class ConflictError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorKind.CONFLICT, message, details)


class DatabaseError(AppError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorKind.DATABASE, message, details)


class ExternalServiceError(AppError):
    def __init__(self, service: str, message: str, details: Any = None):
        super().__init__(ErrorKind.EXTERNAL_SERVICE, f"{service}: {message}", details)


class ErrorInfo(BaseModel):
    message: str
    code: str
    status_code: int
    details: Any = None


def handle_error(error: object) -> ErrorInfo:
    """Classify any raised value into a message/code/status triple."""
    if isinstance(error, AppError):
        return ErrorInfo(
            message=error.message,
            code=error.kind.code,
            status_code=error.kind.status_code,
            details=error.details,
        )
    if isinstance(error, Exception):
        return ErrorInfo(message=str(error), code="INTERNAL_ERROR", status_code=500)
    return ErrorInfo(message="An unknown error occurred", code="UNKNOWN_ERROR", status_code=500)
