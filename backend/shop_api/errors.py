"""
API error kinds and their mapping to HTTP responses.

Handlers and services raise ApiError; the exception handler registered in
create_app() turns it into a response whose body is the bare message string.
"""

from enum import Enum
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    DESERIALIZATION = "deserialization"


# Unknown ids are reported as client errors, not 404
ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.DESERIALIZATION: 400,
}


class ApiError(Exception):
    def __init__(self, kind: ErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code if status_code is not None else ERROR_STATUS_CODES[kind]


def describe_validation_error(exc: ValidationError) -> str:
    """Render a pydantic ValidationError as a single line"""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.message)
