import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from uigen.errors import AuthenticationError, NotFoundError, UserError, ValidationError

logger = logging.getLogger(__name__)

# Checked in order, first match wins
USER_ERROR_STATUS: list[tuple[type[UserError], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
]


def error_body(status_code: int, message: str, error_type: str) -> JSONResponse:
    """`{message, type}` body shared by every error response, parsed by ApiError on the client."""
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


def classify_user_error(exc: UserError) -> tuple[int, str]:
    for error_class, status_code, error_type in USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            return status_code, error_type
    return 400, "bad_request"


async def user_error_handler(_: Request, exc: UserError) -> Response:
    """Map UserError subclasses to their status codes; the message is safe to show."""
    status_code, error_type = classify_user_error(exc)
    return error_body(status_code, str(exc), error_type)


async def request_validation_handler(_: Request, exc: RequestValidationError) -> Response:
    """Malformed request bodies (422) in the same shape as other errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return error_body(422, message, "request_validation_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return error_body(500, "An unexpected error occurred.", "internal_server_error")
