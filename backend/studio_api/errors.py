import logging
from dataclasses import asdict, dataclass

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class StudioError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_content(self) -> dict:
        return {"error": self.message}


class ValidationFailed(StudioError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    def to_content(self) -> dict:
        return {"error": self.message, "details": [asdict(e) for e in self.errors]}


class InvalidIdentifier(StudioError):
    status_code = 400
    message = "Invalid identifier"


class NotFound(StudioError):
    status_code = 404
    message = "Not found"


class InvalidCredentials(StudioError):
    status_code = 401
    message = "Invalid credentials"


class Unauthorized(StudioError):
    status_code = 401
    message = "Authentication required"


class AccountDeactivated(StudioError):
    status_code = 401
    message = "Account is deactivated"


class Forbidden(StudioError):
    status_code = 403
    message = "Insufficient permissions"


class AccountLocked(StudioError):
    status_code = 423
    message = (
        "Account is temporarily locked due to too many failed login attempts. "
        "Please try again later."
    )


class DuplicateIdentity(StudioError):
    status_code = 400
    message = "Admin with this username or email already exists"


class DuplicateSubmission(StudioError):
    status_code = 400
    message = "Duplicate submission"


def setup_error_handlers(app):
    @app.exception_handler(StudioError)
    async def studio_error_handler(request: Request, exc: StudioError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            FieldError(".".join(str(loc) for loc in error["loc"] if loc != "body"), error["msg"])
            for error in exc.errors()
        ]
        return JSONResponse(status_code=400, content=ValidationFailed(errors).to_content())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception: %s %s - %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
