# product_api/errors.py

"""
Error types for the Product API and their FastAPI exception handlers.

Every error the API renders derives from ProductApiError, so one handler
produces a consistent JSON body for all of them:

    InputValidationError -> 400 {"errors": [{"location", "field", "msg"}, ...]}
    NotFoundError        -> 404 {"error": "Not Found"}
    PersistenceError     -> 500 {"error": "Internal Server Error"}

StartupError is only raised during boot and is logged, never rendered.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ProductApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class InputValidationError(ProductApiError):
    """One or more declared request rules failed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("Invalid request")

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class NotFoundError(ProductApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class PersistenceError(ProductApiError):
    """
    The store failed (connection lost, constraint violated, ...).

    The cause is logged where it is caught; the client only ever sees the
    generic message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self):
        super().__init__("Internal Server Error")


class StartupError(Exception):
    """The store could not be reached while the application was booting."""


async def product_api_error_handler(request: Request, exc: ProductApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's own parsing errors (e.g. malformed JSON) like rule failures."""
    errors = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        field = ".".join(str(part) for part in loc[1:])
        errors.append({"location": location, "field": field, "msg": error.get("msg", "")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=InputValidationError(errors).to_dict(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductApiError, product_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
