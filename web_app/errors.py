"""
Error handlers translating registry failures into HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortlinks.errors import RegistryError

logger = logging.getLogger("shortlinks.web")


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    """
    Render a RegistryError with the status code its class declares.
    
    Server-side failures are logged at ERROR, caller mistakes at INFO.
    """
    if exc.status_code >= 500:
        logger.error(f"Registry error in {request.url.path}: {exc.message}")
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    body = {"success": False, "error": exc.message}
    if exc.details:
        body["details"] = exc.details
    return JSONResponse(body, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 rather than 422."""
    messages = [error.get("msg", "invalid value") for error in exc.errors()]
    logger.info(f"Invalid request to {request.url.path}: {messages}")
    return JSONResponse(
        {"success": False, "error": "Invalid request", "details": messages},
        status_code=400,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on app."""
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
