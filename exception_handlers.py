import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions import LandlordProError

logger = logging.getLogger(__name__)

# Request sections that add nothing to a field name
_LOCATION_PREFIXES = {"body", "query", "path", "form", "header"}


def error_body(message: str) -> dict:
    return {"success": False, "message": message}


def validation_message(exc: RequestValidationError) -> str:
    """Readable message built from the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if str(part) not in _LOCATION_PREFIXES]
    msg = str(first.get("msg", "Invalid value"))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(LandlordProError)
    async def domain_exception_handler(request: Request, exc: LandlordProError):
        return JSONResponse(content=error_body(exc.message), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = str(exc.detail)
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = "Route not found"
        return JSONResponse(content=error_body(message), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(content=error_body(validation_message(exc)), status_code=400)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(content=error_body("Internal server error"), status_code=500)
