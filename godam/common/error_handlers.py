from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from godam.core.exceptions import GodamError
from godam.logger_config import logger


def _error(message, status_code, **extra):
    body = {"success": False, "error": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def _describe(errors) -> str:
    missing = [
        ".".join(str(p) for p in err["loc"] if p != "body")
        for err in errors
        if err.get("type") in ("missing", "string_too_short", "too_short")
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return "Invalid request"


def register_error_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info(f"Validation failed on {request.method} {request.url.path}")
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        return _error(_describe(exc.errors()), status.HTTP_400_BAD_REQUEST, details=details)

    @app.exception_handler(GodamError)
    async def handle_domain_error(request: Request, exc: GodamError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def handle_exception(request: Request, exc: Exception):
        # Log the exception with traceback
        logger.exception("Unhandled exception occurred")
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
