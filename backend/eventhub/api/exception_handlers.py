import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventhub.core.config import Settings
from eventhub.core.errors import DomainError

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info("[error] %s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("[error] %s %s -> invalid body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("[error] Unhandled exception on %s %s", request.method, request.url.path)
        content = {"error": "Internal server error"}
        # Exception text leaks internals; only expose it outside production
        if not settings.is_prod:
            content["message"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
