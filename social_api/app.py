import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from social_api.core.config import get_settings
from social_api.core.errors import ServiceError
from social_api.core.logging import get_logger, setup_logging
from social_api.db.create_tables import create_all
from social_api.routers import accounts as accounts_router
from social_api.routers import auth as auth_router
from social_api.services.session_service import get_signing_key

logger = get_logger("social_api.app")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def _error_body(message: str, code: str) -> dict:
    return {"message": message, "error": code}


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(_error_body(exc.message, exc.code), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = "Invalid request payload"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(_error_body(detail, "validation_error"), status_code=400)


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(_error_body("Internal server error", "internal_error"), status_code=500)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(_error_body("Internal server error", "internal_error"), status_code=500)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # Refuse to boot in prod without a signing secret.
    get_signing_key()
    if settings.auto_create_tables:
        create_all()
    logger.info("Social graph API started (env=%s)", settings.app_env)
    yield


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (`uvicorn social_api.app:app`)."""
    settings = get_settings()
    setup_logging(settings.log_level)

    application = FastAPI(title="Social Graph API", lifespan=lifespan)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_exception_handler(ServiceError, service_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(SQLAlchemyError, database_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    application.include_router(auth_router.router)
    application.include_router(accounts_router.router)

    @application.get("/")
    def health():
        return {"message": "Social Graph API is running"}

    return application


app = create_app()
