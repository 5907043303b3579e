from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_api import __version__
from movie_api.api.router import build_api_router
from movie_api.core.error_codes import GeneralErrorCode, code_for_status
from movie_api.core.errors import ApiError, DomainFault, ValidationFault
from movie_api.core.logging import configure_logging
from movie_api.core.settings import get_settings
from movie_api.db.session import dispose_engine
from movie_api.middleware.correlation import CorrelationStage
from movie_api.middleware.exceptions import ExceptionStage, render_fault


logger = logging.getLogger(__name__)


def _validation_fault(exc: RequestValidationError) -> ValidationFault:
    errors = []
    for e in exc.errors():
        location = ".".join(str(part) for part in e.get("loc", ()))
        message = f"{location}: {e['msg']}"
        errors.append(ApiError(code=int(GeneralErrorCode.BAD_REQUEST), message=message))
    if not errors:
        errors.append(ApiError.from_code(GeneralErrorCode.BAD_REQUEST))
    return ValidationFault(errors=errors)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("Movies API %s started", __version__)
    yield
    await dispose_engine()
    logger.info("Movies API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="Movies API", version=__version__, lifespan=lifespan)

    # Added innermost first. Request order: CorrelationStage -> CORS ->
    # ExceptionStage -> routes.
    app.add_middleware(ExceptionStage)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_allow_origin],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization", settings.correlation_header],
        expose_headers=[settings.correlation_header],
    )
    app.add_middleware(CorrelationStage, header_name=settings.correlation_header)

    # Framework-raised failures are folded into the same envelope.
    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        return render_fault(
            _validation_fault(exc), getattr(request.state, "correlation_id", None)
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException):
        fault = DomainFault.from_code(
            code_for_status(exc.status_code), status_code=exc.status_code
        )
        response = render_fault(fault, getattr(request.state, "correlation_id", None))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.include_router(build_api_router(settings.health_endpoint))

    return app


app = create_app()
