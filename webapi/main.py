from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from webapi.config.factory import build_metrics, build_user_service
from webapi.config.logger import get_logger
from webapi.config.settings import Settings
from webapi.shared.exceptions import (
    MalformedRequestError,
    NotAcceptableError,
    NotFoundError,
    ValidationFailedError,
)
from webapi.shared.health import health_router
from webapi.shared.logger import StructuredLogger
from webapi.shared.metrics import UserMetrics
from webapi.shared.negotiation import render
from webapi.users.repository import InMemoryUserRepository
from webapi.users.routes import router as users_router


def register_exception_handlers(app: FastAPI, logger: StructuredLogger) -> None:
    """Map the error taxonomy onto HTTP responses."""

    @app.exception_handler(MalformedRequestError)
    async def malformed_request(request: Request, exc: MalformedRequestError):
        logger.warning("Malformed request", path=request.url.path, reason=exc.message)
        return render(request, {"message": exc.message}, status_code=400, root="Error", strict=False)

    @app.exception_handler(RequestValidationError)
    async def unparsable_request(request: Request, exc: RequestValidationError):
        app.state.metrics.increment(UserMetrics.MALFORMED)
        logger.warning("Unparsable request", path=request.url.path, errors=len(exc.errors()))
        errors = {
            ".".join(str(part) for part in error.get("loc", ())): [error.get("msg", "")]
            for error in exc.errors()
        }
        return render(request, errors, status_code=400, root="Error", strict=False)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        logger.info("Not found", path=request.url.path, **exc.details)
        return Response(status_code=404)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed(request: Request, exc: ValidationFailedError):
        return render(request, exc.errors, status_code=422, root="ValidationErrors", strict=False)

    @app.exception_handler(NotAcceptableError)
    async def not_acceptable(request: Request, exc: NotAcceptableError):
        logger.info("Not acceptable", path=request.url.path, **exc.details)
        return Response(status_code=406)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[InMemoryUserRepository] = None,
) -> FastAPI:
    """
    Build the users API.

    The repository is owned by the returned app (``app.state``); pass one in
    to share or pre-seed it.
    """
    settings = settings or Settings()
    logger = get_logger("webapi", settings)
    app = FastAPI(title=settings.app.app_name, debug=settings.app.debug)

    metrics = build_metrics(settings)
    service = build_user_service(settings, repository=repository, metrics=metrics)

    app.state.settings = settings
    app.state.metrics = metrics
    app.state.user_repository = service.repository
    app.state.user_service = service

    register_exception_handlers(app, logger)
    app.include_router(users_router)
    app.include_router(health_router)

    logger.info("Users API configured", app_name=settings.app.app_name)
    return app


app = create_app()
