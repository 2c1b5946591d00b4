from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from api.core.config import Settings, get_settings
from api.core.lifecycle import ShutdownHook
from api.core.request_logging import RequestLoggingMiddleware
from api.domain.employees import describe_validation_errors
from api.repositories.json_storage import EmployeeFileStorage
from api.routers import employees as employees_router
from api.services.employee_service import EmployeeError, EmployeeErrorKind, EmployeeService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    EmployeeErrorKind.ALREADY_EXISTS: 409,
    EmployeeErrorKind.NOT_FOUND: 404,
}


def _plain_error(message: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


async def _employee_error(request: Request, exc: EmployeeError) -> PlainTextResponse:
    logger.warning(exc.message)
    return _plain_error(exc.message, ERROR_STATUS[exc.kind])


async def _validation_error(request: Request, exc: ValidationError | RequestValidationError) -> PlainTextResponse:
    message = describe_validation_errors(exc.errors()) or "Invalid data"
    logger.warning(message)
    return _plain_error(message, 400)


async def _unexpected_error(request: Request, exc: Exception) -> PlainTextResponse:
    # the server error middleware re-raises afterwards, so the traceback is logged there
    logger.error("Unhandled error on %s %s: %r", request.method, request.url.path, exc)
    return _plain_error("Internal Server Error", 500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API: the store is seeded from the data file on startup and saved on shutdown."""
    settings = settings or get_settings()
    storage = EmployeeFileStorage(settings.data_file)

    def _persist() -> None:
        service = getattr(app.state, "employee_service", None)
        if service is None:
            return
        storage.save(service.snapshot())

    shutdown_hook = ShutdownHook(_persist)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.employee_service = EmployeeService(storage.load())
        try:
            yield
        finally:
            shutdown_hook.run()

    app = FastAPI(title="Employees API", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.shutdown_hook = shutdown_hook

    app.add_middleware(
        RequestLoggingMiddleware,
        log_format=settings.request_log_format,
        threshold=settings.request_log_threshold,
    )
    app.add_exception_handler(EmployeeError, _employee_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(employees_router.router)
    return app


app = create_app()
