# expense_app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError

from expense_app.api import dependencies
from expense_app.api.middleware import AuditTriggerMiddleware, CorrelationIdMiddleware
from expense_app.api.responses import fail
from expense_app.api.routers import expenses, health, users
from expense_app.config.logging import configure_logging
from expense_app.config.settings import get_settings
from expense_app.domain.exceptions import DomainError
from expense_app.persistence.exceptions import (
    EntityConflictError,
    EntityError,
    EntityNotFoundError,
    InvalidCursorError,
)
from expense_app.security.exceptions import SecurityError

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await dependencies.shutdown()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors()})
    return fail(400, f"Missing or invalid fields: {', '.join(fields)}")


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return fail(400, exc.message)


@app.exception_handler(SecurityError)
async def security_error_handler(request, exc: SecurityError):
    return fail(403, exc.message)


@app.exception_handler(EntityNotFoundError)
async def not_found_error_handler(request, exc: EntityNotFoundError):
    return fail(404, exc.message)


@app.exception_handler(EntityConflictError)
async def conflict_error_handler(request, exc: EntityConflictError):
    return fail(409, exc.message)


@app.exception_handler(InvalidCursorError)
async def invalid_cursor_error_handler(request, exc: InvalidCursorError):
    return fail(400, exc.message)


@app.exception_handler(EntityError)
async def entity_error_handler(request, exc: EntityError):
    logger.error("entity_store_failure", extra={"path": request.url.path, "error": exc.message})
    return fail(500, "Storage failure")


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return fail(500, "Internal server error")


# Routers: /health, /api/users, /api/expenses. Every /api request seeds the store first.
app.include_router(health.router)
app.include_router(users.router, prefix="/api", dependencies=[Depends(dependencies.ensure_seeded)])
app.include_router(expenses.router, prefix="/api", dependencies=[Depends(dependencies.ensure_seeded)])
