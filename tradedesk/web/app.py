"""FastAPI application for TradeDesk.

Exposes the trade registry, form assemblers and classified backend records
as a JSON API. Core errors are mapped to HTTP responses here, in one place.
"""

from __future__ import annotations

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tradedesk import __version__
from tradedesk.core.logging import configure_logging
from tradedesk.errors import (
    AccessDenied,
    CollaboratorError,
    SubmissionFailure,
    SubmissionInProgress,
    UnknownTrade,
    ValidationError,
)
from tradedesk.web.routes import customers, dashboard, estimates, health, inventory, jobs, trades

# Initialize structured logging
configure_logging()
logger = structlog.get_logger()

app = FastAPI(
    title="TradeDesk API",
    description="Trade configuration, job forms and business records for trade-services teams",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise

        logger.info("request_completed", status_code=response.status_code)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestLoggingMiddleware)


# Exception Handlers
@app.exception_handler(UnknownTrade)
async def unknown_trade_handler(request: Request, exc: UnknownTrade):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied):
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.exception_handler(SubmissionInProgress)
async def submission_in_progress_handler(request: Request, exc: SubmissionInProgress):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(CollaboratorError)
async def collaborator_error_handler(request: Request, exc: CollaboratorError):
    """Backend failures (reads and rejected submissions) surface as 502."""
    content = {"detail": str(exc), "backend_status": exc.status_code}
    if isinstance(exc, SubmissionFailure):
        content["backend_detail"] = exc.detail
    return JSONResponse(status_code=502, content=content)


# Include Routers
app.include_router(health.router)
app.include_router(trades.router)
app.include_router(jobs.router)
app.include_router(customers.router)
app.include_router(inventory.router)
app.include_router(dashboard.router)
app.include_router(estimates.router)
