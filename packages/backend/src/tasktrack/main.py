"""FastAPI application factory.

Learn: create_app() returns a configured FastAPI instance. Middleware,
CORS, routers, and the error handlers all get registered here.

Error contract: every failure leaves the app as {"error": message}.
Domain errors carry their own status; request validation failures are
reported as 400; anything unexpected becomes a bare 500 and its
traceback stays in the log.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktrack import __version__
from tasktrack.api import api_router
from tasktrack.config import settings
from tasktrack.errors import TaskTrackError
from tasktrack.logging_config import configure_logging
from tasktrack.middleware.request_id import RequestIdMiddleware
from tasktrack.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle. The store needs no setup or teardown."""
    logger.info(
        "tasktrack.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    yield
    logger.info("tasktrack.shutdown")


# ─── Error handlers ──────────────────────────────────────


async def handle_domain_error(request: Request, exc: TaskTrackError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("http.unexpected_error", error=exc.message, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
        headers=exc.headers,
    )


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """One-line summary of the first validation problem, e.g. "email: Field required"."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc looks like ("body", "email"); drop the request part and list indexes
    location = ".".join(
        part for part in first.get("loc", ())[1:] if isinstance(part, str)
    )
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"error": describe_validation_error(exc)}
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "http.unhandled_exception",
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="tasktrack",
        description="Per-user projects and tasks behind bearer-token auth",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(TaskTrackError, handle_domain_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: tasktrack.main:app)
app = create_app()
