"""
Application factory - builds FastAPI app with middleware, routes and the
shared browser host.
"""

from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webprint import __version__
from webprint.config import Settings, get_settings, init_settings
from webprint.infra.browser.host import BrowserHost
from webprint.infra.browser.protocols import RenderHost
from webprint.modules.health.router import router as health_router
from webprint.modules.render import router as render_router
from webprint.shared.errors import WebPrintError
from webprint.shared.ids import generate_request_id
from webprint.shared.logging import (
    clear_request_context,
    get_logger,
    get_request_context,
    set_request_context,
    setup_logging,
)
from webprint.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting WebPrint...")

    async with AsyncExitStack() as stack:
        if getattr(app.state, "host", None) is None:
            app.state.host = await stack.enter_async_context(BrowserHost.launch(settings))

        logger.info("WebPrint started")
        yield

        logger.info("Shutting down WebPrint...")
        app.state.host = None

    logger.info("WebPrint stopped")


def build_app(settings: Settings | None = None, host: RenderHost | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        host: Optional pre-built render host; when omitted, Chromium is
            launched for the lifetime of the app

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        init_settings(settings)

    app = FastAPI(
        title="WebPrint",
        description="Headless HTML to paginated PDF rendering",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.host = host

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            actor=request.headers.get("X-Actor", "system"),
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(WebPrintError)
    async def webprint_error_handler(request: Request, exc: WebPrintError) -> JSONResponse:
        """Handle WebPrintError with consistent JSON response."""
        ctx = get_request_context()
        return JSONResponse(
            status_code=exc.http_status,
            content={
                "error": exc.to_dict(),
                "request_id": ctx.request_id if ctx else None,
            },
        )

    app.include_router(health_router, tags=["health"])
    app.include_router(render_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"service": "WebPrint", "version": __version__}

    return app
