"""Render module routes."""

from pathlib import Path

from fastapi import APIRouter, Request

from webprint.config import get_settings
from webprint.shared.logging import get_logger

from .schemas import RenderPdfRequest, RenderPdfResponse
from .service import RenderService
from .strategies import create_strategy
from .types import PaperSize

logger = get_logger(__name__)
router = APIRouter(prefix="/render", tags=["render"])


@router.post("/pdf", response_model=RenderPdfResponse)
async def render_pdf(body: RenderPdfRequest, request: Request) -> RenderPdfResponse:
    """
    Render a URL to a PDF file on the server.

    Each request gets its own RenderService, so concurrent requests never
    share a surface.
    """
    settings = get_settings()
    host = getattr(request.app.state, "host", None)
    strategy_kind = body.strategy or settings.load_strategy

    service = RenderService(
        host,
        settings=settings,
        strategy_factory=lambda: create_strategy(strategy_kind, settings),
    )

    timeout = body.timeout_seconds if body.timeout_seconds is not None else settings.load_timeout_seconds
    result = await service.render_url(
        body.source_url,
        Path(body.output_path),
        paper_size=PaperSize.from_name(body.paper_size),
        landscape=body.landscape,
        margins=body.margins.to_margins(),
        base_access_root=Path(body.base_access_root) if body.base_access_root else None,
        timeout=timeout,
    )

    if not result.ok:
        # WebPrintError is rendered by the app's exception handler
        raise result.error

    return RenderPdfResponse(
        success=True,
        output_path=str(result.output_path),
        size_bytes=result.output_path.stat().st_size,
    )
