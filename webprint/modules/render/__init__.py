"""Render module - HTML to paginated PDF using a headless browser."""

from .geometry import compute_geometry
from .router import router
from .schemas import RenderPdfRequest, RenderPdfResponse
from .service import RenderService, RendererDelegate
from .strategies import (
    LoadCompletionStrategy,
    PollingLoadStrategy,
    SignalLoadStrategy,
    StrategyState,
    create_strategy,
)
from .types import Margins, PageGeometry, PaperSize, Rect, RenderRequest, RenderResult

__all__ = [
    "router",
    "compute_geometry",
    "RenderService",
    "RendererDelegate",
    "RenderPdfRequest",
    "RenderPdfResponse",
    "LoadCompletionStrategy",
    "PollingLoadStrategy",
    "SignalLoadStrategy",
    "StrategyState",
    "create_strategy",
    "Margins",
    "PageGeometry",
    "PaperSize",
    "Rect",
    "RenderRequest",
    "RenderResult",
]
