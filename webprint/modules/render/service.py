"""
Render service - HTML to PDF using a headless browser host.

Two entry points:
- render_url(): creates a hidden page, waits for the document to load,
  then prints it (via render_surface()).
- render_surface(): prints an already-loaded surface straight away.

Both report the outcome to an optional delegate and an optional callback,
and return it as a RenderResult.
"""

from pathlib import Path
from typing import Callable, Protocol

from webprint.config import Settings, get_settings
from webprint.infra.browser.protocols import RenderHost, RenderingSurface
from webprint.shared.errors import DocumentLoadFailed, RendererBusy, WebPrintError
from webprint.shared.ids import generate_render_id
from webprint.shared.logging import get_logger

from .export import ExportPipeline
from .geometry import compute_geometry
from .loader import DocumentLoader, StrategyFactory
from .strategies import LoadCompletionStrategy, create_strategy
from .types import Margins, PaperSize, RenderRequest, RenderResult

logger = get_logger(__name__)

Callback = Callable[[Path | None, Exception | None], None]

_UNSET = object()


class RendererDelegate(Protocol):
    """Observer notified once per render."""

    def did_create_pdf(self, renderer: "RenderService", path: Path) -> None: ...

    def did_fail(self, renderer: "RenderService", error: Exception) -> None: ...


class RenderService:
    """
    Facade composing loader, load-completion strategy and export pipeline.

    One render at a time per instance; use separate instances for
    concurrent renders.

    Usage:
        async with BrowserHost.launch(settings) as host:
            service = RenderService(host)
            result = await service.render_url(
                "file:///srv/docs/report.html",
                Path("/srv/out/report.pdf"),
                PaperSize.A4,
                margins=Margins.uniform(36),
            )
    """

    def __init__(
        self,
        host: RenderHost | None,
        settings: Settings | None = None,
        delegate: RendererDelegate | None = None,
        strategy_factory: StrategyFactory | None = None,
        export_pipeline: ExportPipeline | None = None,
    ):
        self.settings = settings or get_settings()
        self.host = host
        self.delegate = delegate
        self.strategy_factory = strategy_factory or (
            lambda: create_strategy(self.settings.load_strategy, self.settings)
        )
        self.exporter = export_pipeline or ExportPipeline()

        # Slots held only while render_url() is in flight
        self._surface: RenderingSurface | None = None
        self._strategy: LoadCompletionStrategy | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    # =========================================================================
    # RENDER FROM URL
    # =========================================================================

    async def render_url(
        self,
        source: str,
        output_path: Path,
        paper_size: PaperSize = PaperSize.LETTER,
        landscape: bool = False,
        margins: Margins | None = None,
        base_access_root: Path | None = None,
        delegate: RendererDelegate | None = None,
        callback: Callback | None = None,
        timeout: float | None | object = _UNSET,
    ) -> RenderResult:
        """
        Load an http(s) or file URL into a hidden page and print it to PDF.

        Args:
            source: Document URL (http, https or file)
            output_path: Destination PDF path; parent folders are created
            paper_size: Paper size (portrait baseline)
            landscape: Swap paper width and height
            margins: Page margins in points
            base_access_root: Read-access root for file loads
                (defaults to settings.storage_root)
            delegate: Observer for this call (overrides the instance delegate)
            callback: Called with (path, None) or (None, error)
            timeout: Seconds to wait for the load, None for no limit
                (defaults to settings.load_timeout_seconds)

        Returns:
            RenderResult with the output path or the error
        """
        if self._active:
            return self._finish(RenderResult.failed(RendererBusy()), delegate, callback)

        request = RenderRequest(
            source=source,
            output_path=Path(output_path),
            paper_size=paper_size,
            landscape=landscape,
            margins=margins or Margins(),
            base_access_root=base_access_root,
        )
        wait_timeout = self.settings.load_timeout_seconds if timeout is _UNSET else timeout
        render_id = generate_render_id()
        logger.info(
            f"[{render_id}] Rendering {source} -> {request.output_path} "
            f"({paper_size.name}{', landscape' if landscape else ''})"
        )

        loader = DocumentLoader(
            self.host,
            strategy_factory=self.strategy_factory,
            storage_root=self.settings.storage_root,
        )

        self._active = True
        try:
            result = await self._load_and_export(loader, request, wait_timeout)
        finally:
            self._surface = None
            self._strategy = None
            self._active = False

        if not result.ok:
            logger.warning(f"[{render_id}] Render failed: {result.error}")
        return self._finish(result, delegate, callback)

    async def _load_and_export(
        self,
        loader: DocumentLoader,
        request: RenderRequest,
        timeout: float | None,
    ) -> RenderResult:
        try:
            async with loader.open(request) as pending:
                self._surface = pending.surface
                self._strategy = pending.strategy

                surface = await pending.wait(timeout)
                if surface.load_error:
                    raise DocumentLoadFailed(request.source, surface.load_error)

                return await self._export(surface, request)
        except WebPrintError as e:
            return RenderResult.failed(e)

    # =========================================================================
    # RENDER FROM SURFACE
    # =========================================================================

    async def render_surface(
        self,
        surface: RenderingSurface,
        output_path: Path,
        paper_size: PaperSize = PaperSize.LETTER,
        landscape: bool = False,
        margins: Margins | None = None,
        delegate: RendererDelegate | None = None,
        callback: Callback | None = None,
    ) -> RenderResult:
        """
        Print an existing, already-loaded surface into a paged PDF.

        No load-completion strategy is armed; the caller guarantees the
        surface has finished loading.
        """
        request = RenderRequest(
            source="<surface>",
            output_path=Path(output_path),
            paper_size=paper_size,
            landscape=landscape,
            margins=margins or Margins(),
        )
        result = await self._export(surface, request)
        return self._finish(result, delegate, callback)

    async def _export(self, surface: RenderingSurface, request: RenderRequest) -> RenderResult:
        geometry = compute_geometry(request.paper_size, request.landscape, request.margins)
        return await self.exporter.export(surface, geometry, request.output_path)

    # =========================================================================
    # NOTIFICATION
    # =========================================================================

    def _finish(
        self,
        result: RenderResult,
        delegate: RendererDelegate | None,
        callback: Callback | None,
    ) -> RenderResult:
        """Deliver the result to the delegate and callback, once each."""
        observer = delegate or self.delegate

        if result.ok:
            if observer is not None:
                observer.did_create_pdf(self, result.output_path)
            if callback is not None:
                callback(result.output_path, None)
        else:
            if observer is not None:
                observer.did_fail(self, result.error)
            if callback is not None:
                callback(None, result.error)

        return result
