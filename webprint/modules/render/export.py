"""
Export pipeline - print a loaded surface to PDF and write it atomically.
"""

from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from webprint.infra.browser.protocols import RenderingSurface
from webprint.infra.fs import atomic_write_bytes, ensure_directory
from webprint.shared.errors import (
    OutputPathUnavailable,
    OutputWriteFailed,
    PageGeometryInvalid,
    PrintJobFailed,
    WebPrintError,
)
from webprint.shared.logging import get_logger

from .types import PageGeometry, RenderResult

logger = get_logger(__name__)


class ExportPipeline:
    """Turns a loaded surface plus page geometry into a PDF file."""

    async def export(
        self,
        surface: RenderingSurface,
        geometry: PageGeometry,
        output_path: Path,
    ) -> RenderResult:
        """
        Print the surface and persist the PDF.

        Directory and geometry problems short-circuit before any print job is
        started. Failures are returned, never raised.
        """
        try:
            self._check_destination(output_path)
            self._check_geometry(geometry)
            data = await self._print(surface, geometry)
            self._write(output_path, data)
        except WebPrintError as e:
            if isinstance(e, OutputWriteFailed):
                logger.error(f"Failed to create PDF:\n{e}")
            else:
                logger.warning(e.message)
            return RenderResult.failed(e)

        logger.info(f"Generated PDF file at:\n{output_path} ({len(data)} bytes)")
        return RenderResult.succeeded(output_path)

    def _check_destination(self, output_path: Path) -> None:
        directory = output_path.parent
        if not ensure_directory(directory):
            raise OutputPathUnavailable(directory)

    def _check_geometry(self, geometry: PageGeometry) -> None:
        printable = geometry.printable_rect
        if printable.is_degenerate:
            raise PageGeometryInvalid(printable.width, printable.height)

    async def _print(self, surface: RenderingSurface, geometry: PageGeometry) -> bytes:
        try:
            data = await surface.print_pdf(geometry)
        except PlaywrightError as e:
            raise PrintJobFailed(str(e)) from e
        if not data:
            raise PrintJobFailed("engine returned no data")
        return data

    def _write(self, output_path: Path, data: bytes) -> None:
        try:
            atomic_write_bytes(output_path, data)
        except OSError as e:
            raise OutputWriteFailed(output_path, e) from e
