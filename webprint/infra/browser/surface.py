"""
Playwright page wrapped as a rendering surface.
"""

import asyncio
import re
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

from playwright.async_api import Error as PlaywrightError, Page, Route

from webprint.modules.render.types import PageGeometry
from webprint.shared.logging import get_logger

from .protocols import SignalHandler

logger = get_logger(__name__)

FILE_URL_PATTERN = re.compile(r"^file:", re.IGNORECASE)


def file_url_to_path(url: str) -> Path:
    """Convert a file:// URL to a local path."""
    parsed = urlparse(url)
    return Path(url2pathname(parsed.path))


def is_within(path: Path, root: Path) -> bool:
    """True if path is root or lies below it (after resolving)."""
    path, root = path.resolve(), root.resolve()
    return path == root or root in path.parents


def points_to_css(points: float) -> str:
    """Chromium's print API takes CSS lengths; points are 1/72 inch."""
    return f"{points / 72:.4f}in"


class PlaywrightSurface:
    """
    Rendering surface backed by a Playwright page.

    Loads are issued as background navigation tasks so callers can arm a
    load-completion strategy while the page is still loading.
    """

    def __init__(self, page: Page, *, print_background: bool = True):
        self.page = page
        self.print_background = print_background
        self._navigation: asyncio.Task[None] | None = None
        self._load_error: str | None = None
        self._failed = asyncio.Event()

    @property
    def load_error(self) -> str | None:
        return self._load_error

    # =========================================================================
    # LOADING
    # =========================================================================

    async def load_url(self, url: str) -> None:
        self._start_navigation(url)

    async def load_file(self, url: str, access_root: Path) -> None:
        document = file_url_to_path(url)
        if not is_within(document, access_root):
            self._fail(f"{document} is outside read access root {access_root}")
            logger.warning(f"Refusing file load: {self._load_error}")
            return

        async def guard(route: Route) -> None:
            requested = file_url_to_path(route.request.url)
            if is_within(requested, access_root):
                await route.continue_()
            else:
                logger.warning(f"Blocked file read outside access root: {requested}")
                await route.abort("accessdenied")

        await self.page.route(FILE_URL_PATTERN, guard)
        self._start_navigation(url)

    def _start_navigation(self, url: str) -> None:
        self._navigation = asyncio.create_task(self._navigate(url))

    async def _navigate(self, url: str) -> None:
        try:
            # No engine timeout: the caller's load strategy owns liveness
            await self.page.goto(url, wait_until="load", timeout=0)
        except PlaywrightError as e:
            self._fail(str(e))
            logger.warning(f"Navigation to {url} failed: {e}")

    def _fail(self, reason: str) -> None:
        self._load_error = reason
        self._failed.set()

    async def wait_load_failure(self) -> str:
        await self._failed.wait()
        return self._load_error or "load failed"

    async def is_loading(self) -> bool:
        if self._navigation is None:
            return False
        if not self._navigation.done():
            return True
        if self._load_error:
            return False
        try:
            state = await self.page.evaluate("document.readyState")
        except PlaywrightError:
            # Execution context replaced by a client-side navigation
            return True
        return state != "complete"

    # =========================================================================
    # SIGNALS
    # =========================================================================

    async def expose_signal(self, name: str, handler: SignalHandler) -> None:
        def binding(source: dict[str, Any], payload: Any = None) -> None:
            handler(name, payload)

        await self.page.expose_binding(name, binding)

    # =========================================================================
    # PRINTING
    # =========================================================================

    async def print_pdf(self, geometry: PageGeometry) -> bytes:
        page_rect = geometry.page_rect
        margins = geometry.margins
        return await self.page.pdf(
            width=points_to_css(page_rect.width),
            height=points_to_css(page_rect.height),
            margin={
                "top": points_to_css(margins.top),
                "left": points_to_css(margins.left),
                "bottom": points_to_css(margins.bottom),
                "right": points_to_css(margins.right),
            },
            print_background=self.print_background,
            prefer_css_page_size=False,
        )

    async def close(self) -> None:
        if self._navigation is not None and not self._navigation.done():
            self._navigation.cancel()
            try:
                await self._navigation
            except asyncio.CancelledError:
                pass
        try:
            await self.page.context.close()
        except PlaywrightError as e:
            # Browser already gone; nothing left to release
            logger.warning(f"Closing page context failed: {e}")
