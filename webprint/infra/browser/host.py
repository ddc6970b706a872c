"""
Headless Chromium host that creates transient off-screen surfaces.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Browser, Error as PlaywrightError, async_playwright

from webprint.config import Settings
from webprint.shared.logging import get_logger

from .surface import PlaywrightSurface

logger = get_logger(__name__)


class BrowserHost:
    """
    Owns one Chromium browser; each surface gets its own isolated context.

    Usage:
        async with BrowserHost.launch(settings) as host:
            service = RenderService(host)
    """

    def __init__(
        self,
        browser: Browser,
        bounds: tuple[int, int] = (1024, 768),
        *,
        print_background: bool = True,
    ):
        self._browser = browser
        self._bounds = bounds
        self.print_background = print_background

    @classmethod
    @asynccontextmanager
    async def launch(cls, settings: Settings) -> AsyncIterator["BrowserHost"]:
        """Start Playwright and Chromium for the lifetime of the context."""
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=settings.browser_headless)
            logger.info(f"Chromium {browser.version} launched (headless={settings.browser_headless})")
            try:
                yield cls(
                    browser,
                    bounds=(settings.viewport_width, settings.viewport_height),
                    print_background=settings.print_background,
                )
            finally:
                await browser.close()
                logger.info("Chromium closed")

    @property
    def bounds(self) -> tuple[int, int]:
        return self._bounds

    def is_available(self) -> bool:
        return self._browser.is_connected()

    @asynccontextmanager
    async def open_surface(self, width: int, height: int) -> AsyncIterator[PlaywrightSurface]:
        """Create a transient page sized width x height; closed on exit."""
        context = await self._browser.new_context(viewport={"width": width, "height": height})
        try:
            page = await context.new_page()
        except PlaywrightError:
            await context.close()
            raise
        surface = PlaywrightSurface(page, print_background=self.print_background)
        try:
            yield surface
        finally:
            await surface.close()
