"""
Document loader - opens a transient surface, issues the load and arms a
load-completion strategy against it.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from playwright.async_api import Error as PlaywrightError

from webprint.infra.browser.protocols import RenderHost, RenderingSurface
from webprint.shared.errors import (
    DocumentLoadFailed,
    LoadTargetUnavailable,
    LoadTimedOut,
    StorageRootUnavailable,
)
from webprint.shared.logging import get_logger

from .strategies import LoadCompletionStrategy, PollingLoadStrategy
from .types import RenderRequest

logger = get_logger(__name__)

StrategyFactory = Callable[[], LoadCompletionStrategy]


@dataclass
class PendingLoad:
    """Handle on an issued load: the surface plus the strategy watching it."""

    source: str
    surface: RenderingSurface
    strategy: LoadCompletionStrategy

    async def wait(self, timeout: float | None = None) -> RenderingSurface:
        """
        Wait for the strategy to resolve or the navigation to fail.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Raises:
            DocumentLoadFailed: If the navigation failed first
            LoadTimedOut: If neither happened in time
        """
        completed = asyncio.ensure_future(self.strategy.wait())
        failed = asyncio.ensure_future(self.surface.wait_load_failure())
        try:
            done, _ = await asyncio.wait(
                {completed, failed},
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            completed.cancel()
            failed.cancel()

        if failed in done:
            self.strategy.cancel()
            raise DocumentLoadFailed(self.source, failed.result())
        if completed in done:
            return self.surface

        self.strategy.cancel()
        raise LoadTimedOut(self.source, timeout or 0)


class DocumentLoader:
    """Issues file or network loads on surfaces created from a host."""

    def __init__(
        self,
        host: RenderHost | None,
        strategy_factory: StrategyFactory = PollingLoadStrategy,
        storage_root: Path | None = None,
    ):
        self.host = host
        self.strategy_factory = strategy_factory
        self.storage_root = storage_root

    def resolve_access_root(self, request: RenderRequest) -> Path:
        """Pick the sandbox root for a file load."""
        root = request.base_access_root or self.storage_root
        if root is None:
            raise StorageRootUnavailable()
        if not root.is_dir():
            raise StorageRootUnavailable(root)
        return root

    @asynccontextmanager
    async def open(self, request: RenderRequest) -> AsyncIterator[PendingLoad]:
        """
        Load request.source into a transient surface.

        The surface and strategy live only inside the context; both are torn
        down on every exit path.

        Raises:
            LoadTargetUnavailable: No host, or the host could not open a surface
            StorageRootUnavailable: File load without a usable access root
            DocumentLoadFailed: The engine rejected the load before it started
        """
        if self.host is None or not self.host.is_available():
            raise LoadTargetUnavailable()

        access_root = self.resolve_access_root(request) if request.is_file_source else None
        width, height = self.host.bounds
        if request.landscape:
            width, height = height, width

        async with AsyncExitStack() as stack:
            try:
                surface = await stack.enter_async_context(self.host.open_surface(width, height))
            except PlaywrightError as e:
                raise LoadTargetUnavailable(f"Browser host could not open a page: {e}") from e

            strategy = self.strategy_factory()
            try:
                await strategy.prepare(surface)
                if access_root is not None:
                    logger.debug(f"Loading file {request.source} (read access: {access_root})")
                    await surface.load_file(request.source, access_root)
                else:
                    logger.debug(f"Loading {request.source}")
                    await surface.load_url(request.source)
            except PlaywrightError as e:
                raise DocumentLoadFailed(request.source, str(e)) from e

            if surface.load_error:
                raise DocumentLoadFailed(request.source, surface.load_error)

            strategy.start(surface)
            try:
                yield PendingLoad(source=request.source, surface=surface, strategy=strategy)
            finally:
                strategy.cancel()
