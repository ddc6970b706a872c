"""
Structural interfaces for rendering hosts and surfaces.

The render module only talks to these, so tests can substitute in-memory fakes
for a real browser.
"""

from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

from webprint.modules.render.types import PageGeometry

SignalHandler = Callable[[str, Any], None]


@runtime_checkable
class RenderingSurface(Protocol):
    """An engine instance that loads and lays out one document."""

    @property
    def load_error(self) -> str | None:
        """Navigation failure reason, if the load itself errored."""
        ...

    async def load_url(self, url: str) -> None:
        """Issue a network load. Returns once issued, not once finished."""
        ...

    async def load_file(self, url: str, access_root: Path) -> None:
        """Issue a file load with reads restricted to access_root."""
        ...

    async def is_loading(self) -> bool:
        ...

    async def wait_load_failure(self) -> str:
        """Suspend until the load fails; returns the failure reason."""
        ...

    async def expose_signal(self, name: str, handler: SignalHandler) -> None:
        """Install a script-callable channel `window.<name>(payload)`."""
        ...

    async def print_pdf(self, geometry: PageGeometry) -> bytes:
        ...

    async def close(self) -> None:
        ...


@runtime_checkable
class RenderHost(Protocol):
    """Hosting context that can create transient off-screen surfaces."""

    @property
    def bounds(self) -> tuple[int, int]:
        """Current (width, height) of the host, in CSS pixels."""
        ...

    def is_available(self) -> bool:
        ...

    def open_surface(self, width: int, height: int) -> AbstractAsyncContextManager[RenderingSurface]:
        ...
