"""
Shared fixtures: settings, temp dirs and in-memory browser fakes.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from webprint.app import build_app
from webprint.config import Settings, init_settings, reset_settings

FAKE_PDF = b"%PDF-1.4\n1 0 obj <<>> endobj\ntrailer <<>>\n%%EOF\n"


class FakeSurface:
    """In-memory rendering surface."""

    def __init__(
        self,
        *,
        loading_ticks: int = 0,
        never_stops: bool = False,
        signal_on_load: str | None = None,
        load_error: str | None = None,
        fail_after: float | None = None,
        load_raise: Exception | None = None,
        pdf_bytes: bytes = FAKE_PDF,
        print_error: Exception | None = None,
    ):
        self.loading_ticks = loading_ticks
        self.never_stops = never_stops
        self.signal_on_load = signal_on_load
        self._load_error = load_error
        self.fail_after = fail_after
        self.load_raise = load_raise
        self.pdf_bytes = pdf_bytes
        self.print_error = print_error

        self.loaded_url: str | None = None
        self.access_root: Path | None = None
        self.handlers: dict[str, Callable[[str, Any], None]] = {}
        self.is_loading_calls = 0
        self.print_calls: list[Any] = []
        self.closed = False
        self._failed = asyncio.Event()
        if load_error:
            self._failed.set()

    @property
    def load_error(self) -> str | None:
        return self._load_error

    async def load_url(self, url: str) -> None:
        self._issue(url)

    async def load_file(self, url: str, access_root: Path) -> None:
        self.access_root = access_root
        self._issue(url)

    def _issue(self, url: str) -> None:
        if self.load_raise is not None:
            raise self.load_raise
        self.loaded_url = url
        loop = asyncio.get_running_loop()
        if self.signal_on_load:
            loop.call_later(0.01, self.post, self.signal_on_load)
        if self.fail_after is not None:
            loop.call_later(self.fail_after, self.fail, "net::ERR_CONNECTION_RESET")

    def fail(self, reason: str) -> None:
        """Simulate the navigation erroring out."""
        self._load_error = reason
        self._failed.set()

    async def wait_load_failure(self) -> str:
        await self._failed.wait()
        return self._load_error or "load failed"

    async def is_loading(self) -> bool:
        self.is_loading_calls += 1
        if self.never_stops:
            return True
        if self.loading_ticks > 0:
            self.loading_ticks -= 1
            return True
        return False

    async def expose_signal(self, name: str, handler: Callable[[str, Any], None]) -> None:
        if self.load_raise is not None:
            raise self.load_raise
        self.handlers[name] = handler

    def post(self, name: str, payload: Any = None) -> None:
        """Simulate `window.<name>(payload)` from page script."""
        for handler in self.handlers.values():
            handler(name, payload)

    async def print_pdf(self, geometry: Any) -> bytes:
        self.print_calls.append(geometry)
        if self.print_error is not None:
            raise self.print_error
        return self.pdf_bytes

    async def close(self) -> None:
        self.closed = True


class FakeHost:
    """In-memory host that hands out FakeSurfaces."""

    def __init__(
        self,
        surface_factory: Callable[[], FakeSurface] = FakeSurface,
        bounds: tuple[int, int] = (1024, 768),
        available: bool = True,
        open_error: Exception | None = None,
    ):
        self.surface_factory = surface_factory
        self._bounds = bounds
        self.available = available
        self.open_error = open_error
        self.surfaces: list[FakeSurface] = []
        self.opened_sizes: list[tuple[int, int]] = []

    @property
    def bounds(self) -> tuple[int, int]:
        return self._bounds

    def is_available(self) -> bool:
        return self.available

    @asynccontextmanager
    async def open_surface(self, width: int, height: int):
        self.opened_sizes.append((width, height))
        if self.open_error is not None:
            raise self.open_error
        surface = self.surface_factory()
        self.surfaces.append(surface)
        try:
            yield surface
        finally:
            await surface.close()


class RecordingDelegate:
    """Delegate that records every notification."""

    def __init__(self) -> None:
        self.created: list[Path] = []
        self.failed: list[Exception] = []

    def did_create_pdf(self, renderer: Any, path: Path) -> None:
        self.created.append(path)

    def did_fail(self, renderer: Any, error: Exception) -> None:
        self.failed.append(error)


class RecordingCallback:
    """Callback that records (path, error) calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path | None, Exception | None]] = []

    def __call__(self, path: Path | None, error: Exception | None) -> None:
        self.calls.append((path, error))


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Storage root and output area for a test."""
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture
def settings(temp_dir: Path):
    """Fast settings rooted in temp_dir."""
    test_settings = Settings(
        storage_root=temp_dir,
        poll_interval_seconds=0.01,
        load_timeout_seconds=2.0,
        log_level="DEBUG",
    )
    init_settings(test_settings)
    yield test_settings
    reset_settings()


@pytest.fixture
def make_surface() -> Callable[..., FakeSurface]:
    return FakeSurface


@pytest.fixture
def make_host() -> Callable[..., FakeHost]:
    """Build a FakeHost whose surfaces are created with the given kwargs."""

    def factory(
        bounds: tuple[int, int] = (1024, 768),
        available: bool = True,
        open_error: Exception | None = None,
        **surface_kwargs: Any,
    ) -> FakeHost:
        return FakeHost(
            surface_factory=lambda: FakeSurface(**surface_kwargs),
            bounds=bounds,
            available=available,
            open_error=open_error,
        )

    return factory


@pytest.fixture
def delegate() -> RecordingDelegate:
    return RecordingDelegate()


@pytest.fixture
def make_delegate() -> Callable[[], RecordingDelegate]:
    return RecordingDelegate


@pytest.fixture
def callback() -> RecordingCallback:
    return RecordingCallback()


@pytest.fixture
def fake_host(make_host) -> FakeHost:
    return make_host()


@pytest.fixture
def client(settings: Settings, fake_host: FakeHost):
    """API client backed by the fake host (no Chromium launched)."""
    app = build_app(settings, host=fake_host)
    with TestClient(app) as test_client:
        yield test_client
