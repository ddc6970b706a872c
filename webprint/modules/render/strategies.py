"""
Load-completion strategies.

A strategy signals, exactly once, that a rendering surface has finished
loading its document so that printing can begin. Two variants:

- PollingLoadStrategy: checks surface.is_loading() on a fixed interval.
  Works with any document, adds up to one interval of latency, and cannot
  tell "finished" from "stalled".
- SignalLoadStrategy: installs a script-callable channel before the load;
  the document calls `window.<signal_name>()` when it is ready. Precise, but
  never fires if the document does not cooperate.

Lifecycle: IDLE -> ARMED (start) -> RESOLVED (first completion). Strategies
are single use; repeated start() calls and late completions are no-ops.
"""

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable

from webprint.config import Settings
from webprint.infra.browser.protocols import RenderingSurface
from webprint.shared.logging import get_logger

logger = get_logger(__name__)

CompletionCallback = Callable[[], None]


class StrategyState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    RESOLVED = "resolved"


class LoadCompletionStrategy(ABC):
    """Single-use synchronization object for "document finished loading"."""

    def __init__(self) -> None:
        self._state = StrategyState.IDLE
        self._surface: RenderingSurface | None = None
        self._on_complete: CompletionCallback | None = None
        self._done: asyncio.Future[None] | None = None

    @property
    def state(self) -> StrategyState:
        return self._state

    @property
    def resolved(self) -> bool:
        return self._state is StrategyState.RESOLVED

    async def prepare(self, surface: RenderingSurface) -> None:
        """Hook run before the load is issued. Default: nothing to install."""

    def start(self, surface: RenderingSurface, on_complete: CompletionCallback | None = None) -> None:
        """
        Arm the strategy against a loading surface.

        Must be called from a running event loop. Calling start() on an armed
        or resolved strategy does nothing.
        """
        if self._state is not StrategyState.IDLE:
            logger.debug(f"{type(self).__name__}.start() ignored in state {self._state.value}")
            return

        self._surface = surface
        self._on_complete = on_complete
        self._future()
        self._state = StrategyState.ARMED
        self._armed()

    async def wait(self) -> None:
        """Suspend until the strategy resolves."""
        await asyncio.shield(self._future())

    def cancel(self) -> None:
        """Stop background work. Does not resolve the strategy."""

    @abstractmethod
    def _armed(self) -> None:
        """Variant-specific work once armed."""

    def _resolve(self) -> None:
        if self._state is not StrategyState.ARMED:
            return
        self._state = StrategyState.RESOLVED

        future = self._future()
        if not future.done():
            future.set_result(None)

        callback, self._on_complete = self._on_complete, None
        if callback is not None:
            callback()

    def _future(self) -> asyncio.Future[None]:
        if self._done is None:
            self._done = asyncio.get_running_loop().create_future()
        return self._done


# =============================================================================
# POLLING
# =============================================================================

class PollingLoadStrategy(LoadCompletionStrategy):
    """Resolve on the first timer tick where the surface is no longer loading."""

    def __init__(self, interval: float = 1.0):
        super().__init__()
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self.interval = interval
        self._timer: asyncio.Task[None] | None = None

    def _armed(self) -> None:
        self._timer = asyncio.get_running_loop().create_task(self._tick())

    async def _tick(self) -> None:
        surface = self._surface
        while surface is not None and self._state is StrategyState.ARMED:
            await asyncio.sleep(self.interval)
            if await surface.is_loading():
                continue
            self._timer = None
            self._resolve()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


# =============================================================================
# SIGNAL
# =============================================================================

class SignalLoadStrategy(LoadCompletionStrategy):
    """
    Resolve when the loaded document posts a named signal.

    The document must cooperate, e.g.:

        window.addEventListener("load", () => window.webprintReady());
    """

    def __init__(self, signal_name: str = "webprintReady"):
        super().__init__()
        self.signal_name = signal_name
        self._early_signal = False

    async def prepare(self, surface: RenderingSurface) -> None:
        await surface.expose_signal(self.signal_name, self.on_message)

    def on_message(self, name: str, payload: Any = None) -> None:
        """Receive a message from the document's script context."""
        if name != self.signal_name:
            return
        if self._state is StrategyState.IDLE:
            # Document signalled between load issue and start()
            self._early_signal = True
            return
        self._resolve()

    def _armed(self) -> None:
        if self._early_signal:
            self._resolve()


def create_strategy(kind: str, settings: Settings) -> LoadCompletionStrategy:
    """Build a fresh strategy of the named kind."""
    if kind == "polling":
        return PollingLoadStrategy(interval=settings.poll_interval_seconds)
    if kind == "signal":
        return SignalLoadStrategy(signal_name=settings.signal_name)
    raise ValueError(f"Unknown load strategy: {kind}")
