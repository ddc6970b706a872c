"""
Browser infrastructure - headless Chromium host and page surfaces (Playwright).
"""

from .host import BrowserHost
from .protocols import RenderHost, RenderingSurface, SignalHandler
from .surface import PlaywrightSurface

__all__ = ["BrowserHost", "PlaywrightSurface", "RenderHost", "RenderingSurface", "SignalHandler"]
