"""
WebPrint - headless HTML to paginated PDF rendering.
"""

__version__ = "0.1.0"
