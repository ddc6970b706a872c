"""
Filesystem helpers.
"""

from .atomic import atomic_write_bytes, ensure_directory

__all__ = ["atomic_write_bytes", "ensure_directory"]
