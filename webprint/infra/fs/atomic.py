"""
Directory lookup/creation and atomic file writes.
"""

import os
import tempfile
from pathlib import Path

from webprint.shared.logging import get_logger

logger = get_logger(__name__)


def ensure_directory(path: Path) -> bool:
    """
    Make sure a directory exists, creating it (and parents) if absent.

    Returns:
        True if the directory exists afterwards, False if it could not be created.
    """
    if path.is_dir():
        return True
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create directory {path}: {e}")
        return False
    return path.is_dir()


def atomic_write_bytes(path: Path, data: bytes) -> Path:
    """
    Atomic write to file.
    Writes to a temp file in the same directory, then renames over the target,
    so readers see either the previous complete file or the new one.

    Raises:
        OSError: If the temp file cannot be written or renamed. The temp file
            is removed before the error propagates.
    """
    # Same directory keeps the rename on one filesystem
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".tmp_{path.name}_")

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    return path
