"""
Error taxonomy for WebPrint.

Every error carries a stable code and the HTTP status the API layer maps it to.
"""

from pathlib import Path
from typing import Any


class WebPrintError(Exception):
    """Base error for all WebPrint failures."""

    code = "WEBPRINT_ERROR"
    http_status = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# LOAD ERRORS
# =============================================================================

class LoadTargetUnavailable(WebPrintError):
    """No host rendering context to attach a transient surface to."""

    code = "LOAD_TARGET_UNAVAILABLE"
    http_status = 503

    def __init__(self, message: str = "No browser host available to render into"):
        super().__init__(message)


class StorageRootUnavailable(WebPrintError):
    """No base access root could be resolved for a local file load."""

    code = "STORAGE_ROOT_UNAVAILABLE"
    http_status = 400

    def __init__(self, root: Path | None = None):
        if root is None:
            message = "No storage root configured for local file access"
        else:
            message = f"Storage root is not a directory: {root}"
        super().__init__(message, {"root": str(root) if root else None})


class DocumentLoadFailed(WebPrintError):
    """The rendering engine could not navigate to the source document."""

    code = "DOCUMENT_LOAD_FAILED"
    http_status = 502

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load {source}: {reason}", {"source": source})


class LoadTimedOut(WebPrintError):
    """The load-completion strategy did not resolve within the timeout."""

    code = "LOAD_TIMED_OUT"
    http_status = 504

    def __init__(self, source: str, timeout: float):
        super().__init__(
            f"Document did not finish loading within {timeout:g}s: {source}",
            {"source": source, "timeout_seconds": timeout},
        )


class RendererBusy(WebPrintError):
    """A render is already in flight on this renderer instance."""

    code = "RENDERER_BUSY"
    http_status = 409

    def __init__(self) -> None:
        super().__init__("Another render is already active on this renderer")


# =============================================================================
# EXPORT ERRORS
# =============================================================================

class OutputPathUnavailable(WebPrintError):
    """Destination directory is missing and could not be created."""

    code = "OUTPUT_PATH_UNAVAILABLE"
    http_status = 400

    def __init__(self, directory: Path, reason: str | None = None):
        message = f"Can't access PDF's parent folder: {directory}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"directory": str(directory)})


class PageGeometryInvalid(WebPrintError):
    """Margins leave no printable area on the page."""

    code = "PAGE_GEOMETRY_INVALID"
    http_status = 400

    def __init__(self, width: float, height: float):
        super().__init__(
            f"Printable area is degenerate ({width:g} x {height:g} pt); margins are too large",
            {"printable_width": width, "printable_height": height},
        )


class PrintJobFailed(WebPrintError):
    """The rendering engine failed to produce PDF bytes."""

    code = "PRINT_JOB_FAILED"
    http_status = 502

    def __init__(self, reason: str):
        super().__init__(f"PDF print job failed: {reason}")


class OutputWriteFailed(WebPrintError):
    """Writing the PDF to its destination failed. Wraps the underlying OSError."""

    code = "OUTPUT_WRITE_FAILED"
    http_status = 500

    def __init__(self, path: Path, error: OSError):
        super().__init__(
            f"Failed to create PDF at {path}: {error}",
            {"path": str(path), "errno": error.errno},
        )
        self.original = error
