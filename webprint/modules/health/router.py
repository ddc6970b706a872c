"""Health check routes."""

from fastapi import APIRouter, Request

from webprint import __version__

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    """Service liveness plus whether a browser host is attached."""
    host = getattr(request.app.state, "host", None)
    browser_ok = bool(host is not None and host.is_available())
    return {
        "status": "ok" if browser_ok else "degraded",
        "version": __version__,
        "browser": browser_ok,
    }
