"""
WebPrint entrypoint - serves the render API with uvicorn.
"""

import uvicorn

from webprint import __version__
from webprint.app import build_app
from webprint.config import get_settings
from webprint.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Run the WebPrint server until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level)

    storage = settings.storage_root or "none (file renders need base_access_root)"
    logger.info(f"WebPrint {__version__} on http://{settings.host}:{settings.port}")
    logger.info(f"Load strategy: {settings.load_strategy}, timeout: {settings.load_timeout_seconds}s")
    logger.info(f"Storage root: {storage}")

    uvicorn.run(
        build_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
