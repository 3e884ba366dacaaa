"""Web UI for HeartLog."""

import uvicorn

from ..utils.config import get_settings


def run():
    """Run the web server."""
    settings = get_settings()
    uvicorn.run(
        "heartlog.web.app:app",
        host=settings.web_host,
        port=settings.web_port,
    )


__all__ = ["run"]
