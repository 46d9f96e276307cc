"""
foodme_api.api.__main__

Entrypoint for running the FastAPI application via `python -m foodme_api.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from foodme_api.api.app import create_app
from foodme_api.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# `latency_mode=blocking` only reproduces the process-wide stall with a single worker.
