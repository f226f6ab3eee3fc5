# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point.

Run with ``uvicorn schoolverse.main:app`` or the ``schoolverse-api``
console script.
"""

import uvicorn

from schoolverse.api import create_app
from schoolverse.core.config import get_settings

app = create_app()


def run() -> None:
    """Start the API server with the configured host, port and workers."""
    settings = get_settings()
    uvicorn.run(
        "schoolverse.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=1 if settings.api.reload else settings.api.workers,
        reload=settings.api.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
