"""Serve the API with uvicorn: ``python -m taskboard`` or the ``taskboard`` script."""

from __future__ import annotations

import uvicorn

from taskboard.config import settings


def main() -> None:
    uvicorn.run(
        "taskboard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
