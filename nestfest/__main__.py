# -*- coding: utf-8 -*-
"""Run the API with uvicorn: ``python -m nestfest``."""

import uvicorn

from nestfest.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "nestfest.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    main()
