#!/usr/bin/env python3
"""
Start the carousel layout server.
"""

import logging

import uvicorn
from slideflow.config import get_settings

logger = logging.getLogger("slideflow.run")


def main(reload: bool = True):
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting carousel layout server at http://{settings.host}:{settings.port}")
    logger.info(f"API docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "slideflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload
    )


if __name__ == "__main__":
    main()
