#!/usr/bin/env python3
"""
ScrumBot API - owner ranking over HTTP.

Usage:
    scrumbot-web                  (or: python -m web.backend.app)

Interactive docs are served at /docs and /redoc on the configured
host and port (config.yaml ``web`` section, WEB_HOST / WEB_PORT).
"""

import logging

from fastapi import FastAPI, HTTPException

from planner.exceptions import PlannerException
from .config import get_config
from .exceptions import (
    planner_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import ranking_router, team_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ScrumBot API",
        description="Ranks team members as owners for sprint stories",
        version="1.0.0",
    )

    app.add_exception_handler(PlannerException, planner_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    for router in (ranking_router, team_router):
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "scrumbot-api"}

    return app


app = create_app()


def main():
    import uvicorn

    web = get_config().web
    logger.info(f"Starting ScrumBot API on http://{web.host}:{web.port} (docs at /docs)")
    uvicorn.run("web.backend.app:app", host=web.host, port=web.port, log_level="info")


if __name__ == "__main__":
    main()
