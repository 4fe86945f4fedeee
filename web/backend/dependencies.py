#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from planner.app_context import AppContext
from .config import get_config


@lru_cache()
def get_app_context() -> AppContext:
    """
    FastAPI dependency that returns the wired application context.

    Usage:
        @app.post("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_app_context)):
            ...

    The context is built once; rankers hold no per-request state.
    """
    return AppContext.build(get_config())
