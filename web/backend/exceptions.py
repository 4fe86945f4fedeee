#!/usr/bin/env python3
"""
Error handlers for the web application.

Every error is returned in one envelope:
    {"success": false, "error": "<message>", "type": "<error class>"}
"""

import logging
from typing import Dict, Type

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from planner.exceptions import (
    PlannerException,
    InvalidArgument,
    UnknownMemberReference,
    UnparsableResponse,
    RankingUnavailable,
)

logger = logging.getLogger(__name__)

# Checked in order; unlisted planner errors are 500
PLANNER_STATUS_CODES: Dict[Type[PlannerException], int] = {
    InvalidArgument: 400,
    UnparsableResponse: 502,
    UnknownMemberReference: 502,
    RankingUnavailable: 503,
}


def status_code_for(exc: PlannerException) -> int:
    for exc_type, status_code in PLANNER_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_response(status_code: int, error, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type}
    )


async def planner_exception_handler(
    request: Request,
    exc: PlannerException
) -> JSONResponse:
    """
    Map planner exceptions to HTTP errors.

    Client mistakes are logged at INFO; upstream and internal failures at
    ERROR with the traceback.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Planner error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")
    return error_response(status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.exception(f"Unexpected error in {request.url.path}")
    return error_response(500, "Internal server error", "InternalError")
