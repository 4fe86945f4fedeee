#!/usr/bin/env python3
"""
Ranking endpoints - owner suggestions for stories.
"""

import logging
from fastapi import APIRouter, Depends

from planner.app_context import AppContext
from planner.ranking.validation import parse_weights
from ..dependencies import get_app_context
from ..services.ranking_service import RankingService
from ..models.requests import RankOwnersRequest
from ..models.responses import RankOwnersResponse, WeightsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ranking"])


@router.post("/rank-owners", response_model=RankOwnersResponse)
def rank_owners(
    request: RankOwnersRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Rank team members as owners for a story.

    Returns one suggestion per member sorted by score (highest first).
    Equal scores keep the order of the submitted roster.
    """
    response = RankingService(ctx).rank_owners(request)
    logger.info(f"Ranked {response.count} members with {response.ranked_by}")
    return response


@router.get("/config/weights", response_model=WeightsResponse)
def get_default_weights(ctx: AppContext = Depends(get_app_context)):
    """
    Get default ranking weights from configuration.

    ``balanced`` is false when the weights do not sum to roughly 1.0.
    """
    weights = parse_weights(ctx.config.weights.model_dump())
    return WeightsResponse(
        **weights.to_dict(),
        total=weights.total,
        balanced=weights.is_balanced(),
        strategy=ctx.config.ranking.strategy
    )
