#!/usr/bin/env python3
"""
Ranking service - validates API payloads and runs the selected ranker.
"""

import logging
from typing import List

from planner.app_context import AppContext
from planner.exceptions import InvalidArgument, PlannerException
from planner.ranking.validation import parse_roster, parse_story, parse_weights
from planner.team import TranscriptSegment, extract_team_from_transcript
from ..models.requests import RankOwnersRequest, TranscriptSegmentModel
from ..models.responses import (
    BreakdownResponse,
    CapacityResponse,
    MemberResponse,
    RankOwnersResponse,
    SuggestionResponse,
)

logger = logging.getLogger(__name__)


class RankingService:
    """Service for ranking owners over HTTP."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def rank_owners(self, request: RankOwnersRequest) -> RankOwnersResponse:
        """
        Rank members for the requested story.

        When the selected ranker fails and local fallback is enabled, the
        local heuristic answers instead and ``fallback_used`` is set.

        Raises:
            InvalidArgument: missing or malformed story, members or weights
        """
        if request.story is None or request.members is None or request.weights is None:
            raise InvalidArgument("Missing required data: story, members and weights are required")

        story = parse_story(request.story)
        members = parse_roster(request.members)
        weights = parse_weights(request.weights)

        fallback_used = False
        try:
            ranker = self.ctx.ranker_for(request.strategy)
            outcome = ranker.rank_owners(story, members, weights)
        except InvalidArgument:
            raise
        except PlannerException as e:
            if not self.ctx.config.ranking.fallback_to_local:
                raise
            ranker = self.ctx.local_ranker
            logger.warning(f"Ranking failed ({e}); falling back to {ranker.name}")
            outcome = ranker.rank_owners(story, members, weights)
            fallback_used = True

        suggestions = [
            SuggestionResponse(
                member_id=s.member_id,
                name=s.name,
                role=s.role,
                timezone=s.timezone,
                score=s.score,
                breakdown=BreakdownResponse(**s.breakdown.to_dict()),
                justification=list(s.justification),
            )
            for s in outcome.suggestions
        ]

        return RankOwnersResponse(
            success=True,
            count=len(suggestions),
            skipped=outcome.skipped,
            ranked_by=ranker.name,
            fallback_used=fallback_used,
            suggestions=suggestions
        )


def team_from_segments(segments: List[TranscriptSegmentModel]) -> List[MemberResponse]:
    """Build starter members from transcript speakers."""
    members = extract_team_from_transcript(
        TranscriptSegment(timestamp=s.timestamp, speaker=s.speaker, text=s.text)
        for s in segments
    )
    return [
        MemberResponse(
            id=m.id,
            name=m.name,
            role=m.role,
            timezone=m.timezone,
            capacity=CapacityResponse(
                hours_per_sprint=m.capacity.hours_per_sprint,
                current_load=m.capacity.current_load
            )
        )
        for m in members
    ]
