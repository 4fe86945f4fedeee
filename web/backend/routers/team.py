#!/usr/bin/env python3
"""
Team endpoints - starter rosters from transcripts.
"""

from fastapi import APIRouter

from ..services.ranking_service import team_from_segments
from ..models.requests import TeamFromTranscriptRequest
from ..models.responses import TeamResponse

router = APIRouter(prefix="/api/team", tags=["team"])


@router.post("/from-transcript", response_model=TeamResponse)
def team_from_transcript(request: TeamFromTranscriptRequest):
    """
    Create one member per unique transcript speaker with an inferred role.
    """
    members = team_from_segments(request.segments)
    return TeamResponse(success=True, count=len(members), members=members)
