#!/usr/bin/env python3
"""
Request models for API endpoints.

Ranking payload fields stay loosely typed here; their shape is checked by
planner.ranking.validation so malformed input is reported as a 400 with
the same messages the CLI prints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class RankOwnersRequest(BaseModel):
    """Request to rank team members for a story."""
    story: Optional[Dict[str, Any]] = Field(None, description="Story with asA/iWant/soThat/labels")
    members: Optional[List[Any]] = Field(None, description="Team roster (non-empty)")
    weights: Optional[Dict[str, Any]] = Field(None, description="alpha, beta, gamma, delta (>= 0)")
    strategy: Optional[Literal["local", "llm"]] = Field(
        None, description="Ranker to use; defaults to the configured strategy"
    )


class TranscriptSegmentModel(BaseModel):
    """One parsed transcript segment."""
    timestamp: str = ""
    speaker: str
    text: str = ""


class TeamFromTranscriptRequest(BaseModel):
    """Request to build a starter roster from transcript speakers."""
    segments: List[TranscriptSegmentModel] = Field(..., min_length=1)
