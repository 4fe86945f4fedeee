#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class BreakdownResponse(BaseModel):
    """The four sub-scores of a suggestion."""
    competence: float = Field(ge=0, le=100)
    availability: float = Field(ge=0, le=100)
    growth_potential: float = Field(ge=0, le=100)
    continuity: float = Field(ge=0, le=100)


class SuggestionResponse(BaseModel):
    """Ranked owner suggestion."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "member_id": "alice",
                "name": "Alice Chen",
                "role": "Senior Frontend Engineer",
                "timezone": "PST",
                "score": 71.3,
                "breakdown": {
                    "competence": 65.0,
                    "availability": 100.0,
                    "growth_potential": 0.0,
                    "continuity": 33.3
                },
                "justification": ["Moderate skill alignment", "High availability this sprint"]
            }
        }
    )

    member_id: str
    name: str
    role: str
    timezone: str
    score: float = Field(ge=0)
    breakdown: BreakdownResponse
    justification: List[str]


class RankOwnersResponse(BaseModel):
    """Response with ranked suggestions."""
    success: bool
    count: int
    skipped: int = 0
    ranked_by: str
    fallback_used: bool = False
    suggestions: List[SuggestionResponse]


class CapacityResponse(BaseModel):
    hours_per_sprint: float
    current_load: float


class MemberResponse(BaseModel):
    """Team member created from a transcript speaker."""
    id: str
    name: str
    role: str
    timezone: str
    capacity: CapacityResponse


class TeamResponse(BaseModel):
    success: bool
    count: int
    members: List[MemberResponse]


class WeightsResponse(BaseModel):
    """Default ranking weights."""
    alpha: float
    beta: float
    gamma: float
    delta: float
    total: float
    balanced: bool
    strategy: Optional[str] = None
