#!/usr/bin/env python3
"""
Ranking Module - Owner suggestions for user stories.

Public API:
- rank: Rank members for a story with the local heuristic
- OwnerRanker: Interface shared by all rankers
- LocalRankingService: Keyword/capacity heuristic ranker
- LLMRankingService: Ranker backed by an LLM provider

Modules:
- models.py: Data structures (Story, Member, Weights, Suggestion, ...)
- keywords.py: Keyword extraction from story text and labels
- subscores.py: Competence, availability, growth and continuity scorers
- combination.py: Weighted score, justifications and ordering
- validation.py: Building models from raw input (raises InvalidArgument)
- service.py: LocalRankingService orchestrator
- external.py: LLMRankingService with response validation
"""

from planner.ranking.models import (
    Capacity,
    Member,
    Preferences,
    ProjectHistory,
    QuoteEvidence,
    RankingOutcome,
    ScoreBreakdown,
    Skill,
    Story,
    Suggestion,
    Weights,
)
from planner.ranking.keywords import extract_keywords
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.service import LocalRankingService, rank
from planner.ranking.external import LLMRankingService

__all__ = [
    'rank',
    'extract_keywords',
    'OwnerRanker',
    'LocalRankingService',
    'LLMRankingService',
    'Capacity',
    'Member',
    'Preferences',
    'ProjectHistory',
    'QuoteEvidence',
    'RankingOutcome',
    'ScoreBreakdown',
    'Skill',
    'Story',
    'Suggestion',
    'Weights',
]
