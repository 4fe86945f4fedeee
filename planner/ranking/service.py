#!/usr/bin/env python3
"""
Local Ranking Service - Heuristic owner ranking.

Pure and synchronous: no I/O and no shared mutable state, so one instance
can rank many stories concurrently.
"""

from typing import AbstractSet, List, Optional, Sequence
import logging

from planner.config_loader import RankingConfig
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.keywords import extract_keywords
from planner.ranking.models import Member, RankingOutcome, Story, Suggestion, Weights
from planner.ranking import subscores
from planner.ranking.combination import build_suggestion, clamp_breakdown, sort_suggestions

logger = logging.getLogger(__name__)


class LocalRankingService(OwnerRanker):
    """
    Rank members with the four heuristic sub-scores:
    - Competence: skill-name overlap and average skill level
    - Availability: free sprint hours against a fixed reference
    - Growth potential: overlap with learning goals
    - Continuity: overlap with past project names and roles
    """

    name = "local"

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    def score_member(
        self,
        member: Member,
        keywords: AbstractSet[str],
        weights: Weights
    ) -> Suggestion:
        """Compute the breakdown, weighted score and justification for one member."""
        breakdown = clamp_breakdown(
            competence=subscores.calculate_competence(member, keywords),
            availability=subscores.calculate_availability(
                member, self.config.availability_reference_hours
            ),
            growth_potential=subscores.calculate_growth_potential(member, keywords),
            continuity=subscores.calculate_continuity(member, keywords),
        )
        return build_suggestion(
            member, breakdown, weights,
            max_justifications=self.config.max_justifications
        )

    def rank(
        self,
        story: Story,
        members: Sequence[Member],
        weights: Weights
    ) -> List[Suggestion]:
        """Return one suggestion per member, sorted by score (highest first)."""
        keywords = extract_keywords(story)
        logger.debug(f"Story {story.id or '<unsaved>'}: {len(keywords)} keywords")

        ranked = sort_suggestions(
            self.score_member(member, keywords, weights) for member in members
        )
        if ranked:
            logger.debug(f"Top suggestion: {ranked[0].name} ({ranked[0].score})")
        return ranked

    def rank_owners(
        self,
        story: Story,
        members: Sequence[Member],
        weights: Weights
    ) -> RankingOutcome:
        return RankingOutcome(suggestions=self.rank(story, members, weights))


_default_service = LocalRankingService()


def rank(story: Story, members: Sequence[Member], weights: Weights) -> List[Suggestion]:
    """Rank members for a story with the default local heuristic."""
    return _default_service.rank(story, members, weights)
