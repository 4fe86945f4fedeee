"""
Owner Ranker Interface - One capability boundary, interchangeable implementations.

Implementations:
- LocalRankingService: deterministic keyword/capacity heuristic
- LLMRankingService: sub-scores produced by an LLM provider

The caller picks an implementation and decides how to react to its failure.
"""
from abc import ABC, abstractmethod
from typing import Sequence

from planner.ranking.models import Member, RankingOutcome, Story, Weights


class OwnerRanker(ABC):
    """
    Abstract interface for ranking team members as owners of a story.
    """

    name: str = "ranker"

    @abstractmethod
    def rank_owners(
        self,
        story: Story,
        members: Sequence[Member],
        weights: Weights
    ) -> RankingOutcome:
        """
        Rank members for a story.

        Returns:
            RankingOutcome with suggestions sorted by score (highest first)
            and the number of dropped external entries.
        """
        pass
