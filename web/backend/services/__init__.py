"""Business logic services for the web API."""

from .ranking_service import RankingService, team_from_segments

__all__ = ['RankingService', 'team_from_segments']
