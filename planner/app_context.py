from dataclasses import dataclass
from typing import Optional
import logging

import openai

from planner.config_loader import AppConfig
from planner.exceptions import InvalidArgument, RankingUnavailable
from planner.llm.openai_service import OpenAIService
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.service import LocalRankingService
from planner.ranking.external import LLMRankingService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired rankers.

    The LLM ranker is built on first use, so the local path works without
    API credentials.
    """
    config: AppConfig
    local_ranker: LocalRankingService
    llm_ranker: Optional[LLMRankingService] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            AppContext with the local ranker wired
        """
        return cls(config=config, local_ranker=LocalRankingService(config.ranking))

    @staticmethod
    def _build_llm_ranker(config: AppConfig) -> LLMRankingService:
        """Build the LLM-backed ranker from LLM configuration."""
        logger.info(f"Using LLM ranking with model {config.llm.ranking_model}")
        try:
            llm = OpenAIService.from_config(config.llm)
        except openai.OpenAIError as e:
            # Raised by the client when no API key is configured
            raise RankingUnavailable(f"LLM client could not be created: {e}") from e
        return LLMRankingService(llm, config.ranking)

    def ranker_for(self, strategy: Optional[str] = None) -> OwnerRanker:
        """Return the ranker for ``strategy`` (defaults to the configured one)."""
        strategy = strategy or self.config.ranking.strategy
        if strategy == "local":
            return self.local_ranker
        if strategy == "llm":
            if self.llm_ranker is None:
                self.llm_ranker = self._build_llm_ranker(self.config)
            return self.llm_ranker
        raise InvalidArgument(f"Unknown ranking strategy: {strategy}")

    def fallback_for(self, ranker: OwnerRanker) -> Optional[OwnerRanker]:
        """Local fallback for non-local rankers when enabled in config."""
        if ranker is self.local_ranker or not self.config.ranking.fallback_to_local:
            return None
        return self.local_ranker
