#!/usr/bin/env python3
"""
LLM Ranking Service - Owner ranking with sub-scores produced by an LLM.

The model returns four sub-scores and justifications per member id. Before
combination every entry is validated:
- sub-scores must be numeric; each is clamped to [0, 100]
- the member id must exist in the roster; unknown ids are logged and
  skipped (or raised in strict mode) and the skip count is reported

Combination, rounding and ordering are shared with the local ranker.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging
import math

import openai

from planner.config_loader import RankingConfig
from planner.exceptions import RankingUnavailable, UnknownMemberReference, UnparsableResponse
from planner.llm.interfaces import LLMProvider
from planner.llm.schema_models import RANKING_SCHEMA
from planner.llm.system_prompts import RANKING_SYSTEM_PROMPT
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.models import Member, RankingOutcome, Story, Suggestion, Weights
from planner.ranking.combination import build_suggestion, clamp_breakdown, sort_suggestions

logger = logging.getLogger(__name__)

SUB_SCORE_FIELDS = ('competence', 'availability', 'growth_potential', 'continuity')

# camelCase spellings some models return despite the schema
_FIELD_ALIASES = {
    'member_id': ('member_id', 'memberId'),
    'growth_potential': ('growth_potential', 'growthPotential'),
}

PROMPT_SKILLS_PER_MEMBER = 3
PROMPT_STORY_CHARS = 80


def _field(entry: Mapping[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES.get(name, (name,)):
        if key in entry:
            return entry[key]
    return None


def _sub_score(entry: Mapping[str, Any], name: str) -> float:
    value = _field(entry, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnparsableResponse(f"Sub-score '{name}' is not numeric: {value!r}")
    try:
        score = float(value)
    except OverflowError:
        # integers beyond float range; clamped to the nearest bound later
        score = math.inf if value > 0 else -math.inf
    if math.isnan(score):
        raise UnparsableResponse(f"Sub-score '{name}' is NaN")
    return score


def _member_id(entry: Mapping[str, Any]) -> str:
    value = _field(entry, 'member_id')
    if isinstance(value, bool) or not isinstance(value, (str, int)) or str(value).strip() == "":
        raise UnparsableResponse(f"Ranking entry has no usable member_id: {value!r}")
    return str(value)


def format_member_profile(member: Member) -> str:
    """Compact one-line profile: ``id:Skill:level,...|<free>h``."""
    skills = ",".join(f"{s.name}:{s.level}" for s in member.skills[:PROMPT_SKILLS_PER_MEMBER])
    free = member.capacity.hours_per_sprint - member.capacity.current_load
    return f"{member.id}:{skills}|{free:g}h"


def build_ranking_prompt(story: Story, members: Sequence[Member]) -> str:
    """Build the user message for an LLM ranking request."""
    story_desc = f"{story.i_want[:PROMPT_STORY_CHARS]} ({story.estimate:g}h)"
    profiles = "\n".join(format_member_profile(m) for m in members)
    labels = f"\nLabels: {', '.join(story.labels)}" if story.labels else ""
    return (
        f'Rank team for: "{story_desc}"{labels}\n\n'
        f"Members:\n{profiles}\n\n"
        "Score each 0-100 on: competence (skill match), availability (hours free), "
        "growth_potential (learning fit), continuity (past success)."
    )


class LLMRankingService(OwnerRanker):
    """
    Rank members using sub-scores from an LLM provider.

    Failures of the provider surface as RankingUnavailable; malformed
    responses as UnparsableResponse. The caller decides whether to fall
    back to the local heuristic.
    """

    name = "llm"

    def __init__(self, llm: LLMProvider, config: Optional[RankingConfig] = None):
        self.llm = llm
        self.config = config or RankingConfig()

    def _request_rankings(self, story: Story, members: Sequence[Member]) -> List[Mapping[str, Any]]:
        prompt = build_ranking_prompt(story, members)
        try:
            data = self.llm.extract_structured_data(
                prompt,
                RANKING_SCHEMA,
                system_prompt=RANKING_SYSTEM_PROMPT,
                user_message=prompt,
            )
        except openai.APIError as e:
            logger.error(f"LLM ranking request failed: {e}")
            raise RankingUnavailable(f"External ranking failed: {e}") from e

        rankings = data.get('rankings') if isinstance(data, Mapping) else None
        if not isinstance(rankings, list):
            raise UnparsableResponse("Response has no 'rankings' list")
        for i, entry in enumerate(rankings):
            if not isinstance(entry, Mapping):
                raise UnparsableResponse(f"rankings[{i}] is not an object")
        return rankings

    def suggestions_from_rankings(
        self,
        rankings: Sequence[Mapping[str, Any]],
        members: Sequence[Member],
        weights: Weights
    ) -> RankingOutcome:
        """Validate external rankings and combine them into suggestions.

        Raises:
            UnparsableResponse: an entry has a non-numeric sub-score
                or no member id
            UnknownMemberReference: strict mode and an entry names an unknown id
        """
        by_id: Dict[str, Member] = {m.id: m for m in members}
        seen = set()
        skipped: List[str] = []
        suggestions: List[Suggestion] = []

        for entry in rankings:
            member_id = _member_id(entry)
            member = by_id.get(member_id)
            if member is None:
                if self.config.strict_member_references:
                    raise UnknownMemberReference(member_id)
                logger.warning(f"Ranking references unknown member {member_id}, skipping")
                skipped.append(member_id)
                continue
            if member_id in seen:
                logger.warning(f"Duplicate ranking for member {member_id}, keeping the first")
                continue
            seen.add(member_id)

            breakdown = clamp_breakdown(*(_sub_score(entry, name) for name in SUB_SCORE_FIELDS))
            justification = entry.get('justification') or []
            if not isinstance(justification, list):
                justification = [str(justification)]

            suggestions.append(build_suggestion(
                member, breakdown, weights,
                justification=[str(line) for line in justification],
                max_justifications=self.config.max_justifications,
            ))

        missing = [m.id for m in members if m.id not in seen]
        if missing:
            logger.info(f"LLM returned no ranking for {len(missing)} member(s): {missing}")

        return RankingOutcome(
            suggestions=sort_suggestions(suggestions),
            skipped=len(skipped),
            skipped_member_ids=tuple(skipped),
        )

    def rank_owners(
        self,
        story: Story,
        members: Sequence[Member],
        weights: Weights
    ) -> RankingOutcome:
        logger.info(f"Ranking {len(members)} members with LLM for story: {story.i_want[:50]}...")
        rankings = self._request_rankings(story, members)
        outcome = self.suggestions_from_rankings(rankings, members, weights)
        if outcome.suggestions:
            top = outcome.suggestions[0]
            logger.info(f"Ranked {len(outcome.suggestions)} members, top: {top.name} ({top.score})")
        return outcome
