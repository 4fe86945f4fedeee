"""Sprint planning pipeline runner module.

Ranks owners for every story of a sprint and keeps planning state as an
explicit value passed between stages. Used by both main.py and the web
application.
"""

import json
import time
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import yaml

from planner.exceptions import InvalidArgument, PlannerException
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.models import Member, Story, Suggestion, Weights, with_assignee
from planner.ranking.validation import parse_roster, parse_story

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedStory:
    """A story with its ranked owner suggestions."""
    story: Story
    suggestions: Tuple[Suggestion, ...] = ()
    ranked_by: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PlanningState:
    """Explicit planning state handed from stage to stage.

    Never mutated: every operation returns a new state.
    """
    members: Tuple[Member, ...]
    weights: Weights
    stories: Tuple[PlannedStory, ...] = ()


@dataclass
class SprintPlanResult:
    """Result of running the planning pipeline."""
    state: PlanningState
    ranked_count: int = 0
    fallback_count: int = 0
    failed_count: int = 0
    skipped_references: int = 0
    execution_time: float = 0.0
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed_count == 0


def load_records(path: str) -> Any:
    """Load a YAML or JSON file (JSON is valid YAML, but .json keeps its own parser)."""
    logger.info(f"Loading {path}")
    with open(path, 'r') as f:
        if path.endswith('.json'):
            return json.load(f)
        return yaml.safe_load(f)


def load_team(path: str) -> List[Member]:
    """Load a roster; the file holds a list of members or ``{members: [...]}``."""
    data = load_records(path)
    if isinstance(data, dict):
        data = data.get('members')
    return parse_roster(data)


def load_stories(path: str) -> List[Story]:
    """Load stories; the file holds a list of stories or ``{stories: [...]}``."""
    data = load_records(path)
    if isinstance(data, dict):
        data = data.get('stories')
    if not isinstance(data, list):
        raise InvalidArgument(f"No stories list found in {path}")
    return [parse_story(item) for item in data]


def _rank_one(
    story: Story,
    members: Sequence[Member],
    weights: Weights,
    ranker: OwnerRanker,
    fallback: Optional[OwnerRanker],
    result: SprintPlanResult
) -> PlannedStory:
    try:
        outcome = ranker.rank_owners(story, members, weights)
        result.ranked_count += 1
        if outcome.skipped:
            result.skipped_references += outcome.skipped
            logger.warning(f"Skipped {outcome.skipped} ranking(s) with unknown member ids")
        return PlannedStory(story=story, suggestions=tuple(outcome.suggestions), ranked_by=ranker.name)
    except PlannerException as e:
        message = f"Failed to rank story '{story.i_want[:50]}': {e}"
        logger.error(message)
        result.errors.append(message)

    if fallback is None:
        result.failed_count += 1
        return PlannedStory(story=story, error=str(result.errors[-1]))

    outcome = fallback.rank_owners(story, members, weights)
    result.fallback_count += 1
    logger.info(f"Used {fallback.name} fallback for story '{story.i_want[:50]}'")
    return PlannedStory(story=story, suggestions=tuple(outcome.suggestions), ranked_by=fallback.name)


def plan_sprint(
    stories: Sequence[Story],
    members: Sequence[Member],
    weights: Weights,
    ranker: OwnerRanker,
    fallback: Optional[OwnerRanker] = None,
    inter_request_delay: float = 0.0,
    status_callback: Optional[Callable[[int, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep
) -> SprintPlanResult:
    """Rank owners for every story, sequentially.

    A story whose ranking fails gets the fallback ranker's suggestions, or
    no suggestions when no fallback is given; the rest of the batch still
    runs.

    Args:
        stories: Stories to plan
        members: Team roster (must not be empty)
        weights: Ranking weights
        ranker: Primary ranker
        fallback: Optional ranker used when the primary one fails
        inter_request_delay: Pause between stories (rate limits of remote rankers)
        status_callback: Called with (done, total) after each story
        sleep: Sleep function, injectable for tests

    Returns:
        SprintPlanResult with the new planning state and counts
    """
    if not members:
        raise InvalidArgument("members must not be empty")

    pipeline_start = time.time()
    logger.info("=" * 60)
    logger.info(f"PLANNING SPRINT: {len(stories)} stories, {len(members)} members, ranker={ranker.name}")
    logger.info("=" * 60)

    result = SprintPlanResult(state=PlanningState(members=tuple(members), weights=weights))
    planned: List[PlannedStory] = []

    for index, story in enumerate(stories):
        planned.append(_rank_one(story, members, weights, ranker, fallback, result))
        if status_callback:
            status_callback(index + 1, len(stories))
        if inter_request_delay > 0 and index < len(stories) - 1:
            logger.debug(f"Waiting {inter_request_delay}s before next story")
            sleep(inter_request_delay)

    result.state = replace(result.state, stories=tuple(planned))
    result.execution_time = time.time() - pipeline_start
    logger.info(
        f"Planned {len(planned)} stories in {result.execution_time:.2f}s "
        f"(ranked={result.ranked_count}, fallback={result.fallback_count}, failed={result.failed_count})"
    )
    return result


def rerank(
    state: PlanningState,
    ranker: OwnerRanker,
    weights: Optional[Weights] = None,
    fallback: Optional[OwnerRanker] = None,
    inter_request_delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep
) -> SprintPlanResult:
    """Recompute every story's suggestions in full, optionally with new weights.

    Assignments are kept. Pass the same ``inter_request_delay`` as for
    ``plan_sprint`` when re-ranking with a remote ranker.
    """
    return plan_sprint(
        [planned.story for planned in state.stories],
        state.members,
        weights or state.weights,
        ranker,
        fallback=fallback,
        inter_request_delay=inter_request_delay,
        sleep=sleep,
    )


def assign_story(state: PlanningState, story_id: str, member_id: Optional[str]) -> PlanningState:
    """Return a new state with ``story_id`` assigned to ``member_id`` (None unassigns)."""
    if member_id is not None and member_id not in {m.id for m in state.members}:
        raise InvalidArgument(f"Unknown member id: {member_id}")

    found = False
    stories = []
    for planned in state.stories:
        if planned.story.id == story_id:
            found = True
            planned = replace(planned, story=with_assignee(planned.story, member_id))
        stories.append(planned)

    if not found:
        raise InvalidArgument(f"Unknown story id: {story_id}")
    return replace(state, stories=tuple(stories))


def plan_to_dict(state: PlanningState) -> Dict[str, Any]:
    """Serialize planned stories for JSON output."""
    return {
        'weights': state.weights.to_dict(),
        'stories': [
            {
                'id': planned.story.id,
                'as_a': planned.story.as_a,
                'i_want': planned.story.i_want,
                'so_that': planned.story.so_that,
                'labels': list(planned.story.labels),
                'assigned_to': planned.story.assigned_to,
                'ranked_by': planned.ranked_by,
                'error': planned.error,
                'suggestions': [s.to_dict() for s in planned.suggestions],
            }
            for planned in state.stories
        ],
    }
