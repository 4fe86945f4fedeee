import sys
import json
import logging
import argparse
from typing import List, Optional

import yaml

from planner.app_context import AppContext
from planner.config_loader import load_config
from planner.exceptions import PlannerException, RankingUnavailable
from planner.ranking.validation import parse_weights
from planner.workload import summarize_workload
from pipeline.runner import (
    PlanningState,
    load_stories,
    load_team,
    plan_sprint,
    plan_to_dict,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_plan(state: PlanningState, top_n: int = 3) -> str:
    """Render planned stories as a plain-text table."""
    lines: List[str] = []
    for index, planned in enumerate(state.stories, start=1):
        story = planned.story
        lines.append(f"{index}. As a {story.as_a}, I want {story.i_want}")
        if planned.error:
            lines.append(f"   ! ranking failed: {planned.error}")
            continue
        for suggestion in planned.suggestions[:top_n]:
            b = suggestion.breakdown
            lines.append(
                f"   {suggestion.score:6.1f}  {suggestion.name:<20} "
                f"C={b.competence:5.1f} A={b.availability:5.1f} "
                f"G={b.growth_potential:5.1f} K={b.continuity:5.1f}  "
                f"{'; '.join(suggestion.justification)}"
            )
        lines.append("")

    lines.append("Workload:")
    stories = [p.story for p in state.stories]
    for load in summarize_workload(state.members, stories):
        lines.append(
            f"   {load.name:<20} {load.assigned_hours:g}h / {load.capacity_hours:g}h "
            f"({load.utilization:.0f}%, {load.status})"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="ScrumBot owner ranking")
    parser.add_argument('--team', required=True, help='YAML/JSON file with the team roster')
    parser.add_argument('--stories', required=True, help='YAML/JSON file with the stories')
    parser.add_argument('--config', default='config.yaml', help='Config file (default: config.yaml)')
    parser.add_argument('--strategy', choices=['local', 'llm'], default=None,
                        help='Ranker to use (default: from config)')
    parser.add_argument('--top', type=int, default=3, help='Suggestions shown per story')
    parser.add_argument('--json', action='store_true', help='Print the plan as JSON')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    ctx = AppContext.build(config)

    try:
        members = load_team(args.team)
        stories = load_stories(args.stories)
        weights = parse_weights(config.weights.model_dump())
        if not weights.is_balanced():
            logger.warning(f"Weights sum to {weights.total:.2f}; scores are not on a 0-100 scale")

        try:
            ranker = ctx.ranker_for(args.strategy)
        except RankingUnavailable as e:
            if not config.ranking.fallback_to_local:
                raise
            logger.warning(f"{e}; using local ranking")
            ranker = ctx.local_ranker
        remote = ranker is not ctx.local_ranker
        result = plan_sprint(
            stories,
            members,
            weights,
            ranker,
            fallback=ctx.fallback_for(ranker),
            inter_request_delay=config.ranking.inter_request_delay_seconds if remote else 0.0,
        )
    except PlannerException as e:
        logger.error(f"Planning failed: {e}")
        return 2
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Could not read input: {e}")
        return 2

    if args.json:
        print(json.dumps(plan_to_dict(result.state), indent=2))
    else:
        print(format_plan(result.state, top_n=args.top))

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
