"""Pipeline execution modules for ScrumBot."""

from .runner import (
    plan_sprint,
    rerank,
    assign_story,
    PlanningState,
    PlannedStory,
    SprintPlanResult,
)

__all__ = [
    'plan_sprint',
    'rerank',
    'assign_story',
    'PlanningState',
    'PlannedStory',
    'SprintPlanResult',
]
