#!/usr/bin/env python3
"""
Ranking Models - Data structures for owner ranking.

All models are frozen: a ranking request builds them fresh and never
mutates them. Collections are stored as tuples for the same reason.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class QuoteEvidence:
    """A transcript quote supporting a story."""
    timestamp: str
    speaker: str
    quote: str


@dataclass(frozen=True)
class Story:
    """User story in "As a / I want / So that" form.

    Only ``as_a``, ``i_want``, ``so_that`` and ``labels`` feed scoring; the
    remaining fields travel with the story through the planning pipeline.
    """
    as_a: str = ""
    i_want: str = ""
    so_that: str = ""
    labels: Tuple[str, ...] = ()
    id: Optional[str] = None
    risks: Tuple[str, ...] = ()
    action_items: Tuple[str, ...] = ()
    evidence: Tuple[QuoteEvidence, ...] = ()
    estimate: float = 0.0
    due_date: Optional[str] = None
    assigned_to: Optional[str] = None


@dataclass(frozen=True)
class Skill:
    name: str
    level: int


@dataclass(frozen=True)
class ProjectHistory:
    project_name: str
    role: str
    duration: str = ""


@dataclass(frozen=True)
class Capacity:
    """Sprint capacity. ``current_load`` may exceed ``hours_per_sprint``."""
    hours_per_sprint: float = 0.0
    current_load: float = 0.0

    @property
    def free_hours(self) -> float:
        return max(0.0, self.hours_per_sprint - self.current_load)


@dataclass(frozen=True)
class Preferences:
    wants_to_learn: Tuple[str, ...] = ()
    prefers_not: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Member:
    """Team member profile used for ranking."""
    id: str
    name: str
    role: str = ""
    timezone: str = ""
    skills: Tuple[Skill, ...] = ()
    history: Tuple[ProjectHistory, ...] = ()
    capacity: Capacity = field(default_factory=Capacity)
    preferences: Preferences = field(default_factory=Preferences)


@dataclass(frozen=True)
class Weights:
    """Relative importance of competence, availability, growth and continuity.

    Weights are not required to sum to 1. Callers that want the final score
    on a strict 0-100 scale should use ``normalized()``.
    """
    alpha: float = 0.3
    beta: float = 0.3
    gamma: float = 0.2
    delta: float = 0.2

    @property
    def total(self) -> float:
        return self.alpha + self.beta + self.gamma + self.delta

    def normalized(self) -> 'Weights':
        """Scale weights so they sum to 1. All-zero weights stay all-zero."""
        total = self.total
        if total <= 0:
            return Weights(alpha=0.0, beta=0.0, gamma=0.0, delta=0.0)
        return Weights(
            alpha=self.alpha / total,
            beta=self.beta / total,
            gamma=self.gamma / total,
            delta=self.delta / total,
        )

    def is_balanced(self, tolerance: float = 0.1) -> bool:
        """True when the weights sum to roughly 1.0."""
        return abs(self.total - 1.0) <= tolerance + 1e-9

    def to_dict(self) -> Dict[str, float]:
        return {'alpha': self.alpha, 'beta': self.beta, 'gamma': self.gamma, 'delta': self.delta}


@dataclass(frozen=True)
class ScoreBreakdown:
    """The four sub-scores, each in [0, 100]."""
    competence: float
    availability: float
    growth_potential: float
    continuity: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'competence': self.competence,
            'availability': self.availability,
            'growth_potential': self.growth_potential,
            'continuity': self.continuity,
        }


@dataclass(frozen=True)
class Suggestion:
    """Ranked owner suggestion for a story.

    ``name``, ``role`` and ``timezone`` are copied from the member at
    scoring time.
    """
    member_id: str
    name: str
    role: str
    timezone: str
    score: float
    breakdown: ScoreBreakdown
    justification: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'member_id': self.member_id,
            'name': self.name,
            'role': self.role,
            'timezone': self.timezone,
            'score': self.score,
            'breakdown': self.breakdown.to_dict(),
            'justification': list(self.justification),
        }


@dataclass(frozen=True)
class RankingOutcome:
    """Suggestions plus the number of external entries that were dropped."""
    suggestions: List[Suggestion]
    skipped: int = 0
    skipped_member_ids: Tuple[str, ...] = ()


def with_assignee(story: Story, member_id: Optional[str]) -> Story:
    """Return a copy of ``story`` assigned to ``member_id``."""
    return replace(story, assigned_to=member_id)
