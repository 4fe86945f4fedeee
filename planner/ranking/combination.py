#!/usr/bin/env python3
"""
Score Combination - Weighted final score, justifications and ordering.

Formula: score = alpha*competence + beta*availability + gamma*growth + delta*continuity,
rounded half-up to one decimal. Sub-scores are clamped to [0, 100] before
combination; this matters for externally sourced sub-scores, local scorers
are bounded already.
"""

import math
from typing import Iterable, List, Optional, Sequence

from planner.ranking.models import Member, ScoreBreakdown, Suggestion, Weights

MAX_JUSTIFICATIONS = 5
FALLBACK_JUSTIFICATION = "Available team member"


def clamp_score(value: float) -> float:
    """Clamp a sub-score to [0, 100]. NaN is treated as 0."""
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(100.0, value))


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals, halves away from zero for non-negative input."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp_breakdown(
    competence: float,
    availability: float,
    growth_potential: float,
    continuity: float
) -> ScoreBreakdown:
    return ScoreBreakdown(
        competence=clamp_score(competence),
        availability=clamp_score(availability),
        growth_potential=clamp_score(growth_potential),
        continuity=clamp_score(continuity),
    )


def combine_scores(breakdown: ScoreBreakdown, weights: Weights) -> float:
    """Weighted sum of the sub-scores, rounded to one decimal."""
    raw = (
        weights.alpha * breakdown.competence +
        weights.beta * breakdown.availability +
        weights.gamma * breakdown.growth_potential +
        weights.delta * breakdown.continuity
    )
    return round_half_up(raw)


def generate_justification(breakdown: ScoreBreakdown) -> List[str]:
    """
    Build short explanations from sub-score thresholds.

    Rules are evaluated in a fixed order and each adds at most one line.
    When nothing fires, a single fallback line is returned.
    """
    lines: List[str] = []

    if breakdown.competence > 70:
        lines.append("Strong skill match for this story")
    elif breakdown.competence > 40:
        lines.append("Moderate skill alignment")

    if breakdown.availability > 70:
        lines.append("High availability this sprint")
    elif breakdown.availability < 30:
        lines.append("Limited capacity available")

    if breakdown.growth_potential > 60:
        lines.append("Aligns with learning goals")

    if breakdown.continuity > 60:
        lines.append("Previous experience with similar work")

    if not lines:
        lines.append(FALLBACK_JUSTIFICATION)

    return lines


def cap_justification(lines: Iterable[str], limit: int = MAX_JUSTIFICATIONS) -> List[str]:
    """Keep at most ``limit`` non-empty lines, falling back when none remain."""
    kept = [line.strip() for line in lines if line and line.strip()][:limit]
    return kept or [FALLBACK_JUSTIFICATION]


def build_suggestion(
    member: Member,
    breakdown: ScoreBreakdown,
    weights: Weights,
    justification: Optional[Sequence[str]] = None,
    max_justifications: int = MAX_JUSTIFICATIONS
) -> Suggestion:
    """Combine a member's breakdown into a Suggestion.

    Justifications default to the threshold rules; externally supplied
    ones are capped the same way.
    """
    if justification is None:
        justification = generate_justification(breakdown)

    return Suggestion(
        member_id=member.id,
        name=member.name,
        role=member.role,
        timezone=member.timezone,
        score=combine_scores(breakdown, weights),
        breakdown=breakdown,
        justification=tuple(cap_justification(justification, max_justifications)),
    )


def sort_suggestions(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Sort by score descending; equal scores keep their input order."""
    return sorted(suggestions, key=lambda s: s.score, reverse=True)
