#!/usr/bin/env python3
"""
Sub-score Calculations - Competence, availability, growth and continuity.

Each scorer returns a value in [0, 100]. Scorers that divide by a keyword
or skill count return the neutral default (50) when that count is zero.

Textual matching is bidirectional substring containment: a keyword matches
a term when either one contains the other. Short overlaps give false
positives (skill "api" matches keyword "rapid").
"""

from typing import AbstractSet, Iterable, List

from planner.ranking.models import Member

NEUTRAL_SCORE = 50.0
MAX_SKILL_LEVEL = 5
DEFAULT_AVAILABILITY_REFERENCE_HOURS = 16.0


def _matches_any(keyword: str, terms: List[str]) -> bool:
    return any(term in keyword or keyword in term for term in terms)


def _match_fraction(keywords: AbstractSet[str], terms: Iterable[str]) -> float:
    """Percentage of keywords matching any term; neutral when no keywords."""
    if not keywords:
        return NEUTRAL_SCORE
    lowered = [t.lower() for t in terms]
    matched = sum(1 for kw in keywords if _matches_any(kw, lowered))
    return 100.0 * matched / len(keywords)


def calculate_competence(member: Member, keywords: AbstractSet[str]) -> float:
    """
    Calculate competence as the mean of skill overlap and skill level.

    - overlap: percentage of keywords matching a skill name (50 if no keywords)
    - level: average skill level on the 1-5 scale as a percentage (50 if no skills)
    """
    overlap_score = _match_fraction(keywords, (s.name for s in member.skills))

    if member.skills:
        total_levels = sum(s.level for s in member.skills)
        level_score = 100.0 * total_levels / (MAX_SKILL_LEVEL * len(member.skills))
    else:
        level_score = NEUTRAL_SCORE

    return (overlap_score + level_score) / 2


def calculate_availability(
    member: Member,
    reference_hours: float = DEFAULT_AVAILABILITY_REFERENCE_HOURS
) -> float:
    """
    Calculate availability from free sprint hours.

    Formula: min(100, 100 * max(0, hours_per_sprint - current_load) / reference_hours)

    ``reference_hours`` is a fixed design constant (16 free hours is "very
    available"); it is never derived from the member's capacity.
    """
    if reference_hours <= 0:
        raise ValueError(f"reference_hours must be positive, got {reference_hours}")
    available = member.capacity.free_hours
    return min(100.0, 100.0 * available / reference_hours)


def calculate_growth_potential(member: Member, keywords: AbstractSet[str]) -> float:
    """Percentage of keywords matching something the member wants to learn."""
    return _match_fraction(keywords, member.preferences.wants_to_learn)


def calculate_continuity(member: Member, keywords: AbstractSet[str]) -> float:
    """Percentage of keywords matching a past project name or role."""
    pool = [h.project_name for h in member.history] + [h.role for h in member.history]
    return _match_fraction(keywords, pool)
