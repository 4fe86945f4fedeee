#!/usr/bin/env python3
"""
Input Validation - Build ranking models from raw mappings.

Callers run these before invoking a ranker; the engine assumes well-typed
input. Both snake_case and the camelCase keys used by the browser client
(``asA``, ``hoursPerSprint``, ``projectName``, ...) are accepted.

Every malformed shape raises InvalidArgument.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from planner.exceptions import InvalidArgument
from planner.ranking.models import (
    Capacity,
    Member,
    Preferences,
    ProjectHistory,
    QuoteEvidence,
    Skill,
    Story,
    Weights,
)

WEIGHT_FIELDS = ('alpha', 'beta', 'gamma', 'delta')


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key among snake_case / camelCase aliases."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidArgument(f"{what} must be an object, got {type(value).__name__}")
    return value


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidArgument(f"{what} must be a string, got {type(value).__name__}")
    return value


def _strings(value: Any, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise InvalidArgument(f"{what} must be a list of strings")
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            raise InvalidArgument(f"{what} must contain only strings, got {type(item).__name__}")
    return items


def _number(value: Any, what: str, minimum: Optional[float] = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{what} must be a number, got {value!r}")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise InvalidArgument(f"{what} must be finite, got {value!r}")
    if minimum is not None and number < minimum:
        raise InvalidArgument(f"{what} must be >= {minimum}, got {value!r}")
    return number


def _records(value: Any, what: str) -> List[Mapping[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise InvalidArgument(f"{what} must be a list")
    return [_require_mapping(item, f"{what}[{i}]") for i, item in enumerate(value)]


def parse_story(data: Any) -> Story:
    """Build a Story from a mapping."""
    data = _require_mapping(data, "story")

    evidence = tuple(
        QuoteEvidence(
            timestamp=_string(item.get('timestamp'), "evidence.timestamp"),
            speaker=_string(item.get('speaker'), "evidence.speaker"),
            quote=_string(item.get('quote'), "evidence.quote"),
        )
        for item in _records(data.get('evidence'), "story.evidence")
    )

    estimate = _get(data, 'estimate', default=0)
    story_id = _get(data, 'id')

    return Story(
        as_a=_string(_get(data, 'as_a', 'asA'), "story.as_a"),
        i_want=_string(_get(data, 'i_want', 'iWant'), "story.i_want"),
        so_that=_string(_get(data, 'so_that', 'soThat'), "story.so_that"),
        labels=_strings(data.get('labels'), "story.labels"),
        id=str(story_id) if story_id is not None else None,
        risks=_strings(data.get('risks'), "story.risks"),
        action_items=_strings(_get(data, 'action_items', 'actionItems'), "story.action_items"),
        evidence=evidence,
        estimate=_number(estimate, "story.estimate"),
        due_date=_get(data, 'due_date', 'dueDate'),
        assigned_to=_get(data, 'assigned_to', 'assignedTo'),
    )


def parse_member(data: Any) -> Member:
    """Build a Member from a mapping."""
    data = _require_mapping(data, "member")

    member_id = data.get('id')
    if member_id is None or str(member_id).strip() == "":
        raise InvalidArgument("member.id is required")
    member_id = str(member_id)

    skills = []
    for skill in _records(data.get('skills'), f"member {member_id} skills"):
        level = _number(skill.get('level'), f"member {member_id} skill level", minimum=None)
        if level != int(level) or not 1 <= level <= 5:
            raise InvalidArgument(
                f"member {member_id} skill level must be an integer 1-5, got {skill.get('level')!r}"
            )
        skills.append(Skill(name=_string(skill.get('name'), "skill.name"), level=int(level)))

    history = tuple(
        ProjectHistory(
            project_name=_string(_get(h, 'project_name', 'projectName'), "history.project_name"),
            role=_string(h.get('role'), "history.role"),
            duration=_string(h.get('duration'), "history.duration"),
        )
        for h in _records(data.get('history'), f"member {member_id} history")
    )

    capacity_data = _require_mapping(data.get('capacity') or {}, f"member {member_id} capacity")
    capacity = Capacity(
        hours_per_sprint=_number(
            _get(capacity_data, 'hours_per_sprint', 'hoursPerSprint', default=0),
            f"member {member_id} hours_per_sprint"
        ),
        current_load=_number(
            _get(capacity_data, 'current_load', 'currentLoad', default=0),
            f"member {member_id} current_load"
        ),
    )

    prefs_data = _require_mapping(data.get('preferences') or {}, f"member {member_id} preferences")
    preferences = Preferences(
        wants_to_learn=_strings(
            _get(prefs_data, 'wants_to_learn', 'wantsToLearn'), "preferences.wants_to_learn"
        ),
        prefers_not=_strings(
            _get(prefs_data, 'prefers_not', 'prefersNot'), "preferences.prefers_not"
        ),
    )

    return Member(
        id=member_id,
        name=_string(data.get('name'), "member.name") or member_id,
        role=_string(data.get('role'), "member.role"),
        timezone=_string(data.get('timezone'), "member.timezone"),
        skills=tuple(skills),
        history=history,
        capacity=capacity,
        preferences=preferences,
    )


def parse_roster(data: Any) -> List[Member]:
    """Build a non-empty roster with unique member ids."""
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise InvalidArgument("members must be a list")
    if len(data) == 0:
        raise InvalidArgument("members must not be empty")

    members = [parse_member(item) for item in data]
    seen = set()
    for member in members:
        if member.id in seen:
            raise InvalidArgument(f"duplicate member id: {member.id}")
        seen.add(member.id)
    return members


def parse_weights(data: Any) -> Weights:
    """Build Weights; all four fields are required and must be non-negative."""
    data = _require_mapping(data, "weights")
    missing = [name for name in WEIGHT_FIELDS if name not in data]
    if missing:
        raise InvalidArgument(f"weights missing field(s): {', '.join(missing)}")

    values: Dict[str, float] = {
        name: _number(data[name], f"weights.{name}") for name in WEIGHT_FIELDS
    }
    return Weights(**values)
