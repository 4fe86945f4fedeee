#!/usr/bin/env python3
"""
Workload Summary - Assigned story hours against sprint capacity.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from planner.ranking.models import Member, Story

NEAR_CAPACITY_PERCENT = 80.0


@dataclass(frozen=True)
class MemberWorkload:
    member_id: str
    name: str
    role: str
    assigned_hours: float
    capacity_hours: float
    utilization: float  # percent of capacity
    status: str  # "ok", "near" or "over"


def _status(assigned: float, capacity: float, utilization: float) -> str:
    if assigned > capacity:
        return "over"
    if utilization >= NEAR_CAPACITY_PERCENT:
        return "near"
    return "ok"


def summarize_workload(members: Sequence[Member], stories: Sequence[Story]) -> List[MemberWorkload]:
    """
    Sum story estimates per assignee, one entry per member in roster order.

    Stories assigned to ids outside the roster are ignored. A member with
    zero capacity is at 0% when idle and over capacity once anything is
    assigned.
    """
    assigned: Dict[str, float] = {}
    for story in stories:
        if story.assigned_to:
            assigned[story.assigned_to] = assigned.get(story.assigned_to, 0.0) + story.estimate

    summary = []
    for member in members:
        hours = assigned.get(member.id, 0.0)
        capacity = member.capacity.hours_per_sprint
        if capacity > 0:
            utilization = 100.0 * hours / capacity
        else:
            utilization = 100.0 if hours > 0 else 0.0
        summary.append(MemberWorkload(
            member_id=member.id,
            name=member.name,
            role=member.role,
            assigned_hours=hours,
            capacity_hours=capacity,
            utilization=utilization,
            status=_status(hours, capacity, utilization),
        ))
    return summary
