"""
Pytest configuration and fixtures.

Builders here create ranking models with sensible defaults so each test
only spells out the fields it cares about.
"""

import pytest

from planner.ranking.models import (
    Capacity,
    Member,
    Preferences,
    ProjectHistory,
    Skill,
    Story,
    Weights,
)


def make_member(
    member_id="m1",
    name=None,
    skills=(),
    history=(),
    hours=40.0,
    load=0.0,
    wants_to_learn=(),
    role="Engineer",
    timezone="UTC",
):
    """Build a Member; skills are (name, level) pairs, history (project, role) pairs."""
    return Member(
        id=member_id,
        name=name or member_id.title(),
        role=role,
        timezone=timezone,
        skills=tuple(Skill(name=n, level=lvl) for n, lvl in skills),
        history=tuple(ProjectHistory(project_name=p, role=r) for p, r in history),
        capacity=Capacity(hours_per_sprint=hours, current_load=load),
        preferences=Preferences(wants_to_learn=tuple(wants_to_learn)),
    )


def make_story(as_a="", i_want="", so_that="", labels=(), **kwargs):
    return Story(as_a=as_a, i_want=i_want, so_that=so_that, labels=tuple(labels), **kwargs)


@pytest.fixture
def demo_members():
    """Four-person roster resembling a typical product team."""
    return [
        make_member(
            "alice", "Alice Chen",
            skills=[("React", 5), ("TypeScript", 5), ("CSS", 4)],
            history=[("Dashboard Redesign", "Lead Developer"), ("Component Library", "Contributor")],
            hours=40, load=10,
            wants_to_learn=["Three.js", "WebGL", "Animation"],
            role="Senior Frontend Engineer", timezone="PST",
        ),
        make_member(
            "bob", "Bob Martinez",
            skills=[("Node.js", 4), ("PostgreSQL", 4), ("React", 3)],
            history=[("API Gateway", "Backend Lead"), ("Auth System", "Developer")],
            hours=40, load=20,
            wants_to_learn=["GraphQL", "Microservices"],
            role="Full Stack Engineer", timezone="EST",
        ),
        make_member(
            "carol", "Carol Kim",
            skills=[("JavaScript", 3), ("HTML", 4), ("CSS", 3)],
            history=[("Marketing Site", "Junior Developer")],
            hours=32, load=8,
            wants_to_learn=["React", "TypeScript", "Testing"],
            role="Junior Developer", timezone="CST",
        ),
        make_member(
            "david", "David Okonkwo",
            skills=[("Python", 5), ("Django", 4), ("PostgreSQL", 5)],
            history=[("Payment Processing", "Backend Developer"), ("Data Pipeline", "Lead Engineer")],
            hours=40, load=15,
            wants_to_learn=["Rust", "Kubernetes"],
            role="Backend Engineer", timezone="GMT",
        ),
    ]


@pytest.fixture
def frontend_story():
    return make_story(
        as_a="product manager",
        i_want="a React dashboard showing sprint velocity",
        so_that="stakeholders can track delivery",
        labels=["frontend", "react"],
        id="story-1",
        estimate=8,
    )


@pytest.fixture
def default_weights():
    return Weights(alpha=0.3, beta=0.3, gamma=0.2, delta=0.2)
