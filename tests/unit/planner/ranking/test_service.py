#!/usr/bin/env python3
"""
Tests for LocalRankingService and the module-level rank() helper.

Covers the ordering and scoring guarantees the planner relies on:
determinism, bounded sub-scores, neutral defaults, weight behaviour and
stable ordering for ties.
"""

import math

import pytest

from planner.config_loader import RankingConfig
from planner.ranking import LocalRankingService, rank
from planner.ranking.combination import round_half_up
from planner.ranking.models import RankingOutcome, Weights
from tests.conftest import make_member, make_story

ODD_MEMBERS = [
    make_member("overloaded", skills=[("React", 5)], hours=40, load=400),
    make_member("zero-hours", skills=[("Go", 1)], hours=0, load=0),
    make_member("no-skills"),
    make_member("idle", skills=[("Python", 3)], hours=200, load=0, wants_to_learn=["React"]),
    make_member("veteran", history=[("Frontend Platform", "Frontend Lead")]),
]

WEIGHT_CASES = [
    Weights(),
    Weights(0, 0, 0, 0),
    Weights(1, 0, 0, 0),
    Weights(10, 10, 10, 10),
    Weights(0.5, 0.5, 0.5, 0.5),
]


class TestRankingProperties:

    def test_deterministic(self, frontend_story, demo_members, default_weights):
        first = rank(frontend_story, demo_members, default_weights)
        second = rank(frontend_story, demo_members, default_weights)

        assert first == second

    def test_one_suggestion_per_member(self, frontend_story, demo_members, default_weights):
        suggestions = rank(frontend_story, demo_members, default_weights)

        assert sorted(s.member_id for s in suggestions) == sorted(m.id for m in demo_members)

    def test_sorted_by_score_descending(self, frontend_story, demo_members, default_weights):
        scores = [s.score for s in rank(frontend_story, demo_members, default_weights)]

        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("weights", WEIGHT_CASES)
    def test_sub_scores_and_score_are_bounded(self, frontend_story, weights):
        for suggestion in rank(frontend_story, ODD_MEMBERS, weights):
            for value in suggestion.breakdown.to_dict().values():
                assert 0.0 <= value <= 100.0
            assert math.isfinite(suggestion.score)
            assert suggestion.score >= 0.0
            assert 1 <= len(suggestion.justification) <= 5

    def test_no_keywords_gives_neutral_scores(self):
        story = make_story(as_a="a", i_want="to do it", labels=["ui"])

        for suggestion in rank(story, ODD_MEMBERS, Weights()):
            assert suggestion.breakdown.growth_potential == 50.0
            assert suggestion.breakdown.continuity == 50.0

    def test_no_keywords_competence_uses_neutral_overlap(self):
        member = make_member(skills=[("Go", 2)])

        [suggestion] = rank(make_story(), [member], Weights())

        # overlap 50, level 100 * 2 / 5 = 40
        assert suggestion.breakdown.competence == 45.0

    def test_zero_weights_preserve_roster_order(self, frontend_story, demo_members):
        suggestions = rank(frontend_story, demo_members, Weights(0, 0, 0, 0))

        assert [s.score for s in suggestions] == [0.0] * len(demo_members)
        assert [s.member_id for s in suggestions] == [m.id for m in demo_members]

    def test_identical_profiles_keep_input_order(self, frontend_story):
        twin_a = make_member("twin-a", skills=[("React", 4)], hours=40, load=20)
        twin_b = make_member("twin-b", skills=[("React", 4)], hours=40, load=20)

        forward = rank(frontend_story, [twin_a, twin_b], Weights())
        backward = rank(frontend_story, [twin_b, twin_a], Weights())

        assert [s.member_id for s in forward] == ["twin-a", "twin-b"]
        assert [s.member_id for s in backward] == ["twin-b", "twin-a"]

    def test_more_free_hours_never_lowers_score(self, frontend_story):
        loads = [0, 8, 16, 24, 32, 40, 60]
        members = [
            make_member(f"m{load}", skills=[("React", 4)], hours=40, load=load)
            for load in loads
        ]

        by_id = {s.member_id: s.score for s in rank(frontend_story, members, Weights())}
        scores = [by_id[f"m{load}"] for load in loads]

        assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))

    def test_adding_matching_skill_never_lowers_competence(self):
        story = make_story(labels=["frontend", "react"])
        base = make_member("base", skills=[("React", 5)])
        richer = make_member("richer", skills=[("React", 5), ("Frontend Testing", 5)])

        by_id = {s.member_id: s for s in rank(story, [base, richer], Weights())}

        assert by_id["richer"].breakdown.competence >= by_id["base"].breakdown.competence


class TestRankingScenarios:

    def test_matching_skill_outranks_unrelated_skill(self):
        story = make_story(labels=["frontend", "react"])
        react_dev = make_member("react-dev", skills=[("React", 5)])
        python_dev = make_member("python-dev", skills=[("Python", 5)])

        by_id = {s.member_id: s for s in rank(story, [python_dev, react_dev], Weights())}

        assert by_id["react-dev"].breakdown.competence == 75.0
        assert by_id["python-dev"].breakdown.competence == 50.0

    def test_fully_loaded_member_scores_zero_on_availability_only_weights(self):
        busy = make_member("busy", hours=40, load=40)

        [suggestion] = rank(make_story(labels=["api"]), [busy], Weights(0, 1, 0, 0))

        assert suggestion.breakdown.availability == 0.0
        assert suggestion.score == 0.0
        assert "Limited capacity available" in suggestion.justification

    def test_idle_member_scores_full_on_availability_only_weights(self):
        idle = make_member("idle", hours=40, load=0)

        [suggestion] = rank(make_story(labels=["api"]), [idle], Weights(0, 1, 0, 0))

        assert suggestion.breakdown.availability == 100.0
        assert suggestion.score == 100.0
        assert "High availability this sprint" in suggestion.justification

    def test_competence_only_weights_score_equals_rounded_competence(self, frontend_story, demo_members):
        for suggestion in rank(frontend_story, demo_members, Weights(1, 0, 0, 0)):
            assert suggestion.score == round_half_up(suggestion.breakdown.competence)

    def test_member_fields_are_copied(self, frontend_story, demo_members, default_weights):
        members = {m.id: m for m in demo_members}

        for suggestion in rank(frontend_story, demo_members, default_weights):
            member = members[suggestion.member_id]
            assert suggestion.name == member.name
            assert suggestion.role == member.role
            assert suggestion.timezone == member.timezone

    def test_frontend_lead_tops_frontend_story(self, frontend_story, demo_members, default_weights):
        suggestions = rank(frontend_story, demo_members, default_weights)

        top = suggestions[0]
        assert top.member_id == "alice"
        assert top.score == 47.2
        assert list(top.justification) == [
            "Moderate skill alignment",
            "High availability this sprint",
        ]


class TestLocalRankingService:

    def test_rank_owners_wraps_suggestions(self, frontend_story, demo_members, default_weights):
        service = LocalRankingService()

        outcome = service.rank_owners(frontend_story, demo_members, default_weights)

        assert isinstance(outcome, RankingOutcome)
        assert outcome.skipped == 0
        assert outcome.suggestions == service.rank(frontend_story, demo_members, default_weights)

    def test_availability_reference_comes_from_config(self):
        service = LocalRankingService(RankingConfig(availability_reference_hours=8))
        member = make_member(hours=40, load=32)

        [suggestion] = service.rank(make_story(), [member], Weights())

        assert suggestion.breakdown.availability == 100.0

    def test_justification_limit_comes_from_config(self):
        service = LocalRankingService(RankingConfig(max_justifications=1))
        member = make_member(
            skills=[("React", 5)],
            wants_to_learn=["React"],
            history=[("React rewrite", "Frontend")],
        )

        [suggestion] = service.rank(make_story(labels=["react"]), [member], Weights())

        assert suggestion.justification == ("Strong skill match for this story",)

    def test_name_is_local(self):
        assert LocalRankingService().name == "local"
