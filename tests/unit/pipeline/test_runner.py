#!/usr/bin/env python3
"""
Unit tests for the sprint planning pipeline.
"""

import json
from unittest.mock import MagicMock

import pytest
import yaml

from pipeline.runner import (
    PlanningState,
    assign_story,
    load_stories,
    load_team,
    plan_sprint,
    plan_to_dict,
    rerank,
)
from planner.exceptions import InvalidArgument, RankingUnavailable
from planner.ranking.interfaces import OwnerRanker
from planner.ranking.external import LLMRankingService
from planner.ranking.models import RankingOutcome, Weights
from planner.ranking.service import LocalRankingService
from tests.conftest import make_member, make_story


class FailingRanker(OwnerRanker):
    """Fails for stories whose id is in ``fail_ids`` (all stories when None)."""

    name = "flaky"

    def __init__(self, fail_ids=None):
        self.fail_ids = fail_ids
        self.local = LocalRankingService()

    def rank_owners(self, story, members, weights):
        if self.fail_ids is None or story.id in self.fail_ids:
            raise RankingUnavailable("ranking service down")
        return self.local.rank_owners(story, members, weights)


class SkippingRanker(OwnerRanker):
    name = "skipping"

    def rank_owners(self, story, members, weights):
        return RankingOutcome(suggestions=[], skipped=2, skipped_member_ids=("x", "y"))


@pytest.fixture
def stories():
    return [
        make_story(i_want="a React dashboard", labels=["frontend"], id="s1", estimate=8),
        make_story(i_want="migrate payments to PostgreSQL", labels=["backend"], id="s2", estimate=13),
        make_story(i_want="write onboarding docs", id="s3", estimate=3),
    ]


@pytest.fixture
def members():
    return [
        make_member("alice", skills=[("React", 5)], hours=40, load=10),
        make_member("david", skills=[("PostgreSQL", 5)], hours=40, load=15),
    ]


class TestPlanSprint:

    def test_ranks_every_story(self, stories, members):
        result = plan_sprint(stories, members, Weights(), LocalRankingService())

        assert result.success
        assert result.ranked_count == 3
        assert [p.story.id for p in result.state.stories] == ["s1", "s2", "s3"]
        assert all(len(p.suggestions) == 2 for p in result.state.stories)
        assert all(p.ranked_by == "local" for p in result.state.stories)
        assert result.state.stories[0].suggestions[0].member_id == "alice"
        assert result.state.stories[1].suggestions[0].member_id == "david"

    def test_failure_without_fallback_keeps_going(self, stories, members):
        result = plan_sprint(stories, members, Weights(), FailingRanker(fail_ids={"s2"}))

        assert not result.success
        assert result.ranked_count == 2
        assert result.failed_count == 1
        failed = result.state.stories[1]
        assert failed.suggestions == ()
        assert "ranking service down" in failed.error
        assert result.state.stories[2].suggestions
        assert len(result.errors) == 1

    def test_failure_uses_fallback(self, stories, members):
        result = plan_sprint(
            stories, members, Weights(), FailingRanker(), fallback=LocalRankingService()
        )

        assert result.success
        assert result.fallback_count == 3
        assert result.ranked_count == 0
        assert all(p.ranked_by == "local" for p in result.state.stories)
        assert all(p.error is None for p in result.state.stories)

    def test_skipped_references_are_counted(self, stories, members):
        result = plan_sprint(stories, members, Weights(), SkippingRanker())

        assert result.skipped_references == 6

    def test_delay_between_stories_only(self, stories, members):
        sleep = MagicMock()

        plan_sprint(stories, members, Weights(), LocalRankingService(), inter_request_delay=1.5, sleep=sleep)

        assert sleep.call_count == 2
        sleep.assert_called_with(1.5)

    def test_no_delay_by_default(self, stories, members):
        sleep = MagicMock()

        plan_sprint(stories, members, Weights(), LocalRankingService(), sleep=sleep)

        sleep.assert_not_called()

    def test_status_callback(self, stories, members):
        progress = []

        plan_sprint(
            stories, members, Weights(), LocalRankingService(),
            status_callback=lambda done, total: progress.append((done, total))
        )

        assert progress == [(1, 3), (2, 3), (3, 3)]

    def test_empty_members_rejected(self, stories):
        with pytest.raises(InvalidArgument):
            plan_sprint(stories, [], Weights(), LocalRankingService())

    def test_no_stories(self, members):
        result = plan_sprint([], members, Weights(), LocalRankingService())

        assert result.success
        assert result.state.stories == ()


class TestPlanningState:

    @pytest.fixture
    def state(self, stories, members):
        return plan_sprint(stories, members, Weights(), LocalRankingService()).state

    def test_assign_returns_new_state(self, state):
        updated = assign_story(state, "s1", "alice")

        assert updated.stories[0].story.assigned_to == "alice"
        assert state.stories[0].story.assigned_to is None
        assert updated.stories[1] is state.stories[1]

    def test_unassign(self, state):
        assigned = assign_story(state, "s1", "alice")

        assert assign_story(assigned, "s1", None).stories[0].story.assigned_to is None

    def test_assign_unknown_member(self, state):
        with pytest.raises(InvalidArgument):
            assign_story(state, "s1", "mallory")

    def test_assign_unknown_story(self, state):
        with pytest.raises(InvalidArgument):
            assign_story(state, "nope", "alice")

    def test_rerank_uses_new_weights_and_keeps_assignments(self, state):
        assigned = assign_story(state, "s2", "david")

        result = rerank(assigned, LocalRankingService(), weights=Weights(0, 0, 0, 0))

        assert result.state.weights == Weights(0, 0, 0, 0)
        assert result.state.stories[1].story.assigned_to == "david"
        assert all(s.score == 0.0 for p in result.state.stories for s in p.suggestions)

    def test_rerank_pauses_between_stories(self, state):
        sleep = MagicMock()

        rerank(state, LocalRankingService(), inter_request_delay=1.5, sleep=sleep)

        assert sleep.call_count == len(state.stories) - 1
        sleep.assert_called_with(1.5)

    def test_malformed_external_entry_uses_fallback(self, stories, members):
        llm = MagicMock()
        llm.extract_structured_data.return_value = {"rankings": [{"competence": 50}]}

        result = plan_sprint(
            stories, members, Weights(), LLMRankingService(llm), fallback=LocalRankingService()
        )

        assert result.success
        assert result.fallback_count == 3
        assert all(p.ranked_by == "local" for p in result.state.stories)

    def test_rerank_defaults_to_state_weights(self, state):
        result = rerank(state, LocalRankingService())

        assert result.state == state

    def test_plan_to_dict_is_json_serializable(self, state):
        data = plan_to_dict(assign_story(state, "s1", "alice"))

        decoded = json.loads(json.dumps(data))
        assert decoded['weights'] == Weights().to_dict()
        assert decoded['stories'][0]['assigned_to'] == "alice"
        assert decoded['stories'][0]['suggestions'][0]['breakdown']['competence'] >= 0

    def test_state_is_immutable(self, state):
        with pytest.raises(AttributeError):
            state.weights = Weights(1, 1, 1, 1)


class TestLoaders:

    def test_load_team_yaml_with_members_key(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text(yaml.dump({'members': [
            {'id': 'alice', 'skills': [{'name': 'React', 'level': 5}],
             'capacity': {'hoursPerSprint': 40, 'currentLoad': 10}},
        ]}))

        [member] = load_team(str(path))

        assert member.id == "alice"
        assert member.capacity.free_hours == 30.0

    def test_load_stories_json_list(self, tmp_path):
        path = tmp_path / "stories.json"
        path.write_text(json.dumps([{'id': 's1', 'asA': 'user', 'iWant': 'login', 'labels': ['auth']}]))

        [story] = load_stories(str(path))

        assert story.id == "s1"
        assert story.labels == ("auth",)

    def test_load_stories_without_list(self, tmp_path):
        path = tmp_path / "stories.yaml"
        path.write_text("title: not stories\n")

        with pytest.raises(InvalidArgument):
            load_stories(str(path))

    def test_load_team_empty_file(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text("")

        with pytest.raises(InvalidArgument):
            load_team(str(path))
