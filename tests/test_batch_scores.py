"""
Tests for batch score aggregation
tests/test_batch_scores.py
"""

import pytest

from learning_scores.core.exceptions import (
    ActorNotAuthorizedError,
    EntityNotFoundException,
    ScoreItemNotFoundError,
)
from learning_scores.scoring.batch_scores import build_resolvers, get_achieved_scores, resolve_many
from tests.conftest import ACTOR_ID, OUTSIDER_ID


class TestGetAchievedScores:
    def test_scores_every_activity(self, collaborators):
        scores = get_achieved_scores([101, 102, 103], ACTOR_ID, collaborators)
        assert scores == {101: 5.0, 102: 8.0, 103: 0.0}

    def test_keeps_input_order(self, collaborators):
        scores = get_achieved_scores([103, 101, 102], ACTOR_ID, collaborators)
        assert list(scores) == [103, 101, 102]

    def test_empty_input(self, collaborators):
        assert get_achieved_scores([], ACTOR_ID, collaborators) == {}

    def test_duplicate_ids_collapse(self, collaborators):
        scores = get_achieved_scores([101, 101], ACTOR_ID, collaborators)
        assert scores == {101: 5.0}

    def test_one_failure_fails_whole_batch(self, collaborators):
        # 104 has no score item
        with pytest.raises(ScoreItemNotFoundError):
            get_achieved_scores([101, 104, 102], ACTOR_ID, collaborators)

    def test_unknown_id_fails_before_scoring(self, collaborators, monkeypatch):
        scored = []
        original = collaborators.score_items.get_score_item

        def tracking_get_score_item(activity_id):
            scored.append(activity_id)
            return original(activity_id)

        monkeypatch.setattr(collaborators.score_items, "get_score_item", tracking_get_score_item)

        with pytest.raises(EntityNotFoundException) as exc_info:
            get_achieved_scores([101, 102, 999], ACTOR_ID, collaborators)
        assert exc_info.value.entity_id == "999"
        assert scored == []

    def test_unauthorized_actor_fails_before_scoring(self, collaborators):
        with pytest.raises(ActorNotAuthorizedError):
            get_achieved_scores([101, 102], OUTSIDER_ID, collaborators)

    def test_alias(self):
        assert resolve_many is get_achieved_scores


class TestBuildResolvers:
    def test_one_per_id(self, collaborators):
        resolvers = build_resolvers([101, 102], ACTOR_ID, collaborators)
        assert [r.activity_id for r in resolvers] == [101, 102]

    def test_looks_up_every_id(self, collaborators, activity_directory):
        build_resolvers([102, 101], ACTOR_ID, collaborators)
        assert activity_directory.lookups == [102, 101]
