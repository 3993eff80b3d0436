"""
Interest Model Tests

Tests EMA smoothing, action multipliers, the time weight cap, half-life decay
and pruning of interests that decay below the removal threshold.

Test Scenarios:
---------------
1. EMA: existing 50 + added 20 → 41.0
2. Decay: 7 days → ×0.5, 14 days → ×0.25
3. Pruning: interests below 1.0 after decay are removed
4. Events without topic tags leave the profile untouched (no decay pass)

Run:
----
    pytest behavioral/tests/test_interest_scorer.py -v
"""

from datetime import timedelta

import pytest

from behavioral.models import BehavioralProfile, InterestScore, RawJourneyEvent
from behavioral.profiling import InterestScorer
from conftest import FIXED_NOW


def _event(topics, action="completed", seconds=60.0):
    return RawJourneyEvent(
        user_id="u1",
        content_id="c1",
        action=action,
        time_in_content_seconds=seconds,
        topic_tags=topics,
    )


class TestInterestScorer:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.scorer = InterestScorer()
        self.profile = BehavioralProfile.new("u1")

    def _seed(self, topic, score, days_ago=0):
        self.profile.interests[topic] = InterestScore(
            topic=topic, score=score, last_updated=FIXED_NOW - timedelta(days=days_ago)
        )

    def test_new_topic_gets_added_score(self):
        # completed (x2) for 60s (weight 1.0) → 10 * 2 * 1 = 20
        self.scorer.update_interests(self.profile, _event(["math"]), FIXED_NOW)
        assert self.profile.interests["math"].score == pytest.approx(20.0)
        assert self.profile.interests["math"].last_updated == FIXED_NOW

    def test_ema_update(self):
        self._seed("math", 50.0)
        self.scorer.update_interests(self.profile, _event(["math"]), FIXED_NOW)
        assert self.profile.interests["math"].score == pytest.approx(41.0)

    @pytest.mark.parametrize("action,expected", [
        ("started", 1.0),
        ("completed", 2.0),
        ("revisited", 3.0),
        ("abandoned", 0.5),
        ("COMPLETED", 2.0),
        ("Revisited", 3.0),
        ("paused", 1.0),
        (None, 1.0),
    ])
    def test_action_multiplier(self, action, expected):
        assert self.scorer.action_multiplier(action) == expected

    def test_time_weight_is_capped(self):
        assert self.scorer.time_weight(30) == pytest.approx(0.5)
        assert self.scorer.time_weight(600) == pytest.approx(1.5)
        assert self.scorer.time_weight(None) == 0.0

    def test_decay_after_one_half_life(self):
        self._seed("math", 40.0, days_ago=7)
        self.scorer.update_interests(self.profile, _event(["physics"]), FIXED_NOW)
        assert self.profile.interests["math"].score == pytest.approx(20.0)

    def test_decay_after_two_half_lives(self):
        self._seed("math", 40.0, days_ago=14)
        self.scorer.update_interests(self.profile, _event(["physics"]), FIXED_NOW)
        assert self.profile.interests["math"].score == pytest.approx(10.0)

    def test_same_day_interest_is_not_decayed(self):
        self.profile.interests["math"] = InterestScore(
            topic="math", score=40.0, last_updated=FIXED_NOW - timedelta(hours=20)
        )
        self.scorer.update_interests(self.profile, _event(["physics"]), FIXED_NOW)
        assert self.profile.interests["math"].score == pytest.approx(40.0)

    def test_decayed_interest_below_threshold_is_pruned(self):
        self._seed("math", 3.0, days_ago=14)
        self.scorer.update_interests(self.profile, _event(["physics"]), FIXED_NOW)
        assert "math" not in self.profile.interests
        assert "physics" in self.profile.interests
        assert all(i.score >= 1.0 for i in self.profile.interests.values())

    def test_zero_time_new_topic_is_pruned(self):
        self.scorer.update_interests(self.profile, _event(["math"], seconds=0), FIXED_NOW)
        assert "math" not in self.profile.interests

    def test_no_topic_tags_is_a_no_op(self):
        self._seed("math", 40.0, days_ago=14)
        self.scorer.update_interests(self.profile, _event([]), FIXED_NOW)
        assert self.profile.interests["math"].score == 40.0

    def test_decay_factor(self):
        assert self.scorer.decay_factor(0) == 1.0
        assert self.scorer.decay_factor(7) == pytest.approx(0.5)
        assert self.scorer.decay_factor(21) == pytest.approx(0.125)
