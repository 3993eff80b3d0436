"""
Candidate Scoring Tests

Tests the content-based components, the collaborative placeholder, session
context, the shorts strategy table and the behavioral-enhanced composite.

Test Scenarios:
---------------
1. Topic affinity falls back preference → skill confidence → 0.5
2. Difficulty peaks one level above the stated preference (ZPD)
3. Session context: Monday 19:00, 18 minute item, no profile → 0.85
4. Strategy: 2 of the last 3 items short → shorts mode
5. All scores clamped to [0, 1]; the profile is never mutated

Run:
----
    pytest behavioral/tests/test_scoring.py -v
"""

import pytest

from behavioral.models import (
    BehavioralConfig,
    BehavioralProfile,
    EngagementPattern,
    InterestScore,
    PeakWindow,
    SkillLevel,
    UserPreferences,
)
from behavioral.stages.scoring import (
    ContentStrategy,
    behavioral_interest,
    collaborative_score,
    content_based_score,
    determine_strategy,
    difficulty_zpd,
    filter_by_strategy,
    is_in_shorts_mode,
    is_short,
    length_match,
    recency_boost,
    score_candidates,
    session_context_score,
    session_reason,
    skill_confidence_by_topic,
    strategy_boost,
    topic_affinity,
    type_affinity,
)
from conftest import FIXED_NOW, make_content


def _profile(classification=None, interests=None, peak_windows=None):
    profile = BehavioralProfile.new("u1")
    if classification is not None:
        profile.engagement = EngagementPattern(classification=classification, confidence=0.7)
    for topic, score in (interests or {}).items():
        profile.interests[topic] = InterestScore(topic=topic, score=score, last_updated=FIXED_NOW)
    profile.peak_windows = peak_windows or []
    return profile


class TestContentBasedScoring:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.prefs = UserPreferences(
            difficulty_preference=3,
            topic_preferences={"math": 0.9},
            content_type_preferences={"VIDEO": 0.8},
            daily_time_target_minutes=30,
        )
        self.skills = skill_confidence_by_topic([
            SkillLevel(topic="algebra", confidence_score=0.7),
            SkillLevel(topic="history"),
        ])

    def test_skill_confidence_skips_missing_scores(self):
        assert self.skills == {"algebra": 0.7}

    def test_topic_affinity_fallbacks(self):
        content = make_content("c", topics=["math", "algebra", "physics"])
        assert topic_affinity(content, self.prefs, self.skills) == pytest.approx(0.7)

    def test_topic_affinity_neutral_without_preferences(self):
        content = make_content("c", topics=["math"])
        assert topic_affinity(content, UserPreferences(), self.skills) == 0.5
        assert topic_affinity(make_content("c"), self.prefs, self.skills) == 0.5

    def test_type_affinity_is_case_insensitive(self):
        assert type_affinity(make_content("c", "video"), self.prefs) == 0.8
        assert type_affinity(make_content("c", "quiz"), self.prefs) == 0.5

    @pytest.mark.parametrize("difficulty,expected", [
        (4, 1.0),
        (3, 0.8),
        (5, 0.8),
        (2, 0.5),
        (6, 0.5),
        (1, 0.2),
        (None, 0.5),
    ])
    def test_difficulty_zpd(self, difficulty, expected):
        content = make_content("c", difficulty=difficulty)
        assert difficulty_zpd(content, self.prefs) == expected

    @pytest.mark.parametrize("age_days,expected", [
        (2, 1.0),
        (10, 0.8),
        (40, 0.6),
        (100, 0.4),
        (None, 0.5),
    ])
    def test_recency_boost(self, age_days, expected):
        content = make_content("c", age_days=age_days)
        assert recency_boost(content, FIXED_NOW) == expected

    @pytest.mark.parametrize("minutes,expected", [
        (10, 1.0),
        (15, 1.0),
        (25, 0.8),
        (45, 0.4),
        (None, 0.5),
    ])
    def test_length_match(self, minutes, expected):
        content = make_content("c", minutes=minutes)
        assert length_match(content, self.prefs) == expected

    def test_content_based_score_all_neutral(self):
        content = make_content("c", type="lesson")
        score = content_based_score(content, UserPreferences(), {}, now=FIXED_NOW)
        assert score == pytest.approx(0.5)

    def test_content_based_score_weighted_sum(self):
        content = make_content("c", "video", ["math"], difficulty=4, minutes=10, age_days=2)
        # 0.4*0.9 + 0.2*0.8 + 0.2*1.0 + 0.1*1.0 + 0.1*1.0
        score = content_based_score(content, self.prefs, self.skills, now=FIXED_NOW)
        assert score == pytest.approx(0.92)


class TestCollaborativeScore:
    def test_within_configured_range(self):
        for i in range(50):
            score = collaborative_score("u1", f"c{i}")
            assert 0.3 <= score <= 0.7

    def test_deterministic(self):
        assert collaborative_score("u1", "c1") == collaborative_score("u1", "c1")

    def test_range_is_configurable(self):
        config = BehavioralConfig(collaborative_min=0.5, collaborative_max=0.5)
        assert collaborative_score("u1", "c1", config) == pytest.approx(0.5)


class TestSessionContext:
    def test_no_profile_evening(self):
        content = make_content("c", minutes=18)
        assert session_context_score(content, None, FIXED_NOW) == pytest.approx(0.85)

    def test_peak_window_match(self):
        profile = _profile(
            "explorer", peak_windows=[PeakWindow(day="MONDAY", hour=20, score=0.8)]
        )
        content = make_content("c", minutes=18)
        # time 0.8, energy 1.0, pattern 1.0
        assert session_context_score(content, profile, FIXED_NOW) == pytest.approx(0.92)

    def test_all_days_window_counts_for_time_only(self):
        profile = _profile(
            "explorer", peak_windows=[PeakWindow(day="ALL", hour=19, score=0.4)]
        )
        content = make_content("c", minutes=18)
        # time 0.4, energy 1.0, pattern 0.6
        assert session_context_score(content, profile, FIXED_NOW) == pytest.approx(0.64)

    def test_energy_floor_and_unknown_duration(self):
        long_item = make_content("c", minutes=120)
        no_duration = make_content("d")
        # time 1.0, energy floored at 0.2, pattern 0.5
        assert session_context_score(long_item, None, FIXED_NOW) == pytest.approx(0.61)
        # energy 0.8 when duration is unknown
        assert session_context_score(no_duration, None, FIXED_NOW) == pytest.approx(0.79)

    def test_session_reason(self):
        assert session_reason(FIXED_NOW) == "Perfect for evening learning"
        assert session_reason(FIXED_NOW.replace(hour=8)) == "Good for morning learning"
        assert session_reason(FIXED_NOW.replace(hour=2)) == "Quick content for late night"


class TestShortsStrategy:
    def test_is_short(self):
        assert is_short(make_content("a", "video", minutes=1))
        assert is_short(make_content("b", "quiz", minutes=30))
        assert is_short(make_content("c", "exercise"))
        assert not is_short(make_content("d", "video", minutes=10))
        assert not is_short(make_content("e", "video", minutes=0.25))
        assert not is_short(make_content("f", "article"))

    def test_shorts_mode_uses_last_three(self):
        short = make_content("s", "quiz")
        long = make_content("l", "video", minutes=20)
        assert is_in_shorts_mode([short, long, short])
        assert not is_in_shorts_mode([short, long, long, short])
        assert not is_in_shorts_mode([])

    @pytest.mark.parametrize("classification,shorts_mode,expected", [
        ("explorer", True, ContentStrategy.DISCOVERY_SHORTS),
        ("casual_browser", True, ContentStrategy.SHORTS_ONLY),
        ("deep_learner", True, ContentStrategy.SHORTS_ONLY),
        ("deep_learner", False, ContentStrategy.DEEP_DIVE),
        ("specialist", False, ContentStrategy.TOPIC_FOCUSED),
        ("binge_consumer", False, ContentStrategy.BALANCED),
        ("explorer", False, ContentStrategy.BALANCED),
    ])
    def test_determine_strategy(self, classification, shorts_mode, expected):
        recent = [make_content(f"r{i}", "quiz" if shorts_mode else "video", minutes=20) for i in range(3)]
        assert determine_strategy(_profile(classification), recent) == expected

    def test_no_engagement_is_balanced(self):
        assert determine_strategy(None) == ContentStrategy.BALANCED
        assert determine_strategy(BehavioralProfile(user_id="u1")) == ContentStrategy.BALANCED

    @pytest.mark.parametrize("strategy,short_boost,long_boost", [
        (ContentStrategy.SHORTS_ONLY, 0.3, 0.0),
        (ContentStrategy.DISCOVERY_SHORTS, 0.4, 0.1),
        (ContentStrategy.DEEP_DIVE, 0.0, 0.3),
        (ContentStrategy.TOPIC_FOCUSED, 0.2, 0.2),
        (ContentStrategy.BALANCED, 0.1, 0.1),
    ])
    def test_strategy_boost(self, strategy, short_boost, long_boost):
        short = make_content("s", "quiz")
        long = make_content("l", "video", minutes=20)
        assert strategy_boost(short, strategy) == short_boost
        assert strategy_boost(long, strategy) == long_boost

    def test_filter_by_strategy(self):
        short = make_content("s", "quiz")
        long = make_content("l", "video", minutes=20)
        assert filter_by_strategy([short, long], ContentStrategy.SHORTS_ONLY) == [short]
        assert filter_by_strategy([short, long], ContentStrategy.DEEP_DIVE) == [long]
        assert filter_by_strategy([short, long], ContentStrategy.BALANCED) == [short, long]


class TestScoreCandidates:
    def test_scores_in_unit_range_without_profile(self, sample_catalog):
        scores = score_candidates(sample_catalog, user_id="u1", now=FIXED_NOW)
        assert set(scores) == {c.id for c in sample_catalog}
        assert all(0.0 <= s <= 1.0 for s in scores.values())

    def test_base_score_without_profile(self):
        content = make_content("c", type="lesson")
        scores = score_candidates([content], user_id="u1", now=FIXED_NOW)
        expected = 0.7 * 0.5 + 0.3 * collaborative_score("u1", "c")
        assert scores["c"] == pytest.approx(expected)

    def test_behavioral_interest(self):
        profile = _profile(interests={"math": 0.8})
        content = make_content("c", topics=["math", "art"])
        assert behavioral_interest(content, profile, BehavioralConfig()) == pytest.approx(0.65)
        scaled = BehavioralConfig(behavioral_interest_scale=100.0)
        profile.interests["math"].score = 80.0
        assert behavioral_interest(content, profile, scaled) == pytest.approx(0.65)

    def test_large_interest_is_clamped(self):
        profile = _profile("explorer", interests={"math": 40.0})
        content = make_content("c", topics=["math"])
        scores = score_candidates([content], behavioral_profile=profile, now=FIXED_NOW)
        assert scores["c"] == 1.0

    def test_enhanced_score(self):
        profile = _profile("binge_consumer", interests={"math": 0.6})
        content = make_content("c", "video", ["math"], minutes=18)
        scores = score_candidates([content], behavioral_profile=profile, now=FIXED_NOW)
        base = 0.7 * content_based_score(content, UserPreferences(), {}, now=FIXED_NOW) \
            + 0.3 * collaborative_score("u1", "c")
        session = session_context_score(content, profile, FIXED_NOW)
        # balanced strategy adds 0.1
        expected = 0.4 * base + 0.3 * 0.6 + 0.2 * session + 0.1
        assert scores["c"] == pytest.approx(expected)

    def test_profile_is_not_mutated(self, sample_catalog):
        profile = _profile("explorer", interests={"math": 12.0})
        before = profile.model_dump()
        score_candidates(sample_catalog, behavioral_profile=profile, now=FIXED_NOW)
        assert profile.model_dump() == before
