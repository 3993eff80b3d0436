"""
Shorts strategy: pick a content strategy from recent consumption and engagement,
and boost candidates that fit it.

A "short" is 20-90 seconds long, or a quiz/exercise. The user is in shorts mode
when at least 2 of their last 3 items were shorts.
"""

from enum import Enum
from typing import List, Optional, Sequence

from ...models.content import Content, ContentType
from ...models.profile import BehavioralProfile, EngagementClassification

SHORTS_MIN_SECONDS = 20.0
SHORTS_MAX_SECONDS = 90.0
SHORT_TYPES = (ContentType.QUIZ, ContentType.EXERCISE)
SHORTS_MODE_WINDOW = 3
SHORTS_MODE_MIN = 2


class ContentStrategy(str, Enum):
    SHORTS_ONLY = "shorts_only"
    DISCOVERY_SHORTS = "discovery_shorts"
    DEEP_DIVE = "deep_dive"
    TOPIC_FOCUSED = "topic_focused"
    BALANCED = "balanced"


# (boost when the item matches the strategy's filter, boost otherwise)
STRATEGY_BOOSTS = {
    ContentStrategy.SHORTS_ONLY: (0.3, 0.0),
    ContentStrategy.DISCOVERY_SHORTS: (0.4, 0.1),
    ContentStrategy.DEEP_DIVE: (0.3, 0.0),
    ContentStrategy.TOPIC_FOCUSED: (0.2, 0.2),
    ContentStrategy.BALANCED: (0.1, 0.1),
}

STRATEGY_REASONS = {
    ContentStrategy.SHORTS_ONLY: "Quick content perfect for your current session",
    ContentStrategy.DISCOVERY_SHORTS: "Exploring new topics with short content",
    ContentStrategy.DEEP_DIVE: "Deep dive into topics you care about",
    ContentStrategy.TOPIC_FOCUSED: "Focused content matching your interests",
    ContentStrategy.BALANCED: "Personalized mix for you",
}


def is_short(content: Content) -> bool:
    seconds = content.duration_seconds
    if seconds is not None and SHORTS_MIN_SECONDS <= seconds <= SHORTS_MAX_SECONDS:
        return True
    return content.type in SHORT_TYPES


def is_in_shorts_mode(recent_content: Sequence[Content]) -> bool:
    """recent_content is most recent first."""
    window = list(recent_content)[:SHORTS_MODE_WINDOW]
    return sum(1 for c in window if is_short(c)) >= SHORTS_MODE_MIN


def determine_strategy(
    profile: Optional[BehavioralProfile],
    recent_content: Sequence[Content] = (),
) -> ContentStrategy:
    if profile is None or profile.engagement is None:
        return ContentStrategy.BALANCED
    classification = profile.engagement.classification
    if is_in_shorts_mode(recent_content):
        if classification == EngagementClassification.EXPLORER:
            return ContentStrategy.DISCOVERY_SHORTS
        return ContentStrategy.SHORTS_ONLY
    if classification == EngagementClassification.DEEP_LEARNER:
        return ContentStrategy.DEEP_DIVE
    if classification == EngagementClassification.SPECIALIST:
        return ContentStrategy.TOPIC_FOCUSED
    return ContentStrategy.BALANCED


def matches_strategy(content: Content, strategy: ContentStrategy) -> bool:
    if strategy in (ContentStrategy.SHORTS_ONLY, ContentStrategy.DISCOVERY_SHORTS):
        return is_short(content)
    if strategy == ContentStrategy.DEEP_DIVE:
        return not is_short(content)
    return True


def strategy_boost(content: Content, strategy: ContentStrategy) -> float:
    matched, unmatched = STRATEGY_BOOSTS.get(strategy, STRATEGY_BOOSTS[ContentStrategy.BALANCED])
    return matched if matches_strategy(content, strategy) else unmatched


def filter_by_strategy(candidates: Sequence[Content], strategy: ContentStrategy) -> List[Content]:
    return [c for c in candidates if matches_strategy(c, strategy)]


def strategy_reason(strategy: ContentStrategy) -> str:
    return STRATEGY_REASONS.get(strategy, STRATEGY_REASONS[ContentStrategy.BALANCED])
