"""Shared pytest fixtures: catalog content factories."""

from datetime import datetime, timedelta, timezone

import pytest

from behavioral.models import Content

# A Monday evening, used wherever scoring depends on the clock
FIXED_NOW = datetime(2024, 1, 1, 19, 0, tzinfo=timezone.utc)


def make_content(content_id, type="video", topics=None, difficulty=None, minutes=None,
                 status="published", age_days=None, now=FIXED_NOW):
    return Content(
        id=content_id,
        type=type,
        title=f"Content {content_id}",
        topics=topics or [],
        difficulty_level=difficulty,
        estimated_duration_minutes=minutes,
        status=status,
        created_at=now - timedelta(days=age_days) if age_days is not None else None,
    )


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def sample_catalog():
    """Mixed-type catalog: 4 videos, 3 articles, 2 quizzes, 1 lesson, plus a draft."""
    items = [
        make_content("v1", "video", ["math"], difficulty=4, minutes=10, age_days=2),
        make_content("v2", "video", ["algebra"], difficulty=3, minutes=25, age_days=40),
        make_content("v3", "video", ["physics"], difficulty=5, minutes=45, age_days=100),
        make_content("v4", "video", ["math", "algebra"], difficulty=4, minutes=12, age_days=10),
        make_content("a1", "article", ["math"], difficulty=2, minutes=8, age_days=5),
        make_content("a2", "article", ["history"], difficulty=4, minutes=15, age_days=15),
        make_content("a3", "article", ["physics"], difficulty=1, minutes=5),
        make_content("q1", "quiz", ["math"], difficulty=4, minutes=1, age_days=1),
        make_content("q2", "quiz", ["algebra"], difficulty=3, minutes=1.5, age_days=3),
        make_content("l1", "lesson", ["math"], difficulty=4, minutes=30, age_days=20),
        make_content("d1", "video", ["math"], status="draft"),
    ]
    return items


class FakeRng:
    """Bandit rng with a fixed draw; permutations come back reversed."""

    def __init__(self, draw):
        self.draw = draw

    def random(self):
        return self.draw

    def permutation(self, n):
        return list(reversed(range(n)))
