"""Typed, recoverable conditions surfaced to callers of the ranking API."""


class RecommendationError(Exception):
    """Base class for recommendation failures."""


class NoContentAvailableError(RecommendationError):
    """No candidate content remains for the user after exclusions."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No content available for user: {user_id}")
