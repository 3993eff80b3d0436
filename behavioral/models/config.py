"""
Engine configuration: profiling, scoring, and bandit parameters.

BehavioralConfig defaults are defined here. The server may pass a dict
(e.g. loaded from ALGORITHM_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator


class BehavioralConfig(BaseModel):
    """Configuration for behavioral profiling and recommendation scoring."""

    # -------------------------------------------------------------------------
    # Interest Model
    # added = interest_base_value * action_multiplier * min(seconds / 60, max_time_weight)
    # -------------------------------------------------------------------------

    interest_base_value: float = 10.0
    # Keys are lowercase action names. Unknown actions use 1.0.
    action_multipliers: Dict[str, float] = Field(
        default_factory=lambda: {
            "started": 1.0,
            "completed": 2.0,
            "revisited": 3.0,
            "abandoned": 0.5,
        }
    )
    interest_max_time_weight: float = 1.5
    # EMA smoothing: new = old * (1 - alpha) + added * alpha
    interest_ema_alpha: float = 0.3
    # Decay = 0.5 ** (whole_days / half_life)
    interest_half_life_days: float = 7.0
    # Interests below this after decay are removed from the profile.
    interest_removal_threshold: float = 1.0

    # -------------------------------------------------------------------------
    # Journey Model (global transition table, per-user topic sets)
    # -------------------------------------------------------------------------

    common_paths_min_frequency: int = 2
    common_paths_limit: int = 20
    predict_next_limit: int = 3
    # 1 = no floor beyond "has been observed".
    predict_min_frequency: int = 1
    max_transition_sources: int = 50_000
    max_tracked_users: int = 10_000
    lock_stripes: int = 64

    # -------------------------------------------------------------------------
    # Engagement Classifier
    # -------------------------------------------------------------------------

    engagement_max_sessions: int = 10
    engagement_max_users: int = 1_000
    engagement_min_sessions: int = 3

    # -------------------------------------------------------------------------
    # Peak windows (activity by weekday/hour)
    # -------------------------------------------------------------------------

    peak_window_limit: int = 3
    peak_window_max_users: int = 10_000
    # Pseudo-count for a stored window of score 1.0 when counts are rebuilt after a reload
    peak_window_seed_scale: int = 10

    # -------------------------------------------------------------------------
    # Content-based Scoring Weights (must sum to 1.0)
    # content = w_topic*topic + w_type*type + w_difficulty*zpd + w_recency*recency + w_length*length
    # -------------------------------------------------------------------------

    weight_topic: float = 0.4
    weight_type: float = 0.2
    weight_difficulty: float = 0.2
    weight_recency: float = 0.1
    weight_length: float = 0.1

    # base = weight_content * content + weight_collaborative * collaborative
    weight_content: float = 0.7
    weight_collaborative: float = 0.3
    collaborative_min: float = 0.3
    collaborative_max: float = 0.7

    # enhanced = w_base*base + w_interest*interest + w_session*session + strategy_boost, clamped
    weight_enhanced_base: float = 0.4
    weight_behavioral_interest: float = 0.3
    weight_session_context: float = 0.2
    # Raw interest scores are divided by this before entering the enhanced score.
    behavioral_interest_scale: float = 1.0

    # session = w_time*time + w_energy*energy + w_pattern*pattern
    weight_session_time: float = 0.4
    weight_session_energy: float = 0.3
    weight_session_pattern: float = 0.3

    # Used when the user has no stored preferences.
    default_difficulty_preference: int = 3
    default_daily_time_target_minutes: float = 30.0

    # -------------------------------------------------------------------------
    # Bandit Ranking
    # -------------------------------------------------------------------------

    epsilon_by_classification: Dict[str, float] = Field(
        default_factory=lambda: {
            "explorer": 0.4,
            "specialist": 0.1,
            "binge_consumer": 0.3,
            "casual_browser": 0.35,
            "deep_learner": 0.15,
        }
    )
    default_epsilon: float = 0.2

    # -------------------------------------------------------------------------
    # Orchestrator
    # -------------------------------------------------------------------------

    default_limit: int = 10
    recent_content_window: int = 5

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        groups = {
            "content": (
                self.weight_topic,
                self.weight_type,
                self.weight_difficulty,
                self.weight_recency,
                self.weight_length,
            ),
            "base": (self.weight_content, self.weight_collaborative),
            "session": (
                self.weight_session_time,
                self.weight_session_energy,
                self.weight_session_pattern,
            ),
        }
        for name, weights in groups.items():
            total = sum(weights)
            if abs(total - 1.0) > 0.01:
                raise ValueError(f"{name} scoring weights must sum to 1.0, got {total}")
        if self.collaborative_min > self.collaborative_max:
            raise ValueError("collaborative_min must not exceed collaborative_max")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "BehavioralConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        for section in ("interest", "journey", "engagement", "peak_windows", "scoring", "bandit"):
            if section in config_dict:
                flat.update(config_dict[section])
        if "content_weights" in config_dict:
            cw = config_dict["content_weights"]
            for key in ("topic", "type", "difficulty", "recency", "length"):
                if key in cw:
                    flat[f"weight_{key}"] = cw[key]
        if "epsilon" in config_dict:
            flat["epsilon_by_classification"] = dict(config_dict["epsilon"])
        # Top-level keys win over sections.
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = BehavioralConfig()


def resolve_config(config: Optional["BehavioralConfig"]) -> "BehavioralConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
