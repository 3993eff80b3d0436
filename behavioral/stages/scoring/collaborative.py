"""
Collaborative scoring placeholder.

Maps a stable hash of (user, content) into [collaborative_min, collaborative_max].
Deterministic across processes and independent of the content-based score.
User/item similarity is not modelled here.
"""

import hashlib
from typing import Optional

from ...models.config import BehavioralConfig, DEFAULT_CONFIG


def collaborative_score(
    user_id: Optional[str],
    content_id: str,
    config: BehavioralConfig = DEFAULT_CONFIG,
) -> float:
    digest = hashlib.sha256(f"{user_id or ''}:{content_id}".encode("utf-8")).digest()
    unit = int.from_bytes(digest[:8], "big") / float(2**64 - 1)
    low, high = config.collaborative_min, config.collaborative_max
    return low + (high - low) * unit
