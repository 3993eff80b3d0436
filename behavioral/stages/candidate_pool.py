"""
Stage A: Candidate Pool

Published catalog items the user has not already viewed, completed, or skipped.
"""

from typing import Iterable, List, Set

from ..models.content import Content, ContentStatus


def get_candidate_pool(excluded_ids: Set[str], catalog: Iterable[Content]) -> List[Content]:
    """
    Filter the catalog down to recommendable items.

    Args:
        excluded_ids: Content ids with viewed/completed/skipped interactions.
        catalog: Catalog items (any status).

    Returns:
        Published items not in excluded_ids, in catalog order, without duplicates.
    """
    seen: Set[str] = set()
    candidates: List[Content] = []
    for content in catalog:
        if content.status != ContentStatus.PUBLISHED:
            continue
        if content.id in excluded_ids or content.id in seen:
            continue
        seen.add(content.id)
        candidates.append(content)
    return candidates
