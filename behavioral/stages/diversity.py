"""
Type diversity: round-robin across content types in ranked order.

Types are visited in order of first appearance in the ranked list. When every
type is exhausted before the limit, the rest is backfilled from the ranked list
and then from the fallback order (all candidates by score).
"""

from collections import OrderedDict
from typing import List, Optional, Sequence

from ..models.content import Content


def diversify(
    ranked: Sequence[Content],
    limit: int,
    fallback: Optional[Sequence[Content]] = None,
) -> List[Content]:
    by_type: "OrderedDict[str, List[Content]]" = OrderedDict()
    for content in ranked:
        by_type.setdefault(content.type.value, []).append(content)

    selected: List[Content] = []
    chosen = set()
    while len(selected) < limit and by_type:
        for type_name in list(by_type):
            if len(selected) >= limit:
                break
            bucket = by_type[type_name]
            content = bucket.pop(0)
            if content.id not in chosen:
                chosen.add(content.id)
                selected.append(content)
            if not bucket:
                del by_type[type_name]

    for source in (ranked, fallback or ()):
        for content in source:
            if len(selected) >= limit:
                return selected
            if content.id not in chosen:
                chosen.add(content.id)
                selected.append(content)
    return selected
