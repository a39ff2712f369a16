from __future__ import annotations

from typing import Dict, List, Sequence

import deal

from .statements import ClassifiedStatement, Group


def partition(classified: Sequence[ClassifiedStatement]) -> Dict[Group, List[ClassifiedStatement]]:
    """
    Non-empty groups in Group order, each sorted by (kind rank, lowercased
    module path). sorted() is stable: equal keys keep their source order.
    """
    buckets: Dict[Group, List[ClassifiedStatement]] = {}
    for item in classified:
        buckets.setdefault(item.group, []).append(item)
    return {g: sorted(buckets[g], key=lambda c: c.order_key) for g in sorted(buckets)}


@deal.pre(
    lambda classified, newline="\n": all(isinstance(c, ClassifiedStatement) for c in classified),
    message="render expects ClassifiedStatement items",
)
@deal.post(lambda result: isinstance(result, str), message="render returns text")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def render(classified: Sequence[ClassifiedStatement], newline: str = "\n") -> str:
    """
    Canonical block text: groups separated by exactly one blank line, no
    blank line at either edge, no trailing newline. Statement text is emitted
    verbatim.
    """
    segments = [
        newline.join(item.statement.raw_text for item in items)
        for items in partition(classified).values()
    ]
    return (newline + newline).join(segments)
