"""Agreement statistics across the four consensus methods."""

from __future__ import annotations

from rankmedian.schemas.ranking import (
    ConsensusBundle,
    ConsensusStatistics,
    ItemAppearance,
    RankingMethod,
)

# Positions counted as "top" when measuring agreement
_TOP_POSITIONS = (1, 2, 3)
_LEADER_COUNT = 5


def compute_statistics(bundle: ConsensusBundle) -> ConsensusStatistics | None:
    """Summarize how the four median methods agree on the leading items.

    Every tied ranking of every method contributes to the per-item
    position counts.

    Returns:
        ConsensusStatistics, or None when the bundle has no medians.
    """
    if bundle.medians is None:
        return None

    columns = bundle.ranking_matrix.items
    appearances = {item.id: ItemAppearance(item=item) for item in columns}

    for method in RankingMethod:
        for ranking in bundle.medians.get(method).rankings:
            for position in _TOP_POSITIONS:
                if position not in ranking:
                    continue
                item = columns[ranking.index(position)]
                appearances[item.id].counts[position] += 1

    total_methods = len(RankingMethod)
    top_position = sum(1 for a in appearances.values() if a.counts[1] == total_methods)
    top3 = sum(1 for a in appearances.values() if a.top3_total >= total_methods)

    leaders = sorted(
        appearances.values(),
        key=lambda a: (a.counts[1], a.counts[2], a.counts[3]),
        reverse=True,
    )[:_LEADER_COUNT]

    return ConsensusStatistics(
        total_methods=total_methods,
        top_position_agreement=top_position,
        top3_agreement=top3,
        distances={m: bundle.medians.get(m).distance for m in RankingMethod},
        tie_counts={m: len(bundle.medians.get(m).rankings) for m in RankingMethod},
        leaders=leaders,
    )
