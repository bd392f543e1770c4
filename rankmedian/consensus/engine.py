"""Consensus engine for rankmedian.

Runs the full aggregation flow: heuristic filtering, ranking matrix
construction with the item cap, the random reference report, and the
exhaustive median search, returning a single ConsensusBundle.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from rankmedian.consensus.matrix import build_ranking_matrix, complete_rows, filter_votes_for_items
from rankmedian.consensus.reference import random_ranking, reference_distances
from rankmedian.consensus.search import find_medians
from rankmedian.consensus.tally import apply_heuristic, items_for_results, resolve_heuristic
from rankmedian.schemas.catalog import Expert, Heuristic, Item, Vote
from rankmedian.schemas.engine import EngineConfig
from rankmedian.schemas.ranking import (
    ConsensusBundle,
    ItemRankings,
    RankingMedians,
    RankingMethod,
)

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_NOTICE = "Not enough data to calculate consensus rankings."


def rankings_to_items(
    rankings: Sequence[Sequence[int]], columns: Sequence[Item],
) -> list[list[Item]]:
    """Turn slot→rank permutations into item orderings, best item first."""
    orderings: list[list[Item]] = []
    for ranking in rankings:
        slot_of_rank = {rank: slot for slot, rank in enumerate(ranking)}
        orderings.append([columns[slot_of_rank[rank]] for rank in range(1, len(ranking) + 1)])
    return orderings


class ConsensusEngine:
    """Median ranking engine.

    Stateless between calls apart from its configuration; every call to
    ``process`` owns its working data and its own random generator.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def process(
        self,
        items: Sequence[Item],
        votes: Sequence[Vote],
        experts: Sequence[Expert],
        heuristic: str | Heuristic | None = None,
    ) -> ConsensusBundle:
        """Compute consensus rankings for the items a heuristic selects.

        Args:
            items: Full catalog.
            votes: All votes.
            experts: Panel participants; only role ``expert`` is ranked.
            heuristic: Heuristic name, defaulting to the configured one.

        Returns:
            ConsensusBundle. ``medians`` is None when no usable ranking
            rows or no items remain.

        Raises:
            ValueError: If the heuristic name is unknown.
        """
        selected = resolve_heuristic(heuristic or self._config.default_heuristic)

        results = apply_heuristic(votes, items, selected)
        filtered_items = items_for_results(results, items)
        filtered_votes = filter_votes_for_items(filtered_items, votes)

        matrix = build_ranking_matrix(
            filtered_items, filtered_votes, experts, max_items=self._config.max_items,
        )
        notices: list[str] = []
        if matrix.truncated:
            notices.append(
                f"Too many items ({matrix.size + len(matrix.dropped_items)}) for the "
                f"permutation search; kept the {matrix.size} best-ranked."
            )

        if self._config.allow_partial_rows:
            rows = [list(row) for row in matrix.rows]
        else:
            rows = complete_rows(matrix)

        if not rows or matrix.size == 0:
            logger.info(
                "Insufficient data for heuristic %s: %d usable rows, %d items",
                selected.value, len(rows), matrix.size,
            )
            notices.append(INSUFFICIENT_DATA_NOTICE)
            return ConsensusBundle(
                heuristic=selected,
                filtered_items=filtered_items,
                ranking_matrix=matrix,
                notices=notices,
            )

        rng = random.Random(self._config.reference_seed)
        reference = random_ranking(matrix.size, rng)
        distances = reference_distances(reference, rows)

        medians = find_medians(rows, max_items=self._config.max_items)
        item_rankings = self._map_medians(medians, matrix.items)

        logger.info(
            "Consensus for heuristic %s over %d items and %d rankings: "
            "Cook-Sayford=%d, GV=%d, Kemeny-Snell=%d, VG=%d",
            selected.value,
            matrix.size,
            len(rows),
            medians.cook_sayford.distance,
            medians.gv.distance,
            medians.kemeny_snell.distance,
            medians.vg.distance,
        )

        return ConsensusBundle(
            heuristic=selected,
            filtered_items=filtered_items,
            ranking_matrix=matrix,
            usable_rows=rows,
            reference_ranking=reference,
            distances=distances,
            medians=medians,
            item_rankings=item_rankings,
            notices=notices,
        )

    @staticmethod
    def _map_medians(medians: RankingMedians, columns: Sequence[Item]) -> ItemRankings:
        return ItemRankings(
            **{
                method.value: rankings_to_items(medians.get(method).rankings, columns)
                for method in RankingMethod
            }
        )


def process_consensus(
    items: Sequence[Item],
    votes: Sequence[Vote],
    experts: Sequence[Expert],
    heuristic: str | Heuristic | None = None,
    config: EngineConfig | None = None,
) -> ConsensusBundle:
    """Functional wrapper around ``ConsensusEngine(config).process``."""
    return ConsensusEngine(config).process(items, votes, experts, heuristic)
