"""Ranking matrix construction.

Builds the dense expert×item matrix that feeds the consensus search and
enforces the item cap that keeps the permutation search tractable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rankmedian.schemas.catalog import Expert, ExpertRole, Item, Vote
from rankmedian.schemas.engine import MAX_SEARCH_ITEMS
from rankmedian.schemas.ranking import RankingMatrix

logger = logging.getLogger(__name__)


def filter_votes_for_items(items: Iterable[Item], votes: Iterable[Vote]) -> list[Vote]:
    """Keep only the votes that refer to one of ``items``."""
    item_ids = {item.id for item in items}
    return [vote for vote in votes if vote.item_id in item_ids]


def _group_votes(votes: Iterable[Vote]) -> dict[str, dict[str, int]]:
    """Voter id → item id → rank. A later vote for the same pair wins."""
    grouped: dict[str, dict[str, int]] = {}
    for vote in votes:
        grouped.setdefault(vote.voter_id, {})[vote.item_id] = vote.rank
    return grouped


def _build_rows(
    columns: Sequence[Item],
    votes_by_expert: dict[str, dict[str, int]],
    experts: Sequence[Expert],
) -> tuple[list[str], list[list[int]]]:
    column_of = {item.id: index for index, item in enumerate(columns)}
    expert_ids: list[str] = []
    rows: list[list[int]] = []

    for expert in experts:
        if expert.role != ExpertRole.EXPERT:
            continue
        ranks = votes_by_expert.get(expert.id)
        if not ranks:
            continue

        row = [0] * len(columns)
        for item_id, rank in ranks.items():
            index = column_of.get(item_id)
            if index is not None:
                row[index] = rank

        if any(row):
            expert_ids.append(expert.id)
            rows.append(row)

    return expert_ids, rows


def _column_key(item: Item) -> tuple[str, str]:
    # case-insensitive id order; exact id breaks ties between case variants
    return item.id.casefold(), item.id


def column_means(rows: Sequence[Sequence[int]], size: int) -> list[float]:
    """Mean rank of each column over all rows; unranked cells count as 0."""
    if not rows:
        return [0.0] * size
    return [sum(row[col] for row in rows) / len(rows) for col in range(size)]


def build_ranking_matrix(
    items: Iterable[Item],
    votes: Iterable[Vote],
    experts: Sequence[Expert],
    *,
    max_items: int = MAX_SEARCH_ITEMS,
) -> RankingMatrix:
    """Build the expert×item ranking matrix for the retained items.

    Columns are the items sorted by id, case-insensitively. Each row
    belongs to an expert (role ``expert``) who ranked at least one of the
    columns. When more
    than ``max_items`` columns remain, only the ``max_items`` columns with
    the lowest mean rank are kept (ties keep id order) and the matrix is
    rebuilt from that reduced set. The mean runs over every row with
    unranked cells counted as 0, so an item few experts ranked can
    outrank one that many experts placed 1st or 2nd.

    Args:
        items: Items retained by the heuristic.
        votes: Votes; those for other items are ignored.
        experts: Panel participants, in row order.
        max_items: Column cap for the permutation search.

    Returns:
        The RankingMatrix, flagged ``truncated`` if columns were pruned.
    """
    if max_items < 1:
        raise ValueError(f"max_items must be positive, got {max_items}")

    columns = sorted(items, key=_column_key)
    votes_by_expert = _group_votes(filter_votes_for_items(columns, votes))
    expert_ids, rows = _build_rows(columns, votes_by_expert, experts)

    if len(columns) <= max_items:
        logger.debug("Ranking matrix: %d experts × %d items", len(rows), len(columns))
        return RankingMatrix(items=columns, expert_ids=expert_ids, rows=rows)

    means = column_means(rows, len(columns))
    best = sorted(range(len(columns)), key=lambda col: means[col])[:max_items]
    kept = [columns[col] for col in sorted(best)]
    dropped = [item for col, item in enumerate(columns) if col not in best]

    logger.warning(
        "Too many items (%d) for permutation search; keeping the %d best-ranked",
        len(columns),
        max_items,
    )

    expert_ids, rows = _build_rows(kept, votes_by_expert, experts)
    return RankingMatrix(
        items=kept,
        expert_ids=expert_ids,
        rows=rows,
        truncated=True,
        dropped_items=dropped,
    )


def is_complete(row: Sequence[int]) -> bool:
    """Whether a row is a permutation of 1..len(row)."""
    return sorted(row) == list(range(1, len(row) + 1))


def complete_rows(matrix: RankingMatrix) -> list[list[int]]:
    """Rows of ``matrix`` that rank every column exactly once."""
    return [list(row) for row in matrix.rows if is_complete(row)]
