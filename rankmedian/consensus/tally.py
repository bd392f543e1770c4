"""Vote tallying and heuristic item selection.

Turns raw votes into per-item statistics and narrows the catalog with
one of eight named heuristics before the ranking matrix is built.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from rankmedian.schemas.catalog import Heuristic, Item, Vote
from rankmedian.schemas.ranking import VotingResult

logger = logging.getLogger(__name__)

# Points awarded for a vote are (_POINTS_BASE - rank): 3 for 1st, 2 for 2nd, 1 for 3rd
_POINTS_BASE = 4

HEURISTIC_DESCRIPTIONS: dict[Heuristic, tuple[str, str]] = {
    Heuristic.STANDARD: (
        "Standard Ranking",
        "Ranks items by total points (3 for 1st place, 2 for 2nd, 1 for 3rd).",
    ),
    Heuristic.H1: (
        "Third Place Mentions (H1)",
        "Items ranked 3rd in at least one vote, most 3rd-place mentions first.",
    ),
    Heuristic.H2: (
        "Second Place Mentions (H2)",
        "Items ranked 2nd in at least one vote, most 2nd-place mentions first.",
    ),
    Heuristic.H3: (
        "First Place Mentions (H3)",
        "Items ranked 1st in at least one vote, most 1st-place mentions first.",
    ),
    Heuristic.H4: (
        "Multiple Third Place Mentions (H4)",
        "Items ranked 3rd in at least two votes.",
    ),
    Heuristic.H5: (
        "Third and Second Place Mentions (H5)",
        "Items ranked 3rd in one vote and 2nd in another, by combined mentions.",
    ),
    Heuristic.H6: (
        "Fewest Mentions (H6)",
        "Items with at least one vote, fewest total mentions first.",
    ),
    Heuristic.H7: (
        "Never in Top 3 (H7)",
        "Items that received no votes at all, sorted by title.",
    ),
}


def resolve_heuristic(name: str | Heuristic) -> Heuristic:
    """Parse a heuristic name.

    Raises:
        ValueError: If the name is not one of the eight known heuristics.
    """
    try:
        return Heuristic(name)
    except ValueError:
        valid = ", ".join(h.value for h in Heuristic)
        msg = f"Unknown heuristic: '{name}'. Choose from: {valid}"
        raise ValueError(msg) from None


def count_ranks(votes: Iterable[Vote], items: Sequence[Item]) -> list[VotingResult]:
    """Tally points, vote counts and rank mentions for every catalog item.

    Results follow catalog order. Votes referring to items outside the
    catalog are ignored.
    """
    results: dict[str, VotingResult] = {
        item.id: VotingResult(item_id=item.id, title=item.title, artist=item.artist)
        for item in items
    }

    for vote in votes:
        result = results.get(vote.item_id)
        if result is None:
            continue
        result.total_points += _POINTS_BASE - vote.rank
        result.vote_count += 1
        result.rank_counts[vote.rank] = result.rank_counts.get(vote.rank, 0) + 1

    return list(results.values())


def _select(
    results: list[VotingResult],
    keep: Callable[[VotingResult], bool],
    key: Callable[[VotingResult], object],
    *,
    reverse: bool = False,
) -> list[VotingResult]:
    # sorted() is stable, so ties keep catalog order even with reverse=True
    return sorted((r for r in results if keep(r)), key=key, reverse=reverse)


def apply_heuristic(
    votes: Iterable[Vote],
    items: Sequence[Item],
    heuristic: str | Heuristic,
) -> list[VotingResult]:
    """Tally votes and keep/sort items according to a named heuristic.

    Args:
        votes: Flat collection of votes.
        items: Full catalog, in catalog order.
        heuristic: One of the eight heuristic names.

    Returns:
        Retained VotingResults in heuristic order.

    Raises:
        ValueError: If the heuristic name is unknown.
    """
    selected = resolve_heuristic(heuristic)
    results = count_ranks(votes, items)

    def voted(r: VotingResult) -> bool:
        return r.vote_count > 0

    match selected:
        case Heuristic.STANDARD:
            retained = _select(results, voted, lambda r: r.total_points, reverse=True)
        case Heuristic.H1:
            retained = _select(
                results, lambda r: r.rank_counts[3] > 0, lambda r: r.rank_counts[3], reverse=True,
            )
        case Heuristic.H2:
            retained = _select(
                results, lambda r: r.rank_counts[2] > 0, lambda r: r.rank_counts[2], reverse=True,
            )
        case Heuristic.H3:
            retained = _select(
                results, lambda r: r.rank_counts[1] > 0, lambda r: r.rank_counts[1], reverse=True,
            )
        case Heuristic.H4:
            retained = _select(
                results, lambda r: r.rank_counts[3] >= 2, lambda r: r.rank_counts[3], reverse=True,
            )
        case Heuristic.H5:
            retained = _select(
                results,
                lambda r: r.rank_counts[3] > 0 and r.rank_counts[2] > 0,
                lambda r: r.rank_counts[2] + r.rank_counts[3],
                reverse=True,
            )
        case Heuristic.H6:
            retained = _select(results, voted, lambda r: r.vote_count)
        case Heuristic.H7:
            # "Never in the top 3" is vote_count == 0 only because votes carry ranks 1-3
            retained = _select(results, lambda r: r.vote_count == 0, lambda r: r.title)

    logger.debug(
        "Heuristic %s kept %d of %d items", selected.value, len(retained), len(results),
    )
    return retained


def items_for_results(results: Iterable[VotingResult], items: Sequence[Item]) -> list[Item]:
    """Map tally results back to their catalog items, preserving result order."""
    by_id = {item.id: item for item in items}
    return [by_id[r.item_id] for r in results if r.item_id in by_id]
