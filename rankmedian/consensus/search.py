"""Exhaustive consensus (median) ranking search.

Enumerates every permutation of the retained items and keeps, for each
of four objectives, the complete set of permutations tied at the
optimum:

- Cook-Sayford: minimum sum of Cook distances
- GV: minimum maximum Cook distance
- Kemeny-Snell: minimum sum of Hamming distances
- VG: minimum maximum Hamming distance
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from rankmedian.consensus.distance import cook_distance, hamming_distance, pairwise_code
from rankmedian.schemas.engine import MAX_SEARCH_ITEMS
from rankmedian.schemas.ranking import MedianResult, RankingMedians

logger = logging.getLogger(__name__)


@dataclass
class _TieSet:
    """Running optimum that keeps every permutation tied at the best value."""

    best: int | None = None
    rankings: list[tuple[int, ...]] = field(default_factory=list)

    def offer(self, value: int, ranking: tuple[int, ...]) -> None:
        if self.best is None or value < self.best:
            self.best = value
            self.rankings = [ranking]
        elif value == self.best:
            self.rankings.append(ranking)

    def result(self) -> MedianResult:
        return MedianResult(
            rankings=[list(r) for r in self.rankings],
            distance=self.best if self.best is not None else 0,
        )


def generate_permutations(size: int) -> Iterator[tuple[int, ...]]:
    """Yield every permutation of 1..size in lexicographic order."""
    return itertools.permutations(range(1, size + 1))


def _validate_rows(rows: Sequence[Sequence[int]], max_items: int) -> int:
    if not rows:
        raise ValueError("At least one expert ranking is required")
    size = len(rows[0])
    for row in rows:
        if len(row) != size:
            msg = f"Expert rankings have different lengths: {len(row)} != {size}"
            raise ValueError(msg)
    if size < 1:
        raise ValueError("Expert rankings must rank at least one item")
    if size > max_items:
        msg = (
            f"Too many items ({size}) for exhaustive search; "
            f"the limit is {max_items}"
        )
        raise ValueError(msg)
    return size


def find_medians(
    rows: Sequence[Sequence[int]],
    *,
    max_items: int = MAX_SEARCH_ITEMS,
) -> RankingMedians:
    """Find the median rankings of ``rows`` under all four objectives.

    Args:
        rows: Expert rankings, all of the same length k.
        max_items: Largest k accepted.

    Returns:
        RankingMedians with every tied optimal permutation per objective.

    Raises:
        ValueError: If ``rows`` is empty, ragged, or k exceeds ``max_items``.
    """
    size = _validate_rows(rows, max_items)

    expert_codes = [pairwise_code(row) for row in rows]

    cook_sayford = _TieSet()
    gv = _TieSet()
    kemeny_snell = _TieSet()
    vg = _TieSet()

    for permutation in generate_permutations(size):
        cook = [cook_distance(permutation, row) for row in rows]
        cook_sayford.offer(sum(cook), permutation)
        gv.offer(max(cook), permutation)

        code = pairwise_code(permutation)
        hamming = [hamming_distance(code, expert_code) for expert_code in expert_codes]
        kemeny_snell.offer(sum(hamming), permutation)
        vg.offer(max(hamming), permutation)

    logger.debug(
        "Searched %d permutations of %d items against %d rankings",
        math.factorial(size),
        size,
        len(rows),
    )

    return RankingMedians(
        cook_sayford=cook_sayford.result(),
        gv=gv.result(),
        kemeny_snell=kemeny_snell.result(),
        vg=vg.result(),
    )
