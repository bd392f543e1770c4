"""Random reference ranking for comparison displays.

The reference is informational only: it shows how far each expert sits
from an arbitrary ranking and never feeds the consensus search.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from rankmedian.consensus.distance import cook_distance


def random_ranking(size: int, rng: random.Random) -> list[int]:
    """Uniformly random permutation of 1..size (Fisher-Yates shuffle)."""
    ranking = list(range(1, size + 1))
    for i in range(size - 1, 0, -1):
        j = rng.randint(0, i)
        ranking[i], ranking[j] = ranking[j], ranking[i]
    return ranking


def reference_distances(reference: Sequence[int], rows: Sequence[Sequence[int]]) -> list[int]:
    """Cook distance from ``reference`` to every expert row."""
    return [cook_distance(reference, row) for row in rows]
