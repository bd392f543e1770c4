"""Rank aggregation for rankmedian.

Provides vote tallying and heuristic selection, ranking matrix
construction, Cook and Hamming distances, the exhaustive median search,
the random reference report, and the engine tying them together.
"""

from rankmedian.consensus.distance import (
    compare_matrix,
    cook_distance,
    hamming_distance,
    pairwise_code,
    ranking_hamming_distance,
)
from rankmedian.consensus.engine import ConsensusEngine, process_consensus
from rankmedian.consensus.matrix import (
    build_ranking_matrix,
    complete_rows,
    filter_votes_for_items,
)
from rankmedian.consensus.reference import random_ranking, reference_distances
from rankmedian.consensus.search import find_medians, generate_permutations
from rankmedian.consensus.statistics import compute_statistics
from rankmedian.consensus.tally import (
    HEURISTIC_DESCRIPTIONS,
    apply_heuristic,
    count_ranks,
    resolve_heuristic,
)

__all__ = [
    "HEURISTIC_DESCRIPTIONS",
    "ConsensusEngine",
    "apply_heuristic",
    "build_ranking_matrix",
    "compare_matrix",
    "complete_rows",
    "compute_statistics",
    "cook_distance",
    "count_ranks",
    "filter_votes_for_items",
    "find_medians",
    "generate_permutations",
    "hamming_distance",
    "pairwise_code",
    "process_consensus",
    "random_ranking",
    "ranking_hamming_distance",
    "reference_distances",
    "resolve_heuristic",
]
