"""Distance metrics between rankings.

A ranking is a sequence indexed by item slot whose values are ranks
1..k. Two metrics are provided: the positional Cook distance and the
Hamming distance between pairwise comparison codes.
"""

from __future__ import annotations

from collections.abc import Sequence


def _check_lengths(a: Sequence[int], b: Sequence[int], name: str) -> None:
    if len(a) != len(b):
        msg = f"Rankings have different lengths in {name}(): {len(a)} != {len(b)}"
        raise ValueError(msg)


def cook_distance(a: Sequence[int], b: Sequence[int]) -> int:
    """Sum of absolute rank differences between two equal-length rankings.

    Raises:
        ValueError: If the rankings differ in length.
    """
    _check_lengths(a, b, "cook_distance")
    return sum(abs(x - y) for x, y in zip(a, b))


def compare_matrix(ranking: Sequence[int]) -> list[list[int]]:
    """Build the k×k pairwise comparison matrix of a ranking.

    Rows and columns are indexed by each value's position in the sorted
    ranking. Cell ``[u][v]`` is +1 when the slot holding value ``u``
    precedes the slot holding value ``v``, -1 when it follows, and 0 on
    the diagonal. Repeated values (unranked 0 cells in partial rows)
    resolve to their first occurrence and compare as equal.
    """
    size = len(ranking)
    order: dict[int, int] = {}
    for index, value in enumerate(sorted(ranking)):
        order.setdefault(value, index)
    slot: dict[int, int] = {}
    for index, value in enumerate(ranking):
        slot.setdefault(value, index)

    matrix = [[0] * size for _ in range(size)]
    for left in ranking:
        for right in ranking:
            if slot[left] < slot[right]:
                cell = 1
            elif slot[left] > slot[right]:
                cell = -1
            else:
                cell = 0
            matrix[order[left]][order[right]] = cell
    return matrix


def upper_triangle(matrix: Sequence[Sequence[int]]) -> list[int]:
    """Flatten the cells strictly above the main diagonal, row by row."""
    return [
        matrix[i][j]
        for i in range(len(matrix))
        for j in range(i + 1, len(matrix[i]))
    ]


def pairwise_code(ranking: Sequence[int]) -> list[int]:
    """Pairwise comparison code of a ranking, length k(k-1)/2."""
    return upper_triangle(compare_matrix(ranking))


def hamming_distance(a: Sequence[int], b: Sequence[int]) -> int:
    """Sum of absolute differences between two pairwise codes.

    Each disagreeing pair contributes 2, so the result is twice the
    number of item pairs the two rankings order differently.

    Raises:
        ValueError: If the codes differ in length.
    """
    _check_lengths(a, b, "hamming_distance")
    return sum(abs(x - y) for x, y in zip(a, b))


def ranking_hamming_distance(a: Sequence[int], b: Sequence[int]) -> int:
    """Hamming distance between the pairwise codes of two rankings."""
    _check_lengths(a, b, "ranking_hamming_distance")
    return hamming_distance(pairwise_code(a), pairwise_code(b))
