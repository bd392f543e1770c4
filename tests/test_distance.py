"""Tests for the Cook and Hamming ranking distances."""

import itertools

import pytest

from rankmedian.consensus.distance import (
    compare_matrix,
    cook_distance,
    hamming_distance,
    pairwise_code,
    ranking_hamming_distance,
    upper_triangle,
)

_PERMS_4 = [list(p) for p in itertools.permutations(range(1, 5))]


class TestCookDistance:
    def test_known_value(self):
        assert cook_distance([1, 2, 3], [3, 2, 1]) == 4

    @pytest.mark.parametrize("ranking", _PERMS_4)
    def test_identity(self, ranking):
        assert cook_distance(ranking, ranking) == 0

    def test_symmetry(self):
        for a, b in itertools.product(_PERMS_4, repeat=2):
            assert cook_distance(a, b) == cook_distance(b, a)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="different lengths in cook_distance"):
            cook_distance([1, 2, 3], [1, 2])


class TestCompareMatrix:
    def test_identity_ranking(self):
        assert compare_matrix([1, 2, 3]) == [
            [0, 1, 1],
            [-1, 0, 1],
            [-1, -1, 0],
        ]

    def test_indexed_by_rank_value(self):
        # value 1 sits in slot 2, value 2 in slot 0, value 3 in slot 1
        assert compare_matrix([2, 3, 1]) == [
            [0, -1, -1],
            [1, 0, 1],
            [1, -1, 0],
        ]

    @pytest.mark.parametrize("ranking", _PERMS_4)
    def test_antisymmetric(self, ranking):
        matrix = compare_matrix(ranking)
        size = len(ranking)
        for i in range(size):
            assert matrix[i][i] == 0
            for j in range(size):
                assert matrix[i][j] == -matrix[j][i]

    def test_repeated_zeros_compare_equal(self):
        matrix = compare_matrix([0, 1, 0])
        assert matrix[0][0] == 0
        # value 0 first appears in slot 0, before value 1 in slot 1
        assert matrix[0][2] == 1
        assert matrix[2][0] == -1


class TestPairwiseCode:
    @pytest.mark.parametrize("size", range(1, 8))
    def test_length(self, size):
        assert len(pairwise_code(list(range(1, size + 1)))) == size * (size - 1) // 2

    def test_reversed_ranking(self):
        assert pairwise_code([3, 2, 1]) == [-1, -1, -1]

    def test_upper_triangle_row_major(self):
        assert upper_triangle([[0, 1, 2], [3, 0, 4], [5, 6, 0]]) == [1, 2, 4]


class TestHammingDistance:
    @pytest.mark.parametrize("ranking", _PERMS_4)
    def test_identity(self, ranking):
        code = pairwise_code(ranking)
        assert hamming_distance(code, code) == 0

    def test_full_reversal(self):
        assert ranking_hamming_distance([1, 2, 3], [3, 2, 1]) == 6

    def test_counts_each_swapped_pair_twice(self):
        assert ranking_hamming_distance([1, 2, 3, 4], [2, 1, 3, 4]) == 2

    def test_symmetry(self):
        for a, b in itertools.product(_PERMS_4, repeat=2):
            assert ranking_hamming_distance(a, b) == ranking_hamming_distance(b, a)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="different lengths in hamming_distance"):
            hamming_distance([1, -1, 1], [1])

    def test_ranking_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="different lengths"):
            ranking_hamming_distance([1, 2], [1, 2, 3])
