"""Tests for the forbidden cut / cycle oracle."""

import numpy as np
import pytest

from ringcut.oracle import (
    CycleOracle,
    can_be_almost_minimal,
    can_be_almost_minimal_mixed,
    is_forbidden_cut,
    isolated_size,
)


class TestForbiddenCut:
    """Size limits for regions isolated by short cuts."""

    @pytest.mark.parametrize("cut_size, component_size, expected", [
        (3, 0, False),
        (4, 1, True),
        (5, 1, False),
        (5, 2, True),
        (6, 3, False),
        (6, 4, True),
        (7, 4, False),
        (7, 5, True),
        (8, 100, False),
    ])
    def test_table(self, cut_size, component_size, expected):
        assert is_forbidden_cut(cut_size, component_size) is expected

    def test_monotone_in_component_size(self):
        for cut_size in range(3, 9):
            values = [is_forbidden_cut(cut_size, s) for s in range(10)]
            assert values == sorted(values)

    def test_isolated_size(self):
        assert isolated_size(3, 1, 0) == 3
        assert isolated_size(0, 0, 0) == 0
        assert isolated_size(2, 0, 5) == 0


class TestAlmostMinimal:
    """Paths that may themselves be part of the minimal cycle."""

    def test_ring_path(self, ring6):
        assert can_be_almost_minimal(ring6, (0, 1, 2, 3), 3, 7)
        assert not can_be_almost_minimal(ring6, (0, 1, 2), 3, 7)

    def test_seven_cycle_in_six_cycle(self, wheel6):
        assert can_be_almost_minimal(wheel6, (0, 6, 3), 5, 6)
        assert not can_be_almost_minimal(wheel6, (0, 6, 3), 5, 7)

    def test_mixed(self, ring6):
        assert can_be_almost_minimal_mixed(ring6, (1, 2), (4, 5), 0, 4, 6)
        assert can_be_almost_minimal_mixed(ring6, (1, 2), (4, 5), 1, 4, 6)
        assert not can_be_almost_minimal_mixed(ring6, (1, 2), (4, 5), 1, 4, 7)


class TestCycleOracle:
    """Short-cycle criteria on the bare 6-ring."""

    @pytest.fixture
    def oracle(self, ring6):
        return CycleOracle(ring6)

    def test_length_tables(self, oracle):
        expected = {0: 0, 1: 1, 2: 1, 3: 3, 4: 3, 5: 4}
        for c in (6, 7):
            table = oracle.length[c]
            for p in range(6):
                for q in range(6):
                    assert table[p, q] == expected[(q - p) % 6]

    def test_length_table_shape(self, wheel7):
        oracle = CycleOracle(wheel7)
        for c in (6, 7):
            assert oracle.length[c].shape == (7, 7)
            assert oracle.length_one_edge[c].shape == (7, 7)
            assert np.all(np.diag(oracle.length[c]) == 0)

    def test_one_edge_tables(self, oracle):
        expected = {0: 0, 1: 1, 2: 1, 3: 1, 4: 2, 5: 3}
        for c in (6, 7):
            table = oracle.length_one_edge[c]
            for p in range(6):
                for q in range(6):
                    assert table[p, q] == expected[(q - p) % 6]

    def test_forbidden_cycle_one_edge(self, oracle):
        # the reverse arc isolates three ring vertices behind a 4-cycle
        assert oracle.forbidden_cycle_one_edge(0, 4, 1, 6)
        assert not oracle.forbidden_cycle_one_edge(0, 4, 2, 6)
        assert oracle.forbidden_cycle_one_edge(0, 5, 2, 7)
        assert not oracle.forbidden_cycle_one_edge(0, 5, 3, 7)

    def test_one_edge_rest_of_cycle(self, oracle):
        # 2..5 lie behind a 4-cycle through the extra edge and the arc 0-1
        assert oracle.forbidden_cycle_one_edge(0, 1, 4, 6)
        assert not oracle.forbidden_cycle_one_edge(0, 1, 3, 6)

    def test_forbidden_cycle(self, oracle):
        assert not oracle.forbidden_cycle(0, 3, 3, 6)
        assert oracle.forbidden_cycle(0, 1, 2, 6)
        assert oracle.forbidden_cycle(0, 2, 0, 6)
        assert not oracle.forbidden_cycle(0, 2, 1, 6)

    def test_short_cycle_memoised(self, oracle):
        first = oracle.check_short_cycle(0, 2, 0, 6)
        assert (0, 2, 0, 6) in oracle._short_cycle
        assert oracle.check_short_cycle(0, 2, 0, 6) is first

    def test_component_size(self, oracle):
        assert oracle.component_size((0, 5, 4, 3, 2)) == (1, 0)

    def test_is_valid(self, oracle):
        assert oracle.is_valid((0, 3), (3, 3), (False, False))
        assert not oracle.is_valid((0, 1), (2, 4), (False, False))

    def test_lower_bound_zero_for_length_three(self, oracle):
        assert oracle.lower_bound_cycle(0, 1, 3, 4, 3, 0, 6) == 0

    def test_lower_bound_length_two_then_one(self, oracle):
        assert oracle.lower_bound_cycle(0, 2, 3, 4, 2, 1, 6) == 5
        assert oracle.lower_bound_cycle(0, 3, 4, 5, 2, 1, 6) == 6

    def test_lower_bound_length_two_alone(self, oracle):
        assert oracle.lower_bound_cycle(0, 3, 4, 5, 2, 0, 7) == 7

    def test_lower_bound_length_one_then_two(self, oracle):
        assert oracle.lower_bound_cycle(0, 1, 2, 4, 1, 2, 6) == 5

    def test_ring_paths_cover_pairs(self, oracle):
        assert len(oracle.ring_paths) == 30
