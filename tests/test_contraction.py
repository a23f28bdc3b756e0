"""Tests for the contraction state and the vertex-size checks."""

import dataclasses

import numpy as np
import pytest

from ringcut.configuration import ConfigurationError
from ringcut.contraction import (
    apply_contraction,
    check_degree7,
    forbidden_vertex_size,
    forbidden_vertex_size_pair,
    vertex_size_after_contract,
)
from ringcut.oracle import CycleOracle


class TestApplyContraction:
    """Deriving the frozen contraction state."""

    def test_arrays_read_only(self, wheel6):
        result = apply_contraction(CycleOracle(wheel6), [(0, 6)])
        for array in (result.dist, result.dist_contracted, result.representative, result.inside):
            assert not array.flags.writeable
        with pytest.raises(ValueError):
            result.dist_contracted[0, 0] = 5

    def test_frozen(self, wheel6):
        result = apply_contraction(CycleOracle(wheel6), [])
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.contraction = ((0, 6),)

    def test_representatives(self, wheel6):
        result = apply_contraction(CycleOracle(wheel6), [(0, 6), (1, 6)])
        assert list(result.representative) == [0, 0, 2, 3, 4, 5, 0]
        assert result.dist_contracted[1, 6] == 0
        assert result.dist_contracted[2, 6] == 1

    def test_empty_contraction(self, ring6):
        result = apply_contraction(CycleOracle(ring6), [])
        assert np.array_equal(result.dist, result.dist_contracted)
        for c in (6, 7):
            assert not result.erased(c).any()

    def test_erased_logged(self, pendant, caplog):
        with caplog.at_level("INFO", logger="ringcut.contraction"):
            result = apply_contraction(CycleOracle(pendant), [])
        assert result.inside[6] and result.inside[7]
        assert "vertex 6 is erased by 6" in caplog.text
        assert "vertex 7 is erased by 7" in caplog.text

    def test_bad_edge(self, ring6):
        with pytest.raises(ConfigurationError):
            apply_contraction(CycleOracle(ring6), [(0, 2)])

    def test_first_contracted_path_cached(self, ring8):
        result = apply_contraction(CycleOracle(ring8), [(1, 2)])
        assert result.first_contracted_path(0, 4) == (0, 1, 2, 3, 4)
        assert (0, 4) in result._first_paths


class TestVertexSize:
    """Component sizes after contraction."""

    def test_class_counted_once(self, wheel6):
        result = apply_contraction(CycleOracle(wheel6), [(0, 6), (1, 6)])
        s, t = vertex_size_after_contract(result, range(wheel6.n), 6)
        assert t == 0
        erased = result.erased(6)
        assert s == sum(1 for v in (0, 2, 3, 4, 5) if not erased[v])

    def test_erased_skipped(self, pendant):
        result = apply_contraction(CycleOracle(pendant), [])
        assert vertex_size_after_contract(result, [2, 6, 7], 7) == (1, 0)

    def test_forbidden_vertex_size(self, ring6, uncontracted_result):
        result = uncontracted_result(ring6)
        assert not forbidden_vertex_size(result, [0, 1], 4, 6)
        assert not forbidden_vertex_size(result, [0, 1], 4, 6, rev=True)
        assert forbidden_vertex_size(result, [0, 1], 3, 6, rev=True)
        assert not forbidden_vertex_size(result, [0, 1], 3, 6)

    def test_forbidden_vertex_size_pair(self, ring6, uncontracted_result):
        result = uncontracted_result(ring6)
        assert forbidden_vertex_size_pair(result, [0, 1], [3, 4], 1, 1, 6)

    def test_chain_rejects_far_vertices(self, ring6, uncontracted_result):
        result = uncontracted_result(ring6)
        with pytest.raises(AssertionError):
            forbidden_vertex_size(result, [0, 3], 1, 6)


class TestDegree7:
    """The single degree-7 interior vertex situation."""

    def test_wheel7_is_dangerous(self, wheel7, uncontracted_result):
        assert not check_degree7(uncontracted_result(wheel7))

    def test_wheel6_is_fine(self, wheel6, uncontracted_result):
        assert check_degree7(uncontracted_result(wheel6))

    def test_hub_erased(self, wheel7, uncontracted_result):
        result = uncontracted_result(wheel7)
        inside = np.zeros(wheel7.n, dtype=bool)
        inside[7] = True
        assert check_degree7(dataclasses.replace(result, inside=inside))

    def test_two_interior_vertices(self, pendant, uncontracted_result):
        assert check_degree7(uncontracted_result(pendant))

    def test_hub_contracted_into_ring(self, wheel7):
        result = apply_contraction(CycleOracle(wheel7), [(0, 7)])
        assert check_degree7(result)
