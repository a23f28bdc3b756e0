"""Tests for shapes, ring-tuple finders and the rule catalogue."""

import numpy as np

from ringcut.patterns import (
    PATTERN_RULES,
    ChainCheck,
    PairCheck,
    Shape,
    find_ring_tuples,
    shapes_in_use,
)


def synthetic_distances():
    """r = 6 with d(0,2) = 0, d(3,5) = d(2,3) = d(0,1) = 1, everything else 2."""
    dist = np.full((6, 6), 2, dtype=np.int64)
    np.fill_diagonal(dist, 0)
    for (u, v), d in {(0, 2): 0, (3, 5): 1, (2, 3): 1, (0, 1): 1}.items():
        dist[u, v] = dist[v, u] = d
    return dist


class TestShape:
    """Parsing of shape names."""

    def test_parse(self):
        shape = Shape.parse("ab0_ac1_bc1")
        assert shape.size == 3
        assert shape.constraints == ((0, 1, 0), (0, 2, 1), (1, 2, 1))

    def test_size_from_largest_letter(self):
        assert Shape.parse("ab0_bc1_de0").size == 5
        assert Shape.parse("ab1").size == 2

    def test_matches(self):
        dist = synthetic_distances()
        shape = Shape.parse("ab0_bc1")
        assert shape.matches(dist, (0, 2, 3))
        assert not shape.matches(dist, (0, 2, 4))


class TestFindRingTuples:
    """Enumeration of matching ring tuples."""

    def test_pairs(self):
        assert find_ring_tuples(synthetic_distances(), 6, Shape.parse("ab0")) == [(0, 2)]

    def test_triples_both_orientations(self):
        found = find_ring_tuples(synthetic_distances(), 6, Shape.parse("ab0_bc1"))
        assert found == [(0, 2, 3), (2, 0, 1)]

    def test_quadruples(self):
        found = find_ring_tuples(synthetic_distances(), 6, Shape.parse("ab0_cd1"))
        assert found == [(0, 2, 3, 5)]

    def test_no_zero_distances_on_raw_ring(self):
        idx = np.arange(6)
        diff = np.abs(idx[:, None] - idx[None, :])
        dist = np.minimum(diff, 6 - diff)
        assert find_ring_tuples(dist, 6, Shape.parse("ab0")) == []

    def test_tuples_in_cyclic_order(self):
        dist = np.ones((8, 8), dtype=np.int64)
        np.fill_diagonal(dist, 0)
        for vs in find_ring_tuples(dist, 8, Shape.parse("ab1_cd1")):
            forward = [(x - vs[0]) % 8 for x in vs[1:]]
            assert forward == sorted(forward)
            assert len(set(vs)) == 4


class TestCatalogue:
    """Consistency of the rule table."""

    def test_rule_counts(self):
        assert len(PATTERN_RULES) == 124
        assert sum(1 for rule in PATTERN_RULES if rule.cut_size == 6) == 37
        assert sum(1 for rule in PATTERN_RULES if rule.cut_size == 7) == 87

    def test_tags_match_cut_size(self):
        for rule in PATTERN_RULES:
            assert rule.tag.startswith(f"{rule.cut_size}cut-")

    def test_arities(self):
        for rule in PATTERN_RULES:
            size = Shape.parse(rule.shape).size
            assert len(rule.lengths) == size
            assert len(rule.one_edge) == size
            assert sorted(rule.order) == list(range(size))

    def test_check_positions_in_range(self):
        for rule in PATTERN_RULES:
            size = Shape.parse(rule.shape).size
            if isinstance(rule.check, ChainCheck):
                assert all(i < size for i in rule.check.order)
            elif isinstance(rule.check, PairCheck):
                assert all(i < size for i in rule.check.first + rule.check.second)
            else:
                assert rule.check is None

    def test_rotated_order(self):
        rotated = [rule for rule in PATTERN_RULES if rule.tag == "7cut-8" and rule.order == (3, 0, 1, 2)]
        assert len(rotated) == 1
        assert rotated[0].label == "2221-14"

    def test_shapes_in_use(self):
        names = [shape.name for shape in shapes_in_use()]
        assert len(names) == len(set(names))
        assert names[0] == "ab0"
        assert {rule.shape for rule in PATTERN_RULES} == set(names)
