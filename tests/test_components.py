"""Tests for the regions cut off by ring-anchored paths."""

import numpy as np

from ringcut.components import (
    component_between,
    component_enclosed,
    component_ids_after_cut,
    component_outside,
    ring_interior_counts,
)
from ringcut.distances import apsp


class TestComponentBetween:
    """The side of a path holding the ring arc after its start."""

    def test_chord_sides(self, chord8):
        assert set(component_between(chord8, (1, 8, 5))) == {2, 3, 4, 9}
        assert set(component_between(chord8, (5, 8, 1))) == {6, 7, 0, 10}

    def test_wheel_spokes(self, wheel6):
        assert set(component_between(wheel6, (0, 6, 3))) == {1, 2}
        assert set(component_between(wheel6, (3, 6, 0))) == {4, 5}

    def test_adjacent_endpoints(self, ring6):
        assert component_between(ring6, (0, 1)) == []

    def test_path_excluded(self, chord8):
        side = component_between(chord8, (1, 8, 5))
        assert not {1, 8, 5} & set(side)

    def test_counts(self, chord8):
        assert ring_interior_counts(chord8, component_between(chord8, (1, 8, 5))) == (3, 1)


class TestTwoPathRegions:
    """Regions bounded by two paths."""

    def test_enclosed_on_ring(self, ring8):
        assert set(component_enclosed(ring8, (1, 2, 3), (5, 6, 7, 0))) == {1, 2, 3, 4}

    def test_enclosed_with_chord(self, chord8):
        assert set(component_enclosed(chord8, (1, 8, 5), (7, 0))) == {1, 5, 6, 8, 10}

    def test_outside(self, chord8):
        outside = component_outside(chord8, (1, 8, 5), (5, 8, 1))
        assert set(outside) == {0, 2, 3, 4, 6, 7, 9, 10}
        assert len(outside) == len(set(outside))


class TestComponentIds:
    """Labelling after removing a cut."""

    def test_single_vertex_cut(self, pendant):
        labels = component_ids_after_cut(pendant, apsp(pendant), (6,))
        assert list(labels[:6]) == [0] * 6
        assert labels[6] == -1
        assert labels[7] == 1

    def test_ring_edge_cut(self, pendant):
        labels = component_ids_after_cut(pendant, apsp(pendant), (0, 1))
        assert list(labels) == [-1, -1, 0, 0, 0, 0, 1, 1]

    def test_cut_removes_whole_class(self, wheel6):
        dc = apsp(wheel6, [(0, 6)])
        labels = component_ids_after_cut(wheel6, dc, (6,))
        assert labels[0] == -1 and labels[6] == -1
        assert np.all(labels[1:6] == 0)

    def test_empty_cut(self, chord8):
        labels = component_ids_after_cut(chord8, apsp(chord8), ())
        assert np.all(labels == 0)
