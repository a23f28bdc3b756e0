"""
Forbidden cut / cycle oracle.

Integer criteria deciding whether a hypothesised short cycle through the
ring is compatible with the minimality of the surrounding 6- or 7-cycle.
Everything here works on the raw (uncontracted) graph.
"""

from __future__ import annotations
import logging
from typing import Sequence

import numpy as np

from .configuration import Configuration, VertexPath
from .components import component_between, ring_interior_counts
from .paths import all_ring_paths, ring_edge_count

logger = logging.getLogger(__name__)

# Lengths of the surrounding cycle under test.
CUT_SIZES = (6, 7)


def is_forbidden_cut(cut_size: int, component_size: int) -> bool:
    """
    Minimum component size that a cut of the given size may not isolate.

    A cut of size <= 4 isolates nothing, 5 at most one vertex, 6 at most
    three, 7 at most four. Larger cuts are unrestricted.
    """
    if cut_size <= 4:
        return component_size > 0
    if cut_size == 5:
        return component_size > 1
    if cut_size == 6:
        return component_size > 3
    if cut_size == 7:
        return component_size > 4
    return False


def isolated_size(ring_count: int, interior_count: int, slack: int) -> int:
    """
    Effective size of a cut-off region.

    Ring vertices count half (rounded down, after discounting the ring
    vertices the outer connector may absorb); interior vertices count fully.
    """
    return max(ring_count - slack + 1, 0) // 2 + interior_count


def can_be_almost_minimal(conf: Configuration, path: VertexPath, k: int, cut_size: int) -> bool:
    """
    Whether path plus an outer connector of length k may be the minimal cycle itself.

    True if the path runs entirely along the ring (and the cycle has length
    at least 6), or if it leaves the ring on at most three edges and closes
    a 7-cycle inside a 6-cycle.
    """
    conf.require_ring(path[0], path[-1])
    pathlen = len(path) - 1
    assert pathlen >= 1
    in_ring = ring_edge_count(conf, path)
    return (
        (in_ring == pathlen and pathlen + k >= 6)
        or ((pathlen <= 3 or in_ring >= pathlen - 3) and pathlen + k == 7 and cut_size == 6)
    )


def can_be_almost_minimal_pair(
    conf: Configuration,
    path1: VertexPath,
    path2: VertexPath,
    k1: int,
    k2: int,
    cut_size: int
) -> bool:
    """Two-path version of can_be_almost_minimal: lengths and ring edges are summed."""
    conf.require_ring(path1[0], path1[-1], path2[0], path2[-1])
    in_ring = ring_edge_count(conf, path1) + ring_edge_count(conf, path2)
    pathlen = len(path1) + len(path2) - 2
    k = k1 + k2
    return (
        (in_ring == pathlen and pathlen + k >= 6)
        or ((pathlen <= 3 or in_ring >= pathlen - 3) and pathlen + k == 7 and cut_size == 6)
    )


def can_be_almost_minimal_mixed(
    conf: Configuration,
    path1: VertexPath,
    path2: VertexPath,
    k1: int,
    k2: int,
    cut_size: int
) -> bool:
    """
    Variant for a contractible / reverse-contractible pair.

    Counts the edges off the ring (both paths plus the first connector) and
    allows the trivial all-ring case or at most three inside edges closing a
    7-cycle in a 6-cycle.
    """
    conf.require_ring(path1[0], path1[-1], path2[0], path2[-1])
    pathlen1 = len(path1) - 1
    pathlen2 = len(path2) - 1
    num_inside = k1 + (pathlen1 - ring_edge_count(conf, path1)) + (pathlen2 - ring_edge_count(conf, path2))
    total = pathlen1 + pathlen2 + k1 + k2
    return (num_inside == 0 and total >= 6) or (num_inside <= 3 and total == 7 and cut_size == 6)


class CycleOracle:
    """
    Short-cycle criteria for one configuration.

    Precomputes every simple ring-to-ring path of at most seven edges and the
    outer-path lower-bound tables for both cycle lengths. Query results are
    memoised; the oracle is immutable after construction.

    Attributes:
        conf: The configuration
        ring_paths: (p, q) -> all simple p-q paths
        length: cut size -> r x r table of least admissible outer path lengths
        length_one_edge: same, for cycles closed through one extra edge
    """

    def __init__(self, conf: Configuration):
        self.conf = conf
        self.ring_paths = all_ring_paths(conf)
        self._sizes: dict[VertexPath, tuple[int, int]] = {}
        self._short_cycle: dict[tuple[int, int, int, int], bool] = {}
        self._one_edge: dict[tuple[int, int, int, int], bool] = {}

        logger.debug("enumerated %d ring paths", sum(len(v) for v in self.ring_paths.values()))
        self.length = {c: self._outer_length_table(c, one_edge=False) for c in CUT_SIZES}
        self.length_one_edge = {c: self._outer_length_table(c, one_edge=True) for c in CUT_SIZES}

    def component_size(self, path: VertexPath) -> tuple[int, int]:
        """(#ring, #interior) of component_between(path), memoised."""
        if path not in self._sizes:
            self._sizes[path] = ring_interior_counts(self.conf, component_between(self.conf, path))
        return self._sizes[path]

    def check_short_cycle(self, a: int, b: int, k: int, cut_size: int) -> bool:
        """
        Whether an a-b contractibly connected outer path of length k is excluded.

        Closes every internal a-b path R into a cycle with the outer path and
        looks for one that isolates too much, unless R could be the minimal
        cycle itself. A cycle of length 5 around two degree-<=4 ring vertices
        is excluded as well.
        """
        key = (a, b, k, cut_size)
        if key in self._short_cycle:
            return self._short_cycle[key]
        self.conf.require_ring(a, b)
        assert a != b

        result = False
        r = self.conf.r
        for path in self.ring_paths[(a, b)]:
            if can_be_almost_minimal(self.conf, path, k, cut_size):
                continue
            m = len(path) - 1
            s, t = self.component_size(path)
            if is_forbidden_cut(k + m, isolated_size(s, t, max(k - 1, 0))):
                result = True
                break
            if (
                ((k == 2 and m == 3) or (k == 1 and m == 4))
                and s == 2 and t == 0
                and self.conf.degree((a + 1) % r) <= 4
                and self.conf.degree((a + 2) % r) <= 4
            ):
                result = True
                break
        self._short_cycle[key] = result
        return result

    def forbidden_cycle(self, a: int, b: int, k: int, cut_size: int) -> bool:
        """
        Whether replacing the ring arc a -> b by an outer path of length k is excluded.

        Equal length is the minimal cycle itself; a longer outer path makes
        the swapped cycle shorter than the minimum; a shorter one is decided
        by check_short_cycle.
        """
        assert cut_size in CUT_SIZES
        assert k <= cut_size
        q = self.conf.arc_length(a, b)
        if q == k:
            return False
        if q < k:
            return True
        return self.check_short_cycle(a, b, k, cut_size)

    def forbidden_cycle_one_edge(self, a: int, b: int, k: int, cut_size: int) -> bool:
        """
        Like forbidden_cycle, for cycles closed through one extra edge.

        First checks the cycle made of the rest of the surrounding cycle,
        the arc a -> b and the extra edge; then every internal a-b path.
        """
        assert cut_size in CUT_SIZES
        assert k <= cut_size
        key = (a, b, k, cut_size)
        if key in self._one_edge:
            return self._one_edge[key]

        r = self.conf.r
        q = self.conf.arc_length(a, b)
        arc = tuple((a + i) % r for i in range(q + 1))[::-1]
        s, t = self.component_size(arc)
        length = cut_size - k + q + 1
        result = (
            not (length == 7 and cut_size == 6)
            and is_forbidden_cut(length, isolated_size(s, t, max(cut_size - k - 1, 0)))
        )

        if not result:
            assert a != b
            for path in self.ring_paths[(a, b)]:
                m = len(path) - 1
                in_ring = ring_edge_count(self.conf, path)
                if (m <= 2 or in_ring >= m - 2) and k + m + 1 == 7 and cut_size == 6:
                    continue
                s, t = self.component_size(path)
                if is_forbidden_cut(k + m + 1, isolated_size(s, t, max(k - 1, 0))):
                    result = True
                    break
        self._one_edge[key] = result
        return result

    def _outer_length_table(self, cut_size: int, one_edge: bool) -> np.ndarray:
        r = self.conf.r
        table = np.zeros((r, r), dtype=np.int64)
        forbidden = self.forbidden_cycle_one_edge if one_edge else self.forbidden_cycle
        start = 1 if one_edge else 0
        for p in range(r):
            for q in range(r):
                if p == q:
                    continue
                if q == (p + 1) % r:
                    table[p, q] = 1
                    continue
                k = start
                while k <= cut_size and forbidden(p, q, k, cut_size):
                    k += 1
                table[p, q] = k
        return table

    def lower_bound_cycle(
        self,
        p1: int,
        q1: int,
        p2: int,
        q2: int,
        pathlen1: int,
        pathlen2: int,
        cut_size: int
    ) -> int:
        """
        Lower bound on the surrounding cycle given two non-contractible outer paths.

        The ring vertices appear in order p1, q1, p2, q2; a p1-q1 outer path
        of length pathlen1 and a p2-q2 outer path of length pathlen2 exist.
        The bound also considers cycles passing the midpoint of a length-2
        path once, or an endpoint of a length-1 path twice.

        Returns:
            Lower bound on the cycle length; callers prune when it exceeds
            cut_size. 0 when either path has length 3.
        """
        assert pathlen1 + pathlen2 <= 3
        length = self.length[cut_size]
        one = self.length_one_edge[cut_size]

        vertical = max(length[p1, q1], 2 - pathlen1) + max(length[p2, q2], 2 - pathlen2)
        horizontal = length[q1, p2] + length[q2, p1]
        bound = _combine(vertical, horizontal, pathlen1 + pathlen2, 6 - pathlen1 - pathlen2)

        crossing = min(length[q2, p1] + one[q1, p2], one[q2, p1] + length[q1, p2])
        if pathlen1 == 2:
            v1 = max(one[p1, q1], 1) + max(length[p2, q2], 2 - pathlen2)
            bound = min(bound, _combine(v1, crossing, pathlen2 + 1, 5 - pathlen2))
            if pathlen2 == 1:
                v2 = max(length[p1, q1], 2 - pathlen1) + max(one[p2, q2], 2)
                bound = min(bound, _combine(v2, crossing, pathlen1, 6 - pathlen1))
        if pathlen2 == 2:
            v1 = max(length[p1, q1], 2 - pathlen1) + max(one[p2, q2], 1)
            bound = min(bound, _combine(v1, crossing, pathlen1 + 1, 5 - pathlen1))
            if pathlen1 == 1:
                v2 = max(one[p1, q1], 2) + max(length[p2, q2], 2 - pathlen2)
                bound = min(bound, _combine(v2, crossing, pathlen2, 6 - pathlen2))
        if pathlen1 == 3 or pathlen2 == 3:
            bound = 0
        return int(bound)

    def is_valid(self, vs: Sequence[int], lens: Sequence[int], one_edge: Sequence[bool]) -> bool:
        """
        Whether a boundary pattern survives every pairwise cycle check.

        Segment i runs from vs[i] to vs[i+1] (cyclically) outside the
        configuration with length lens[i]; one_edge[i] marks segments closed
        through an extra edge. The lengths sum to the cut size.
        """
        assert len(vs) == len(lens) == len(one_edge)
        cut_size = sum(lens)
        assert cut_size in CUT_SIZES

        m = len(vs)
        for i in range(m):
            j = (i + 1) % m
            if one_edge[i] and one_edge[j]:
                continue
            check = self.forbidden_cycle_one_edge if one_edge[i] or one_edge[j] else self.forbidden_cycle
            if check(vs[i], vs[j], lens[i], cut_size) or check(vs[j], vs[i], cut_size - lens[i], cut_size):
                return False
        return True


def _combine(vertical: int, horizontal: int, used: int, budget: int) -> int:
    # both outer regions would be 5-cuts: stretch the shorter side
    if vertical + used <= 5 and horizontal + used <= 5:
        return vertical + horizontal + budget - max(vertical, horizontal)
    return vertical + horizontal
