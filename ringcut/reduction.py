"""
Reductable-vertex calculators.

A vertex is reductable when a small (2- or 3-) cut, either inside the
contracted configuration or closed by short paths outside it, could remove
it. Reductable vertices are ignored when sizing the regions cut off by a
boundary pattern.
"""

from __future__ import annotations
import logging
from functools import lru_cache
from typing import Callable, Iterable

import numpy as np

from .configuration import Configuration, Edge, VertexPath
from .components import (
    component_between,
    component_enclosed,
    component_ids_after_cut,
    component_outside,
    ring_interior_counts,
)
from .distances import representatives, shortest_paths
from .oracle import (
    CUT_SIZES,
    CycleOracle,
    can_be_almost_minimal_mixed,
    can_be_almost_minimal_pair,
    is_forbidden_cut,
    isolated_size,
)

logger = logging.getLogger(__name__)

# Longest outer completion considered for a reducing cut.
MAX_OUTER_EDGES = 3


def ring_quadruples(r: int) -> list[tuple[int, int, int, int]]:
    """All (p1, q1, p2, q2) of distinct ring vertices appearing in this cyclic order."""
    result = []
    for p1 in range(r):
        for q1 in range(p1 + 1, p1 + r):
            for p2 in range(q1 + 1, p1 + r):
                for q2 in range(p2 + 1, p1 + r):
                    result.append((p1, q1 % r, p2 % r, q2 % r))
    return result


def inside_reductable_flags(conf: Configuration, dist_contracted: np.ndarray) -> np.ndarray:
    """
    Vertices removable by a cut of at most three vertices inside the contracted graph.

    Every vertex set of size 1-3 is removed together with its contraction
    classes; components that no longer reach a vertex equivalent to the
    ring are flagged.

    Returns:
        bool array of length n
    """
    attached = (dist_contracted[: conf.r] == 0).any(axis=0)
    flags = np.zeros(conf.n, dtype=bool)

    def mark(cut: tuple[int, ...]) -> None:
        labels = component_ids_after_cut(conf, dist_contracted, cut)
        kept = set(int(x) for x in labels[attached & (labels >= 0)])
        for v in range(conf.n):
            if labels[v] >= 0 and int(labels[v]) not in kept:
                flags[v] = True

    for v0 in range(conf.n):
        mark((v0,))
        for v1 in range(v0):
            mark((v0, v1))
            for v2 in range(v1):
                mark((v0, v1, v2))
    return flags


class ReductionSweep:
    """
    The four outer-cut sweeps for one contraction.

    Each sweep looks for short outer completions (at most three edges in
    total) of one path or a pair of paths between ring vertices that the
    oracle cannot exclude, and flags the configuration vertices the
    corresponding contracted paths would cut off.

    Args:
        conf: The configuration
        oracle: Cycle oracle of the raw graph
        dist: Raw distance matrix
        dist_contracted: Contracted distance matrix
        contraction: Contraction edges
    """

    def __init__(
        self,
        conf: Configuration,
        oracle: CycleOracle,
        dist: np.ndarray,
        dist_contracted: np.ndarray,
        contraction: Iterable[Edge]
    ):
        self.conf = conf
        self.oracle = oracle
        self.dist = dist
        self.dist_contracted = dist_contracted
        self.contraction = tuple(contraction)
        self.representative = representatives(dist_contracted)
        self.shortest = lru_cache(maxsize=None)(self._shortest)

    def _shortest(self, s: int, t: int, contracted: bool) -> list[VertexPath]:
        return shortest_paths(self.conf, s, t, self.contraction if contracted else ())

    def _mark(self, flags: np.ndarray, component: Iterable[int], *paths: VertexPath) -> None:
        # vertices collapsed into the cutting paths stay
        on_path = {int(self.representative[u]) for path in paths for u in path}
        for v in component:
            if int(self.representative[v]) not in on_path:
                flags[v] = True

    def single_path(self, cut_size: int, flags: np.ndarray) -> None:
        """One p-q path closed by a short contractibly connected outer path."""
        dist, dc = self.dist, self.dist_contracted
        r = self.conf.r
        for p in range(r):
            for q in range(r):
                if p == q:
                    continue
                lo = max(0, 5 - int(dist[p, q]))
                hi = MAX_OUTER_EDGES - int(dc[p, q])
                if lo > hi:
                    continue
                contracted = self.shortest(p, q, True)
                for pathlen in range(lo, hi + 1):
                    if self.oracle.check_short_cycle(p, q, pathlen, cut_size):
                        continue
                    for path in contracted:
                        if len(path) - 1 == dist[p, q]:
                            continue
                        self._mark(flags, component_between(self.conf, path), path)

    def _pair_candidates(self, p1: int, q1: int, p2: int, q2: int, min1: int, min2: int) -> list[tuple[int, int]]:
        dc = self.dist_contracted
        inside = int(dc[q1, p2]) + int(dc[q2, p1])
        hi = MAX_OUTER_EDGES - inside
        result = []
        for pathlen1 in range(min1, hi + 1):
            for pathlen2 in range(min2, hi + 1):
                if pathlen1 + pathlen2 + inside <= MAX_OUTER_EDGES:
                    result.append((pathlen1, pathlen2))
        return result

    def _mark_pairs(self, flags: np.ndarray, q1: int, p2: int, q2: int, p1: int, region: Callable) -> None:
        dist = self.dist
        for path1 in self.shortest(q1, p2, True):
            for path2 in self.shortest(q2, p1, True):
                if len(path1) - 1 == dist[q1, p2] and len(path2) - 1 == dist[q2, p1]:
                    continue
                self._mark(flags, region(self.conf, path1, path2), path1, path2)

    def contractible_pair(self, cut_size: int, flags: np.ndarray) -> None:
        """Contractible outer paths p1-q1 and p2-q2 joined by chords q1-p2, q2-p1."""
        dist = self.dist
        for p1, q1, p2, q2 in ring_quadruples(self.conf.r):
            min1 = max(0, 5 - int(dist[p1, q1]))
            min2 = max(0, 5 - int(dist[p2, q2]))
            for pathlen1, pathlen2 in self._pair_candidates(p1, q1, p2, q2, min1, min2):
                if self.oracle.check_short_cycle(p1, q1, pathlen1, cut_size):
                    continue
                if self.oracle.check_short_cycle(p2, q2, pathlen2, cut_size):
                    continue
                if self._has_small_cut(q1, p2, q2, p1, pathlen1, pathlen2, cut_size, mixed=False):
                    continue
                self._mark_pairs(flags, q1, p2, q2, p1, component_enclosed)

    def mixed_pair(self, cut_size: int, flags: np.ndarray) -> None:
        """Contractible p1-q1 outer path with a reverse-contractible q2-p2 outer path."""
        dist = self.dist
        for p1, q1, p2, q2 in ring_quadruples(self.conf.r):
            min1 = max(0, 5 - int(dist[p1, q1]))
            min2 = max(0, 5 - int(dist[p2, q2]))
            for pathlen1, pathlen2 in self._pair_candidates(p1, q1, p2, q2, min1, min2):
                if self.oracle.check_short_cycle(p1, q1, pathlen1, cut_size):
                    continue
                if self.oracle.check_short_cycle(q2, p2, pathlen2, cut_size):
                    continue
                if self._has_small_cut(q1, p2, q2, p1, pathlen1, pathlen2, cut_size, mixed=True):
                    continue
                self._mark_pairs(flags, q1, p2, q2, p1, component_outside)

    def _has_small_cut(
        self,
        q1: int,
        p2: int,
        q2: int,
        p1: int,
        pathlen1: int,
        pathlen2: int,
        cut_size: int,
        mixed: bool
    ) -> bool:
        conf = self.conf
        slack = max(pathlen1 + pathlen2 - 2, 0)
        for path1 in self.shortest(q1, p2, False):
            for path2 in self.shortest(q2, p1, False):
                if mixed:
                    if can_be_almost_minimal_mixed(conf, path1, path2, pathlen1, pathlen2, cut_size):
                        continue
                    region = component_outside(conf, path1, path2)
                else:
                    if can_be_almost_minimal_pair(conf, path1, path2, pathlen1, pathlen2, cut_size):
                        continue
                    region = component_enclosed(conf, path1, path2)
                s, t = ring_interior_counts(conf, region)
                cycle = len(path1) + len(path2) - 2 + pathlen1 + pathlen2
                if is_forbidden_cut(cycle, isolated_size(s, t, slack)):
                    return True
        return False

    def noncontractible_pair(self, cut_size: int, flags: np.ndarray) -> None:
        """
        Non-contractible outer paths p1-q1 and p2-q2.

        Uses every internal q1-p2 and q2-p1 path (not only the shortest) and
        prunes by the lower bound on the surrounding cycle first.
        """
        conf, dc = self.conf, self.dist_contracted
        r = conf.r
        for p1, q1, p2, q2 in ring_quadruples(r):
            if (q1 + 1) % r == p2 and (q2 + 1) % r == p1:
                continue
            min1 = max(2 - int(dc[p1, q1]), 0)
            min2 = max(2 - int(dc[p2, q2]), 0)
            for pathlen1, pathlen2 in self._pair_candidates(p1, q1, p2, q2, min1, min2):
                bound = self.oracle.lower_bound_cycle(p1, q1, p2, q2, pathlen1, pathlen2, cut_size)
                if bound > cut_size:
                    continue
                if self._has_short_separator(q1, p2, q2, p1, pathlen1 + pathlen2):
                    continue
                self._mark_pairs(flags, q1, p2, q2, p1, component_outside)

    def _has_short_separator(self, q1: int, p2: int, q2: int, p1: int, outer: int) -> bool:
        conf = self.conf
        budget = 5 - outer
        path1s = [path for path in self.oracle.ring_paths[(q1, p2)] if len(path) - 1 <= budget]
        path2s = [path for path in self.oracle.ring_paths[(q2, p1)] if len(path) - 1 <= budget]
        slack = max(outer - 2, 0)
        for path1 in path1s:
            for path2 in path2s:
                length = outer + len(path1) - 1 + len(path2) - 1
                if length > 5:
                    continue
                s, t = ring_interior_counts(conf, component_outside(conf, path1, path2))
                size = isolated_size(s, t, slack)
                if (length <= 4 and size > 0) or (length == 5 and size > 1):
                    return True
        return False

    def outside_flags(self, cut_size: int) -> np.ndarray:
        """
        Vertices removable by an outer cut inside a cut_size-cycle.

        Returns:
            bool array of length n, the union of all four sweeps
        """
        assert cut_size in CUT_SIZES
        flags = np.zeros(self.conf.n, dtype=bool)
        for sweep in (self.single_path, self.contractible_pair, self.noncontractible_pair, self.mixed_pair):
            sweep(cut_size, flags)
            logger.debug("%s (%d-cycle): %d vertices flagged", sweep.__name__, cut_size, int(flags.sum()))
        return flags
