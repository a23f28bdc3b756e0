"""Contraction state and the vertex-size checks that depend on it."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from .configuration import Configuration, Edge, VertexPath
from .components import component_between, component_enclosed
from .distances import apsp, representatives, shortest_paths
from .oracle import CUT_SIZES, CycleOracle
from .reduction import ReductionSweep, inside_reductable_flags

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ContractionResult:
    """
    Everything derived from one contraction set.

    Produced once by apply_contraction; all arrays are read-only.

    Attributes:
        conf: The configuration
        contraction: Contraction edges
        dist: Raw distances
        dist_contracted: Distances with contraction edges at weight 0
        representative: Minimum member of every vertex's contraction class
        inside: Vertices removable by a 2/3-cut inside the contracted graph
        outside: cut size -> vertices removable by an outer cut
    """
    conf: Configuration
    contraction: tuple[Edge, ...]
    dist: np.ndarray
    dist_contracted: np.ndarray
    representative: np.ndarray
    inside: np.ndarray
    outside: dict[int, np.ndarray]
    _first_paths: dict[tuple[int, int], VertexPath] = field(default_factory=dict, init=False, repr=False)

    def erased(self, cut_size: int) -> np.ndarray:
        """Vertices ignored when sizing regions inside a cut_size-cycle."""
        return self.inside | self.outside[cut_size]

    def first_contracted_path(self, s: int, t: int) -> VertexPath:
        """First contracted shortest s-t path in discovery order."""
        key = (s, t)
        if key not in self._first_paths:
            self._first_paths[key] = shortest_paths(self.conf, s, t, self.contraction)[0]
        return self._first_paths[key]


def apply_contraction(oracle: CycleOracle, edges: Iterable[Edge]) -> ContractionResult:
    """
    Contract a set of edges and derive the reduction flags.

    Args:
        oracle: Cycle oracle of the configuration
        edges: Contraction edges (must be edges of the graph)

    Returns:
        The frozen contraction state

    Raises:
        ConfigurationError: If an edge is not in the graph
    """
    conf = oracle.conf
    edges = tuple(edges)
    logger.debug("contracting %s", ", ".join(f"({u}, {v})" for u, v in edges))

    dist = apsp(conf)
    dist_contracted = apsp(conf, edges)
    inside = inside_reductable_flags(conf, dist_contracted)
    sweep = ReductionSweep(conf, oracle, dist, dist_contracted, edges)
    outside = {c: sweep.outside_flags(c) for c in CUT_SIZES}
    representative = representatives(dist_contracted)

    for array in (dist, dist_contracted, inside, representative, *outside.values()):
        array.flags.writeable = False

    result = ContractionResult(
        conf=conf,
        contraction=edges,
        dist=dist,
        dist_contracted=dist_contracted,
        representative=representative,
        inside=inside,
        outside=outside,
    )
    for v in range(conf.n):
        for c in CUT_SIZES:
            if inside[v] or outside[c][v]:
                logger.info("vertex %d is erased by %d", v, c)
    return result


def vertex_size_after_contract(result: ContractionResult, component: Iterable[int], cut_size: int) -> tuple[int, int]:
    """
    Size of a component after contraction.

    Counts one vertex per contraction class (its representative), skipping
    vertices reductable for the given cut size.

    Returns:
        (#ring representatives, #interior representatives)
    """
    assert cut_size in CUT_SIZES
    erased = result.erased(cut_size)
    s = t = 0
    for v in component:
        if erased[v] or result.representative[v] != v:
            continue
        if result.conf.is_ring(v):
            s += 1
        else:
            t += 1
    return s, t


def _chain(result: ContractionResult, vs: Sequence[int]) -> tuple[VertexPath, int]:
    """Concatenate contracted shortest paths through vs; return the path and its contracted length."""
    assert len(vs) >= 2
    result.conf.require_ring(*vs)
    path: VertexPath = (vs[0],)
    length = 0
    for a, b in zip(vs, vs[1:]):
        d = int(result.dist_contracted[a, b])
        assert d <= 1, f"ring vertices {a}, {b} are {d} apart after contraction"
        length += d
        path += result.first_contracted_path(a, b)[1:]
    return path, length


def _too_large(length: int, size: int) -> bool:
    return (length == 4 and size > 0) or (length == 5 and size > 1) or (length == 6 and size > 2)


def forbidden_vertex_size(
    result: ContractionResult,
    vs: Sequence[int],
    k: int,
    cut_size: int,
    rev: bool = False
) -> bool:
    """
    Whether a chain through ring vertices closes a cycle that isolates too much.

    The chain joins consecutive vs by contracted shortest paths; an outer
    path of length k joins vs[-1] back to vs[0]. The cut-off side is the one
    holding the ring vertices after vs[0] (before it when rev).

    Args:
        result: Contraction state
        vs: Ring vertices, consecutive ones at most 1 apart after contraction
        k: Outer path length
        cut_size: Surrounding cycle length (6 or 7)
        rev: Take the other side

    Returns:
        True if the region is too large for the cycle length
    """
    path, length = _chain(result, vs)
    if rev:
        path = path[::-1]
    s, t = vertex_size_after_contract(result, component_between(result.conf, path), cut_size)
    size = max(s - (k - 1) + 1, 0) // 2 + t
    return _too_large(length + k, size)


def forbidden_vertex_size_pair(
    result: ContractionResult,
    vs1: Sequence[int],
    vs2: Sequence[int],
    k1: int,
    k2: int,
    cut_size: int
) -> bool:
    """
    Two-chain version of forbidden_vertex_size.

    Outer paths of length k1 (vs1[-1] to vs2[0]) and k2 (vs2[-1] to vs1[0])
    close the two chains into one cycle; the enclosed region is sized.
    """
    path1, length1 = _chain(result, vs1)
    path2, length2 = _chain(result, vs2)
    s, t = vertex_size_after_contract(result, component_enclosed(result.conf, path1, path2), cut_size)
    size = max(s - max(k1 + k2 - 2, 0) + 1, 0) // 2 + t
    return _too_large(k1 + k2 + length1 + length2, size)


def check_degree7(result: ContractionResult) -> bool:
    """
    Whether the contracted configuration escapes the single-degree-7 situation.

    Builds the contracted graph on the representatives of all vertices not
    erased for 7-cycles. The situation is dangerous only when exactly one
    interior representative survives and it has degree 7.

    Returns:
        True if not dangerous
    """
    conf = result.conf
    erased = result.erased(7)
    rep = result.representative
    contracted: list[set[int]] = [set() for _ in range(conf.n)]
    for v in range(conf.n):
        if erased[v]:
            continue
        for u in conf.neighbors(v):
            if erased[u]:
                continue
            contracted[rep[v]].add(int(rep[u]))
            contracted[rep[u]].add(int(rep[v]))

    interior = [v for v in range(conf.r, conf.n) if not erased[v] and rep[v] == v]
    logger.debug("interior representatives after contraction: %s", interior)
    if len(interior) != 1:
        return True
    # a contracted edge leaves a self-loop on its representative, which counts
    return len(contracted[interior[0]]) != 7
