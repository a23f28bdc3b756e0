"""Regions of the configuration cut off by ring-anchored paths."""

from __future__ import annotations
from typing import Iterable

import numpy as np

from .configuration import Configuration, VertexPath


def _flood(conf: Configuration, seeds: Iterable[int], blocked: set[int], label: np.ndarray, value: int) -> list[int]:
    """Label everything reachable from seeds without entering blocked; return visit order."""
    visited = []
    stack = [v for v in reversed(list(seeds)) if v not in blocked and label[v] == -1]
    while stack:
        v = stack.pop()
        if label[v] != -1:
            continue
        label[v] = value
        visited.append(v)
        for u in reversed(conf.neighbors(v)):
            if u not in blocked and label[u] == -1:
                stack.append(u)
    return visited


def component_between(conf: Configuration, path: VertexPath) -> list[int]:
    """
    Vertices separated from the rest by a path between two ring vertices.

    For a path p ... q (p != q, both on the ring) this is everything
    reachable, without crossing the path, from the ring vertices strictly
    between p and q in increasing (cyclic) order.

    Args:
        conf: The configuration
        path: Vertex sequence; only its vertex set and endpoints matter

    Returns:
        Component vertices in discovery order (empty when q follows p)
    """
    p, q = path[0], path[-1]
    conf.require_ring(p, q)
    assert p != q, f"component of a closed path at {p}"

    label = np.full(conf.n, -1, dtype=np.int64)
    return _flood(conf, conf.ring_between(p, q), set(path), label, 0)


def component_enclosed(conf: Configuration, q1p2: VertexPath, q2p1: VertexPath) -> list[int]:
    """
    Region enclosed by two paths q1 -> p2 and q2 -> p1.

    The ring vertices are assumed to appear in the order p1, q1, p2, q2.
    The result is the p1..q2 side of the second path minus the q1..p2 side
    of the first. Crossing paths only approximate the enclosed region.
    """
    inner = set(component_between(conf, q1p2))
    return [v for v in component_between(conf, tuple(reversed(q2p1))) if v not in inner]


def component_outside(conf: Configuration, q1p2: VertexPath, q2p1: VertexPath) -> list[int]:
    """
    Everything except the enclosed region and the paths themselves.

    Symmetric difference of the q1..p2 side of the first path and the
    q2..p1 side of the second.
    """
    side1 = component_between(conf, q1p2)
    side2 = component_between(conf, q2p1)
    both = set(side1) & set(side2)
    return [v for v in side2 if v not in both] + sorted(v for v in side1 if v not in both)


def ring_interior_counts(conf: Configuration, vertices: Iterable[int]) -> tuple[int, int]:
    """Split a vertex collection into (#ring, #interior)."""
    s = t = 0
    for v in vertices:
        if conf.is_ring(v):
            s += 1
        else:
            t += 1
    return s, t


def component_ids_after_cut(conf: Configuration, dist_contracted: np.ndarray, cut: Iterable[int]) -> np.ndarray:
    """
    Label connected components after removing a cut and everything equivalent to it.

    Args:
        conf: The configuration
        dist_contracted: Contracted distance matrix (0 = same contraction class)
        cut: Cut vertices

    Returns:
        int array of length n: -1 for removed vertices, 0 for everything still
        attached to the ring, 1, 2, ... for the isolated interior pieces
    """
    blocked: set[int] = set()
    for v in cut:
        blocked.update(int(u) for u in np.flatnonzero(dist_contracted[v] == 0))

    label = np.full(conf.n, -1, dtype=np.int64)
    _flood(conf, range(conf.r), blocked, label, 0)
    next_label = 1
    for v in range(conf.r, conf.n):
        if v not in blocked and label[v] == -1:
            _flood(conf, [v], blocked, label, next_label)
            next_label += 1
    return label
