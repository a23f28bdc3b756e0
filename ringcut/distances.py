"""Distance engine: APSP with and without contraction, all shortest paths."""

from __future__ import annotations
from collections import deque
from typing import Iterable

import numpy as np

from .configuration import Configuration, ConfigurationError, Edge, VertexPath


# Sentinel for disconnected pairs; small enough that INF + INF fits any int dtype.
INF = 10000


def contraction_set(edges: Iterable[Edge]) -> frozenset[Edge]:
    """Both orientations of every contraction edge."""
    result = set()
    for u, v in edges:
        result.add((u, v))
        result.add((v, u))
    return frozenset(result)


def apsp(conf: Configuration, contraction: Iterable[Edge] = ()) -> np.ndarray:
    """
    All-pairs shortest path lengths (Warshall-Floyd).

    Args:
        conf: The configuration
        contraction: Edges whose weight is forced to 0 before relaxation.
            Empty for the raw distances.

    Returns:
        n x n int64 matrix; INF for disconnected pairs

    Raises:
        ConfigurationError: If a contraction pair is not an edge of the graph
    """
    n = conf.n
    dist = np.full((n, n), INF, dtype=np.int64)
    np.fill_diagonal(dist, 0)
    for v in range(n):
        for u in conf.neighbors(v):
            dist[v, u] = 1

    for u, v in contraction:
        if not (0 <= u < n and 0 <= v < n) or dist[u, v] != 1:
            raise ConfigurationError(f"contraction edge ({u}, {v}) is not an edge of the configuration")
        dist[u, v] = 0
        dist[v, u] = 0

    for k in range(n):
        np.minimum(dist, dist[:, k, None] + dist[None, k, :], out=dist)
    return dist


def representatives(dist: np.ndarray) -> np.ndarray:
    """
    Canonical representative of every vertex: the smallest vertex at distance 0.

    With the contracted distance matrix this is the minimum member of the
    contraction class.
    """
    return np.argmax(dist == 0, axis=1)


def equivalence_classes(dist: np.ndarray) -> list[tuple[int, ...]]:
    """Contraction classes (vertices at mutual distance 0), ordered by representative."""
    classes: dict[int, list[int]] = {}
    for v, rep in enumerate(representatives(dist)):
        classes.setdefault(int(rep), []).append(v)
    return [tuple(members) for _, members in sorted(classes.items())]


def shortest_paths(
    conf: Configuration,
    s: int,
    t: int,
    contraction: Iterable[Edge] = ()
) -> list[VertexPath]:
    """
    Enumerate all distinct shortest s-t paths.

    Distances come from a 0/1-BFS in which contraction edges weigh 0 (pushed
    to the front of the deque) and all other edges weigh 1. A second pass
    extends every shortest path to a vertex by one tight edge, skipping
    extensions that revisit a vertex or duplicate a path already recorded.

    Args:
        conf: The configuration
        s: Source vertex
        t: Target vertex
        contraction: Edges of weight 0; empty for unweighted shortest paths

    Returns:
        Simple paths from s to t in discovery order, no duplicates. Every path
        has weighted length dist(s, t).
    """
    zero = contraction_set(contraction)
    n = conf.n

    dist = [INF] * n
    dist[s] = 0
    queue = deque([s])
    while queue:
        v = queue.popleft()
        for u in conf.neighbors(v):
            if (u, v) in zero:
                if dist[v] < dist[u]:
                    dist[u] = dist[v]
                    queue.appendleft(u)
            elif dist[v] + 1 < dist[u]:
                dist[u] = dist[v] + 1
                queue.append(u)

    # paths[v] := shortest s-v paths found so far
    paths: list[list[VertexPath]] = [[] for _ in range(n)]
    known: list[set[VertexPath]] = [set() for _ in range(n)]
    paths[s].append((s,))
    known[s].add((s,))
    queue.append(s)
    while queue:
        v = queue.popleft()
        for u in conf.neighbors(v):
            step = dist[u] == dist[v] + 1
            if not (step or (dist[u] == dist[v] and (u, v) in zero)):
                continue
            updated = False
            for path in list(paths[v]):
                extended = path + (u,)
                if u in path or extended in known[u]:
                    continue
                paths[u].append(extended)
                known[u].add(extended)
                updated = True
            if updated:
                if step:
                    queue.append(u)
                else:
                    queue.appendleft(u)

    weight = _path_weight_fn(zero)
    for path in paths[t]:
        assert weight(path) == dist[t], f"path {path} does not realise dist({s}, {t}) = {dist[t]}"
    return paths[t]


def _path_weight_fn(zero: frozenset[Edge]):
    def weight(path: VertexPath) -> int:
        return sum(0 if (a, b) in zero else 1 for a, b in zip(path, path[1:]))
    return weight
