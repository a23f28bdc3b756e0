"""Depth-bounded enumeration of simple paths between ring vertices."""

from __future__ import annotations

from .configuration import Configuration, VertexPath


# Longest internal path (in edges) considered when closing a cycle through the ring.
MAX_PATH_EDGES = 7


def all_paths(conf: Configuration, p: int, q: int, max_edges: int = MAX_PATH_EDGES) -> list[VertexPath]:
    """
    Enumerate every simple p-q path with at most max_edges edges.

    The search is an explicit-stack DFS over immutable path tuples;
    neighbours are expanded in ascending order, so the output order is the
    lexicographic DFS order.

    Args:
        conf: The configuration (raw graph, no contraction)
        p: Start vertex
        q: End vertex
        max_edges: Depth cap

    Returns:
        List of paths, each a tuple starting at p and ending at q
    """
    found: list[VertexPath] = []
    stack: list[VertexPath] = [(p,)]
    while stack:
        path = stack.pop()
        if path[-1] == q:
            found.append(path)
            continue
        if len(path) > max_edges:
            continue
        # reversed so the smallest neighbour is expanded first
        for u in reversed(conf.neighbors(path[-1])):
            if u not in path:
                stack.append(path + (u,))
    return found


def all_ring_paths(conf: Configuration) -> dict[tuple[int, int], list[VertexPath]]:
    """
    Precompute all_paths(p, q) for every ordered pair of distinct ring vertices.

    Returns:
        Dictionary mapping (p, q) -> list of paths
    """
    return {
        (p, q): all_paths(conf, p, q)
        for p in range(conf.r)
        for q in range(conf.r)
        if p != q
    }


def ring_edge_count(conf: Configuration, path: VertexPath) -> int:
    """Number of consecutive pairs in path whose endpoints are both ring vertices."""
    return sum(1 for a, b in zip(path, path[1:]) if conf.is_ring(a) and conf.is_ring(b))
